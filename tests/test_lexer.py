"""
Tests for the doccheck lexer.
"""

import pytest

from doccheck.errors import LexerError
from doccheck.parser import Lexer, TokenType, offset_to_line_column, tokenize_file
from conftest import tokenize, token_values


class TestBasicTokens:
    """Test the token alternatives."""

    def test_empty_source(self):
        """Empty source produces no tokens."""
        assert tokenize("") == []

    def test_whitespace_only(self):
        assert tokenize("  \n\t\r\n ") == []

    def test_struct_tokens_and_spans(self):
        """Identifiers and control characters carry their offsets."""
        tokens = tokenize("struct Point { x: i32 }")
        assert [(t.type, t.value, t.span) for t in tokens] == [
            (TokenType.IDENTIFIER, "struct", (0, 6)),
            (TokenType.IDENTIFIER, "Point", (7, 12)),
            (TokenType.CONTROL, "{", (13, 14)),
            (TokenType.IDENTIFIER, "x", (15, 16)),
            (TokenType.CONTROL, ":", (16, 17)),
            (TokenType.IDENTIFIER, "i32", (18, 21)),
            (TokenType.CONTROL, "}", (22, 23)),
        ]

    def test_control_characters(self):
        tokens = tokenize("( ) , : { } < >")
        assert all(t.type == TokenType.CONTROL for t in tokens)
        assert [t.value for t in tokens] == list("(),:{}<>")

    def test_arrow_operator(self):
        """-> is one operator token, even without surrounding spaces."""
        tokens = tokenize("a->b")
        assert [(t.type, t.value) for t in tokens] == [
            (TokenType.IDENTIFIER, "a"),
            (TokenType.OPERATOR, "->"),
            (TokenType.IDENTIFIER, "b"),
        ]

    def test_split_arrow_is_not_operator(self):
        tokens = tokenize("- >")
        assert [(t.type, t.value) for t in tokens] == [
            (TokenType.OTHER, "-"),
            (TokenType.CONTROL, ">"),
        ]

    def test_identifiers(self):
        assert token_values("_private x1 u8 CamelCase") == ["_private", "x1", "u8", "CamelCase"]

    def test_digits_are_other(self):
        """Numbers are not identifiers and fall through to the catch-all."""
        tokens = tokenize("42 1x")
        assert [(t.type, t.value) for t in tokens] == [
            (TokenType.OTHER, "4"),
            (TokenType.OTHER, "2"),
            (TokenType.OTHER, "1"),
            (TokenType.IDENTIFIER, "x"),
        ]

    def test_non_ascii_is_other(self):
        tokens = tokenize("café")
        assert [(t.type, t.value) for t in tokens] == [
            (TokenType.IDENTIFIER, "caf"),
            (TokenType.OTHER, "é"),
        ]

    def test_punctuation_is_other(self):
        tokens = tokenize("&'a [u8];")
        assert [(t.type, t.value) for t in tokens] == [
            (TokenType.OTHER, "&"),
            (TokenType.OTHER, "'"),
            (TokenType.IDENTIFIER, "a"),
            (TokenType.OTHER, "["),
            (TokenType.IDENTIFIER, "u8"),
            (TokenType.OTHER, "]"),
            (TokenType.OTHER, ";"),
        ]


class TestComments:
    """Test comment tokens."""

    def test_doc_line_comment(self):
        """/// comments lose the marker and surrounding whitespace."""
        tokens = tokenize("/// A 2D point.  \nstruct")
        assert tokens[0].type == TokenType.COMMENT
        assert tokens[0].value == "A 2D point."
        assert tokens[0].span == (0, 17)
        assert tokens[1].value == "struct"

    def test_plain_line_comment(self):
        tokens = tokenize("// just a note")
        assert [(t.type, t.value) for t in tokens] == [(TokenType.COMMENT, "just a note")]

    def test_inner_doc_comment(self):
        assert token_values("//! crate docs") == ["crate docs"]

    def test_empty_doc_line(self):
        assert token_values("///\n///") == ["", ""]

    def test_comment_at_end_of_file(self):
        tokens = tokenize("x // trailing")
        assert tokens[-1].value == "trailing"
        assert tokens[-1].end == len("x // trailing")

    def test_block_doc_comment_verbatim(self):
        """Block doc comments keep their inner text unchanged."""
        tokens = tokenize("/** Block\n * doc */fn")
        assert tokens[0].type == TokenType.COMMENT
        assert tokens[0].value == " Block\n * doc "
        assert tokens[1].value == "fn"

    def test_inner_block_doc_comment(self):
        assert token_values("/*! inner */") == [" inner "]

    def test_plain_block_comment_is_not_a_comment(self):
        """Only /** and /*! open a block comment."""
        tokens = tokenize("/* note */")
        assert [(t.type, t.value) for t in tokens] == [
            (TokenType.OTHER, "/"),
            (TokenType.OTHER, "*"),
            (TokenType.IDENTIFIER, "note"),
            (TokenType.OTHER, "*"),
            (TokenType.OTHER, "/"),
        ]

    def test_unterminated_block_comment(self):
        """An unclosed block comment falls through to the catch-all."""
        tokens = tokenize("/** open")
        assert [t.value for t in tokens] == ["/", "*", "*", "open"]
        assert tokens[0].type == TokenType.OTHER


class TestSpans:
    """Test span properties over a realistic input."""

    SOURCE = '''
    /// Adds two numbers.
    ///
    /// # Arguments
    /// * `a`: first operand.
    /// * `b`: second operand.
    ///
    /// # Return
    /// The sum.
    pub fn add<'a>(a: &'a i32, b: i32) -> i32 { a + b }

    /** Block docs */
    #[derive(Debug)]
    struct Wrapper(Vec<u8>);
    '''

    def test_spans_are_ordered_and_only_whitespace_between(self):
        tokens = tokenize(self.SOURCE)
        previous_end = 0
        for token in tokens:
            assert token.start >= previous_end
            assert token.end > token.start
            assert self.SOURCE[previous_end:token.start].strip() == ""
            previous_end = token.end
        assert self.SOURCE[previous_end:].strip() == ""

    def test_spans_count_characters_not_bytes(self):
        tokens = tokenize("/// é\nfn")
        assert tokens[0].span == (0, 5)
        assert tokens[1].span == (6, 8)
        assert offset_to_line_column("/// é\nfn", tokens[1].start) == (2, 1)

    def test_non_comment_spans_match_values(self):
        for token in tokenize(self.SOURCE):
            if token.type != TokenType.COMMENT:
                assert self.SOURCE[token.start:token.end] == token.value


class TestCatchAll:
    """Test the lexer with the catch-all disabled."""

    def test_unknown_character_raises(self):
        lexer = Lexer("fn\n  @", catch_all=False)
        with pytest.raises(LexerError) as info:
            lexer.tokenize_all()
        assert info.value.offset == 5
        assert (info.value.line, info.value.column) == (2, 3)
        assert "token parser error at line 2 column 3" in str(info.value)

    def test_known_characters_pass(self):
        lexer = Lexer("fn f(a: b) -> c {}", catch_all=False)
        assert len(lexer.tokenize_all()) == 11


class TestPositions:
    """Test offset to line/column conversion."""

    def test_first_character(self):
        assert offset_to_line_column("abc", 0) == (1, 1)

    def test_after_newline(self):
        assert offset_to_line_column("ab\ncd", 3) == (2, 1)
        assert offset_to_line_column("ab\ncd", 4) == (2, 2)

    def test_offset_past_end_is_clamped(self):
        assert offset_to_line_column("ab\n", 50) == (2, 1)

    def test_empty_text(self):
        assert offset_to_line_column("", 0) == (1, 1)


class TestFiles:
    """Test reading files from disk."""

    def test_tokenize_utf8_with_bom(self, tmp_path):
        path = tmp_path / "bom.rs"
        path.write_bytes("\ufefffn main".encode("utf-8"))
        assert [t.value for t in tokenize_file(str(path))] == ["fn", "main"]

    def test_tokenize_latin1_fallback(self, tmp_path):
        path = tmp_path / "latin.rs"
        path.write_bytes(b"// caf\xe9\nfn x")
        tokens = tokenize_file(str(path))
        assert tokens[0].value == "café"
        assert [t.value for t in tokens[1:]] == ["fn", "x"]
