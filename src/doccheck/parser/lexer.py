"""
Source Lexer (Tokenizer)

Converts raw source text into a stream of span-tagged tokens.
Handles: comments, the return arrow, delimiters, identifiers, and a
single-character catch-all for everything else.

A line comment keeps only its trimmed text after the `//`, `///` or `//!`
marker, so a bare `///` line yields an empty comment.
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, List, Optional, Tuple

from doccheck.errors import LexerError
from doccheck.parser.positions import offset_to_line_column

logger = logging.getLogger(__name__)


class TokenType(Enum):
    """Types of tokens produced by the lexer."""
    CONTROL = auto()         # ( ) , : { } < >
    OPERATOR = auto()        # ->
    IDENTIFIER = auto()      # fn, Point, _private, u8
    COMMENT = auto()         # // line, /// doc, /** block */
    OTHER = auto()           # anything else, one character at a time


CONTROL_CHARS = frozenset("(),:{}<>")
ARROW = "->"


@dataclass(frozen=True)
class Token:
    """
    A single token from the lexer.

    ``start`` and ``end`` index the source string (code points, not bytes).
    """
    type: TokenType
    value: str
    start: int
    end: int

    @property
    def span(self) -> Tuple[int, int]:
        return (self.start, self.end)

    def is_control(self, char: str) -> bool:
        return self.type == TokenType.CONTROL and self.value == char

    def is_keyword(self, word: str) -> bool:
        return self.type == TokenType.IDENTIFIER and self.value == word

    def is_other(self, char: str) -> bool:
        return self.type == TokenType.OTHER and self.value == char

    def __repr__(self):
        return f"Token({self.type.name}, {self.value!r}, {self.start}..{self.end})"


class Lexer:
    """
    Tokenizer for declaration source files.

    Alternatives are tried in a fixed order at every position: comments,
    the ``->`` operator, control characters, identifiers, and finally the
    single-character catch-all. Whitespace between tokens is skipped.

    Usage:
        lexer = Lexer(source_text)
        tokens = list(lexer.tokenize())
    """

    def __init__(self, source: str, filename: str = "<unknown>", catch_all: bool = True):
        self.source = source
        self.filename = filename
        self.catch_all = catch_all
        self.pos = 0
        self.length = len(source)

    @staticmethod
    def _is_ident_start(ch: str) -> bool:
        return ch == '_' or ('a' <= ch <= 'z') or ('A' <= ch <= 'Z')

    @staticmethod
    def _is_ident_cont(ch: str) -> bool:
        return Lexer._is_ident_start(ch) or ('0' <= ch <= '9')

    def _current(self) -> Optional[str]:
        """Get current character or None if at end."""
        if self.pos >= self.length:
            return None
        return self.source[self.pos]

    def _startswith(self, prefix: str) -> bool:
        return self.source.startswith(prefix, self.pos)

    def _skip_whitespace(self) -> None:
        while self.pos < self.length and self.source[self.pos].isspace():
            self.pos += 1

    def _read_block_comment(self) -> Optional[str]:
        """Read ``/** ... */`` or ``/*! ... */``, None if it is never closed."""
        close = self.source.find("*/", self.pos + 3)
        if close < 0:
            return None
        text = self.source[self.pos + 3:close]
        self.pos = close + 2
        return text

    def _read_line_comment(self) -> str:
        """Read a ``//`` comment to end of line, without its marker."""
        end = self.source.find("\n", self.pos)
        if end < 0:
            end = self.length
        body = self.source[self.pos + 2:end]
        # Doc markers: /// and //!
        if body[:1] in ("/", "!"):
            body = body[1:]
        self.pos = end
        return body.strip()

    def _read_identifier(self) -> str:
        start = self.pos
        while self.pos < self.length and self._is_ident_cont(self.source[self.pos]):
            self.pos += 1
        return self.source[start:self.pos]

    def _read_token(self) -> Token:
        """Read the token starting at the current position."""
        start = self.pos
        ch = self.source[start]

        if self._startswith("/**") or self._startswith("/*!"):
            text = self._read_block_comment()
            if text is not None:
                return Token(TokenType.COMMENT, text, start, self.pos)

        if self._startswith("//"):
            text = self._read_line_comment()
            return Token(TokenType.COMMENT, text, start, self.pos)

        if self._startswith(ARROW):
            self.pos += len(ARROW)
            return Token(TokenType.OPERATOR, ARROW, start, self.pos)

        if ch in CONTROL_CHARS:
            self.pos += 1
            return Token(TokenType.CONTROL, ch, start, self.pos)

        if self._is_ident_start(ch):
            value = self._read_identifier()
            return Token(TokenType.IDENTIFIER, value, start, self.pos)

        if not self.catch_all:
            line, column = offset_to_line_column(self.source, start)
            raise LexerError(f"unexpected character {ch!r}", start, line, column)

        self.pos += 1
        return Token(TokenType.OTHER, ch, start, self.pos)

    def tokenize(self) -> Iterator[Token]:
        """Generate tokens from the source."""
        while True:
            self._skip_whitespace()
            if self._current() is None:
                break
            yield self._read_token()

    def tokenize_all(self) -> List[Token]:
        """Convenience method to get all tokens as a list."""
        tokens = list(self.tokenize())
        logger.debug(f"{self.filename}: {len(tokens)} tokens")
        return tokens


def read_source(filepath: str) -> str:
    """Read a source file. Handles encoding fallback."""
    # Try UTF-8 with BOM first, then UTF-8, then latin-1 (which always succeeds)
    for encoding in ['utf-8-sig', 'utf-8']:
        try:
            with open(filepath, 'r', encoding=encoding) as f:
                return f.read()
        except UnicodeDecodeError:
            continue
    logger.debug(f"{filepath}: not valid UTF-8, reading as latin-1")
    with open(filepath, 'r', encoding='latin-1') as f:
        return f.read()


def tokenize_file(filepath: str) -> List[Token]:
    """Tokenize a file and return all tokens."""
    lexer = Lexer(read_source(filepath), filename=filepath)
    return lexer.tokenize_all()
