"""
Declaration Parser

Converts a token stream from the lexer into a flat stream of complex tokens.
Recognizes function, struct, enum, const and trait declarations together
with the comments directly above them. Every token that is not part of a
recognized declaration is passed through unchanged, so the output covers
the whole input in source order.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import ClassVar, List, Optional, Sequence, Tuple

from doccheck.errors import ParseError
from doccheck.parser.lexer import Lexer, Token, TokenType
from doccheck.parser.positions import offset_to_line_column
from doccheck.parser.types import skip_type

logger = logging.getLogger(__name__)

SELF_ARGUMENT = "self"


class DeclarationKind(Enum):
    """Kinds of complex tokens."""
    STRUCT = auto()
    FIELD = auto()
    FUNCTION = auto()
    ENUM = auto()
    TRAIT = auto()
    CONST = auto()
    OTHER = auto()


@dataclass(frozen=True)
class ComplexToken:
    """Base class for parser output."""
    kind: ClassVar[DeclarationKind] = DeclarationKind.OTHER
    span: Tuple[int, int] = (0, 0)


@dataclass(frozen=True)
class FieldInfo(ComplexToken):
    """A documented field of a struct."""
    kind: ClassVar[DeclarationKind] = DeclarationKind.FIELD
    name: str = ""
    docs: str = ""


@dataclass(frozen=True)
class StructInfo(ComplexToken):
    """A struct declaration with its fields."""
    kind: ClassVar[DeclarationKind] = DeclarationKind.STRUCT
    name: str = ""
    fields: Tuple[FieldInfo, ...] = field(default_factory=tuple)
    docs: str = ""


@dataclass(frozen=True)
class FunctionInfo(ComplexToken):
    """
    A function signature.

    ``args`` holds argument names in declaration order; a receiver
    (``self``, ``&self``, ``&mut self``) is recorded as ``"self"``.
    ``void_return`` is true when the signature has no ``->``.
    """
    kind: ClassVar[DeclarationKind] = DeclarationKind.FUNCTION
    name: str = ""
    args: Tuple[str, ...] = field(default_factory=tuple)
    void_return: bool = True
    docs: str = ""


@dataclass(frozen=True)
class EnumInfo(ComplexToken):
    kind: ClassVar[DeclarationKind] = DeclarationKind.ENUM
    name: str = ""
    docs: str = ""


@dataclass(frozen=True)
class TraitInfo(ComplexToken):
    kind: ClassVar[DeclarationKind] = DeclarationKind.TRAIT
    name: str = ""
    docs: str = ""


@dataclass(frozen=True)
class ConstInfo(ComplexToken):
    kind: ClassVar[DeclarationKind] = DeclarationKind.CONST
    name: str = ""
    docs: str = ""


@dataclass(frozen=True)
class OtherToken(ComplexToken):
    """A token that is not part of any recognized declaration."""
    token: Optional[Token] = None


class DeclarationParser:
    """
    Parser for declarations embedded in free-form source.

    Each recognizer is tried from the same position in a fixed order
    (function, struct, enum, const, trait); the first one that matches
    consumes the declaration. When none matches, a single token is passed
    through as an ``OtherToken``.

    Usage:
        parser = DeclarationParser(tokens)
        complex_tokens = parser.parse()
    """

    def __init__(self, tokens: Sequence[Token], source: Optional[str] = None,
                 filename: str = "<unknown>"):
        self.tokens = list(tokens)
        self.source = source
        self.filename = filename
        self.pos = 0
        self.length = len(self.tokens)

    # ------------------------------------------------------------------
    # Cursor helpers
    # ------------------------------------------------------------------

    def _current(self) -> Optional[Token]:
        """Get current token or None if at end."""
        if self.pos >= self.length:
            return None
        return self.tokens[self.pos]

    def _advance(self) -> Optional[Token]:
        """Advance one token and return the previous one."""
        token = self._current()
        if token is not None:
            self.pos += 1
        return token

    def _accept_control(self, char: str) -> bool:
        token = self._current()
        if token is not None and token.is_control(char):
            self.pos += 1
            return True
        return False

    def _accept_other(self, char: str) -> bool:
        token = self._current()
        if token is not None and token.is_other(char):
            self.pos += 1
            return True
        return False

    def _accept_keyword(self, word: str) -> bool:
        token = self._current()
        if token is not None and token.is_keyword(word):
            self.pos += 1
            return True
        return False

    def _accept_identifier(self) -> Optional[str]:
        token = self._current()
        if token is not None and token.type == TokenType.IDENTIFIER:
            self.pos += 1
            return token.value
        return None

    def _accept_operator(self, op: str) -> bool:
        token = self._current()
        if token is not None and token.type == TokenType.OPERATOR and token.value == op:
            self.pos += 1
            return True
        return False

    def _skip_type(self) -> bool:
        end = skip_type(self.tokens, self.pos)
        if end is None:
            return False
        self.pos = end
        return True

    def _span_from(self, start: int) -> Tuple[int, int]:
        """Span covering tokens[start:self.pos]."""
        return (self.tokens[start].start, self.tokens[self.pos - 1].end)

    def _error(self, reason: str, token: Optional[Token]) -> ParseError:
        offset = token.start if token is not None else 0
        if self.source is not None:
            line, column = offset_to_line_column(self.source, offset)
            return ParseError(reason, offset, line, column, token=token)
        return ParseError(reason, offset, token=token)

    # ------------------------------------------------------------------
    # Shared prefixes
    # ------------------------------------------------------------------

    def _parse_docs(self) -> str:
        """Concatenate consecutive comment tokens."""
        parts = []
        while True:
            token = self._current()
            if token is None or token.type != TokenType.COMMENT:
                break
            parts.append(token.value)
            self.pos += 1
        return "".join(parts)

    def _skip_attribute(self) -> bool:
        """Skip ``#[...]`` up to the first ``]`` (nested brackets are not balanced)."""
        start = self.pos
        if not (self._accept_other('#') and self._accept_other('[')):
            self.pos = start
            return False
        while True:
            token = self._advance()
            if token is None:
                self.pos = start
                return False
            if token.is_other(']'):
                return True

    def _skip_attributes(self) -> None:
        while self._skip_attribute():
            pass

    def _skip_visibility(self) -> None:
        """Skip ``pub`` or ``pub(...)``."""
        if not self._accept_keyword("pub"):
            return
        start = self.pos
        if not self._accept_control('('):
            return
        while True:
            token = self._advance()
            if token is None:
                self.pos = start
                return
            if token.is_control(')'):
                return

    def _skip_extern(self) -> None:
        """Skip ``extern`` with an optional ``"ABI"`` string."""
        start = self.pos
        if not self._accept_keyword("extern"):
            return
        token = self._current()
        if token is None or not token.is_other('"'):
            return
        if self._accept_other('"') and self._accept_identifier() is not None \
                and self._accept_other('"'):
            return
        self.pos = start

    def _skip_until_body(self) -> Optional[Token]:
        """Advance to the ``{`` of a struct body, or the ``;`` of a unit/tuple struct."""
        while True:
            token = self._current()
            if token is None:
                return None
            if token.is_control('{') or token.is_other(';'):
                return token
            self.pos += 1

    # ------------------------------------------------------------------
    # Recognizers
    # ------------------------------------------------------------------

    def _parse_argument(self) -> Optional[str]:
        """Parse one function argument and return its name."""
        start = self.pos
        if self._parse_receiver():
            return SELF_ARGUMENT
        self.pos = start

        self._accept_keyword("mut")
        name = self._accept_identifier()
        if name is None:
            return None
        if not self._accept_control(':'):
            return None
        if not self._skip_type():
            return None
        if not self._accept_control(','):
            self._accept_control(')')
        return name

    def _parse_receiver(self) -> bool:
        """``self``, ``&self`` or ``&mut self`` followed by ``,`` or ``)``."""
        if self._accept_other('&'):
            self._accept_keyword("mut")
        if not self._accept_keyword("self"):
            return False
        return self._accept_control(',') or self._accept_control(')')

    def _parse_function(self) -> Optional[FunctionInfo]:
        start = self.pos
        docs = self._parse_docs()
        self._skip_extern()
        self._skip_attributes()
        self._skip_visibility()
        self._accept_keyword("const")
        self._accept_keyword("async")
        self._accept_keyword("unsafe")
        self._skip_extern()
        if not self._accept_keyword("fn"):
            return None
        name = self._accept_identifier()
        if name is None:
            return None

        # Generics and lifetime bounds before the argument list.
        while True:
            token = self._current()
            if token is None:
                return None
            if token.is_control('('):
                break
            self.pos += 1
        self.pos += 1

        args = []
        while True:
            arg_start = self.pos
            arg = self._parse_argument()
            if arg is None:
                self.pos = arg_start
                break
            args.append(arg)
        self._accept_control(')')
        void_return = not self._accept_operator("->")

        return FunctionInfo(
            name=name,
            args=tuple(args),
            void_return=void_return,
            docs=docs,
            span=self._span_from(start),
        )

    def _parse_field(self) -> Optional[FieldInfo]:
        start = self.pos
        docs = self._parse_docs()
        self._skip_attributes()
        self._skip_visibility()
        name = self._accept_identifier()
        if name is None:
            return None
        if not self._accept_control(':'):
            return None
        if not self._skip_type():
            return None
        if not self._accept_control(','):
            self._accept_control('}')
        return FieldInfo(name=name, docs=docs, span=self._span_from(start))

    def _parse_struct(self) -> Optional[StructInfo]:
        start = self.pos
        docs = self._parse_docs()
        self._skip_attributes()
        self._skip_visibility()
        if not self._accept_keyword("struct"):
            return None
        name = self._accept_identifier()
        if name is None:
            return None

        # Generics, lifetimes and where-clauses before the body.
        stop = self._skip_until_body()
        if stop is None:
            return None
        fields = []
        if stop.is_control('{'):
            self.pos += 1
            while True:
                field_start = self.pos
                info = self._parse_field()
                if info is None:
                    self.pos = field_start
                    break
                fields.append(info)
            self._accept_control('}')

        return StructInfo(
            name=name,
            fields=tuple(fields),
            docs=docs,
            span=self._span_from(start),
        )

    def _parse_named(self, keyword: str, info_type, attributes: bool = True):
        """Recognizer for declarations that are only a keyword and a name."""
        start = self.pos
        docs = self._parse_docs()
        if attributes:
            self._skip_attributes()
        self._skip_visibility()
        if not self._accept_keyword(keyword):
            return None
        name = self._accept_identifier()
        if name is None:
            return None
        return info_type(name=name, docs=docs, span=self._span_from(start))

    def _parse_enum(self) -> Optional[EnumInfo]:
        return self._parse_named("enum", EnumInfo)

    def _parse_const(self) -> Optional[ConstInfo]:
        return self._parse_named("const", ConstInfo)

    def _parse_trait(self) -> Optional[TraitInfo]:
        return self._parse_named("trait", TraitInfo, attributes=False)

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def _check_token_order(self) -> None:
        """Tokens must be in source order with non-overlapping spans."""
        previous_end = 0
        for token in self.tokens:
            if not isinstance(token, Token):
                raise self._error(f"expected a token, got {type(token).__name__}", None)
            if token.start < previous_end or token.end < token.start:
                raise self._error(f"token {token.value!r} is out of source order", token)
            previous_end = token.end

    def parse(self) -> List[ComplexToken]:
        """Parse the token stream into complex tokens."""
        self._check_token_order()
        recognizers = (
            self._parse_function,
            self._parse_struct,
            self._parse_enum,
            self._parse_const,
            self._parse_trait,
        )
        result: List[ComplexToken] = []

        while self.pos < self.length:
            start = self.pos
            for recognize in recognizers:
                node = recognize()
                if node is not None:
                    break
                self.pos = start
            else:
                token = self._advance()
                node = OtherToken(token=token, span=token.span)
            result.append(node)

        logger.debug(
            f"{self.filename}: {len(result)} complex tokens, "
            f"{sum(1 for n in result if not isinstance(n, OtherToken))} declarations"
        )
        return result


def parse_tokens(tokens: Sequence[Token], source: Optional[str] = None,
                 filename: str = "<unknown>") -> List[ComplexToken]:
    """Parse a token list into complex tokens."""
    return DeclarationParser(tokens, source, filename).parse()


def parse_source(source: str, filename: str = "<unknown>") -> List[ComplexToken]:
    """Tokenize and parse source code into complex tokens."""
    tokens = Lexer(source, filename).tokenize_all()
    return DeclarationParser(tokens, source, filename).parse()
