"""
Type skipping.

Consumes exactly one type expression from a token list without building a
representation of it. Every function takes ``(tokens, pos)`` and returns
the index just past the type, or None when no type starts at ``pos``.
Nothing is mutated, so callers can retry another alternative from the
same position.

Shapes, in the order they are tried:

    generic   <tuple-or-simple> '<' args '>'
    tuple     '(' [type {',' type} [',']] ')' | simple
    simple    dyn T | &impl T | mut T | &['a] [mut] T | T

where ``T`` is a bare identifier or ``[ident]``.
"""

from typing import Optional, Sequence

from doccheck.parser.lexer import Token, TokenType


def _control(tokens: Sequence[Token], pos: int, char: str) -> Optional[int]:
    if pos < len(tokens) and tokens[pos].is_control(char):
        return pos + 1
    return None


def _other(tokens: Sequence[Token], pos: int, char: str) -> Optional[int]:
    if pos < len(tokens) and tokens[pos].is_other(char):
        return pos + 1
    return None


def _keyword(tokens: Sequence[Token], pos: int, word: str) -> Optional[int]:
    if pos < len(tokens) and tokens[pos].is_keyword(word):
        return pos + 1
    return None


def _identifier(tokens: Sequence[Token], pos: int) -> Optional[int]:
    if pos < len(tokens) and tokens[pos].type == TokenType.IDENTIFIER:
        return pos + 1
    return None


def skip_lifetime(tokens: Sequence[Token], pos: int) -> Optional[int]:
    """Skip a named lifetime such as ``'a``."""
    end = _other(tokens, pos, "'")
    if end is None:
        return None
    return _identifier(tokens, end)


def skip_bare_type(tokens: Sequence[Token], pos: int) -> Optional[int]:
    """Skip an identifier or a bracketed identifier (``[u8]``)."""
    end = _identifier(tokens, pos)
    if end is not None:
        return end
    end = _other(tokens, pos, "[")
    if end is None:
        return None
    end = _identifier(tokens, end)
    if end is None:
        return None
    return _other(tokens, end, "]")


def _skip_trait_object(tokens, pos):
    end = _keyword(tokens, pos, "dyn")
    if end is None:
        return None
    return skip_bare_type(tokens, end)


def _skip_impl_reference(tokens, pos):
    end = _other(tokens, pos, "&")
    if end is None:
        return None
    end = _keyword(tokens, end, "impl")
    if end is None:
        return None
    return skip_bare_type(tokens, end)


def _skip_mutable(tokens, pos):
    end = _keyword(tokens, pos, "mut")
    if end is None:
        return None
    return skip_bare_type(tokens, end)


def _skip_reference(tokens, pos):
    end = _other(tokens, pos, "&")
    if end is None:
        return None
    end = skip_lifetime(tokens, end) or end
    end = _keyword(tokens, end, "mut") or end
    return skip_bare_type(tokens, end)


SIMPLE_TYPE_SHAPES = (
    _skip_trait_object,
    _skip_impl_reference,
    _skip_mutable,
    _skip_reference,
    skip_bare_type,
)


def skip_simple_type(tokens: Sequence[Token], pos: int) -> Optional[int]:
    """Skip a bare type with an optional dyn/&impl/mut/reference marker."""
    for shape in SIMPLE_TYPE_SHAPES:
        end = shape(tokens, pos)
        if end is not None:
            return end
    return None


def skip_tuple_type(tokens: Sequence[Token], pos: int) -> Optional[int]:
    """
    Skip a parenthesized, comma-separated list of types, including ``()``.

    A simple type without parentheses counts as a one-element tuple.
    """
    end = _control(tokens, pos, "(")
    if end is None:
        return skip_simple_type(tokens, pos)
    closed = _control(tokens, end, ")")
    if closed is not None:
        return closed

    end = skip_type(tokens, end)
    if end is None:
        return None
    while True:
        comma = _control(tokens, end, ",")
        if comma is None:
            break
        closed = _control(tokens, comma, ")")
        if closed is not None:
            return closed
        end = skip_type(tokens, comma)
        if end is None:
            return None
    return _control(tokens, end, ")")


def _skip_type_argument(tokens, pos):
    end = skip_lifetime(tokens, pos)
    if end is not None:
        return end
    # Associated type binding: Item = T
    name_end = _identifier(tokens, pos)
    if name_end is not None and _other(tokens, name_end, "=") is not None:
        return skip_type(tokens, name_end + 1)
    return skip_type(tokens, pos)


def _skip_type_arguments(tokens, pos):
    """Skip ``args '>'`` after an opening ``<``."""
    end = _skip_type_argument(tokens, pos)
    if end is None:
        return None
    while True:
        comma = _control(tokens, end, ",")
        if comma is None:
            break
        closed = _control(tokens, comma, ">")
        if closed is not None:
            return closed
        end = _skip_type_argument(tokens, comma)
        if end is None:
            return None
    return _control(tokens, end, ">")


def skip_generic_type(tokens: Sequence[Token], pos: int) -> Optional[int]:
    """Skip a tuple or simple type followed by a balanced ``<...>`` list."""
    end = skip_tuple_type(tokens, pos)
    if end is None:
        return None
    end = _control(tokens, end, "<")
    if end is None:
        return None
    return _skip_type_arguments(tokens, end)


def skip_type(tokens: Sequence[Token], pos: int) -> Optional[int]:
    """Skip one type expression: generic, then tuple, then simple."""
    end = skip_generic_type(tokens, pos)
    if end is None:
        end = skip_tuple_type(tokens, pos)
    return end
