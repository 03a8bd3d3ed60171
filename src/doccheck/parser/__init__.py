"""
doccheck.parser - Declaration Parser

Lexer, type skipper and declaration parser for source files.
Converts source text into a flat stream of declarations and passthrough tokens.
"""

from doccheck.parser.lexer import Lexer, Token, TokenType, read_source, tokenize_file
from doccheck.parser.positions import offset_to_line_column
from doccheck.parser.types import (
    skip_type,
    skip_generic_type,
    skip_tuple_type,
    skip_simple_type,
    skip_bare_type,
)
from doccheck.parser.declarations import (
    DeclarationParser,
    parse_source,
    parse_tokens,
    SELF_ARGUMENT,
    # Complex token types
    ComplexToken,
    DeclarationKind,
    StructInfo,
    FieldInfo,
    FunctionInfo,
    EnumInfo,
    TraitInfo,
    ConstInfo,
    OtherToken,
)

__all__ = [
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    "read_source",
    "tokenize_file",
    "offset_to_line_column",
    # Types
    "skip_type",
    "skip_generic_type",
    "skip_tuple_type",
    "skip_simple_type",
    "skip_bare_type",
    # Parser
    "DeclarationParser",
    "parse_source",
    "parse_tokens",
    "SELF_ARGUMENT",
    # Complex tokens
    "ComplexToken",
    "DeclarationKind",
    "StructInfo",
    "FieldInfo",
    "FunctionInfo",
    "EnumInfo",
    "TraitInfo",
    "ConstInfo",
    "OtherToken",
]
