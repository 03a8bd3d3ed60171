"""
Human-readable token dumps for ``--print-tokens``.
"""

import sys
from typing import Iterable, Optional, TextIO, Union

from doccheck.parser.declarations import ComplexToken, DeclarationKind, OtherToken
from doccheck.parser.lexer import Token, TokenType
from doccheck.parser.positions import offset_to_line_column

RULE = "------------------------------------"

TOKEN_NAMES = {
    TokenType.CONTROL: "Control",
    TokenType.OPERATOR: "Operator",
    TokenType.IDENTIFIER: "Identifier",
    TokenType.COMMENT: "Comment",
    TokenType.OTHER: "Other",
}

NAMED_DESCRIPTIONS = {
    DeclarationKind.ENUM: "Enum",
    DeclarationKind.TRAIT: "Trait",
    DeclarationKind.CONST: "Const",
}


def _quote_list(names) -> str:
    return "[" + ", ".join(f'"{n}"' for n in names) + "]"


def describe_token(token: Token) -> str:
    """``Identifier("fn")``, ``Control('(')``, ..."""
    name = TOKEN_NAMES[token.type]
    if token.type in (TokenType.CONTROL, TokenType.OTHER):
        return f"{name}({token.value!r})"
    return f'{name}("{token.value}")'


def describe_complex_token(node: ComplexToken) -> str:
    kind = node.kind
    if kind == DeclarationKind.STRUCT:
        fields = _quote_list(f.name for f in node.fields)
        return f'Struct(name="{node.name}", fields={fields}, docs={node.docs!r})'
    if kind == DeclarationKind.FUNCTION:
        return (
            f'Function(name="{node.name}", args={_quote_list(node.args)}, '
            f'void_return={node.void_return}, docs={node.docs!r})'
        )
    if kind in NAMED_DESCRIPTIONS:
        return f'{NAMED_DESCRIPTIONS[kind]}(name="{node.name}", docs={node.docs!r})'
    if isinstance(node, OtherToken):
        return f"Other({describe_token(node.token)})"
    return repr(node)


def dump_tokens(
    title: str,
    items: Iterable[Union[Token, ComplexToken]],
    source: str,
    out: Optional[TextIO] = None,
) -> None:
    """Print ``[line L, column C] <description>`` for every item."""
    out = out or sys.stdout
    print(f"{title}:", file=out)
    for item in items:
        line, column = offset_to_line_column(source, item.span[0])
        if isinstance(item, Token):
            description = describe_token(item)
        else:
            description = describe_complex_token(item)
        print(f"[line {line}, column {column}] {description}", file=out)
    print(RULE + "\n", file=out)
