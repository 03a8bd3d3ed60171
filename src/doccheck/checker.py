"""
Documentation Checker

Checks that every declaration found by the parser carries documentation:
- structs and every one of their fields
- enums, traits and consts
- functions, including return value and argument documentation

Checking stops at the first problem, in source order.

Function documentation is expected to look like this:

    /// Adds two numbers.
    ///
    /// # Arguments
    /// * `a`: first operand.
    /// * `b`: second operand.
    ///
    /// # Return
    /// The sum.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, TextIO, Tuple, Union

from doccheck.dump import dump_tokens
from doccheck.errors import DocCheckError, DocumentationError
from doccheck.parser.declarations import (
    SELF_ARGUMENT,
    ComplexToken,
    DeclarationKind,
    DeclarationParser,
    FunctionInfo,
    StructInfo,
)
from doccheck.parser.lexer import Lexer, read_source
from doccheck.parser.positions import offset_to_line_column

logger = logging.getLogger(__name__)

RETURN_DOC_KEYWORD = "return"
ARGUMENT_DOC_MARKER = "* `"

# Declarations that only need non-empty docs, with their message names
NAMED_KINDS = {
    DeclarationKind.ENUM: "enum",
    DeclarationKind.TRAIT: "trait",
    DeclarationKind.CONST: "const",
}


def extract_documented_arguments(docs: str) -> List[str]:
    """
    Collect the argument names written as ``* `name``` bullets.

    After each marker, leading backticks are skipped and the name runs to
    the next backtick (or the end of the text).
    """
    names = []
    pos = docs.find(ARGUMENT_DOC_MARKER)
    while pos >= 0:
        current = pos + len(ARGUMENT_DOC_MARKER)
        name = []
        while current < len(docs):
            ch = docs[current]
            if ch == '`':
                if name:
                    break
                current += 1
                continue
            name.append(ch)
            current += 1
        names.append(''.join(name))
        pos = docs.find(ARGUMENT_DOC_MARKER, pos + 1)
    return names


class DocChecker:
    """
    Runs the lexer, the declaration parser and the documentation rules.

    Usage:
        checker = DocChecker()
        checker.check_documentation(source_text)   # raises DocCheckError
    """

    def check_documentation(self, content: str, print_tokens: bool = False,
                            out: Optional[TextIO] = None, filename: str = "<unknown>") -> None:
        """Check all declarations in ``content``; raise on the first problem."""
        if not content:
            return

        tokens = Lexer(content, filename).tokenize_all()
        if print_tokens:
            dump_tokens("parsed tokens", tokens, content, out)

        complex_tokens = DeclarationParser(tokens, content, filename).parse()
        if print_tokens:
            dump_tokens("parsed complex tokens", complex_tokens, content, out)

        try:
            self.check_complex_tokens(complex_tokens)
        except DocumentationError as e:
            line, column = offset_to_line_column(content, e.span[0])
            raise e.locate(line, column)

    def check_file(self, path: Union[str, Path], print_tokens: bool = False,
                   out: Optional[TextIO] = None) -> None:
        """Read a file and check it."""
        content = read_source(str(path))
        logger.debug(f"Checking {path}")
        self.check_documentation(content, print_tokens, out, filename=str(path))

    def check_complex_tokens(self, complex_tokens: Sequence[ComplexToken]) -> None:
        for token in complex_tokens:
            if token.kind == DeclarationKind.STRUCT:
                self.check_struct_docs(token)
                self.check_struct_field_docs(token)
            elif token.kind == DeclarationKind.FUNCTION:
                self.check_function_docs(token)
            elif token.kind in NAMED_KINDS:
                self._check_not_empty(token, NAMED_KINDS[token.kind])

    @staticmethod
    def _check_not_empty(info, kind: str) -> None:
        if not info.docs:
            raise DocumentationError(
                f'expected to find documentation for the {kind} "{info.name}"',
                kind, info.name, info.span,
            )

    def check_struct_docs(self, info: StructInfo) -> None:
        self._check_not_empty(info, "struct")

    def check_struct_field_docs(self, info: StructInfo) -> None:
        """Every field of the struct must be documented."""
        for field_info in info.fields:
            if not field_info.docs:
                raise DocumentationError(
                    f'expected to find documentation for the struct field "{field_info.name}"',
                    "field", field_info.name, field_info.span,
                )

    def check_function_docs(self, info: FunctionInfo) -> None:
        """
        Check function documentation.

        The docs must be non-empty ASCII text, mention "return" (in any case)
        exactly when the function returns a value, and document every
        argument except the receiver, and nothing else, as a
        ``* `name``` bullet.
        """
        def fail(message: str, argument: Optional[str] = None) -> DocumentationError:
            return DocumentationError(message, "function", info.name, info.span, argument)

        if not info.docs:
            raise fail(f'expected to find documentation for the function "{info.name}"')

        if not info.docs.isascii():
            raise fail(
                f'expected the documentation for the function "{info.name}" '
                f'to only use ASCII characters'
            )

        # A plain substring search, so "Returns ..." counts too.
        has_return_docs = RETURN_DOC_KEYWORD in info.docs.lower()
        if not info.void_return and not has_return_docs:
            raise fail(
                f'expected to find the "{RETURN_DOC_KEYWORD}" keyword (case-insensitive) in the '
                f'documentation that describes the return value for the function "{info.name}"'
            )
        if info.void_return and has_return_docs:
            raise fail(f'found documentation of the VOID return value for the function "{info.name}"')

        documented_args = extract_documented_arguments(info.docs)

        for arg_name in info.args:
            if arg_name == SELF_ARGUMENT:
                continue
            if arg_name not in documented_args:
                raise fail(
                    f'expected to find documentation for the argument "{arg_name}" '
                    f'of the function "{info.name}"',
                    arg_name,
                )

        for doc_arg_name in documented_args:
            if doc_arg_name not in info.args:
                raise fail(
                    f'found documentation for a non-existing argument "{doc_arg_name}" '
                    f'of the function "{info.name}"',
                    doc_arg_name,
                )


def check_documentation(content: str, print_tokens: bool = False,
                        out: Optional[TextIO] = None) -> None:
    """Check source text, raising DocCheckError on the first problem."""
    DocChecker().check_documentation(content, print_tokens, out)


def check(content: str, print_tokens: bool = False) -> Tuple[bool, Optional[str]]:
    """Check source text and return ``(ok, message)`` instead of raising."""
    try:
        DocChecker().check_documentation(content, print_tokens)
    except DocCheckError as e:
        return False, e.message
    return True, None


def check_file(path: Union[str, Path], print_tokens: bool = False) -> None:
    """Convenience function to check a file."""
    DocChecker().check_file(path, print_tokens)
