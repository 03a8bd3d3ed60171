"""
Exceptions shared by the lexer, the declaration parser and the checker.
"""

from typing import Optional, Tuple


class DocCheckError(Exception):
    """Base class for every failure a documentation check can report."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class LexerError(DocCheckError):
    """Raised when no token alternative matches at some offset."""

    def __init__(self, reason: str, offset: int, line: int = 0, column: int = 0):
        self.reason = reason
        self.offset = offset
        self.line = line
        self.column = column
        if line:
            message = f"token parser error at line {line} column {column}, reason: {reason}"
        else:
            message = f"token parser error at offset {offset}, reason: {reason}"
        super().__init__(message)


class ParseError(DocCheckError):
    """Raised when the declaration grammar cannot consume the token stream."""

    def __init__(self, reason: str, offset: int, line: int = 0, column: int = 0, token=None):
        self.reason = reason
        self.offset = offset
        self.line = line
        self.column = column
        self.token = token
        if line:
            message = f"statement parser error at line {line} column {column}, reason: {reason}"
        else:
            message = f"statement parser error at offset {offset}, reason: {reason}"
        super().__init__(message)


class DocumentationError(DocCheckError):
    """A declaration whose documentation is missing or malformed."""

    def __init__(
        self,
        message: str,
        kind: str,
        name: str,
        span: Tuple[int, int] = (0, 0),
        argument: Optional[str] = None,
    ):
        self.kind = kind
        self.name = name
        self.span = span
        self.argument = argument
        self.line = 0
        self.column = 0
        super().__init__(message)

    def locate(self, line: int, column: int) -> "DocumentationError":
        """Attach the 1-based position of the offending declaration."""
        self.line = line
        self.column = column
        return self
