"""
doccheck - Declaration Documentation Checker

Checks that structs, fields, enums, traits, consts and functions in source
files carry complete documentation comments.
"""

__version__ = "0.1.0"
__author__ = "doccheck contributors"

from doccheck.errors import DocCheckError, LexerError, ParseError, DocumentationError
from doccheck.checker import DocChecker, check, check_documentation, check_file
