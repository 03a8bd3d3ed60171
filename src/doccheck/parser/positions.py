"""
Offset to line/column conversion used by error reporting and token dumps.
"""

from typing import Tuple


def offset_to_line_column(source: str, offset: int) -> Tuple[int, int]:
    """
    Convert an offset into ``source`` to a 1-based (line, column) pair.

    Offsets past the end of the text are clamped to the position just after
    the last character.
    """
    offset = max(0, min(offset, len(source)))
    line = source.count("\n", 0, offset) + 1
    line_start = source.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1
