"""
Cell-level helpers shared by the sheet extractors.

A cell (``<s:Cell>``) optionally carries a StyleID and a MergeAcross
attribute, and optionally wraps one datum (``<s:Data s:Type="...">``).
Helpers here read and cross-check those pieces and raise the matching
ExtractionError subclass on any mismatch.
"""

import math
import re
from typing import Iterator, Optional, Tuple

from scytl_results.exceptions import MissingNode, ParseFailure, SchemaViolation, TypeMismatch
from scytl_results.tree import TreeNode
from scytl_results.types import DataType, Tag


_INT_RE = re.compile(r'\s*[+-]?\d+\s*', re.ASCII)
_DECIMAL_RE = re.compile(r'\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?', re.ASCII)

# Counts are 32-bit signed integers in the export
INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1


def find_table(worksheet: TreeNode, worksheet_name: Optional[str] = None) -> TreeNode:
    """Return the worksheet's ``<s:Table>``; raise MissingNode if absent."""
    table = worksheet.child(Tag.TABLE)
    if table is None:
        raise MissingNode("Worksheet has no table", worksheet=worksheet_name)
    return table


def iter_rows(table: TreeNode, start: int = 1) -> Iterator[Tuple[int, TreeNode]]:
    """Iterate ``(row_number, row)`` pairs; row numbers are 1-based."""
    return enumerate(table.children(Tag.ROW), start=start)


def iter_cells(row: TreeNode) -> Iterator[TreeNode]:
    return row.children(Tag.CELL)


def style_of(cell: TreeNode) -> Optional[str]:
    return cell.attribute(Tag.STYLE_ID)


def datum_of(cell: TreeNode) -> Optional[TreeNode]:
    return cell.child(Tag.DATA)


def datum_type(cell: TreeNode) -> Optional[str]:
    """The ``s:Type`` of the cell's datum, or None if there is no datum."""
    datum = datum_of(cell)
    return datum.attribute(Tag.TYPE) if datum is not None else None


def datum_text(cell: TreeNode) -> Optional[str]:
    datum = datum_of(cell)
    return datum.text() if datum is not None else None


def is_string(cell: TreeNode) -> bool:
    return datum_type(cell) == DataType.STRING.value


def is_number(cell: TreeNode) -> bool:
    return datum_type(cell) == DataType.NUMBER.value


def require_string(cell: TreeNode, what: str, **context) -> Optional[str]:
    """
    Require a String datum and return its text (None when the datum is empty).

    Raises:
        TypeMismatch: If the cell has no datum or the datum is not a String
    """
    declared = datum_type(cell)
    if declared != DataType.STRING.value:
        raise TypeMismatch(
            f"{what}: expected a String datum, found {declared or 'no datum'}",
            **context
        )
    return datum_text(cell)


def require_vote_count(cell: TreeNode, vote_count_style: str, what: str, **context) -> int:
    """
    Read a vote-count cell: VoteCount style, Number datum, integer text.

    Raises:
        SchemaViolation: If style or datum type do not match
        ParseFailure: If the text is not an integer
    """
    style = style_of(cell)
    declared = datum_type(cell)
    if style != vote_count_style or declared != DataType.NUMBER.value:
        raise SchemaViolation(
            f"{what}: expected style '{vote_count_style}' with a Number datum, "
            f"found style {style!r} with {declared or 'no datum'}",
            **context
        )
    return parse_int(datum_text(cell), what, **context)


def parse_int(text: Optional[str], what: str = 'value', **context) -> int:
    """
    Parse integer text. Surrounding whitespace is allowed, nothing else.

    Values outside the 32-bit signed range are rejected.

    Example:
        >>> parse_int(' 9095 ')
        9095
        >>> parse_int('9095.5')  # Raises ParseFailure
    """
    if text is None or not _INT_RE.fullmatch(text):
        raise ParseFailure(f"{what}: {text!r} is not an integer", **context)
    try:
        value = int(text)
    except ValueError as e:
        raise ParseFailure(f"{what}: {text[:20]!r}... has too many digits", **context) from e
    if not INT_MIN <= value <= INT_MAX:
        raise ParseFailure(f"{what}: {text!r} is out of range", **context)
    return value


def parse_percent(text: Optional[str], suffix: str, what: str = 'percentage', **context) -> float:
    """
    Parse percentage text such as ``'20.87 %'``.

    Exactly ``suffix`` is stripped from the end; the remainder must be a
    decimal number with nothing trailing.

    Example:
        >>> parse_percent('20.87 %', ' %')
        20.87
        >>> parse_percent('20.87%x', ' %')  # Raises ParseFailure
    """
    if text is None or not text.endswith(suffix):
        raise ParseFailure(f"{what}: {text!r} does not end with {suffix!r}", **context)

    number = text[:-len(suffix)]
    if not _DECIMAL_RE.fullmatch(number):
        raise ParseFailure(f"{what}: {text!r} is not a decimal percentage", **context)
    value = float(number)
    if not math.isfinite(value):
        raise ParseFailure(f"{what}: {text!r} is out of range", **context)
    return value


def merge_across(cell: TreeNode, **context) -> int:
    """
    Number of additional columns merged into this cell (0 when absent).

    Raises:
        ParseFailure: If the attribute is not a non-negative integer
    """
    raw = cell.attribute(Tag.MERGE_ACROSS)
    if raw is None:
        return 0
    value = parse_int(raw, 'MergeAcross', **context)
    if value < 0:
        raise ParseFailure(f"MergeAcross: negative value {value}", **context)
    return value
