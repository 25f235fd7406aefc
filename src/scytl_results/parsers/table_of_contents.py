"""
Extraction of the Table of Contents worksheet.

The sheet mixes index rows with headings and decoration. An index row
looks like:

    <s:Row>
      <s:Cell s:StyleID="Page"><s:Data s:Type="Number">1</s:Data></s:Cell>
      <s:Cell><s:Data s:Type="String">Registered Voters</s:Data></s:Cell>
    </s:Row>

Cells after the contest name are ignored. Every other row is skipped.
"""

from typing import List, Optional
import logging

from scytl_results.config import WorkbookSchema, get_schema
from scytl_results.exceptions import ParseFailure
from scytl_results.models import TocEntry
from scytl_results.parsers.cells import (
    datum_text,
    find_table,
    is_number,
    is_string,
    iter_cells,
    iter_rows,
    parse_int,
    style_of,
)
from scytl_results.tree import TreeNode

logger = logging.getLogger(__name__)


def _read_entry(row: TreeNode, schema: WorkbookSchema) -> Optional[TocEntry]:
    """Return the row's TocEntry, or None if the row is not an index row."""
    cells = list(iter_cells(row))
    if len(cells) < 2:
        return None

    # Cells after the contest name are decoration
    page_cell, contest_cell = cells[:2]
    if style_of(page_cell) != schema.page_style:
        return None
    if not (is_number(page_cell) and is_string(contest_cell)):
        return None

    try:
        page = parse_int(datum_text(page_cell), 'page number')
    except ParseFailure:
        return None

    return TocEntry(page_number=page, contest_name=datum_text(contest_cell) or '')


def read_table_of_contents(
    worksheet: TreeNode,
    schema: Optional[WorkbookSchema] = None,
    worksheet_name: Optional[str] = None,
) -> List[TocEntry]:
    """
    Collect (page number, contest name) pairs in document order.

    Args:
        worksheet: The Table of Contents ``<s:Worksheet>``
        schema: Vendor vocabulary (defaults to the packaged schema)
        worksheet_name: Name used in error details

    Returns:
        One TocEntry per index row

    Raises:
        MissingNode: If the worksheet has no table
    """
    schema = schema or get_schema()
    table = find_table(worksheet, worksheet_name)

    entries = []
    for row_number, row in iter_rows(table):
        entry = _read_entry(row, schema)
        if entry is None:
            logger.debug(f"TOC row {row_number} is not an index row, skipped")
            continue
        entries.append(entry)

    logger.debug(f"Read {len(entries)} table of contents entries")
    return entries
