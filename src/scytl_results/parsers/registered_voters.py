"""
Extraction of the Registered Voters worksheet.

The first row is the header; every following row is one region:

    County   | Registered Voters | Ballots Cast | Voter Turnout
    Arkansas | 9095              | 1898         | 20.87 %

Value cells are matched against the header by position. The header
text, the cell style and the datum type are cross-checked on every cell
so that a column shifted or renamed by a different export fails loudly
instead of landing in the wrong field.
"""

from typing import Dict, List, Optional, Union
import logging

from scytl_results.config import WorkbookSchema, get_schema
from scytl_results.exceptions import MissingNode, SchemaViolation, WidthMismatch
from scytl_results.models import RegionProfile
from scytl_results.parsers.cells import (
    datum_text,
    datum_type,
    find_table,
    is_string,
    iter_cells,
    iter_rows,
    parse_percent,
    require_string,
    require_vote_count,
    style_of,
)
from scytl_results.tree import TreeNode
from scytl_results.types import DataType

logger = logging.getLogger(__name__)


def read_header(row: Optional[TreeNode]) -> List[str]:
    """
    Header names of the sheet, in column order.

    Only cells with a String datum contribute; other cells are ignored.
    """
    if row is None:
        return []
    return [datum_text(cell) or '' for cell in iter_cells(row) if is_string(cell)]


class _RegionRowReader:
    """Dispatches each value cell of a region row on its header name."""

    def __init__(self, schema: WorkbookSchema, worksheet_name: Optional[str]):
        self.schema = schema
        self.worksheet_name = worksheet_name
        self.fields = {
            schema.registered_voters_column: 'registered_voters',
            schema.ballots_cast_column: 'ballots_cast',
            schema.voter_turnout_column: 'voter_turnout',
        }

    def read_value(self, cell: TreeNode, column: str, **context) -> Union[int, float]:
        schema = self.schema
        if column in (schema.registered_voters_column, schema.ballots_cast_column):
            return require_vote_count(cell, schema.vote_count_style, column, **context)

        if column == schema.voter_turnout_column:
            style = style_of(cell)
            declared = datum_type(cell)
            if style != schema.vote_count_style or declared != DataType.STRING.value:
                raise SchemaViolation(
                    f"{column}: expected style '{schema.vote_count_style}' with a "
                    f"String datum, found style {style!r} with {declared or 'no datum'}",
                    **context
                )
            return parse_percent(datum_text(cell), schema.percent_suffix, column, **context)

        raise SchemaViolation(
            f"Unrecognized column name in Registered Voters worksheet: {column!r}",
            column=column,
            **context
        )

    def read_row(self, row: TreeNode, row_number: int, header: List[str]) -> RegionProfile:
        context = {'worksheet': self.worksheet_name, 'row': row_number}

        cells = list(iter_cells(row))
        if not cells:
            raise MissingNode("Region row has no cells", **context)

        region_name = require_string(cells[0], 'region name', cell_number=1, **context)

        # The first header entry names the region column ("County", "Precinct", ...)
        value_cells = cells[1:]
        value_columns = header[1:]

        values: Dict[str, Union[int, float]] = {}
        for index, (cell, column) in enumerate(zip(value_cells, value_columns), start=2):
            values[self.fields.get(column, column)] = self.read_value(
                cell, column, cell_number=index, **context
            )

        if len(value_cells) != len(value_columns):
            raise WidthMismatch(
                f"Region row has {len(value_cells)} value cells, "
                f"header has {len(value_columns)} value columns",
                **context
            )

        missing = [name for name, field in self.fields.items() if field not in values]
        if missing:
            raise SchemaViolation(f"Region row lacks columns {missing}", **context)

        return RegionProfile(region_name=region_name or '', **values)


def read_registered_voters(
    worksheet: TreeNode,
    schema: Optional[WorkbookSchema] = None,
    worksheet_name: Optional[str] = None,
) -> List[RegionProfile]:
    """
    Read one RegionProfile per data row of the Registered Voters sheet.

    Args:
        worksheet: The Registered Voters ``<s:Worksheet>``
        schema: Vendor vocabulary (defaults to the packaged schema)
        worksheet_name: Name used in error details

    Returns:
        RegionProfiles in document order

    Raises:
        MissingNode: If the worksheet has no table, or a row has no cells
        TypeMismatch: If a region name is not a String datum
        SchemaViolation: On unrecognized columns or style/type mismatches
        ParseFailure: If a count or turnout does not parse
        WidthMismatch: If a row's cell count disagrees with the header
    """
    schema = schema or get_schema()
    table = find_table(worksheet, worksheet_name)
    reader = _RegionRowReader(schema, worksheet_name)

    rows = iter_rows(table)
    first = next(rows, None)
    header = read_header(first[1] if first else None)
    logger.debug(f"Registered Voters header: {header}")

    regions = [reader.read_row(row, row_number, header) for row_number, row in rows]

    logger.debug(f"Read {len(regions)} region profiles")
    return regions
