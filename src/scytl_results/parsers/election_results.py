"""
Extraction of a per-contest results worksheet.

Row layout of a results sheet:

1. Title row: one ``headerLbl`` cell whose MergeAcross fixes the width
2. Candidate row: candidate names, each merged across its columns
3. Column-name row: one cell per logical column
4. Data rows: a label followed by one VoteCount cell per column

Example (MergeAcross in parentheses):

    U.S. President - DEM (6)
    <blank> | <blank>           | John Wolfe (1)             | Barack Obama (1)           | <blank>
    County  | Registered Voters | Election Day | Total Votes | Election Day | Total Votes | Total
    Arkansas| 0                 | 508          | 508         | 599          | 599         | 1107
"""

from typing import Iterator, List, Optional, Tuple
import logging

from scytl_results.config import WorkbookSchema, get_schema
from scytl_results.exceptions import MissingNode, SchemaViolation, WidthMismatch
from scytl_results.models import Election, ElectionHeader, LabeledTuple
from scytl_results.parsers.cells import (
    datum_text,
    find_table,
    iter_cells,
    iter_rows,
    merge_across,
    require_string,
    require_vote_count,
    style_of,
)
from scytl_results.tree import TreeNode

logger = logging.getLogger(__name__)


class ElectionResultsReader:
    """
    Reads one results worksheet into an Election.

    Header slots are allocated from the title row and filled by the
    candidate row and the column-name row before any data row is read.
    The slot count never changes after the title row.

    Example:
        >>> reader = ElectionResultsReader(worksheet_name='2')
        >>> election = reader.read(worksheet)
        >>> [h.display_name for h in election.headers]
        ['County', 'Registered Voters', 'John Wolfe - Election Day', ...]
    """

    def __init__(
        self,
        schema: Optional[WorkbookSchema] = None,
        worksheet_name: Optional[str] = None,
    ):
        self.schema = schema or get_schema()
        self.worksheet_name = worksheet_name

    def _context(self, row_number: int) -> dict:
        return {'worksheet': self.worksheet_name, 'row': row_number}

    def _next_row(self, rows: Iterator[Tuple[int, TreeNode]], expected: int, what: str) -> TreeNode:
        found = next(rows, None)
        if found is None:
            raise MissingNode(f"Results worksheet has no {what}", **self._context(expected))
        return found[1]

    def read_title(self, row: TreeNode) -> Tuple[str, int]:
        """
        Return ``(election name, header width)`` from the title row.

        Raises:
            MissingNode: If the row has no cell or the title is empty
            SchemaViolation: If the cell lacks the header label style
            TypeMismatch: If the title is not a String datum
        """
        context = self._context(1)
        cell = next(iter_cells(row), None)
        if cell is None:
            raise MissingNode("Title row has no cell", **context)

        style = style_of(cell)
        if style != self.schema.header_label_style:
            raise SchemaViolation(
                f"Title cell: expected style '{self.schema.header_label_style}', found {style!r}",
                cell_number=1,
                **context
            )

        name = require_string(cell, 'election name', cell_number=1, **context)
        if not name:
            raise MissingNode("Title cell has no text", cell_number=1, **context)

        width = merge_across(cell, cell_number=1, **context) + 1
        return name, width

    def read_candidates(self, row: TreeNode, width: int) -> List[str]:
        """
        Expand the candidate row into one candidate name per header slot.

        A cell with MergeAcross M covers M + 1 slots. Cells without text
        leave their slots blank. A span reaching past the last slot is cut
        at the width.

        Raises:
            WidthMismatch: If cells remain once all slots are covered, or
                the cells run out before covering every slot
        """
        context = self._context(2)
        candidates = [''] * width
        cursor = 0
        cells = list(iter_cells(row))

        for index, cell in enumerate(cells, start=1):
            if cursor >= width:
                raise WidthMismatch(
                    f"Candidate row has {len(cells) - index + 1} cells beyond the "
                    f"{width} header columns",
                    cell_number=index,
                    **context
                )
            span = merge_across(cell, cell_number=index, **context) + 1
            text = datum_text(cell)
            end = min(cursor + span, width)
            if text:
                candidates[cursor:end] = [text] * (end - cursor)
            cursor = end

        if cursor != width:
            raise WidthMismatch(
                f"Candidate row covers {cursor} columns, title spans {width}",
                **context
            )
        return candidates

    def read_column_names(self, row: TreeNode, width: int) -> List[str]:
        """
        Read one non-empty String column name per header slot.

        Raises:
            TypeMismatch: If a cell's datum is not a String
            MissingNode: If a column name is empty
            WidthMismatch: If the cell count differs from the width
        """
        context = self._context(3)
        cells = list(iter_cells(row))
        if len(cells) != width:
            raise WidthMismatch(
                f"Column-name row has {len(cells)} cells, title spans {width}",
                **context
            )

        names = []
        for index, cell in enumerate(cells, start=1):
            name = require_string(cell, 'column name', cell_number=index, **context)
            if not name:
                raise MissingNode("Column name is empty", cell_number=index, **context)
            names.append(name)
        return names

    def read_tuple(self, row: TreeNode, row_number: int, width: int) -> LabeledTuple:
        """
        Read a data row: a String label followed by vote counts.

        Raises:
            MissingNode: If the row has no cells
            TypeMismatch: If the label is not a String datum
            SchemaViolation: If a value cell is not a VoteCount Number
            ParseFailure: If a vote count is not an integer
            WidthMismatch: If the value count does not fit the header
        """
        context = self._context(row_number)
        cells = list(iter_cells(row))
        if not cells:
            raise MissingNode("Data row has no cells", **context)

        label = require_string(cells[0], 'row label', cell_number=1, **context)
        data = [
            require_vote_count(
                cell, self.schema.vote_count_style, 'vote count',
                cell_number=index, **context
            )
            for index, cell in enumerate(cells[1:], start=2)
        ]

        if len(data) + 1 != width:
            raise WidthMismatch(
                f"Data row has {len(data)} vote counts, expected {width - 1}",
                **context
            )
        return LabeledTuple(label=label or '', data=data)

    def read(self, worksheet: TreeNode) -> Election:
        """
        Read the whole results worksheet.

        Raises:
            MissingNode: If the worksheet has no table or lacks a header row
            ExtractionError: Any error raised by the row readers
        """
        table = find_table(worksheet, self.worksheet_name)
        rows = iter_rows(table)

        name, width = self.read_title(self._next_row(rows, 1, 'title row'))
        candidates = self.read_candidates(self._next_row(rows, 2, 'candidate row'), width)
        columns = self.read_column_names(self._next_row(rows, 3, 'column-name row'), width)

        headers = [
            ElectionHeader(column_name=column, candidate_name=candidate)
            for column, candidate in zip(columns, candidates)
        ]
        results = [self.read_tuple(row, row_number, width) for row_number, row in rows]

        logger.debug(
            f"Election {name!r}: {len(headers)} columns, {len(results)} result rows"
        )
        return Election(name=name, headers=headers, results=results)


def read_election_results(
    worksheet: TreeNode,
    schema: Optional[WorkbookSchema] = None,
    worksheet_name: Optional[str] = None,
) -> Election:
    """Read one results worksheet; see ElectionResultsReader."""
    return ElectionResultsReader(schema, worksheet_name).read(worksheet)
