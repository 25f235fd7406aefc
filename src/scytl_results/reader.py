"""
Orchestrator for reading a complete Scytl results workbook.

Workbook layout (document order matters):

    <s:Workbook>
      <o:DocumentProperties> Title, Author, Created
      <s:Worksheet s:Name="Table of Contents">
      <s:Worksheet s:Name="Registered Voters">
      <s:Worksheet s:Name="2">   one results sheet per contest ...
      <s:Worksheet s:Name="3">

Worksheets are found by a single forward scan: each named lookup resumes
where the previous one stopped, and every worksheet after Registered
Voters is a results sheet.
"""

from pathlib import Path
from typing import Callable, Iterator, List, Optional, TypeVar, Union
import logging

from scytl_results.config import WorkbookSchema, get_schema
from scytl_results.exceptions import ExtractionError, MissingNode
from scytl_results.models import Election, ElectionDataset
from scytl_results.parsers import (
    read_document_properties,
    read_election_results,
    read_registered_voters,
    read_table_of_contents,
)
from scytl_results.tree import TreeNode, load_workbook
from scytl_results.types import Tag

logger = logging.getLogger(__name__)

T = TypeVar('T')


class WorksheetCursor:
    """
    Forward-only cursor over the workbook's worksheets.

    The cursor never moves backwards: a worksheet skipped while looking
    for one name cannot be found by a later lookup.

    Example:
        >>> cursor = WorksheetCursor(root)
        >>> toc = cursor.seek('Table of Contents')
        >>> voters = cursor.seek('Registered Voters')
        >>> contests = list(cursor.remaining())
    """

    def __init__(self, root: TreeNode):
        self._current: Optional[TreeNode] = root.child(Tag.WORKSHEET)

    @property
    def current(self) -> Optional[TreeNode]:
        return self._current

    def _advance(self) -> None:
        if self._current is not None:
            self._current = self._current.next_sibling(Tag.WORKSHEET)

    def seek(self, name: str) -> TreeNode:
        """
        Advance to the worksheet named ``name``, starting at the cursor.

        The cursor stays on the found worksheet.

        Raises:
            MissingNode: If the scan runs off the end first
        """
        while self._current is not None and self._current.attribute(Tag.NAME) != name:
            self._advance()

        if self._current is None:
            raise MissingNode(f"Worksheet '{name}' not found", worksheet=name)
        return self._current

    def remaining(self) -> Iterator[TreeNode]:
        """Yield every worksheet after the current one, advancing the cursor."""
        self._advance()
        while self._current is not None:
            yield self._current
            self._advance()


class ScytlReader:
    """
    Reads a Scytl workbook into an ElectionDataset.

    The dataset is only returned after every extractor succeeded; the first
    ExtractionError aborts the read.

    Example:
        >>> root = load_workbook('detail.xml')
        >>> dataset = ScytlReader(root).read()
        >>> dataset.regions[0].region_name
        'Arkansas'
    """

    def __init__(self, root: Optional[TreeNode], schema: Optional[WorkbookSchema] = None):
        self.root = root
        self.schema = schema or get_schema()

    @staticmethod
    def _extract(worksheet_name: Optional[str], step: Callable[[], T]) -> T:
        try:
            return step()
        except ExtractionError as e:
            raise e.with_worksheet(worksheet_name)

    def read(self) -> ElectionDataset:
        """
        Run all extractors in workbook order.

        Returns:
            The complete ElectionDataset

        Raises:
            MissingNode: If the root, the metadata block or a named
                worksheet is missing
            ExtractionError: The first error raised by any extractor
        """
        root = self.root
        if root is None or root.tag != Tag.WORKBOOK:
            raise MissingNode("Couldn't find root Workbook element")

        schema = self.schema
        properties = read_document_properties(root.child(Tag.DOCUMENT_PROPERTIES))
        logger.info(f"Reading workbook '{properties.title}' ({properties.created})")

        cursor = WorksheetCursor(root)

        toc_sheet = cursor.seek(schema.toc_worksheet)
        toc = self._extract(
            schema.toc_worksheet,
            lambda: read_table_of_contents(toc_sheet, schema, schema.toc_worksheet),
        )

        voters_sheet = cursor.seek(schema.registered_voters_worksheet)
        regions = self._extract(
            schema.registered_voters_worksheet,
            lambda: read_registered_voters(
                voters_sheet, schema, schema.registered_voters_worksheet
            ),
        )

        elections: List[Election] = []
        for worksheet in cursor.remaining():
            name = worksheet.attribute(Tag.NAME)
            elections.append(self._extract(
                name,
                lambda: read_election_results(worksheet, schema, name),
            ))

        dataset = ElectionDataset(
            properties=properties,
            toc=toc,
            regions=regions,
            elections=elections,
        )
        logger.info(
            f"Read {len(toc)} TOC entries, {len(regions)} regions, "
            f"{len(elections)} elections"
        )
        return dataset


def read_workbook(path: Union[str, Path], schema: Optional[WorkbookSchema] = None) -> ElectionDataset:
    """
    Load a workbook file and extract its dataset.

    Raises:
        WorkbookLoadError: If the file cannot be loaded
        ExtractionError: If any extraction step fails
    """
    return ScytlReader(load_workbook(path), schema).read()
