"""
Pytest configuration shared by unit and integration tests.

Provides a builder for small SpreadsheetML documents so that every test
spells out exactly the rows it exercises.
"""

from typing import Optional

import pytest
from lxml import etree

from scytl_results.config import WorkbookSchema
from scytl_results.tree import TreeNode, parse_workbook
from scytl_results.types import OFFICE_NS, SPREADSHEET_NS, Tag, office, ss


class SpreadsheetBuilder:
    """Builds SpreadsheetML elements with lxml."""

    NSMAP = {'s': SPREADSHEET_NS, 'o': OFFICE_NS}

    def _element(self, tag: str, *children, **attrs) -> etree._Element:
        element = etree.Element(tag, nsmap=self.NSMAP)
        for name, value in attrs.items():
            if value is not None:
                element.set(ss(name), str(value))
        element.extend(children)
        return element

    def cell(
        self,
        value=None,
        type: Optional[str] = None,
        style: Optional[str] = None,
        merge: Optional[int] = None,
        empty_data: bool = False,
    ) -> etree._Element:
        cell = self._element(Tag.CELL, MergeAcross=merge, StyleID=style)
        if value is None and not empty_data and type is None:
            return cell
        if type is None:
            type = 'Number' if isinstance(value, int) else 'String'
        data = etree.SubElement(cell, Tag.DATA, {Tag.TYPE: type})
        if value is not None:
            data.text = str(value)
        return cell

    def text(self, value, **kwargs) -> etree._Element:
        return self.cell(value, type='String', **kwargs)

    def number(self, value, style: Optional[str] = 'VoteCount', **kwargs) -> etree._Element:
        return self.cell(value, type='Number', style=style, **kwargs)

    def row(self, *cells) -> etree._Element:
        return self._element(Tag.ROW, *cells)

    def worksheet(self, name: str, *rows, table: bool = True) -> etree._Element:
        worksheet = self._element(Tag.WORKSHEET, Name=name)
        if table:
            worksheet.append(self._element(Tag.TABLE, *rows))
        return worksheet

    def properties(self, title='Detail Results', author='Scytl', created='2012-11-21T16:58:32Z') -> etree._Element:
        block = etree.Element(Tag.DOCUMENT_PROPERTIES, nsmap=self.NSMAP)
        for local, value in (('Title', title), ('Author', author), ('Created', created)):
            if value is not None:
                etree.SubElement(block, office(local)).text = value
        return block

    def workbook(self, *worksheets, properties=None, with_properties: bool = True) -> str:
        """Serialize a complete workbook; the default properties block is added unless disabled."""
        root = etree.Element(Tag.WORKBOOK, nsmap=self.NSMAP)
        if with_properties:
            root.append(self.properties() if properties is None else properties)
        root.extend(worksheets)
        etree.cleanup_namespaces(root)
        return etree.tostring(root, encoding='unicode')

    # Canonical sheets

    def toc_sheet(self, *entries) -> etree._Element:
        rows = [self.row(self.text('Table of Contents', style='title'))]
        rows += [self.row(self.number(page, style='Page'), self.text(name)) for page, name in entries]
        return self.worksheet('Table of Contents', *rows)

    def voters_header(self, *columns: str) -> etree._Element:
        columns = columns or ('County', 'Registered Voters', 'Ballots Cast', 'Voter Turnout')
        return self.row(*[self.text(c) for c in columns])

    def voters_row(self, region, registered, cast, turnout) -> etree._Element:
        return self.row(
            self.text(region),
            self.number(registered),
            self.number(cast),
            self.text(turnout, style='VoteCount'),
        )

    def voters_sheet(self, *rows) -> etree._Element:
        rows = rows or (self.voters_row('Arkansas', 9095, 1898, '20.87 %'),)
        return self.worksheet('Registered Voters', self.voters_header(), *rows)

    def president_sheet(self, name: str = '2', data_rows=None) -> etree._Element:
        if data_rows is None:
            data_rows = [
                self.row(self.text('Arkansas'), *[self.number(v) for v in (0, 508, 508, 599, 599, 1107)]),
                self.row(self.text('Ashley'), *[self.number(v) for v in (0, 312, 312, 401, 401, 713)]),
            ]
        return self.worksheet(
            name,
            self.row(self.text('U.S. President - DEM', style='headerLbl', merge=6)),
            self.row(
                self.text(None, empty_data=True),
                self.text(None, empty_data=True),
                self.text('John Wolfe', merge=1),
                self.text('Barack Obama', merge=1),
                self.text(None, empty_data=True),
            ),
            self.row(*[self.text(c) for c in (
                'County', 'Registered Voters', 'Election Day', 'Total Votes',
                'Election Day', 'Total Votes', 'Total',
            )]),
            *data_rows,
        )

    def sheet_node(self, *rows, name: str = 'Sheet') -> TreeNode:
        """Parse a single worksheet and return its element."""
        root = parse_workbook(self.workbook(self.worksheet(name, *rows)))
        return root.child(Tag.WORKSHEET)


@pytest.fixture
def xml() -> SpreadsheetBuilder:
    return SpreadsheetBuilder()


@pytest.fixture
def schema() -> WorkbookSchema:
    return WorkbookSchema()


@pytest.fixture
def sample_workbook(xml) -> str:
    """A small but complete workbook: TOC, Registered Voters, one contest."""
    return xml.workbook(
        xml.toc_sheet((1, 'Registered Voters'), (2, 'U.S. President - DEM')),
        xml.voters_sheet(
            xml.voters_row('Arkansas', 9095, 1898, '20.87 %'),
            xml.voters_row('Ashley', 12001, 3850, '32.08 %'),
        ),
        xml.president_sheet(),
    )


@pytest.fixture
def sample_path(tmp_path, sample_workbook):
    path = tmp_path / 'detail.xml'
    path.write_text(sample_workbook, encoding='utf-8')
    return path
