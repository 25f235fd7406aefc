"""
Shared vocabulary of the SpreadsheetML 2003 workbook format.

Tag and attribute names are a fixed external contract: Scytl exports are
written by Excel's XML spreadsheet writer, so every extractor must match
these names verbatim.
"""

from enum import Enum


SPREADSHEET_NS = 'urn:schemas-microsoft-com:office:spreadsheet'
OFFICE_NS = 'urn:schemas-microsoft-com:office:office'


def ss(local: str) -> str:
    """Qualified name in the spreadsheet namespace (``s:`` prefix)."""
    return f'{{{SPREADSHEET_NS}}}{local}'


def office(local: str) -> str:
    """Qualified name in the office namespace (``o:`` prefix)."""
    return f'{{{OFFICE_NS}}}{local}'


class DataType(str, Enum):
    """Values of the ``s:Type`` attribute on ``<s:Data>`` elements."""

    STRING = 'String'
    NUMBER = 'Number'


class Tag:
    """
    Qualified element and attribute names used by the extractors.

    Example:
        >>> Tag.ROW
        '{urn:schemas-microsoft-com:office:spreadsheet}Row'
    """

    # Elements
    WORKBOOK = ss('Workbook')
    WORKSHEET = ss('Worksheet')
    TABLE = ss('Table')
    ROW = ss('Row')
    CELL = ss('Cell')
    DATA = ss('Data')

    DOCUMENT_PROPERTIES = office('DocumentProperties')
    TITLE = office('Title')
    AUTHOR = office('Author')
    CREATED = office('Created')

    # Attributes
    NAME = ss('Name')
    STYLE_ID = ss('StyleID')
    MERGE_ACROSS = ss('MergeAcross')
    TYPE = ss('Type')
