"""
Tree access capability over a parsed workbook.

Extractors only see the TreeNode interface: child lookup by qualified tag,
next sibling element, attribute lookup and text content. LxmlNode is the
single implementation over lxml; tests may substitute in-memory trees.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator, Optional, Union
import logging
from lxml import etree

from scytl_results.exceptions import WorkbookLoadError

logger = logging.getLogger(__name__)


class TreeNode(ABC):
    """
    Read-only view of one element of the workbook tree.

    All names are namespace-qualified in Clark notation (``{uri}Local``),
    see scytl_results.types.
    """

    @property
    @abstractmethod
    def tag(self) -> str:
        """Qualified tag name of this element."""

    @abstractmethod
    def child(self, tag: str) -> Optional['TreeNode']:
        """First direct child element with the given tag, or None."""

    @abstractmethod
    def next_sibling(self, tag: Optional[str] = None) -> Optional['TreeNode']:
        """Next sibling element (with the given tag, if one is passed), or None."""

    @abstractmethod
    def attribute(self, name: str) -> Optional[str]:
        """Attribute value, or None when the attribute is absent."""

    @abstractmethod
    def text(self) -> Optional[str]:
        """Text content, or None when the element carries no text."""

    def children(self, tag: str) -> Iterator['TreeNode']:
        """Iterate direct children with the given tag in document order."""
        node = self.child(tag)
        while node is not None:
            yield node
            node = node.next_sibling(tag)


class LxmlNode(TreeNode):
    """TreeNode implementation over an ``lxml.etree`` element."""

    __slots__ = ('_element',)

    def __init__(self, element: etree._Element):
        self._element = element

    @property
    def tag(self) -> str:
        return self._element.tag

    def child(self, tag: str) -> Optional[TreeNode]:
        found = self._element.find(tag)
        return LxmlNode(found) if found is not None else None

    def next_sibling(self, tag: Optional[str] = None) -> Optional[TreeNode]:
        sibling = self._element.getnext()
        while sibling is not None:
            # Comments and processing instructions have non-string tags
            if isinstance(sibling.tag, str) and (tag is None or sibling.tag == tag):
                return LxmlNode(sibling)
            sibling = sibling.getnext()
        return None

    def attribute(self, name: str) -> Optional[str]:
        return self._element.get(name)

    def text(self) -> Optional[str]:
        # Rich-text data (<s:Data><html:B>..</html:B></s:Data>) spreads text over children
        content = ''.join(self._element.itertext())
        return content or None

    def __eq__(self, other: object) -> bool:
        return isinstance(other, LxmlNode) and other._element is self._element

    def __hash__(self) -> int:
        return hash(self._element)

    def __repr__(self) -> str:
        return f"LxmlNode({self._element.tag!r})"


def _make_parser() -> etree.XMLParser:
    # Malformed XML is rejected rather than recovered: a damaged export is untrusted
    return etree.XMLParser(recover=False, huge_tree=True, resolve_entities=False)


def load_workbook(path: Union[str, Path]) -> TreeNode:
    """
    Parse a workbook file and return its root element.

    Args:
        path: Path to the SpreadsheetML file

    Returns:
        Root element wrapped as LxmlNode

    Raises:
        WorkbookLoadError: If the file cannot be read or is not well-formed XML
    """
    path = Path(path)
    logger.debug(f"Loading workbook {path}")

    try:
        tree = etree.parse(str(path), _make_parser())
    except OSError as e:
        raise WorkbookLoadError(f"Cannot read file: {e}", path=str(path)) from e
    except etree.XMLSyntaxError as e:
        raise WorkbookLoadError(f"Malformed XML: {e}", path=str(path)) from e

    return LxmlNode(tree.getroot())


def parse_workbook(data: Union[str, bytes]) -> TreeNode:
    """
    Parse an in-memory workbook document and return its root element.

    Raises:
        WorkbookLoadError: If the content is not well-formed XML
    """
    if isinstance(data, str):
        data = data.encode('utf-8')

    try:
        root = etree.fromstring(data, _make_parser())
    except etree.XMLSyntaxError as e:
        raise WorkbookLoadError(f"Malformed XML: {e}") from e

    return LxmlNode(root)
