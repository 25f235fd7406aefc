"""
Extraction of the workbook's ``<o:DocumentProperties>`` block.
"""

from typing import Optional
import logging

from scytl_results.exceptions import MissingNode
from scytl_results.models import DocumentProperties
from scytl_results.tree import TreeNode
from scytl_results.types import Tag

logger = logging.getLogger(__name__)


def _required_text(properties: TreeNode, tag: str, label: str) -> str:
    node = properties.child(tag)
    if node is None:
        raise MissingNode(f"Document properties have no {label}")
    text = node.text()
    if not text:
        raise MissingNode(f"Document property {label} is empty")
    return text


def read_document_properties(properties: Optional[TreeNode]) -> DocumentProperties:
    """
    Read Title, Author and Created from the metadata block.

    Args:
        properties: The ``<o:DocumentProperties>`` element, or None if absent

    Returns:
        Fully populated DocumentProperties

    Raises:
        MissingNode: If the block, or any of the three fields, is absent or empty
    """
    if properties is None:
        raise MissingNode("Workbook has no document properties")

    result = DocumentProperties(
        title=_required_text(properties, Tag.TITLE, 'Title'),
        author=_required_text(properties, Tag.AUTHOR, 'Author'),
        created=_required_text(properties, Tag.CREATED, 'Created'),
    )
    logger.debug(f"Document properties: {result.title!r} by {result.author!r}")
    return result
