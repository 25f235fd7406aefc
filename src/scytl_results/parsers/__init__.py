"""
Sheet extractors for Scytl results workbooks.

Each extractor receives one worksheet (or the metadata block) through the
TreeNode interface and returns freshly built models. Extractors never call
each other; the reader module sequences them.
"""

from .document_properties import read_document_properties
from .table_of_contents import read_table_of_contents
from .registered_voters import read_registered_voters
from .election_results import ElectionResultsReader, read_election_results

__all__ = [
    'read_document_properties',
    'read_table_of_contents',
    'read_registered_voters',
    'read_election_results',
    'ElectionResultsReader',
]
