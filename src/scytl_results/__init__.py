"""
scytl-results: election results extraction from Scytl SpreadsheetML workbooks.

Main package exports for user-facing API.
"""

from scytl_results.exceptions import (
    ExtractionError,
    MissingNode,
    ParseFailure,
    SchemaViolation,
    TypeMismatch,
    WidthMismatch,
    WorkbookLoadError,
)
from scytl_results.models import (
    DocumentProperties,
    Election,
    ElectionDataset,
    ElectionHeader,
    LabeledTuple,
    RegionProfile,
    TocEntry,
)
from scytl_results.reader import ScytlReader, read_workbook
from scytl_results.render import render, render_lines
from scytl_results.tree import load_workbook, parse_workbook

__all__ = [
    'ScytlReader',
    'read_workbook',
    'load_workbook',
    'parse_workbook',
    'render',
    'render_lines',
    'DocumentProperties',
    'Election',
    'ElectionDataset',
    'ElectionHeader',
    'LabeledTuple',
    'RegionProfile',
    'TocEntry',
    'ExtractionError',
    'MissingNode',
    'ParseFailure',
    'SchemaViolation',
    'TypeMismatch',
    'WidthMismatch',
    'WorkbookLoadError',
]
