"""
Exceptions raised while loading and extracting a Scytl workbook.

Every structural problem is fatal: extraction stops at the first error and
no partial dataset is returned. All extraction errors inherit from
ExtractionError and carry an ErrorKind plus positional details.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    MISSING_NODE = 'MissingNode'
    TYPE_MISMATCH = 'TypeMismatch'
    SCHEMA_VIOLATION = 'SchemaViolation'
    PARSE_FAILURE = 'ParseFailure'
    WIDTH_MISMATCH = 'WidthMismatch'


class ScytlError(Exception):
    """Base class for all errors raised by scytl_results."""


class WorkbookLoadError(ScytlError):
    """The input file could not be read or is not well-formed XML."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path:
            return f"{self.message} (file: {self.path})"
        return self.message


class ExtractionError(ScytlError):
    """
    Base exception for schema-validated extraction failures.

    Attributes:
        message: Human-readable error message
        kind: Which of the five error kinds this is
        details: Positional context (worksheet, row, cell, column)
    """

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        worksheet: Optional[str] = None,
        row: Optional[int] = None,
        cell_number: Optional[int] = None,
        column: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = {}
        if worksheet is not None:
            self.details['worksheet'] = worksheet
        if row is not None:
            self.details['row'] = row
        if cell_number is not None:
            self.details['cell'] = cell_number
        if column is not None:
            self.details['column'] = column

    @property
    def worksheet(self) -> Optional[str]:
        return self.details.get('worksheet')

    def with_worksheet(self, worksheet: Optional[str]) -> 'ExtractionError':
        """Attach the worksheet name unless the raiser already did."""
        if worksheet is not None and 'worksheet' not in self.details:
            self.details['worksheet'] = worksheet
        return self

    def __str__(self) -> str:
        if self.details:
            return f"{self.kind.value}: {self.message} | Details: {self.details}"
        return f"{self.kind.value}: {self.message}"


class MissingNode(ExtractionError):
    """An expected element, child or text content is absent."""

    kind = ErrorKind.MISSING_NODE


class TypeMismatch(ExtractionError):
    """A datum's ``s:Type`` attribute is not the expected one."""

    kind = ErrorKind.TYPE_MISMATCH


class SchemaViolation(ExtractionError):
    """
    Style, column name and data type do not fit the known schema.

    Examples:
        - Vote count cell without the VoteCount style
        - Unrecognized column name in the Registered Voters header
    """

    kind = ErrorKind.SCHEMA_VIOLATION


class ParseFailure(ExtractionError):
    """Text content does not parse as the expected numeric form."""

    kind = ErrorKind.PARSE_FAILURE


class WidthMismatch(ExtractionError):
    """Cell count disagrees with the header width or tuple length."""

    kind = ErrorKind.WIDTH_MISMATCH
