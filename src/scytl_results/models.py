"""
Pydantic models for data extracted from a Scytl results workbook.

All models are frozen: extractors collect values in work lists and build
each record once, after the source rows have passed every check.
"""

from typing import List
from pydantic import BaseModel, ConfigDict, Field, model_validator


class DocumentProperties(BaseModel):
    """Metadata block of the workbook (``<o:DocumentProperties>``)."""

    title: str = Field(..., description="Document title")
    author: str = Field(..., description="Document author")
    created: str = Field(..., description="Creation timestamp, verbatim")

    model_config = ConfigDict(frozen=True)


class TocEntry(BaseModel):
    """One (page number, contest name) row of the Table of Contents sheet."""

    page_number: int = Field(..., description="Page (sheet) number of the contest")
    contest_name: str = Field(..., description="Contest name")

    model_config = ConfigDict(frozen=True)


class RegionProfile(BaseModel):
    """
    One data row of the Registered Voters sheet.

    Example:
        >>> RegionProfile(region_name='Arkansas', registered_voters=9095,
        ...               ballots_cast=1898, voter_turnout=20.87)
    """

    region_name: str = Field(..., description="County or precinct name")
    registered_voters: int = Field(..., description="Registered voters in the region")
    ballots_cast: int = Field(..., description="Ballots cast in the region")
    voter_turnout: float = Field(
        ..., allow_inf_nan=False, description="Turnout in percent (20.87 for '20.87 %')"
    )

    model_config = ConfigDict(frozen=True)


class ElectionHeader(BaseModel):
    """One logical column of a results sheet, after merged-cell expansion."""

    column_name: str = Field(..., description="Column name, e.g. 'Election Day'")
    candidate_name: str = Field(default='', description="Candidate spanning this column, may be empty")

    model_config = ConfigDict(frozen=True)

    @property
    def display_name(self) -> str:
        """'<candidate> - <column>', or the bare column name without a candidate."""
        if self.candidate_name:
            return f"{self.candidate_name} - {self.column_name}"
        return self.column_name


class LabeledTuple(BaseModel):
    """One data row of a results sheet: a region label and its vote counts."""

    label: str = Field(..., description="Row label (county or precinct)")
    data: List[int] = Field(default_factory=list, description="Vote counts, label column excluded")

    model_config = ConfigDict(frozen=True)


class Election(BaseModel):
    """
    Results of one contest (one results worksheet).

    Invariant: every tuple has exactly one value per header column except
    the leading label column.
    """

    name: str = Field(..., description="Contest name from the sheet's title row")
    headers: List[ElectionHeader] = Field(..., min_length=1)
    results: List[LabeledTuple] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode='after')
    def check_tuple_widths(self) -> 'Election':
        width = len(self.headers)
        for i, result in enumerate(self.results):
            if len(result.data) + 1 != width:
                raise ValueError(
                    f"Result {i} ('{result.label}') has {len(result.data)} values, "
                    f"expected {width - 1}"
                )
        return self


class ElectionDataset(BaseModel):
    """
    Everything extracted from one workbook.

    Only built after a full successful read; a failed read yields no
    dataset at all.
    """

    properties: DocumentProperties
    toc: List[TocEntry] = Field(default_factory=list)
    regions: List[RegionProfile] = Field(default_factory=list)
    elections: List[Election] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def __repr__(self) -> str:
        return (
            f"ElectionDataset(title='{self.properties.title}', "
            f"toc={len(self.toc)}, "
            f"regions={len(self.regions)}, "
            f"elections={len(self.elections)})"
        )
