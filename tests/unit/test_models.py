"""
Unit tests for the extracted data models.
"""

import pytest
from pydantic import ValidationError

from scytl_results.models import (
    Election,
    ElectionDataset,
    ElectionHeader,
    LabeledTuple,
    RegionProfile,
    TocEntry,
)


class TestElectionHeader:

    def test_display_name_with_candidate(self):
        header = ElectionHeader(column_name='Election Day', candidate_name='John Wolfe')

        assert header.display_name == 'John Wolfe - Election Day'

    def test_display_name_without_candidate(self):
        assert ElectionHeader(column_name='Total').display_name == 'Total'


class TestRegionProfile:

    @pytest.mark.parametrize('turnout', [float('inf'), float('nan')])
    def test_rejects_non_finite_turnout(self, turnout):
        with pytest.raises(ValidationError):
            RegionProfile(
                region_name='Arkansas', registered_voters=1, ballots_cast=1, voter_turnout=turnout
            )


class TestElection:

    def _headers(self, *names):
        return [ElectionHeader(column_name=n) for n in names]

    def test_accepts_matching_widths(self):
        election = Election(
            name='Contest',
            headers=self._headers('County', 'Total'),
            results=[LabeledTuple(label='Arkansas', data=[12])],
        )

        assert election.results[0].data == [12]

    def test_rejects_tuple_width_mismatch(self):
        """len(data) + 1 must equal the header count."""
        with pytest.raises(ValidationError, match="expected 1"):
            Election(
                name='Contest',
                headers=self._headers('County', 'Total'),
                results=[LabeledTuple(label='Arkansas', data=[12, 13])],
            )

    def test_requires_headers(self):
        with pytest.raises(ValidationError):
            Election(name='Contest', headers=[])

    def test_models_are_frozen(self):
        entry = TocEntry(page_number=1, contest_name='Registered Voters')

        with pytest.raises(ValidationError):
            entry.page_number = 2


class TestElectionDataset:

    def test_repr_summarises_counts(self):
        from scytl_results.models import DocumentProperties

        dataset = ElectionDataset(
            properties=DocumentProperties(title='T', author='A', created='C'),
        )

        assert repr(dataset) == "ElectionDataset(title='T', toc=0, regions=0, elections=0)"
