"""
pandas views of an extracted dataset.

Handy for analysis and CSV export:

    >>> dataset = read_workbook('detail.xml')
    >>> regions_frame(dataset).to_csv('turnout.csv', index=False)
    >>> election_frame(dataset.elections[0]).sum()
"""

import pandas as pd

from scytl_results.models import Election, ElectionDataset

REGION_COLUMNS = ['region', 'registered_voters', 'ballots_cast', 'voter_turnout']


def toc_frame(dataset: ElectionDataset) -> pd.DataFrame:
    """Table of contents as a DataFrame with columns page, contest."""
    return pd.DataFrame(
        [(entry.page_number, entry.contest_name) for entry in dataset.toc],
        columns=['page', 'contest'],
    )


def regions_frame(dataset: ElectionDataset) -> pd.DataFrame:
    """One row per region with its registration and turnout figures."""
    return pd.DataFrame(
        [
            (r.region_name, r.registered_voters, r.ballots_cast, r.voter_turnout)
            for r in dataset.regions
        ],
        columns=REGION_COLUMNS,
    )


def election_frame(election: Election) -> pd.DataFrame:
    """
    Vote counts of one election indexed by row label.

    Columns are the header display names after the leading label column,
    e.g. 'Registered Voters', 'John Wolfe - Election Day'. Candidates with
    identical column names stay distinct because the candidate is part of
    the display name.
    """
    label_header, *value_headers = election.headers
    frame = pd.DataFrame(
        [result.data for result in election.results],
        columns=[header.display_name for header in value_headers],
        index=pd.Index([result.label for result in election.results], name=label_header.column_name),
        dtype='int64',
    )
    frame.attrs['election'] = election.name
    return frame
