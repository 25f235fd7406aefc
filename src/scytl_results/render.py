"""
Delimited text rendering of an ElectionDataset.

Output layout:

    Title;<title>
    Author;<author>
    Created;<created>
    <page>;<contest>                      one line per TOC entry
    County;Registered Voters;Ballots Cast;Voter Turnout
      <region>;<registered>;<cast>;<turnout>
    <election name>                       per election:
    <header>;<header>;...                 "<candidate> - <column>" or "<column>"
    <label>;<count>;<count>;...
"""

from typing import IO, Iterator, Optional
import sys

from scytl_results.config import get_app_config
from scytl_results.models import Election, ElectionDataset

REGIONS_HEADER = ('County', 'Registered Voters', 'Ballots Cast', 'Voter Turnout')


def format_turnout(value: float) -> str:
    """Shortest general form with six significant digits ('20.87', '100')."""
    return f"{value:g}"


def render_election(election: Election, delimiter: str = ';') -> Iterator[str]:
    yield election.name
    yield delimiter.join(header.display_name for header in election.headers)
    for result in election.results:
        yield delimiter.join([result.label] + [str(value) for value in result.data])


def render_lines(
    dataset: ElectionDataset,
    delimiter: Optional[str] = None,
    region_indent: Optional[str] = None,
) -> Iterator[str]:
    """
    Yield the output lines of a dataset, without line terminators.

    Args:
        dataset: Extracted dataset
        delimiter: Field delimiter (default from AppConfig, ';')
        region_indent: Prefix of region lines (default from AppConfig, two spaces)
    """
    config = get_app_config()
    delimiter = config.delimiter if delimiter is None else delimiter
    region_indent = config.region_indent if region_indent is None else region_indent

    properties = dataset.properties
    yield f"Title{delimiter}{properties.title}"
    yield f"Author{delimiter}{properties.author}"
    yield f"Created{delimiter}{properties.created}"

    for entry in dataset.toc:
        yield f"{entry.page_number}{delimiter}{entry.contest_name}"

    yield delimiter.join(REGIONS_HEADER)
    for region in dataset.regions:
        yield region_indent + delimiter.join([
            region.region_name,
            str(region.registered_voters),
            str(region.ballots_cast),
            format_turnout(region.voter_turnout),
        ])

    for election in dataset.elections:
        yield from render_election(election, delimiter)


def render(dataset: ElectionDataset, **options) -> str:
    """Render the whole dataset as one newline-terminated string."""
    return ''.join(f"{line}\n" for line in render_lines(dataset, **options))


def write(dataset: ElectionDataset, stream: Optional[IO[str]] = None, **options) -> None:
    """Write the rendered dataset to ``stream`` (standard output by default)."""
    stream = stream or sys.stdout
    for line in render_lines(dataset, **options):
        stream.write(f"{line}\n")
