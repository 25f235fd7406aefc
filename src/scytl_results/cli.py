"""
Command line entry point.

Usage:
    scytl-results <filename>

Prints the workbook's contents as semicolon-delimited text. Exit code 0 on
success, 1 on usage errors, unreadable files and extraction failures.
"""

from typing import List, Optional
import argparse
import logging
import sys

from pydantic import ValidationError

from scytl_results.config import get_app_config
from scytl_results.exceptions import ExtractionError, WorkbookLoadError
from scytl_results.reader import read_workbook
from scytl_results.render import write

logger = logging.getLogger(__name__)


class _UsageError(Exception):
    pass


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser reporting usage errors with exit code 1."""

    def error(self, message: str) -> None:
        raise _UsageError(message)


def build_parser() -> _ArgumentParser:
    parser = _ArgumentParser(
        prog='scytl-results',
        description="Extract election results from a Scytl SpreadsheetML workbook.",
        add_help=False,
    )
    parser.add_argument(
        "path",
        help="Path to the workbook (detail.xml).",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except _UsageError as e:
        parser.print_usage(sys.stderr)
        print(f"error: {e}", file=sys.stderr)
        return 1

    try:
        config = get_app_config()
    except ValidationError as e:
        error = e.errors()[0]
        field = '.'.join(str(part) for part in error['loc'])
        print(f"Invalid configuration: {field}: {error['msg']}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=config.log_level,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )

    try:
        dataset = read_workbook(args.path)
    except WorkbookLoadError as e:
        logger.debug("Load failure", exc_info=True)
        print(f"Error loading <{args.path}>: {e}", file=sys.stderr)
        return 1
    except ExtractionError as e:
        logger.debug("Extraction failure", exc_info=True)
        print(f"Error reading from <{args.path}>: {e}", file=sys.stderr)
        return 1

    write(dataset, sys.stdout, delimiter=config.delimiter, region_indent=config.region_indent)
    return 0


if __name__ == '__main__':
    sys.exit(main())
