#!/usr/bin/env python3
"""
mdfexport command line interface.

Usage:
    mdfexport [OPTION]... FILE

Examples:
    mdfexport run.mf4 > run.csv
    mdfexport -g 1 -c 0,3-5 -U -d ';' run.mf4
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence, TextIO

import asammdf

from mdfexport import __version__
from mdfexport.core import (
    ExportError,
    FormatConfig,
    UsageError,
    build_table,
    resolve_selection,
    write_table,
)
from mdfexport.core.ranges import INDEX_RE
from mdfexport.io.mdf_reader import DataSource, open_mdf

PROG = "mdfexport"
LOG_FORMAT = f"{PROG}: %(levelname)s: %(message)s"

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

logger = logging.getLogger(__name__)

_DESCRIPTION = "Export data channels from an MDF file to delimited text (csv by default)."

_EPILOG = """\
The channel LIST is made up of one range, or many ranges separated
by commas. Selected channels are written in the same order as they
appear in LIST.
Each range is one of:

  N     N'th channel, counted from 0
  N-    from N'th channel to last channel
  N-M   from N'th to M'th (included) channel
  -M    from first to M'th (included) channel

A range N-M with N greater than M selects nothing.
"""


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message: str):
        raise UsageError(message)


def _group_index(kind: str):
    def parse(text: str) -> int:
        if not INDEX_RE.fullmatch(text):
            raise argparse.ArgumentTypeError(f"Argument for {kind} group is invalid: '{text}'")
        return int(text)

    return parse


def build_parser() -> argparse.ArgumentParser:
    p = _ArgumentParser(
        prog=PROG,
        description=_DESCRIPTION,
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("files", nargs="*", metavar="FILE", help="MDF file to export")

    p.add_argument("-s", "--column-header", dest="show_header", action="store_true", default=True,
                   help="print column header with channel name (default)")
    p.add_argument("-S", "--no-column-header", dest="show_header", action="store_false",
                   help="do not print column header with channel name")
    p.add_argument("-u", "--unit-row", dest="show_units", action="store_true", default=True,
                   help="print row with channel units (default)")
    p.add_argument("-U", "--no-unit-row", dest="show_units", action="store_false",
                   help="do not print row with channel units")
    p.add_argument("-d", "--delimiter", dest="column_delimiter", default=",", metavar="DELIM",
                   help="use DELIM instead of , for field delimiter")
    p.add_argument("-r", "--row-delimiter", dest="row_delimiter", default="\n", metavar="DELIM",
                   help="use DELIM instead of new line for row delimiter")
    p.add_argument("-g", "--data-group", type=_group_index("data"), default=None, metavar="GROUP",
                   help="use only this data group")
    p.add_argument("-p", "--channel-group", type=_group_index("channel"), default=None, metavar="GROUP",
                   help="use only this channel group")
    p.add_argument("-c", "--channels", default=None, metavar="LIST",
                   help="print only channels in LIST")
    p.add_argument("-v", "--verbose", action="store_true",
                   help="log progress to stderr")
    p.add_argument("--version", action="version",
                   version=f"{PROG}/{__version__} asammdf/{asammdf.__version__}",
                   help="print current version")
    return p


# Flags whose value may itself start with "-" (e.g. "-c -3,5", "-d -").
_STRING_VALUE_FLAGS = {
    "-c": "--channels",
    "--channels": "--channels",
    "-d": "--delimiter",
    "--delimiter": "--delimiter",
    "-r": "--row-delimiter",
    "--row-delimiter": "--row-delimiter",
}


def _attach_values(argv: Sequence[str]) -> list[str]:
    """Rewrite "-c VALUE" into "--channels=VALUE" so argparse never reads VALUE as a flag."""
    result: list[str] = []
    args = iter(argv)
    for arg in args:
        if arg == "--":
            result.append(arg)
            result.extend(args)
            break
        long_flag = _STRING_VALUE_FLAGS.get(arg)
        value = next(args, None) if long_flag is not None else None
        if value is None:
            # a trailing flag without value is left for argparse to report
            result.append(arg)
        else:
            result.append(f"{long_flag}={value}")
    return result


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    if argv is None:
        argv = sys.argv[1:]
    args = build_parser().parse_args(_attach_values(argv))
    if len(args.files) != 1:
        raise UsageError("No or more than one file is given.")
    args.file = args.files[0]
    return args


def format_config_from_args(args: argparse.Namespace) -> FormatConfig:
    return FormatConfig(
        column_delimiter=args.column_delimiter,
        row_delimiter=args.row_delimiter,
        show_header=args.show_header,
        show_units=args.show_units,
    )


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(stream=sys.stderr, format=LOG_FORMAT)
    logging.getLogger(PROG).setLevel(logging.DEBUG if verbose else logging.WARNING)


def export_channels(
    source: DataSource,
    config: FormatConfig,
    stream: TextIO,
    *,
    data_group: int | None = None,
    channel_group: int | None = None,
    channels: str | None = None,
) -> int:
    """Run selection, table building and writing against an open source.

    Returns the number of data rows written (0 when nothing was selected).
    """
    selection = resolve_selection(
        source.data_groups,
        data_group=data_group,
        channel_group=channel_group,
        channels=channels,
    )
    if selection.is_empty:
        logger.info("No channels selected, nothing to export.")
        return 0

    table = build_table(selection.channel_group, selection.channels)
    n_rows = write_table(table, config, stream)
    logger.debug("Wrote %d column(s) x %d row(s)", len(table), n_rows)
    return n_rows


def main(argv: Sequence[str] | None = None) -> int:
    configure_logging()
    try:
        args = parse_args(argv)
    except UsageError as e:
        logger.error("%s (try `%s --help' for more information)", e, PROG)
        return EXIT_USAGE

    configure_logging(args.verbose)
    config = format_config_from_args(args)

    try:
        with open_mdf(args.file) as source:
            export_channels(
                source,
                config,
                sys.stdout,
                data_group=args.data_group,
                channel_group=args.channel_group,
                channels=args.channels,
            )
    except ExportError as e:
        logger.error("%s", e)
        return EXIT_FAILURE

    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
