# mdfexport/core/__init__.py
"""
Core export pipeline for mdfexport.

This module is independent from the MDF reader:
- ranges: channel range-list parsing
- selection: data group / channel group / channel resolution
- table: Column, Table and the table builder
- writer: FormatConfig and delimited-text serialization
"""

from .ranges import parse_ranges, check_channel_bounds
from .selection import Selection, choose_group, resolve_selection
from .table import Column, Table, build_table
from .writer import FormatConfig, render_table, write_table
from .exceptions import (
    ExportError,
    UsageError,
    InvalidColumn,
    InvalidFormatConfig,
    InvalidRange,
    ChannelOutOfBounds,
    GroupResolutionError,
    AmbiguousGroup,
    GroupNotFound,
    ColumnLengthMismatch,
    SourceReadError,
)


__all__ = [
    # range lists
    "parse_ranges",
    "check_channel_bounds",

    # selection
    "Selection",
    "choose_group",
    "resolve_selection",

    # table
    "Column",
    "Table",
    "build_table",

    # output
    "FormatConfig",
    "render_table",
    "write_table",

    # exceptions
    "ExportError",
    "UsageError",
    "InvalidColumn",
    "InvalidFormatConfig",
    "InvalidRange",
    "ChannelOutOfBounds",
    "GroupResolutionError",
    "AmbiguousGroup",
    "GroupNotFound",
    "ColumnLengthMismatch",
    "SourceReadError",
]
