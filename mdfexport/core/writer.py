# mdfexport/core/writer.py
from __future__ import annotations

from dataclasses import dataclass
from typing import TextIO

from .exceptions import ColumnLengthMismatch, InvalidFormatConfig
from .table import Table

VALUE_FORMAT = "{:.6f}"


@dataclass(frozen=True, slots=True)
class FormatConfig:
    """
    Output formatting options, fixed once the command line is parsed.

    - column_delimiter: placed between values of a row
    - row_delimiter: terminates every emitted line
    - show_header: emit a line with the channel names
    - show_units: emit a line with the channel units
    """
    column_delimiter: str = ","
    row_delimiter: str = "\n"
    show_header: bool = True
    show_units: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.column_delimiter, str):
            raise InvalidFormatConfig("FormatConfig.column_delimiter must be a string.")
        if not isinstance(self.row_delimiter, str):
            raise InvalidFormatConfig("FormatConfig.row_delimiter must be a string.")
        if not isinstance(self.show_header, bool):
            raise InvalidFormatConfig("FormatConfig.show_header must be a bool.")
        if not isinstance(self.show_units, bool):
            raise InvalidFormatConfig("FormatConfig.show_units must be a bool.")


def check_column_lengths(table: Table) -> int:
    """Return the row count, or raise if a column cannot fill every row."""
    n_rows = table.n_rows
    for col in table.columns:
        if col.n < n_rows:
            raise ColumnLengthMismatch(col.name, n_rows, col.n)
    return n_rows


def iter_lines(table: Table, config: FormatConfig):
    """Yield output lines (without row delimiter): header, units, then data rows."""
    n_rows = check_column_lengths(table)
    delim = config.column_delimiter

    if config.show_header:
        yield delim.join(table.names)
    if config.show_units:
        yield delim.join(table.units)

    samples = [col.samples for col in table.columns]
    for i in range(n_rows):
        yield delim.join(VALUE_FORMAT.format(s[i]) for s in samples)


def render_table(table: Table, config: FormatConfig | None = None) -> str:
    """Serialize `table` to delimited text. An empty table renders to ""."""
    config = config or FormatConfig()
    if len(table) == 0:
        return ""
    return "".join(line + config.row_delimiter for line in iter_lines(table, config))


def write_table(table: Table, config: FormatConfig, stream: TextIO) -> int:
    """Render the whole table, then write it to `stream` in one call.

    Returns the number of data rows written. Nothing is written if the table
    is inconsistent.
    """
    text = render_table(table, config)
    stream.write(text)
    stream.flush()
    return table.n_rows if len(table) else 0
