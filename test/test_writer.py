# test/test_writer.py
import io

import numpy as np
import pytest

from mdfexport.core.table import Column, Table
from mdfexport.core.writer import FormatConfig, render_table, write_table
from mdfexport.core.exceptions import ColumnLengthMismatch, InvalidFormatConfig


def _table(*cols):
    return Table(columns=tuple(Column(name, unit, values) for name, unit, values in cols))


def test_format_config_defaults():
    cfg = FormatConfig()
    assert cfg.column_delimiter == ","
    assert cfg.row_delimiter == "\n"
    assert cfg.show_header is True
    assert cfg.show_units is True


def test_format_config_is_immutable():
    cfg = FormatConfig()
    with pytest.raises(AttributeError):
        cfg.column_delimiter = ";"


def test_format_config_validates_types():
    with pytest.raises(InvalidFormatConfig):
        FormatConfig(column_delimiter=None)
    with pytest.raises(InvalidFormatConfig):
        FormatConfig(show_units="yes")


def test_single_column_with_header_and_units():
    table = _table(("Speed", "km/h", [1.0, 2.0]))
    out = render_table(table, FormatConfig())
    assert out == "Speed\nkm/h\n1.000000\n2.000000\n"


def test_first_sample_is_written():
    table = _table(("x", "", [7.5, 8.0, 9.0]))
    lines = render_table(table, FormatConfig(show_header=False, show_units=False)).splitlines()
    assert lines == ["7.500000", "8.000000", "9.000000"]


def test_multiple_columns_and_custom_delimiters():
    table = _table(
        ("Speed", "km/h", [1.0, 2.5]),
        ("Torque", "Nm", [-3.25, 1e6]),
    )
    cfg = FormatConfig(column_delimiter=";", row_delimiter="\r\n")
    assert render_table(table, cfg) == (
        "Speed;Torque\r\n"
        "km/h;Nm\r\n"
        "1.000000;-3.250000\r\n"
        "2.500000;1000000.000000\r\n"
    )


def test_header_and_unit_rows_are_independent():
    table = _table(("a", "V", [1.0]), ("b", "A", [2.0]))

    out = render_table(table, FormatConfig(show_header=False))
    assert out == "V,A\n1.000000,2.000000\n"

    out = render_table(table, FormatConfig(show_units=False))
    assert out == "a,b\n1.000000,2.000000\n"


def test_multi_character_delimiters():
    table = _table(("a", "", [1.0]), ("b", "", [2.0]))
    cfg = FormatConfig(column_delimiter=" | ", row_delimiter="<EOL>", show_units=False)
    assert render_table(table, cfg) == "a | b<EOL>1.000000 | 2.000000<EOL>"


def test_rounding_and_special_values():
    table = _table(("x", "", [0.1234565, 1.0000005, -0.0000001, np.nan, np.inf, -np.inf]))
    lines = render_table(table, FormatConfig(show_header=False, show_units=False)).splitlines()
    assert lines[3:] == ["nan", "inf", "-inf"]
    assert lines[2] == "-0.000000"


@pytest.mark.parametrize("show_header", [True, False])
@pytest.mark.parametrize("show_units", [True, False])
@pytest.mark.parametrize("n_rows", [0, 1, 5])
def test_line_count(show_header, show_units, n_rows):
    table = _table(
        ("a", "u", np.arange(n_rows, dtype=float)),
        ("b", "v", np.arange(n_rows, dtype=float)),
        ("c", "w", np.arange(n_rows, dtype=float)),
    )
    cfg = FormatConfig(row_delimiter="|", show_header=show_header, show_units=show_units)
    out = render_table(table, cfg)
    assert out.count("|") == int(show_header) + int(show_units) + n_rows


def test_longer_later_columns_are_cut_to_first_column():
    table = _table(("a", "", [1.0]), ("b", "", [2.0, 3.0]))
    out = render_table(table, FormatConfig(show_header=False, show_units=False))
    assert out == "1.000000,2.000000\n"


def test_shorter_later_column_is_an_error():
    table = _table(("a", "", [1.0, 2.0, 3.0]), ("b", "", [4.0]))
    with pytest.raises(ColumnLengthMismatch) as exc:
        render_table(table, FormatConfig())
    assert exc.value.name == "b"
    assert exc.value.expected == 3
    assert exc.value.actual == 1


def test_no_partial_output_on_length_mismatch():
    table = _table(("a", "", [1.0, 2.0]), ("b", "", []))
    buf = io.StringIO()
    with pytest.raises(ColumnLengthMismatch):
        write_table(table, FormatConfig(), buf)
    assert buf.getvalue() == ""


def test_write_table_returns_row_count():
    table = _table(("a", "", [1.0, 2.0, 3.0]))
    buf = io.StringIO()
    assert write_table(table, FormatConfig(), buf) == 3
    assert buf.getvalue().endswith("3.000000\n")


def test_empty_table_writes_nothing():
    buf = io.StringIO()
    assert write_table(Table(), FormatConfig(), buf) == 0
    assert buf.getvalue() == ""
