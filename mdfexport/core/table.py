# mdfexport/core/table.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, TYPE_CHECKING

import numpy as np

from .exceptions import InvalidColumn

if TYPE_CHECKING:
    from mdfexport.io.mdf_reader import ChannelGroupLike

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Column:
    """One exported channel: name, unit and its samples as 1D float64."""

    name: str
    unit: str = ""
    samples: np.ndarray = field(default_factory=lambda: np.empty(0), repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise InvalidColumn("Column.name must be a string.")
        if self.unit is None:
            object.__setattr__(self, "unit", "")
        elif not isinstance(self.unit, str):
            raise InvalidColumn("Column.unit must be a string.")

        try:
            v = np.asarray(self.samples, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise InvalidColumn(f"Column '{self.name}' samples must be numeric: {e}") from e
        if v.ndim != 1:
            raise InvalidColumn(f"Column '{self.name}' samples must be 1D, got shape {v.shape}")

        object.__setattr__(self, "samples", v)

    @property
    def n(self) -> int:
        return int(self.samples.size)


@dataclass(frozen=True, slots=True)
class Table:
    """
    Columns exported together from one channel group.

    Rows are aligned by sample position only; there is no shared time axis.
    The row count is the sample count of the first column.
    """
    columns: tuple[Column, ...] = ()

    def __post_init__(self) -> None:
        cols = tuple(self.columns)
        for col in cols:
            if not isinstance(col, Column):
                raise InvalidColumn("Table.columns values must be Column instances.")
        object.__setattr__(self, "columns", cols)

    def __len__(self) -> int:
        return len(self.columns)

    def __iter__(self) -> Iterator[Column]:
        return iter(self.columns)

    @property
    def names(self) -> list[str]:
        return [col.name for col in self.columns]

    @property
    def units(self) -> list[str]:
        return [col.unit for col in self.columns]

    @property
    def n_rows(self) -> int:
        return self.columns[0].n if self.columns else 0


def build_table(channel_group: "ChannelGroupLike", channels: Iterable[int]) -> Table:
    """Read name, unit and samples of each selected channel, in selection order.

    Every index is read from the source, including repeated ones. Source
    errors propagate unchanged.
    """
    source_channels = channel_group.channels
    columns: list[Column] = []
    for index in channels:
        ch = source_channels[index]
        samples = ch.read_samples()
        logger.debug("Read channel %d '%s' (%d samples)", index, ch.name, len(samples))
        columns.append(Column(name=ch.name, unit=ch.unit, samples=samples))
    return Table(columns=tuple(columns))
