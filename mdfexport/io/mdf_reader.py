from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator, Protocol, Sequence, runtime_checkable

import logging

from asammdf import MDF  # pivotal dependency for MDF file handling
import numpy as np

from mdfexport.core.exceptions import SourceReadError

logger = logging.getLogger(__name__)


@runtime_checkable
class ChannelLike(Protocol):
    """A single named, unit-tagged numeric series."""

    name: str
    unit: str

    def read_samples(self) -> np.ndarray: ...


@runtime_checkable
class ChannelGroupLike(Protocol):
    """Channels sharing a common sample layout."""

    @property
    def channels(self) -> Sequence[ChannelLike]: ...


@runtime_checkable
class DataGroupLike(Protocol):
    @property
    def channel_groups(self) -> Sequence[ChannelGroupLike]: ...


@runtime_checkable
class DataSource(Protocol):
    """Protocol for measurement sources: data groups -> channel groups -> channels."""

    @property
    def data_groups(self) -> Sequence[DataGroupLike]: ...


@dataclass
class ChannelInfo:
    """
    Metadata + lazy loader for one channel of one channel group.

    Nothing is decoded until read_samples() is called, and nothing is
    cached: every call reads the channel again.
    """

    name: str
    unit: str
    n_samples: int
    # MDF identifiers
    group_index: int           # asammdf group (one per channel group)
    channel_index: int         # channel id inside the group

    # Lazy loader: when called, reads ONLY this channel
    loader: Callable[[], np.ndarray] = field(repr=False)

    def read_samples(self) -> np.ndarray:
        raw = self.loader()
        try:
            samples = np.asarray(raw, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise SourceReadError(
                f"Channel '{self.name}' does not hold numeric samples: {e}"
            ) from e
        if samples.ndim != 1:
            raise SourceReadError(
                f"Channel '{self.name}' samples must be 1D, got shape {samples.shape}"
            )
        return samples


@dataclass
class ChannelGroupInfo:
    group_index: int
    channels: list[ChannelInfo] = field(default_factory=list)


@dataclass
class DataGroupInfo:
    channel_groups: list[ChannelGroupInfo] = field(default_factory=list)


def _data_group_key(group, group_index: int):
    """Identity of the data-group block behind an asammdf group.

    asammdf lists one group per channel group; groups that share a data
    group block share its address. Fall back to the group position when the
    block is not exposed.
    """
    block = getattr(group, "data_group", None)
    address = getattr(block, "address", None)
    if address is None:
        return ("group", group_index)
    return ("address", address)


class AsammdfSource:
    """Concrete DataSource backed by asammdf.MDF.

    Use as a context manager (or call close()) so the file handle is released.
    """

    def __init__(self, path: str | Path):
        path = Path(path)
        if not path.is_file():
            raise SourceReadError(f"File '{path}' does not exist.")
        try:
            self._mdf = MDF(str(path))
        except Exception as e:
            raise SourceReadError(f"Cannot read MDF file '{path}': {e}") from e
        self.path = path
        self._data_groups: list[DataGroupInfo] = []
        try:
            self._build_index()
        except Exception:
            self._mdf.close()
            raise

    # ------------------------------------------------------------------
    # Index construction
    # ------------------------------------------------------------------
    def _build_index(self) -> None:
        by_key: dict[object, DataGroupInfo] = {}

        for group_index, group in enumerate(self._mdf.groups):
            key = _data_group_key(group, group_index)
            data_group = by_key.get(key)
            if data_group is None:
                data_group = DataGroupInfo()
                by_key[key] = data_group
                self._data_groups.append(data_group)

            n_samples = int(getattr(group.channel_group, "cycles_nr", 0) or 0)
            channel_group = ChannelGroupInfo(group_index=group_index)

            for channel_index, channel in enumerate(group.channels):

                def make_loader(g_i: int = group_index, c_i: int = channel_index):
                    def _loader() -> np.ndarray:
                        try:
                            sig = self._mdf.get(group=g_i, index=c_i)
                        except Exception as e:
                            raise SourceReadError(
                                f"Cannot decode channel {c_i} of group {g_i}: {e}"
                            ) from e
                        return sig.samples

                    return _loader

                channel_group.channels.append(
                    ChannelInfo(
                        name=channel.name,
                        unit=getattr(channel, "unit", None) or "",
                        n_samples=n_samples,
                        group_index=group_index,
                        channel_index=channel_index,
                        loader=make_loader(),
                    )
                )

            data_group.channel_groups.append(channel_group)

        logger.debug(
            "Indexed %s: %d data group(s), %d channel group(s)",
            self.path,
            len(self._data_groups),
            len(self._mdf.groups),
        )

    # ------------------------------------------------------------------
    # DataSource protocol implementation
    # ------------------------------------------------------------------
    @property
    def data_groups(self) -> list[DataGroupInfo]:
        return self._data_groups

    def close(self) -> None:
        self._mdf.close()

    def __enter__(self) -> "AsammdfSource":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


@contextmanager
def open_mdf(path: str | Path) -> Iterator[AsammdfSource]:
    """Open an MDF file as a DataSource; the file is closed on every exit path."""
    source = AsammdfSource(path)
    try:
        yield source
    finally:
        source.close()
