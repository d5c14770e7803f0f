# mdfexport/core/selection.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from .exceptions import AmbiguousGroup, GroupNotFound
from .ranges import parse_ranges

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Selection:
    """The chosen channel group and the channel indices to export from it."""

    data_group_index: int
    channel_group_index: int
    channel_group: Any = field(repr=False)
    channels: list[int] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.channels


def choose_group(groups: Sequence, index: int | None, kind: str) -> int:
    """
    Pick a group index.

    An explicit index must exist. Without one, the only group is used; when
    several exist the caller has to choose, so AmbiguousGroup is raised.
    """
    if index is None:
        if len(groups) > 1:
            raise AmbiguousGroup(kind, len(groups))
        index = 0
    if index < 0 or index >= len(groups):
        raise GroupNotFound(kind, index)
    return index


def resolve_selection(
    data_groups: Sequence,
    data_group: int | None = None,
    channel_group: int | None = None,
    channels: str | None = None,
) -> Selection:
    """Resolve group indices and the channel range list against a source hierarchy.

    Parameters
    ----------
    data_groups:
        The source's data groups, each exposing `channel_groups`.
    data_group, channel_group:
        Explicit indices, or None to auto-select when only one exists.
    channels:
        Range list (see mdfexport.core.ranges), or None for every channel.
    """
    dg_index = choose_group(data_groups, data_group, "data")
    channel_groups = data_groups[dg_index].channel_groups

    cg_index = choose_group(channel_groups, channel_group, "channel")
    cg = channel_groups[cg_index]
    channel_count = len(cg.channels)

    if channels is None:
        channel_list = list(range(channel_count))
    else:
        channel_list = parse_ranges(channels, channel_count)

    logger.debug(
        "Selected data group %d, channel group %d: %d of %d channel(s)",
        dg_index,
        cg_index,
        len(channel_list),
        channel_count,
    )
    return Selection(
        data_group_index=dg_index,
        channel_group_index=cg_index,
        channel_group=cg,
        channels=channel_list,
    )
