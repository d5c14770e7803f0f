# mdfexport/core/ranges.py
"""
Channel range-list parsing.

A range list is one or more sub-ranges separated by commas. Each sub-range
is one of:

    N     the N'th channel, counted from 0
    N-    from the N'th channel to the last channel
    N-M   from the N'th to the M'th channel (both included)
    -M    from the first to the M'th channel (included)

Indices are produced in the order they are written, so "1,3-4,0" selects
[1, 3, 4, 0]. The result is neither sorted nor de-duplicated.

A bounded range with N > M (e.g. "5-2") contributes no channels. It is
accepted silently rather than rejected.
"""

from __future__ import annotations

import re
from typing import Iterator

from .exceptions import ChannelOutOfBounds, InvalidRange

RANGE_SEPARATOR = ","
SPAN_SEPARATOR = "-"

INDEX_RE = re.compile(r"[0-9]+")


def check_channel_bounds(n: int, channel_count: int) -> int:
    """Return `n` unchanged, or raise ChannelOutOfBounds if it is not a valid index."""
    if n >= channel_count or n < 0:
        raise ChannelOutOfBounds(n, channel_count)
    return n


def _parse_index(text: str, token: str) -> int:
    if not INDEX_RE.fullmatch(text):
        if not text:
            raise InvalidRange(token, "missing channel index")
        raise InvalidRange(token, f"'{text}' is not a non-negative integer")
    return int(text)


def iter_range(token: str, channel_count: int) -> Iterator[int]:
    """Yield the channel indices selected by a single sub-range.

    Both endpoints are validated before anything is yielded, start first.
    """
    sep = token.find(SPAN_SEPARATOR)

    if sep == -1:
        # N
        n = check_channel_bounds(_parse_index(token, token), channel_count)
        return iter((n,))

    if sep == 0:
        # -M
        end = check_channel_bounds(_parse_index(token[1:], token), channel_count)
        return iter(range(0, end + 1))

    if sep == len(token) - 1:
        # N-
        start = check_channel_bounds(_parse_index(token[:-1], token), channel_count)
        return iter(range(start, channel_count))

    # N-M
    start = _parse_index(token[:sep], token)
    end = _parse_index(token[sep + 1:], token)
    check_channel_bounds(start, channel_count)
    check_channel_bounds(end, channel_count)
    return iter(range(start, end + 1))


def parse_ranges(spec: str, channel_count: int) -> list[int]:
    """Parse a range list into an ordered list of channel indices.

    Parameters
    ----------
    spec:
        Comma separated sub-ranges, e.g. "0,2-4,7-".
    channel_count:
        Number of channels in the selected channel group. Every index
        written in `spec` must be below this value.

    Raises
    ------
    InvalidRange
        If a sub-range is malformed (empty, non-numeric, signed, ...).
    ChannelOutOfBounds
        If an index is >= channel_count.
    """
    if not isinstance(spec, str):
        raise InvalidRange(repr(spec), "range list must be a string")

    result: list[int] = []
    for token in spec.split(RANGE_SEPARATOR):
        result.extend(iter_range(token, channel_count))
    return result
