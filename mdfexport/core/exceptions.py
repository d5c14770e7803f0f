# mdfexport/core/exceptions.py
from __future__ import annotations


class ExportError(Exception):
    """Base error for all mdfexport failures."""


# ---- Invocation errors ----
class UsageError(ExportError):
    """Raised when command-line flags or positional arguments are invalid."""


# ---- Validation / construction errors ----
class InvalidColumn(ExportError):
    """Raised when a Column is constructed with invalid inputs."""


class InvalidFormatConfig(ExportError):
    """Raised when a FormatConfig is constructed with invalid inputs."""


class InvalidRange(ExportError):
    """Raised when a channel range list contains a malformed sub-range."""

    def __init__(self, token: str, reason: str | None = None) -> None:
        self.token = token
        self.reason = reason
        msg = f"Invalid channel range '{token}'"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class ColumnLengthMismatch(ExportError):
    """Raised when a column holds fewer samples than the table has rows."""

    def __init__(self, name: str, expected: int, actual: int) -> None:
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Channel '{name}' has {actual} samples, expected at least {expected}."
        )


class SourceReadError(ExportError):
    """Raised when the measurement file cannot be opened or decoded."""


# ---- Lookup errors (also behave like IndexError for sequence-like APIs) ----
class ChannelOutOfBounds(ExportError, IndexError):
    """Raised when a channel index is outside of the selected channel group."""

    def __init__(self, index: int, channel_count: int) -> None:
        self.index = index
        self.channel_count = channel_count
        super().__init__(f"Channel {index} does not exist.")


class GroupResolutionError(ExportError):
    """Base error for data group / channel group selection failures."""


class AmbiguousGroup(GroupResolutionError):
    """Raised when several groups exist and none was chosen explicitly."""

    _FLAGS = {"data": "-g", "channel": "-p"}

    def __init__(self, kind: str, count: int) -> None:
        self.kind = kind
        self.count = count
        super().__init__(
            f"More than one {kind} group in file ({count}). "
            f"Use `{self._FLAGS.get(kind, '-g')}' option to choose {kind} group."
        )


class GroupNotFound(GroupResolutionError, IndexError):
    """Raised when a requested group index does not exist."""

    def __init__(self, kind: str, index: int) -> None:
        self.kind = kind
        self.index = index
        super().__init__(f"{kind.capitalize()} group {index} does not exist in file.")
