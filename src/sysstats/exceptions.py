"""Custom exceptions used by the sysstats package."""


class SysStatsError(RuntimeError):
    """Base class for statistics errors."""


class MalformedRecordError(SysStatsError, ValueError):
    """Raised when a counter record has the wrong field count or a non-numeric field."""


class MissingEntityError(SysStatsError, KeyError):
    """Raised when an entity of the second sample is absent from the first."""

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""


class EntityIdentityMismatchError(SysStatsError, ValueError):
    """Raised when two samples being compared describe different devices."""
