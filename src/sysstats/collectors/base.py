"""
Base classes for rate collectors.
"""

from __future__ import annotations

import abc
import asyncio
import logging
import re
from typing import Any, Dict, Generic, Iterator, List, Optional, Sequence, TypeVar

from ..config import SysStatsConfig
from ..exceptions import MalformedRecordError

LOG = logging.getLogger(__name__)

RawT = TypeVar("RawT")
DerivedT = TypeVar("DerivedT")

_UINT_RE = re.compile(r"[0-9]+")
_UINT64_MAX = (1 << 64) - 1


def parse_counter(token: str, record: str) -> int:
    """Parse one unsigned 64-bit counter, failing the whole record otherwise."""
    if not _UINT_RE.fullmatch(token):
        raise MalformedRecordError(f"Field {token!r} is not an unsigned integer in record {record!r}")
    value = int(token)
    if value > _UINT64_MAX:
        raise MalformedRecordError(f"Field {token!r} overflows 64 bits in record {record!r}")
    return value


def parse_counters(tokens: Sequence[str], record: str) -> List[int]:
    return [parse_counter(token, record) for token in tokens]


def check_interval(seconds: float) -> None:
    if seconds < 0:
        raise ValueError(f"Sampling interval must be >= 0, got {seconds}")


class RateCollector(abc.ABC, Generic[RawT, DerivedT]):
    """Contract for counter domains that turn two raw captures into rates."""

    NAME: str = ""

    def __init__(self, config: Optional[SysStatsConfig] = None) -> None:
        self.config = config or SysStatsConfig.default()

    @abc.abstractmethod
    def capture_raw(self) -> RawT:
        """Read the counter source once and return the raw capture."""

    @abc.abstractmethod
    def derive(self, first: RawT, second: RawT) -> DerivedT:
        """Derive rates between two raw captures of this domain."""

    @abc.abstractmethod
    def records(self, derived: DerivedT) -> Iterator[Dict[str, Any]]:
        """Flatten a derived result into one dict per entity."""

    def sample_over_interval(self, seconds: float) -> DerivedT:
        """Capture, block for ``seconds``, capture again and derive.

        Failures from either capture or from the derivation propagate as-is.
        The wait cannot be cancelled; use :meth:`sample_over_interval_async`
        or compose :meth:`capture_raw` and :meth:`derive` directly for that.
        """
        check_interval(seconds)
        first = self.capture_raw()
        self.config.sleep(seconds)
        second = self.capture_raw()
        LOG.debug("Collector %s sampled over %.3fs", self.NAME, seconds)
        return self.derive(first, second)

    async def sample_over_interval_async(self, seconds: float) -> DerivedT:
        """Same as :meth:`sample_over_interval` but waits with ``asyncio.sleep``."""
        check_interval(seconds)
        first = self.capture_raw()
        await asyncio.sleep(seconds)
        second = self.capture_raw()
        return self.derive(first, second)
