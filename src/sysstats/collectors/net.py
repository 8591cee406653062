from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterator, Tuple

from ..exceptions import MalformedRecordError
from ..snapshot import Snapshot, derive_keyed, per_second
from .base import RateCollector, parse_counters

LOG = logging.getLogger(__name__)

# Column order of /proc/net/dev after the interface name.
NET_FIELDS: Tuple[str, ...] = (
    "rx_bytes",
    "rx_packets",
    "rx_errs",
    "rx_drop",
    "rx_fifo",
    "rx_frame",
    "rx_compressed",
    "rx_multicast",
    "tx_bytes",
    "tx_packets",
    "tx_errs",
    "tx_drop",
    "tx_fifo",
    "tx_colls",
    "tx_carrier",
    "tx_compressed",
)


@dataclass(frozen=True)
class IfaceRawStats:
    """Cumulative counters of one network interface."""

    name: str
    rx_bytes: int
    rx_packets: int
    rx_errs: int
    rx_drop: int
    rx_fifo: int
    rx_frame: int
    rx_compressed: int
    rx_multicast: int
    tx_bytes: int
    tx_packets: int
    tx_errs: int
    tx_drop: int
    tx_fifo: int
    tx_colls: int
    tx_carrier: int
    tx_compressed: int
    timestamp: float = 0.0

    def counters(self) -> Dict[str, int]:
        return {field: getattr(self, field) for field in NET_FIELDS}


@dataclass(frozen=True)
class IfaceAvgStats:
    """Per-second traffic of one network interface."""

    name: str
    rx_bytes: float
    rx_packets: float
    rx_errs: float
    rx_drop: float
    rx_fifo: float
    rx_frame: float
    rx_compressed: float
    rx_multicast: float
    tx_bytes: float
    tx_packets: float
    tx_errs: float
    tx_drop: float
    tx_fifo: float
    tx_colls: float
    tx_carrier: float
    tx_compressed: float


def parse_iface_record(record: str, timestamp: float = 0.0) -> Tuple[str, IfaceRawStats]:
    """Parse ``  eth0:  178331 2395 0 0 0 0 0 0 257286 1876 0 0 0 0 0 0``.

    Old kernels glue the first counter to the colon (``eth0:178331``), so the
    name is split on the separator rather than on whitespace.
    """
    name, sep, rest = record.strip().partition(":")
    if not sep or not name:
        raise MalformedRecordError(f"Missing interface name separator in record {record!r}")
    name = name.strip()
    values = rest.split()
    if len(values) != len(NET_FIELDS):
        raise MalformedRecordError(
            f"Expected {len(NET_FIELDS)} counters for interface {name!r}, got {len(values)}"
        )
    return name, IfaceRawStats(name, *parse_counters(values, record), timestamp=timestamp)


def derive_iface_sample(first: IfaceRawStats, second: IfaceRawStats) -> IfaceAvgStats:
    elapsed = second.timestamp - first.timestamp
    first_counters = first.counters()
    rates = {
        field: per_second(value - first_counters[field], elapsed)
        for field, value in second.counters().items()
    }
    return IfaceAvgStats(second.name, **rates)


class NetworkCollector(RateCollector[Snapshot[IfaceRawStats], Snapshot[IfaceAvgStats]]):
    """Per-interface traffic rates from /proc/net/dev."""

    NAME = "net"

    def capture_raw(self) -> Snapshot[IfaceRawStats]:
        path = self.config.proc_path("net", "dev")
        now = self.config.clock()
        samples: Dict[str, IfaceRawStats] = {}
        with path.open("r", encoding="utf-8") as handle:
            for line in handle:
                # the two header lines carry no ':' separator
                if ":" not in line:
                    continue
                name, sample = parse_iface_record(line, now)
                samples[name] = sample
        LOG.debug("Captured %d interfaces from %s", len(samples), path)
        return Snapshot(samples, now)

    def derive(
        self, first: Snapshot[IfaceRawStats], second: Snapshot[IfaceRawStats]
    ) -> Snapshot[IfaceAvgStats]:
        return derive_keyed(first, second, derive_iface_sample, self.NAME)

    def records(self, derived: Snapshot[IfaceAvgStats]) -> Iterator[Dict[str, Any]]:
        for name in sorted(derived):
            record = asdict(derived[name])
            record["iface"] = record.pop("name")
            yield record
