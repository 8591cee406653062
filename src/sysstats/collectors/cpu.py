from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterator, Tuple

from ..exceptions import MalformedRecordError
from ..snapshot import Snapshot, derive_keyed
from .base import RateCollector, parse_counters

LOG = logging.getLogger(__name__)

# Column order of a cpu line in /proc/stat, in USER_HZ ticks.
CPU_FIELDS: Tuple[str, ...] = (
    "user",
    "nice",
    "system",
    "idle",
    "iowait",
    "irq",
    "softirq",
    "steal",
    "guest",
    "guest_nice",
)


@dataclass(frozen=True)
class CpuRawStats:
    """Cumulative tick counters of one CPU line of /proc/stat.

    ``total`` is the sum of every mode, computed when the line is parsed.
    """

    name: str
    user: int
    nice: int
    system: int
    idle: int
    iowait: int
    irq: int
    softirq: int
    steal: int
    guest: int
    guest_nice: int
    total: int
    timestamp: float = 0.0

    def counters(self) -> Dict[str, int]:
        return {field: getattr(self, field) for field in CPU_FIELDS}


@dataclass(frozen=True)
class CpuAvgStats:
    """Percentage of the tick delta spent in each mode, plus busy ``total``."""

    name: str
    user: float
    nice: float
    system: float
    idle: float
    iowait: float
    irq: float
    softirq: float
    steal: float
    guest: float
    guest_nice: float
    total: float


def parse_cpu_record(record: str, timestamp: float = 0.0) -> Tuple[str, CpuRawStats]:
    """Parse ``cpu0 294 0 309 10612 71 30 0 0 0 0`` into ``("cpu0", CpuRawStats)``."""
    fields = record.split()
    if not fields:
        raise MalformedRecordError("Empty cpu record")
    name, values = fields[0], fields[1:]
    if len(values) != len(CPU_FIELDS):
        raise MalformedRecordError(
            f"Expected {len(CPU_FIELDS)} counters after {name!r}, got {len(values)}: {record!r}"
        )
    counters = parse_counters(values, record)
    return name, CpuRawStats(name, *counters, total=sum(counters), timestamp=timestamp)


def derive_cpu_sample(first: CpuRawStats, second: CpuRawStats, precision: int = 2) -> CpuAvgStats:
    tick_delta = second.total - first.total
    if tick_delta == 0:
        return CpuAvgStats(second.name, *([0.0] * len(CPU_FIELDS)), total=0.0)

    second_counters = second.counters()
    first_counters = first.counters()
    rates = {
        field: round((second_counters[field] - first_counters[field]) * 100.0 / tick_delta, precision)
        for field in CPU_FIELDS
    }
    # Busy time comes from the already rounded idle percentage.
    busy = round(100.0 - rates["idle"], precision)
    return CpuAvgStats(second.name, total=busy, **rates)


class CpuCollector(RateCollector[Snapshot[CpuRawStats], Snapshot[CpuAvgStats]]):
    """CPU utilization per core from /proc/stat."""

    NAME = "cpu"

    def capture_raw(self) -> Snapshot[CpuRawStats]:
        path = self.config.proc_path("stat")
        now = self.config.clock()
        samples: Dict[str, CpuRawStats] = {}
        with path.open("r", encoding="utf-8") as handle:
            for line in handle:
                # cpu lines are grouped at the top of the file
                if not line.startswith("cpu"):
                    break
                name, sample = parse_cpu_record(line, now)
                samples[name] = sample
        LOG.debug("Captured %d cpu records from %s", len(samples), path)
        return Snapshot(samples, now)

    def derive(
        self, first: Snapshot[CpuRawStats], second: Snapshot[CpuRawStats]
    ) -> Snapshot[CpuAvgStats]:
        precision = self.config.cpu_precision
        return derive_keyed(
            first,
            second,
            lambda a, b: derive_cpu_sample(a, b, precision),
            self.NAME,
        )

    def records(self, derived: Snapshot[CpuAvgStats]) -> Iterator[Dict[str, Any]]:
        for name in sorted(derived):
            record = asdict(derived[name])
            record["cpu"] = record.pop("name")
            yield record
