from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, Iterator, Tuple

from ..exceptions import MalformedRecordError
from .base import RateCollector, parse_counter

LOG = logging.getLogger(__name__)

_STAT_LINES = {
    "processes": re.compile(r"^processes\s+(\S+)"),
    "running": re.compile(r"^procs_running\s+(\S+)"),
    "blocked": re.compile(r"^procs_blocked\s+(\S+)"),
}


@dataclass(frozen=True)
class ProcRawStats:
    processes: int  # forks since boot
    running: int  # runnable processes
    blocked: int  # waiting for I/O
    run_queue: int  # runnable scheduling entities
    total: int  # scheduling entities that currently exist
    timestamp: float = 0.0


@dataclass(frozen=True)
class ProcAvgStats:
    new_procs: float  # forks per second
    running: int
    blocked: int
    run_queue: int
    total: int


def parse_loadavg_entities(content: str) -> Tuple[int, int]:
    """Return ``(run_queue, total)`` from the 4th field of /proc/loadavg (``2/713``)."""
    fields = content.split()
    if len(fields) != 5:
        raise MalformedRecordError(
            f"Error parsing /proc/loadavg. It should have 5 fields, got {len(fields)}"
        )
    parts = fields[3].split("/")
    if len(parts) != 2:
        raise MalformedRecordError(f"Expected 'running/total' in /proc/loadavg, got {fields[3]!r}")
    return parse_counter(parts[0], content), parse_counter(parts[1], content)


def parse_stat_processes(lines: Iterable[str]) -> Dict[str, int]:
    """Pick the fork counter and scheduler gauges out of /proc/stat lines.

    Lines that are absent leave their value at 0.
    """
    values = dict.fromkeys(_STAT_LINES, 0)
    for line in lines:
        for key, pattern in _STAT_LINES.items():
            match = pattern.match(line)
            if match:
                values[key] = parse_counter(match.group(1), line.strip())
                break
    return values


def derive_proc_sample(first: ProcRawStats, second: ProcRawStats) -> ProcAvgStats:
    elapsed = second.timestamp - first.timestamp
    # clock adjustments can make elapsed zero or negative
    if elapsed > 0:
        new_procs = (second.processes - first.processes) / elapsed
    else:
        new_procs = 0.0
    return ProcAvgStats(
        new_procs=new_procs,
        running=second.running,
        blocked=second.blocked,
        run_queue=second.run_queue,
        total=second.total,
    )


class ProcessCollector(RateCollector[ProcRawStats, ProcAvgStats]):
    """Fork rate and scheduler gauges from /proc/stat and /proc/loadavg."""

    NAME = "proc"

    def capture_raw(self) -> ProcRawStats:
        now = self.config.clock()
        loadavg_path = self.config.proc_path("loadavg")
        run_queue, total = parse_loadavg_entities(loadavg_path.read_text(encoding="utf-8"))

        stat_path = self.config.proc_path("stat")
        with stat_path.open("r", encoding="utf-8") as handle:
            values = parse_stat_processes(handle)
        LOG.debug("Captured process stats from %s and %s", loadavg_path, stat_path)
        return ProcRawStats(run_queue=run_queue, total=total, timestamp=now, **values)

    def derive(self, first: ProcRawStats, second: ProcRawStats) -> ProcAvgStats:
        return derive_proc_sample(first, second)

    def records(self, derived: ProcAvgStats) -> Iterator[Dict[str, Any]]:
        yield asdict(derived)
