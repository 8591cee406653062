"""
Disk I/O rates from /proc/diskstats.

Each line is ``major minor name`` followed by eleven counters::

    8       0 sda 4222 4373 293854 48992 676 1024 13428 2016 0 1744 51004

Kernels 4.18+ append four discard counters and 5.5+ two flush counters; those
trailing columns are accepted and ignored.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterator, Tuple

from ..exceptions import EntityIdentityMismatchError, MalformedRecordError
from ..snapshot import Snapshot, derive_keyed, per_second
from .base import RateCollector, parse_counter, parse_counters

LOG = logging.getLogger(__name__)

DISK_FIELD_COUNTS = (14, 18, 20)


@dataclass(frozen=True)
class DiskRawStats:
    major: int
    minor: int
    name: str
    read_ios: int  # reads completed
    read_merges: int
    read_sectors: int
    read_ticks: int  # ms spent reading
    write_ios: int
    write_merges: int
    write_sectors: int
    write_ticks: int
    in_flight: int  # gauge, not a counter
    io_ticks: int  # ms spent doing I/O
    time_in_queue: int  # weighted ms spent doing I/O
    sample_time: float = 0.0

    @property
    def identity(self) -> Tuple[int, int, str]:
        return (self.major, self.minor, self.name)


@dataclass(frozen=True)
class DiskAvgStats:
    major: int
    minor: int
    name: str
    read_ios: float  # per second
    read_merges: float
    read_bytes: float
    write_ios: float
    write_merges: float
    write_bytes: float
    in_flight: int  # from the second sample
    io_ticks: int  # ms accumulated between the samples
    time_in_queue: int


def parse_disk_record(record: str, sample_time: float = 0.0) -> Tuple[str, DiskRawStats]:
    fields = record.split()
    if len(fields) not in DISK_FIELD_COUNTS:
        raise MalformedRecordError(
            f"Couldn't parse disk stats because there are {len(fields)} fields instead of 14: {record!r}"
        )
    major = parse_counter(fields[0], record)
    minor = parse_counter(fields[1], record)
    name = fields[2].rstrip(":")
    counters = parse_counters(fields[3:14], record)
    return name, DiskRawStats(major, minor, name, *counters, sample_time=sample_time)


def derive_disk_sample(first: DiskRawStats, second: DiskRawStats, sector_size: int = 512) -> DiskAvgStats:
    """Average the I/O of one device between two samples.

    Raises:
        EntityIdentityMismatchError: The samples come from different devices.
    """
    if first.identity != second.identity:
        raise EntityIdentityMismatchError(
            "The samples are from different disks: "
            f"first sample -> {first.major} {first.minor} {first.name}, "
            f"second sample -> {second.major} {second.minor} {second.name}"
        )

    elapsed = second.sample_time - first.sample_time
    return DiskAvgStats(
        major=first.major,
        minor=first.minor,
        name=first.name,
        read_ios=per_second(second.read_ios - first.read_ios, elapsed),
        read_merges=per_second(second.read_merges - first.read_merges, elapsed),
        read_bytes=per_second(
            second.read_sectors * sector_size - first.read_sectors * sector_size, elapsed
        ),
        write_ios=per_second(second.write_ios - first.write_ios, elapsed),
        write_merges=per_second(second.write_merges - first.write_merges, elapsed),
        write_bytes=per_second(
            second.write_sectors * sector_size - first.write_sectors * sector_size, elapsed
        ),
        in_flight=second.in_flight,
        io_ticks=second.io_ticks - first.io_ticks,
        time_in_queue=second.time_in_queue - first.time_in_queue,
    )


class DiskCollector(RateCollector[Snapshot[DiskRawStats], Snapshot[DiskAvgStats]]):
    """Per-device I/O rates keyed by device name."""

    NAME = "disk"

    def capture_raw(self) -> Snapshot[DiskRawStats]:
        path = self.config.proc_path("diskstats")
        now = self.config.clock()
        samples: Dict[str, DiskRawStats] = {}
        with path.open("r", encoding="utf-8") as handle:
            for line in handle:
                if not line.strip():
                    continue
                name, sample = parse_disk_record(line, now)
                samples[name] = sample
        LOG.debug("Captured %d block devices from %s", len(samples), path)
        return Snapshot(samples, now)

    def derive_pair(self, first: DiskRawStats, second: DiskRawStats) -> DiskAvgStats:
        return derive_disk_sample(first, second, self.config.sector_size)

    def derive(
        self, first: Snapshot[DiskRawStats], second: Snapshot[DiskRawStats]
    ) -> Snapshot[DiskAvgStats]:
        return derive_keyed(first, second, self.derive_pair, self.NAME)

    def records(self, derived: Snapshot[DiskAvgStats]) -> Iterator[Dict[str, Any]]:
        for name in sorted(derived):
            record = asdict(derived[name])
            record["dev"] = record.pop("name")
            yield record
