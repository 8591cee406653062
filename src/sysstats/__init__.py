"""
sysstats: Linux resource statistics from procfs

Reads the fixed-format counter files under /proc and turns cumulative
counters into per-second rates between two captures taken a known time apart.
Every domain exposes ``capture_raw``, ``derive`` and ``sample_over_interval``;
the functions below are thin wrappers that use the default configuration.
"""

from typing import Dict, List

from sysstats.collectors import (
    CpuAvgStats,
    CpuCollector,
    CpuRawStats,
    DiskAvgStats,
    DiskCollector,
    DiskRawStats,
    IfaceAvgStats,
    IfaceRawStats,
    NetworkCollector,
    ProcAvgStats,
    ProcessCollector,
    ProcRawStats,
    RateCollector,
)
from sysstats.config import SysStatsConfig
from sysstats.exceptions import (
    EntityIdentityMismatchError,
    MalformedRecordError,
    MissingEntityError,
    SysStatsError,
)
from sysstats.readers import (
    DiskUsage,
    FileStats,
    LoadAvg,
    SockStats,
    SysInfo,
    read_disk_usage,
    read_file_stats,
    read_load_avg,
    read_mem_stats,
    read_sock_stats,
    read_sys_info,
)
from sysstats.snapshot import Snapshot

__version__ = "0.1.0"


def get_cpu_raw_stats() -> Snapshot[CpuRawStats]:
    return CpuCollector().capture_raw()


def get_cpu_avg_stats(
    first: Snapshot[CpuRawStats], second: Snapshot[CpuRawStats]
) -> Snapshot[CpuAvgStats]:
    return CpuCollector().derive(first, second)


def get_cpu_stats_interval(interval: float) -> Snapshot[CpuAvgStats]:
    return CpuCollector().sample_over_interval(interval)


def get_net_raw_stats() -> Snapshot[IfaceRawStats]:
    return NetworkCollector().capture_raw()


def get_net_avg_stats(
    first: Snapshot[IfaceRawStats], second: Snapshot[IfaceRawStats]
) -> Snapshot[IfaceAvgStats]:
    return NetworkCollector().derive(first, second)


def get_net_stats_interval(interval: float) -> Snapshot[IfaceAvgStats]:
    return NetworkCollector().sample_over_interval(interval)


def get_disk_raw_stats() -> Snapshot[DiskRawStats]:
    return DiskCollector().capture_raw()


def get_disk_avg_stats(
    first: Snapshot[DiskRawStats], second: Snapshot[DiskRawStats]
) -> Snapshot[DiskAvgStats]:
    return DiskCollector().derive(first, second)


def get_disk_stats_interval(interval: float) -> Snapshot[DiskAvgStats]:
    return DiskCollector().sample_over_interval(interval)


def get_proc_raw_stats() -> ProcRawStats:
    return ProcessCollector().capture_raw()


def get_proc_avg_stats(first: ProcRawStats, second: ProcRawStats) -> ProcAvgStats:
    return ProcessCollector().derive(first, second)


def get_proc_stats_interval(interval: float) -> ProcAvgStats:
    return ProcessCollector().sample_over_interval(interval)


def get_load_avg() -> LoadAvg:
    return read_load_avg()


def get_mem_stats() -> Dict[str, int]:
    return read_mem_stats()


def get_sock_stats() -> SockStats:
    return read_sock_stats()


def get_file_stats() -> FileStats:
    return read_file_stats()


def get_sys_info() -> SysInfo:
    return read_sys_info()


def get_disk_usage() -> List[DiskUsage]:
    return read_disk_usage()


__all__ = [
    "CpuAvgStats",
    "CpuCollector",
    "CpuRawStats",
    "DiskAvgStats",
    "DiskCollector",
    "DiskRawStats",
    "DiskUsage",
    "EntityIdentityMismatchError",
    "FileStats",
    "IfaceAvgStats",
    "IfaceRawStats",
    "LoadAvg",
    "MalformedRecordError",
    "MissingEntityError",
    "NetworkCollector",
    "ProcAvgStats",
    "ProcRawStats",
    "ProcessCollector",
    "RateCollector",
    "Snapshot",
    "SockStats",
    "SysInfo",
    "SysStatsConfig",
    "SysStatsError",
    "get_cpu_avg_stats",
    "get_cpu_raw_stats",
    "get_cpu_stats_interval",
    "get_disk_avg_stats",
    "get_disk_raw_stats",
    "get_disk_stats_interval",
    "get_disk_usage",
    "get_file_stats",
    "get_load_avg",
    "get_mem_stats",
    "get_net_avg_stats",
    "get_net_raw_stats",
    "get_net_stats_interval",
    "get_proc_avg_stats",
    "get_proc_raw_stats",
    "get_proc_stats_interval",
    "get_sock_stats",
    "get_sys_info",
    "__version__",
]
