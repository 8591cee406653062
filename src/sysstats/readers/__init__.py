"""
Single-sample readers: values that are read once and need no second capture.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Callable, Dict, Iterator

from ..config import SysStatsConfig
from .diskusage import DiskUsage, read_disk_usage
from .files import FileStats, read_file_stats
from .loadavg import LoadAvg, read_load_avg
from .mem import read_mem_stats
from .sockets import SockStats, read_sock_stats
from .sysinfo import SysInfo, read_sys_info

Reader = Callable[[SysStatsConfig], Iterator[Dict[str, Any]]]


def _load_records(config: SysStatsConfig) -> Iterator[Dict[str, Any]]:
    yield asdict(read_load_avg(config))


def _mem_records(config: SysStatsConfig) -> Iterator[Dict[str, Any]]:
    yield dict(read_mem_stats(config))


def _sock_records(config: SysStatsConfig) -> Iterator[Dict[str, Any]]:
    yield asdict(read_sock_stats(config))


def _file_records(config: SysStatsConfig) -> Iterator[Dict[str, Any]]:
    yield asdict(read_file_stats(config))


def _sysinfo_records(config: SysStatsConfig) -> Iterator[Dict[str, Any]]:
    yield asdict(read_sys_info(config))


def _df_records(config: SysStatsConfig) -> Iterator[Dict[str, Any]]:
    for usage in read_disk_usage(config):
        yield asdict(usage)


READERS: Dict[str, Reader] = {
    "load": _load_records,
    "mem": _mem_records,
    "sock": _sock_records,
    "files": _file_records,
    "sysinfo": _sysinfo_records,
    "df": _df_records,
}


__all__ = [
    "READERS",
    "Reader",
    "DiskUsage",
    "FileStats",
    "LoadAvg",
    "SockStats",
    "SysInfo",
    "read_disk_usage",
    "read_file_stats",
    "read_load_avg",
    "read_mem_stats",
    "read_sock_stats",
    "read_sys_info",
]
