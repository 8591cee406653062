from __future__ import annotations

import platform
from dataclasses import dataclass
from typing import Optional

from ..config import SysStatsConfig
from ..exceptions import MalformedRecordError


@dataclass(frozen=True)
class SysInfo:
    hostname: str
    domain: str
    os_type: str
    os_release: str
    os_version: str
    os_arch: str
    uptime: float  # seconds since boot


def parse_uptime(content: str) -> float:
    fields = content.split()
    if len(fields) != 2:
        raise MalformedRecordError(f"Error parsing /proc/uptime. It should have 2 fields, got {len(fields)}")
    try:
        return float(fields[0])
    except ValueError as exc:
        raise MalformedRecordError(f"Invalid uptime {fields[0]!r}") from exc


def _read_kernel_value(config: SysStatsConfig, name: str) -> str:
    return config.proc_path("sys", "kernel", name).read_text(encoding="utf-8").strip()


def read_sys_info(config: Optional[SysStatsConfig] = None) -> SysInfo:
    config = config or SysStatsConfig.default()
    return SysInfo(
        hostname=_read_kernel_value(config, "hostname"),
        domain=_read_kernel_value(config, "domainname"),
        os_type=_read_kernel_value(config, "ostype"),
        os_release=_read_kernel_value(config, "osrelease"),
        os_version=_read_kernel_value(config, "version"),
        os_arch=platform.machine(),
        uptime=parse_uptime(config.proc_path("uptime").read_text(encoding="utf-8")),
    )
