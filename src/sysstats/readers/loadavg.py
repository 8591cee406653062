from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..config import SysStatsConfig
from ..exceptions import MalformedRecordError


@dataclass(frozen=True)
class LoadAvg:
    avg1: float
    avg5: float
    avg15: float


def parse_loadavg(content: str) -> LoadAvg:
    fields = content.split()
    if len(fields) < 3:
        raise MalformedRecordError(f"Expected at least 3 fields in /proc/loadavg, got {len(fields)}")
    try:
        return LoadAvg(*(float(value) for value in fields[:3]))
    except ValueError as exc:
        raise MalformedRecordError(f"Invalid load average in {content.strip()!r}") from exc


def read_load_avg(config: Optional[SysStatsConfig] = None) -> LoadAvg:
    config = config or SysStatsConfig.default()
    return parse_loadavg(config.proc_path("loadavg").read_text(encoding="utf-8"))
