"""
Memory statistics from /proc/meminfo.

Keys are lower-cased meminfo names, in kilobytes:

    memtotal, memfree, buffers, cached, swapcached, active, inactive,
    swaptotal, swapfree, dirty, writeback, mapped, slab, commitlimit,
    committed_as

plus three derived values:

    memused   memtotal - memfree
    swapused  swaptotal - swapfree
    realfree  memfree + buffers + cached
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, Optional

from ..config import SysStatsConfig

LOG = logging.getLogger(__name__)

_MEMINFO_RE = re.compile(
    r"^((?:Mem|Swap)(?:Total|Free)|Buffers|Cached|SwapCached|Active|Inactive|"
    r"Dirty|Writeback|Mapped|Slab|Commit(?:Limit|ted_AS)):\s*(\S+)"
)
_VALUE_RE = re.compile(r"[0-9]+")


def parse_meminfo(lines: Iterable[str]) -> Dict[str, int]:
    """Parse meminfo lines, skipping unknown keys and unparseable values."""
    stats: Dict[str, int] = {}
    for line in lines:
        match = _MEMINFO_RE.match(line)
        if not match:
            continue
        key, raw = match.groups()
        if not _VALUE_RE.fullmatch(raw):
            LOG.warning("Skipping unparseable meminfo value %r for %s", raw, key)
            continue
        stats[key.lower()] = int(raw)

    stats["memused"] = stats.get("memtotal", 0) - stats.get("memfree", 0)
    stats["swapused"] = stats.get("swaptotal", 0) - stats.get("swapfree", 0)
    stats["realfree"] = stats.get("memfree", 0) + stats.get("buffers", 0) + stats.get("cached", 0)
    return stats


def read_mem_stats(config: Optional[SysStatsConfig] = None) -> Dict[str, int]:
    config = config or SysStatsConfig.default()
    with config.proc_path("meminfo").open("r", encoding="utf-8") as handle:
        return parse_meminfo(handle)
