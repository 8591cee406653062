"""
File system space usage as reported by ``df -kTP``.

-k uses 1K blocks, -T adds the file system type and -P keeps every mount on a
single line::

    Filesystem     Type  1024-blocks    Used Available Capacity Mounted on
    /dev/sda1      ext2       240972   36441    192090      16% /boot
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import List, Optional

from ..collectors.base import parse_counter
from ..config import SysStatsConfig
from ..exceptions import MalformedRecordError

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiskUsage:
    filesystem: str
    type: str
    total: int  # KiB
    used: int
    available: int
    used_percent: int
    mounted_on: str


def parse_disk_usage(line: str) -> DiskUsage:
    fields = line.split()
    if len(fields) != 7:
        raise MalformedRecordError(
            f"Couldn't parse disk usage because there are {len(fields)} fields instead of 7: {line!r}"
        )
    filesystem, fs_type, total, used, available, capacity, mounted_on = fields
    return DiskUsage(
        filesystem=filesystem,
        type=fs_type,
        total=parse_counter(total, line),
        used=parse_counter(used, line),
        available=parse_counter(available, line),
        used_percent=parse_counter(capacity.rstrip("%"), line),
        mounted_on=mounted_on,
    )


def parse_df_output(output: str) -> List[DiskUsage]:
    lines = [line for line in output.splitlines() if line.strip()]
    # first line is the header
    return [parse_disk_usage(line) for line in lines[1:]]


def read_disk_usage(config: Optional[SysStatsConfig] = None) -> List[DiskUsage]:
    config = config or SysStatsConfig.default()
    result = subprocess.run(
        list(config.df_command),
        check=True,
        capture_output=True,
        text=True,
    )
    usage = parse_df_output(result.stdout)
    LOG.debug("Parsed %d file systems from %s", len(usage), " ".join(config.df_command))
    return usage
