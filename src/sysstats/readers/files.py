from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ..collectors.base import parse_counters
from ..config import SysStatsConfig
from ..exceptions import MalformedRecordError


@dataclass(frozen=True)
class FileStats:
    fh_alloc: int  # allocated file handles
    fh_free: int
    fh_max: int
    in_alloc: int  # allocated inodes
    in_free: int


def _parse_fixed(content: str, expected: int, source: str) -> List[int]:
    fields = content.split()
    if len(fields) != expected:
        raise MalformedRecordError(
            f"Error parsing file {source}. It should have {expected} fields, got {len(fields)}"
        )
    return parse_counters(fields, content.strip())


def parse_file_stats(file_nr: str, inode_nr: str) -> FileStats:
    fh_alloc, fh_free, fh_max = _parse_fixed(file_nr, 3, "/proc/sys/fs/file-nr")
    in_alloc, in_free = _parse_fixed(inode_nr, 2, "/proc/sys/fs/inode-nr")
    return FileStats(fh_alloc, fh_free, fh_max, in_alloc, in_free)


def read_file_stats(config: Optional[SysStatsConfig] = None) -> FileStats:
    config = config or SysStatsConfig.default()
    file_nr = config.proc_path("sys", "fs", "file-nr").read_text(encoding="utf-8")
    inode_nr = config.proc_path("sys", "fs", "inode-nr").read_text(encoding="utf-8")
    return parse_file_stats(file_nr, inode_nr)
