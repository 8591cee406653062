"""Shared fixtures: a throw-away procfs tree and a scripted clock."""

from pathlib import Path
from typing import Dict

import pytest

from sysstats.config import SysStatsConfig

PROC_STAT = """\
cpu  100 0 50 850 0 0 0 0 0 0
cpu0 60 0 30 410 0 0 0 0 0 0
cpu1 40 0 20 440 0 0 0 0 0 0
intr 12345 0 0
ctxt 1000
btime 1700000000
processes 5000
procs_running 3
procs_blocked 1
softirq 1 2 3
"""

NET_DEV = """\
Inter-|   Receive                                                |  Transmit
 face |bytes    packets errs drop fifo frame compressed multicast|bytes    packets errs drop fifo colls carrier compressed
    lo:  166927  259 0 0 0 0 0 0 166927  259 0 0 0 0 0 0
  eth0:  178331 2395 0 0 0 0 0 0 257286 1876 0 0 0 0 0 0
"""

DISKSTATS = """\
   8       0 sda 4222 4373 1000 48992 676 1024 13428 2016 0 1744 51004
   8       1 sda1 287 322 2296 68 6 0 12 0 0 68 68
"""

LOADAVG = "0.50 0.40 0.30 3/713 12345\n"


class FakeClock:
    """Returns the scripted times in order, then keeps returning the last one."""

    def __init__(self, *times: float) -> None:
        self._times = list(times)
        self.calls = 0

    def __call__(self) -> float:
        self.calls += 1
        if len(self._times) > 1:
            return self._times.pop(0)
        return self._times[0]


def write_proc(root: Path, files: Dict[str, str]) -> None:
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


@pytest.fixture
def proc_root(tmp_path: Path) -> Path:
    root = tmp_path / "proc"
    write_proc(
        root,
        {
            "stat": PROC_STAT,
            "net/dev": NET_DEV,
            "diskstats": DISKSTATS,
            "loadavg": LOADAVG,
        },
    )
    return root


@pytest.fixture
def config(proc_root: Path) -> SysStatsConfig:
    return SysStatsConfig.for_root(proc_root).with_clock(FakeClock(1000.0, 1010.0))


@pytest.fixture
def make_clock():
    return FakeClock


@pytest.fixture
def rewrite(proc_root: Path):
    """Replace files of the fake procfs, e.g. between two captures."""

    def _rewrite(files: Dict[str, str]) -> None:
        write_proc(proc_root, files)

    return _rewrite
