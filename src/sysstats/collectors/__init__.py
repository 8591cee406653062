"""Available collector implementations."""

from .base import RateCollector
from .cpu import CpuAvgStats, CpuCollector, CpuRawStats
from .disk import DiskAvgStats, DiskCollector, DiskRawStats
from .net import IfaceAvgStats, IfaceRawStats, NetworkCollector
from .proc import ProcAvgStats, ProcessCollector, ProcRawStats

__all__ = [
    "RateCollector",
    "CpuCollector",
    "CpuRawStats",
    "CpuAvgStats",
    "NetworkCollector",
    "IfaceRawStats",
    "IfaceAvgStats",
    "DiskCollector",
    "DiskRawStats",
    "DiskAvgStats",
    "ProcessCollector",
    "ProcRawStats",
    "ProcAvgStats",
]
