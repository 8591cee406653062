from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from ..collectors.base import parse_counter
from ..config import SysStatsConfig

_SOCK_RE = re.compile(r"sockets:\s+used\s+(\S+)")
_TCP_RE = re.compile(r"TCP:\s+inuse\s+(\S+)\s+orphan\s+(\S+)\s+tw\s+(\S+)")
_UDP_RE = re.compile(r"UDP:\s+inuse\s+(\S+)")
_RAW_RE = re.compile(r"RAW:\s+inuse\s+(\S+)")
_FRAG_RE = re.compile(r"FRAG:\s+inuse\s+(\S+)")


@dataclass
class SockStats:
    """Socket usage from /proc/net/sockstat."""

    used: int = 0
    tcp_in_use: int = 0
    tcp_orphaned: int = 0
    tcp_time_wait: int = 0
    udp_in_use: int = 0
    raw: int = 0
    ip_frag: int = 0


def parse_sockstat(lines: Iterable[str]) -> SockStats:
    stats = SockStats()
    for line in lines:
        line = line.strip()
        sock = _SOCK_RE.match(line)
        if sock:
            stats.used = parse_counter(sock.group(1), line)
            continue
        tcp = _TCP_RE.match(line)
        if tcp:
            stats.tcp_in_use = parse_counter(tcp.group(1), line)
            stats.tcp_orphaned = parse_counter(tcp.group(2), line)
            stats.tcp_time_wait = parse_counter(tcp.group(3), line)
            continue
        udp = _UDP_RE.match(line)
        if udp:
            stats.udp_in_use = parse_counter(udp.group(1), line)
            continue
        raw = _RAW_RE.match(line)
        if raw:
            stats.raw = parse_counter(raw.group(1), line)
            continue
        frag = _FRAG_RE.match(line)
        if frag:
            stats.ip_frag = parse_counter(frag.group(1), line)
    return stats


def read_sock_stats(config: Optional[SysStatsConfig] = None) -> SockStats:
    config = config or SysStatsConfig.default()
    with config.proc_path("net", "sockstat").open("r", encoding="utf-8") as handle:
        return parse_sockstat(handle)
