"""
`sysstat` command line interface that reports procfs rates as JSON lines.
"""

from __future__ import annotations

import argparse
import logging
import subprocess
import sys
from pathlib import Path
from typing import Dict, List, Sequence

from ..aggregator import IntervalReporter, ReportConfig
from ..collectors import (
    CpuCollector,
    DiskCollector,
    NetworkCollector,
    ProcessCollector,
    RateCollector,
)
from ..config import SysStatsConfig
from ..exceptions import SysStatsError
from ..readers import READERS, Reader


LOG = logging.getLogger("sysstat")

RATE_COLLECTORS = {
    "cpu": CpuCollector,
    "net": NetworkCollector,
    "disk": DiskCollector,
    "proc": ProcessCollector,
}


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="sysstat",
        description="Report CPU, network, disk and process rates read from procfs.",
    )
    parser.add_argument("--interval", type=float, default=1.0, help="Seconds between the two captures.")
    parser.add_argument(
        "--count",
        type=int,
        default=1,
        help="Number of reports to print (0 = until interrupted).",
    )
    parser.add_argument(
        "--only",
        type=str,
        default="cpu,net,disk,proc",
        help="Comma separated sources: " + ",".join(list(RATE_COLLECTORS) + list(READERS)) + ".",
    )
    parser.add_argument(
        "--proc-root",
        type=Path,
        default=Path("/proc"),
        help="Directory to read counters from (e.g. a host /proc mounted in a container).",
    )
    parser.add_argument(
        "--log",
        type=str,
        default="WARNING",
        help="Log level (DEBUG, INFO, WARNING, ERROR).",
    )
    parser.add_argument(
        "--labels",
        type=str,
        help="Comma separated key=value pairs added to every event for filtering.",
    )
    return parser.parse_args(argv)


def build_sources(
    args: argparse.Namespace, config: SysStatsConfig
) -> tuple[List[RateCollector], Dict[str, Reader]]:
    enabled = [item.strip() for item in args.only.split(",") if item.strip()]
    unknown = [name for name in enabled if name not in RATE_COLLECTORS and name not in READERS]
    if unknown:
        raise ValueError(f"Unknown sources: {', '.join(unknown)}")

    collectors: List[RateCollector] = [
        RATE_COLLECTORS[name](config) for name in enabled if name in RATE_COLLECTORS
    ]
    readers = {name: READERS[name] for name in enabled if name in READERS}
    return collectors, readers


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def parse_labels(raw: str | None) -> dict[str, str]:
    if not raw:
        return {}
    out: dict[str, str] = {}
    for item in raw.split(","):
        if not item:
            continue
        if "=" not in item:
            continue
        key, value = item.split("=", 1)
        out[key.strip()] = value.strip()
    return out


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(args.log)

    config = SysStatsConfig.for_root(args.proc_root)
    try:
        collectors, readers = build_sources(args, config)
        report_cfg = ReportConfig(
            interval=args.interval,
            count=args.count,
            extra_labels=parse_labels(args.labels),
        )
    except ValueError as exc:
        LOG.error("%s", exc)
        return 1

    if not collectors and not readers:
        LOG.error("No sources enabled. Check --only flag.")
        return 1

    reporter = IntervalReporter(
        collectors,
        report_cfg,
        readers=readers,
        reader_config=config,
        sleep=config.sleep,
    )
    try:
        reporter.run()
    except KeyboardInterrupt:
        LOG.info("Interrupted, stopping reports.")
    except (SysStatsError, OSError, subprocess.CalledProcessError) as exc:
        LOG.error("Sampling failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
