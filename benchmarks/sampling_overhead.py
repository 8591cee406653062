import argparse
import threading
import time
from typing import List

import psutil

from sysstats import CpuCollector, DiskCollector, NetworkCollector, ProcessCollector


def monitor_rss(stop_flag: List[bool], interval: float = 0.05) -> List[int]:
    proc = psutil.Process()
    samples: List[int] = []
    while not stop_flag[0]:
        samples.append(proc.memory_info().rss)
        time.sleep(interval)
    samples.append(proc.memory_info().rss)
    return samples


def main() -> None:
    parser = argparse.ArgumentParser(description="Cost of capturing and deriving procfs snapshots")
    parser.add_argument("--iterations", type=int, default=2000)
    args = parser.parse_args()

    collectors = [CpuCollector(), NetworkCollector(), DiskCollector(), ProcessCollector()]

    stop = [False]
    rss_samples: List[int] = []

    def monitor_thread():
        nonlocal rss_samples
        rss_samples = monitor_rss(stop)

    t = threading.Thread(target=monitor_thread, daemon=True)
    t.start()

    print("Sampling Overhead Results")
    for collector in collectors:
        previous = collector.capture_raw()
        start = time.perf_counter()
        for _ in range(args.iterations):
            current = collector.capture_raw()
            collector.derive(previous, current)
            previous = current
        elapsed = time.perf_counter() - start
        per_call_us = elapsed / args.iterations * 1e6
        print(f"- {collector.NAME:<5} {per_call_us:8.1f} us per capture+derive")

    stop[0] = True
    t.join(timeout=1.0)
    peak_rss = max(rss_samples) if rss_samples else 0
    print(f"- Peak RSS: {peak_rss / (1024**2):.2f} MiB")


if __name__ == "__main__":
    main()
