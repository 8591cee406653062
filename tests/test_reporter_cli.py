import json
import logging

import pytest

from sysstats.aggregator import IntervalReporter, ReportConfig
from sysstats.cli.sysstat import build_sources, main, parse_args, parse_labels
from sysstats.collectors import CpuCollector, NetworkCollector, ProcessCollector
from sysstats.config import SysStatsConfig
from sysstats.readers import READERS


NET_DEV_LATER = """\
Inter-|   Receive                                                |  Transmit
 face |bytes    packets errs drop fifo frame compressed multicast|bytes    packets errs drop fifo colls carrier compressed
    lo:  166927  259 0 0 0 0 0 0 166927  259 0 0 0 0 0 0
  eth0:  179331 2405 0 0 0 0 0 0 257286 1876 0 0 0 0 0 0
"""


def test_reporter_emits_one_line_per_entity(config, rewrite):
    lines = []
    reporter = IntervalReporter(
        [NetworkCollector(config), ProcessCollector(config)],
        ReportConfig(interval=10, count=1, include_wall_time=False, extra_labels={"host": "a"}),
        emit=lines.append,
        sleep=lambda seconds: rewrite({"net/dev": NET_DEV_LATER}),
    )
    assert reporter.run() == 1

    events = [json.loads(line) for line in lines]
    assert [event["type"] for event in events] == ["net", "net", "proc"]
    eth0 = next(event for event in events if event.get("iface") == "eth0")
    assert eth0["rx_bytes"] == 100.0
    assert eth0["rx_packets"] == 1.0
    assert eth0["labels"] == {"host": "a"}
    assert "ts" not in eth0
    assert events[-1]["total"] == 713


def test_reporter_reuses_previous_capture(proc_root, make_clock):
    config = SysStatsConfig.for_root(proc_root).with_clock(make_clock(1.0, 2.0, 3.0, 4.0))
    collector = CpuCollector(config)
    captures = []
    original = collector.capture_raw

    def counting_capture():
        snapshot = original()
        captures.append(snapshot.timestamp)
        return snapshot

    collector.capture_raw = counting_capture
    lines = []
    reporter = IntervalReporter(
        [collector], ReportConfig(interval=0, count=3), emit=lines.append, sleep=lambda _: None
    )
    assert reporter.run() == 3
    assert captures == [1.0, 2.0, 3.0, 4.0]
    assert len(lines) == 9
    assert all("ts" in json.loads(line) for line in lines)


def test_reporter_includes_single_sample_readers(config):
    lines = []
    reporter = IntervalReporter(
        [],
        ReportConfig(interval=0, count=1, include_wall_time=False),
        readers={"load": READERS["load"]},
        reader_config=config,
        emit=lines.append,
        sleep=lambda _: None,
    )
    reporter.run()
    assert json.loads(lines[0]) == {"type": "load", "avg1": 0.5, "avg5": 0.4, "avg15": 0.3}


def test_report_config_validation():
    with pytest.raises(ValueError):
        ReportConfig(interval=-1)
    with pytest.raises(ValueError):
        ReportConfig(count=-1)


def test_parse_labels():
    assert parse_labels(None) == {}
    assert parse_labels("env=prod, host = a,broken,") == {"env": "prod", "host": "a"}


def test_build_sources_rejects_unknown(proc_root):
    args = parse_args(["--only", "cpu,bogus"])
    with pytest.raises(ValueError):
        build_sources(args, SysStatsConfig.for_root(proc_root))


def test_build_sources_splits_collectors_and_readers(proc_root):
    args = parse_args(["--only", "cpu, disk ,load"])
    collectors, readers = build_sources(args, SysStatsConfig.for_root(proc_root))
    assert [collector.NAME for collector in collectors] == ["cpu", "disk"]
    assert list(readers) == ["load"]


def test_main_prints_json_lines(proc_root, capsys):
    code = main(
        ["--proc-root", str(proc_root), "--only", "cpu,load", "--interval", "0", "--count", "1", "--labels", "run=1"]
    )
    assert code == 0
    events = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert [event["type"] for event in events] == ["cpu", "cpu", "cpu", "load"]
    assert [event["cpu"] for event in events[:3]] == ["cpu", "cpu0", "cpu1"]
    assert events[0]["total"] == 0.0
    assert all(event["labels"] == {"run": "1"} for event in events)


def test_main_unknown_source(proc_root):
    assert main(["--proc-root", str(proc_root), "--only", "nope"]) == 1


def test_main_negative_interval(proc_root):
    assert main(["--proc-root", str(proc_root), "--interval", "-1"]) == 1


def test_main_missing_proc_root(tmp_path):
    assert main(["--proc-root", str(tmp_path / "missing"), "--only", "cpu", "--interval", "0"]) == 1


def test_reporter_survives_interface_appearing(proc_root, make_clock, rewrite, caplog):
    config = SysStatsConfig.for_root(proc_root).with_clock(make_clock(1.0, 2.0, 3.0, 4.0))
    sleeps = []

    def add_veth(seconds):
        sleeps.append(seconds)
        if len(sleeps) == 1:
            rewrite({"net/dev": NET_DEV_LATER + "  veth9:  10 1 0 0 0 0 0 0 20 2 0 0 0 0 0 0\n"})

    lines = []
    reporter = IntervalReporter(
        [NetworkCollector(config)],
        ReportConfig(interval=0, count=3, include_wall_time=False),
        emit=lines.append,
        sleep=add_veth,
    )
    with caplog.at_level(logging.WARNING, logger="sysstats.aggregator.interval"):
        assert reporter.run() == 3

    assert "veth9" in caplog.text
    ifaces = [json.loads(line)["iface"] for line in lines]
    assert ifaces == ["eth0", "lo", "veth9", "eth0", "lo", "veth9"]
