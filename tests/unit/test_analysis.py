import matplotlib
import matplotlib.pyplot as plt
import pandas as pd
import pytest

from sysstats.analysis import plot_rates, series_frame, snapshot_frame, summarize_rates
from sysstats.collectors import CpuCollector, ProcessCollector
from sysstats.collectors.net import NET_FIELDS, IfaceAvgStats
from sysstats.snapshot import Snapshot

matplotlib.use("Agg")


def _net(name, rx_bytes):
    values = dict.fromkeys(NET_FIELDS, 0.0)
    values["rx_bytes"] = rx_bytes
    return IfaceAvgStats(name, **values)


def _series():
    return [
        Snapshot({"eth0": _net("eth0", 100.0), "lo": _net("lo", 1.0)}, 10.0),
        Snapshot({"eth0": _net("eth0", 300.0), "lo": _net("lo", 3.0)}, 20.0),
        Snapshot({"eth0": _net("eth0", 200.0), "lo": _net("lo", 2.0)}, 30.0),
    ]


def test_snapshot_frame_indexed_by_entity(config):
    collector = CpuCollector(config)
    raw = collector.capture_raw()
    df = snapshot_frame(collector.derive(raw, raw))
    assert isinstance(df, pd.DataFrame)
    assert list(df.index) == ["cpu", "cpu0", "cpu1"]
    assert "name" not in df.columns
    assert {"user", "idle", "total"} <= set(df.columns)


def test_snapshot_frame_for_process_stats(config):
    collector = ProcessCollector(config)
    raw = collector.capture_raw()
    df = snapshot_frame(collector.derive(raw, raw))
    assert list(df.index) == ["system"]
    assert df.loc["system", "total"] == 713


def test_snapshot_frame_empty():
    df = snapshot_frame(Snapshot({}, 0.0))
    assert df.empty


def test_series_frame_long_format():
    df = series_frame(_series())
    assert len(df) == 6
    assert list(df["timestamp"].unique()) == [10.0, 20.0, 30.0]
    assert df[df["entity"] == "eth0"]["rx_bytes"].tolist() == [100.0, 300.0, 200.0]


def test_series_frame_timestamp_length_mismatch():
    with pytest.raises(ValueError):
        series_frame(_series(), timestamps=[1.0])


def test_summarize_rates():
    summary = summarize_rates(series_frame(_series()), "rx_bytes")
    assert summary.loc["eth0", "max"] == 300.0
    assert summary.loc["eth0", "p50"] == 200.0
    assert summary.loc["lo", "mean"] == pytest.approx(2.0)


def test_summarize_unknown_column():
    with pytest.raises(ValueError):
        summarize_rates(series_frame(_series()), "nope")


def test_plot_rates():
    ax = plot_rates(series_frame(_series()), "rx_bytes")
    assert ax is not None
    assert len(ax.get_lines()) == 2
    plt.close("all")
