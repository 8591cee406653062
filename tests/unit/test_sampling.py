import asyncio
from unittest.mock import MagicMock

import pytest

from sysstats.collectors import CpuCollector, NetworkCollector, ProcessCollector
from sysstats.config import SysStatsConfig


def test_sample_over_interval_sleeps_between_captures(config, rewrite):
    waits = []

    def advance(seconds):
        waits.append(seconds)
        rewrite({"stat": "cpu  150 0 100 900 0 0 0 0 0 0\ncpu0 90 0 60 450 0 0 0 0 0 0\ncpu1 60 0 40 450 0 0 0 0 0 0\n"})

    config.with_sleep(advance)
    derived = CpuCollector(config).sample_over_interval(2)

    assert waits == [2]
    assert derived["cpu"].user == 33.33
    assert derived["cpu"].total == 66.67


def test_zero_interval_is_legal(config):
    config.with_sleep(MagicMock())
    derived = NetworkCollector(config).sample_over_interval(0)
    config.sleep.assert_called_once_with(0)
    assert derived["eth0"].rx_bytes == 0.0


def test_negative_interval_rejected(config):
    config.with_sleep(MagicMock())
    with pytest.raises(ValueError):
        CpuCollector(config).sample_over_interval(-1)
    config.sleep.assert_not_called()


def test_capture_failure_propagates_without_waiting(tmp_path):
    sleep = MagicMock()
    config = SysStatsConfig.for_root(tmp_path).with_sleep(sleep)
    with pytest.raises(FileNotFoundError):
        ProcessCollector(config).sample_over_interval(5)
    sleep.assert_not_called()


def test_second_capture_failure_propagates(config, proc_root):
    def remove_source(seconds):
        (proc_root / "net" / "dev").unlink()

    config.with_sleep(remove_source)
    with pytest.raises(FileNotFoundError):
        NetworkCollector(config).sample_over_interval(1)


@pytest.mark.asyncio
async def test_async_sampling(config):
    derived = await CpuCollector(config).sample_over_interval_async(0)
    assert sorted(derived) == ["cpu", "cpu0", "cpu1"]
    assert derived["cpu"].idle == 0.0


@pytest.mark.asyncio
async def test_async_sampling_can_be_cancelled(config):
    task = asyncio.ensure_future(ProcessCollector(config).sample_over_interval_async(60))
    await asyncio.sleep(0)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
