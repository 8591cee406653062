from sysstats import CpuCollector, DiskCollector, NetworkCollector, SysStatsConfig
from sysstats.analysis import snapshot_frame

config = SysStatsConfig.default()

# One call: capture, wait two seconds, capture again, derive
cpu = CpuCollector(config).sample_over_interval(2)
for name, stats in sorted(cpu.items()):
    print(f"{name}: busy {stats.total:.2f}% user {stats.user:.2f}% iowait {stats.iowait:.2f}%")

# Own timing: keep the raw captures and derive whenever it suits the caller
net = NetworkCollector(config)
first = net.capture_raw()
config.sleep(1)
second = net.capture_raw()
print(snapshot_frame(net.derive(first, second))[["rx_bytes", "tx_bytes"]])

# Disk rates for a single device
disk = DiskCollector(config)
before = disk.capture_raw()
config.sleep(1)
after = disk.capture_raw()
if "sda" in after and "sda" in before:
    print(disk.derive_pair(before["sda"], after["sda"]))
