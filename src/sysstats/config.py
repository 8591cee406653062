import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Tuple, Union


@dataclass
class SysStatsConfig:
    """Where counters are read from and how time is measured."""

    proc_root: Path = Path("/proc")
    sector_size: int = 512
    cpu_precision: int = 2
    clock: Callable[[], float] = field(default=time.time, repr=False)
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)
    df_command: Tuple[str, ...] = ("df", "-kTP")

    def __post_init__(self):
        self.proc_root = Path(self.proc_root)
        if self.sector_size <= 0:
            raise ValueError("sector_size must be positive")
        if self.cpu_precision < 0:
            raise ValueError("cpu_precision must be >= 0")
        if not self.df_command:
            raise ValueError("df_command must name an executable")

    @classmethod
    def default(cls) -> "SysStatsConfig":
        """Read the live /proc of the running host."""
        return cls()

    @classmethod
    def for_root(cls, proc_root: Union[str, Path]) -> "SysStatsConfig":
        """Read a procfs mounted elsewhere, e.g. the host's /proc bind-mounted in a container."""
        return cls(proc_root=Path(proc_root))

    def proc_path(self, *parts: str) -> Path:
        return self.proc_root.joinpath(*parts)

    def with_proc_root(self, proc_root: Union[str, Path]) -> "SysStatsConfig":
        """Override the procfs root.

        Args:
            proc_root: Directory laid out like /proc

        Returns:
            Self for method chaining
        """
        self.proc_root = Path(proc_root)
        return self

    def with_clock(self, clock: Callable[[], float]) -> "SysStatsConfig":
        """Override the capture clock.

        Args:
            clock: Callable returning Unix time in seconds

        Returns:
            Self for method chaining
        """
        self.clock = clock
        return self

    def with_sleep(self, sleep: Callable[[float], None]) -> "SysStatsConfig":
        """Override the blocking wait used between two captures.

        Args:
            sleep: Callable taking a number of seconds

        Returns:
            Self for method chaining
        """
        self.sleep = sleep
        return self
