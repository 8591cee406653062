"""Public analysis helpers exposed by sysstats."""

from .frames import (
    plot_rates,
    series_frame,
    snapshot_frame,
    summarize_rates,
)

__all__ = [
    "plot_rates",
    "series_frame",
    "snapshot_frame",
    "summarize_rates",
]
