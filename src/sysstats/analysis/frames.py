"""Tabular helpers for inspecting derived statistics.

These utilities take the snapshots returned by the collectors and turn them
into pandas DataFrames, summarise a rate column across a series of reports,
and plot how a rate evolves per entity over time.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import numpy as np

from sysstats.snapshot import Snapshot

try:
    import pandas as pd
except ModuleNotFoundError:  # pragma: no cover - exercised only when pandas missing
    pd = None  # type: ignore

ENTITY_COLUMN = "entity"

Derived = Union[Snapshot, Any]


def _require_pandas(caller: str) -> None:
    if pd is None:  # pragma: no cover - pandas absent only in constrained envs
        raise ImportError(
            f"pandas is required for {caller}(). "
            "Install the 'analysis' extra: pip install sysstats[analysis]"
        )


def _rows(derived: Derived) -> List[Dict[str, Any]]:
    if isinstance(derived, Mapping):
        rows = []
        for key in sorted(derived):
            row = dataclasses.asdict(derived[key])
            row.pop("name", None)
            row[ENTITY_COLUMN] = key
            rows.append(row)
        return rows
    if dataclasses.is_dataclass(derived):
        # process stats describe the whole system
        row = dataclasses.asdict(derived)
        row[ENTITY_COLUMN] = "system"
        return [row]
    raise TypeError(f"Unsupported derived value {type(derived).__name__}")


def snapshot_frame(derived: Derived) -> "pd.DataFrame":
    """One row per entity of a derived snapshot, indexed by entity key."""
    _require_pandas("snapshot_frame")
    rows = _rows(derived)
    if not rows:
        return pd.DataFrame(columns=[ENTITY_COLUMN]).set_index(ENTITY_COLUMN)
    return pd.DataFrame(rows).set_index(ENTITY_COLUMN)


def series_frame(reports: Iterable[Derived], timestamps: Optional[Iterable[float]] = None) -> "pd.DataFrame":
    """Long-format frame (``timestamp``, ``entity``, rates...) over several reports.

    Snapshots carry their own timestamp; for process stats pass ``timestamps``
    alongside the reports.
    """
    _require_pandas("series_frame")
    reports = list(reports)
    if timestamps is None:
        stamps = [getattr(report, "timestamp", float(idx)) for idx, report in enumerate(reports)]
    else:
        stamps = list(timestamps)
        if len(stamps) != len(reports):
            raise ValueError("timestamps and reports must have the same length")

    rows: List[Dict[str, Any]] = []
    for stamp, report in zip(stamps, reports):
        for row in _rows(report):
            row["timestamp"] = stamp
            rows.append(row)
    if not rows:
        return pd.DataFrame(columns=["timestamp", ENTITY_COLUMN])
    frame = pd.DataFrame(rows)
    return frame.sort_values(["timestamp", ENTITY_COLUMN]).reset_index(drop=True)


def summarize_rates(frame: "pd.DataFrame", column: str) -> "pd.DataFrame":
    """Per-entity mean, p50/p95/p99 and max of one rate column."""
    _require_pandas("summarize_rates")
    if column not in frame.columns:
        raise ValueError(f"Column '{column}' not present in frame.")
    if ENTITY_COLUMN in frame.columns:
        groups = frame.groupby(ENTITY_COLUMN)[column]
    else:
        groups = frame.groupby(level=0)[column]

    summary = {}
    for entity, values in groups:
        data = values.to_numpy(dtype=float)
        p50, p95, p99 = np.percentile(data, [50, 95, 99])
        summary[entity] = {
            "mean": float(np.mean(data)),
            "p50": float(p50),
            "p95": float(p95),
            "p99": float(p99),
            "max": float(np.max(data)),
        }
    return pd.DataFrame.from_dict(summary, orient="index")


def plot_rates(frame: "pd.DataFrame", column: str, ax=None):
    """Plot one rate column over time, one line per entity."""
    _require_pandas("plot_rates")
    if column not in frame.columns:
        raise ValueError(f"Column '{column}' not present in frame.")
    if "timestamp" not in frame.columns:
        raise ValueError("plot_rates expects a frame built by series_frame().")

    import matplotlib.pyplot as plt

    if ax is None:
        _, ax = plt.subplots(figsize=(10, 4))

    for entity, group in frame.groupby(ENTITY_COLUMN):
        ax.plot(group["timestamp"], group[column], marker="o", linewidth=1.5, label=str(entity))
    ax.set_xlabel("Timestamp")
    ax.set_ylabel(column.replace("_", " ").title())
    ax.set_title(f"{column.replace('_', ' ').title()} per Entity")
    ax.grid(True, linestyle="--", alpha=0.3)
    ax.legend(loc="best")
    return ax
