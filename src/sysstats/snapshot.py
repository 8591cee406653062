"""
Immutable keyed snapshots shared by every rate domain.

A snapshot maps an entity key (``cpu0``, ``eth0``, ``sda1``) to one sample and
carries the single timestamp at which the whole counter source was read.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, Mapping, TypeVar

from .exceptions import MissingEntityError

S = TypeVar("S")
D = TypeVar("D")


class Snapshot(Mapping[str, S]):
    """Read-only ``entity key -> sample`` mapping stamped with a capture time."""

    __slots__ = ("_samples", "_timestamp")

    def __init__(self, samples: Mapping[str, S], timestamp: float) -> None:
        self._samples = MappingProxyType(dict(samples))
        self._timestamp = float(timestamp)

    @property
    def timestamp(self) -> float:
        return self._timestamp

    def __getitem__(self, key: str) -> S:
        return self._samples[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._samples)

    def __len__(self) -> int:
        return len(self._samples)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Snapshot):
            return self._timestamp == other._timestamp and dict(self._samples) == dict(other._samples)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Snapshot(timestamp={self._timestamp!r}, keys={sorted(self._samples)!r})"


def derive_keyed(
    first: Snapshot[S],
    second: Snapshot[S],
    derive_one: Callable[[S, S], D],
    domain: str,
) -> Snapshot[D]:
    """Pair up the entities of two snapshots and derive each pair.

    Every key of ``second`` must exist in ``first``; entities that only show up
    in the second capture (a hot-plugged disk, a new interface) cannot be
    derived and fail the whole call.
    """
    derived: Dict[str, D] = {}
    for key, second_sample in second.items():
        try:
            first_sample = first[key]
        except KeyError:
            raise MissingEntityError(
                f"The key {key!r} doesn't exist in the first {domain} sample"
            ) from None
        derived[key] = derive_one(first_sample, second_sample)
    return Snapshot(derived, second.timestamp)


def per_second(delta: float, elapsed: float) -> float:
    # Zero elapsed only happens when both samples share a timestamp.
    if elapsed == 0:
        return 0.0
    return delta / elapsed


__all__ = ["Snapshot", "derive_keyed", "per_second"]
