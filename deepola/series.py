"""Time-stamped values and the series that hold them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator


@dataclass(frozen=True)
class TimeValue:
    """A single observation: value ``v`` seen at time ``t``."""

    t: float
    v: float


class Series:
    """Parallel sequences of times and values, iterated as ``TimeValue`` pairs."""

    __slots__ = ("times", "values")

    def __init__(self, times: Iterable[float], values: Iterable[float]) -> None:
        times = tuple(times)
        values = tuple(values)
        if len(times) != len(values):
            raise ValueError(
                f"times and values differ in length: {len(times)} != {len(values)}"
            )
        self.times = times
        self.values = values

    def __iter__(self) -> Iterator[TimeValue]:
        return (TimeValue(t, v) for t, v in zip(self.times, self.values))

    def __len__(self) -> int:
        return len(self.times)

    def __repr__(self) -> str:
        return f"Series(times={list(self.times)!r}, values={list(self.values)!r})"