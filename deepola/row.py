"""Forecasting every value of a record with one estimator per column."""

from __future__ import annotations

from typing import Iterable, Sequence

from .cell import CellEstimator
from .series import TimeValue


class RowForecast:
    """Keeps one estimator per value column of a record and forecasts them together."""

    def __init__(self, estimators: Iterable[CellEstimator] = ()) -> None:
        self._estimators: list[CellEstimator] = list(estimators)

    def push_estimator(self, estimator: CellEstimator) -> None:
        """Add the estimator for the next value column."""
        self._estimators.append(estimator)

    def fit_transform(
        self, values: Sequence[float], time: float, final_time: float
    ) -> list[float]:
        """Feed ``values`` observed at ``time`` and forecast each at ``final_time``."""
        values = list(values)
        if len(values) != len(self._estimators):
            raise ValueError(
                f"expected {len(self._estimators)} values, got {len(values)}"
            )
        forecasts = []
        for estimator, value in zip(self._estimators, values):
            estimator.consume(TimeValue(time, value))
            forecasts.append(estimator.produce().predict(float(final_time)))
        return forecasts

    def __len__(self) -> int:
        return len(self._estimators)

    def __repr__(self) -> str:
        return f"RowForecast(estimators={self._estimators!r})"