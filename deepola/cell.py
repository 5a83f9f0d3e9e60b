"""Forecasters for single-valued time series and estimators that fit them."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable, Optional, Protocol

from .score import Score
from .series import TimeValue


def _div(a: float, b: float) -> float:
    """Floating division with IEEE results for a zero divisor."""
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _log(x: float) -> float:
    if math.isnan(x) or x < 0:
        return math.nan
    if x == 0:
        return -math.inf
    return math.log(x)


def _pow(base: float, exponent: float) -> float:
    try:
        return base**exponent
    except OverflowError:
        return math.inf


class CellForecast(ABC):
    """Predicts a single value at a given time."""

    @abstractmethod
    def predict(self, time: float) -> float:
        """Predict the value at ``time``."""

    @abstractmethod
    def complexity(self) -> float:
        """Number of parameters of this forecaster."""


class CellEstimator(ABC):
    """Consumes time-value pairs one at a time and produces a forecaster."""

    @abstractmethod
    def consume(self, tv: TimeValue) -> None:
        """Take the next observation into account."""

    @abstractmethod
    def produce(self) -> CellForecast:
        """Return the current best forecaster."""

    def fit(self, series: Iterable[TimeValue]) -> CellForecast:
        """Consume every observation of ``series`` and return the forecaster."""
        for tv in series:
            self.consume(tv)
        return self.produce()


class _Averager(Protocol):
    def consume(self, tv: TimeValue) -> None: ...

    def average(self) -> float: ...


def least_square(
    complexity: float, forecast: CellForecast, series: Iterable[TimeValue]
) -> Score:
    """Score a forecaster assuming i.i.d. normally distributed errors."""
    samples = list(series)
    rss = 0.0
    for tv in samples:
        residual = tv.v - forecast.predict(tv.t)
        rss += residual * residual
    n = float(len(samples))
    log_likelihood = -n * _log(_div(rss, n)) / 2.0
    return Score(complexity, log_likelihood, n)


@dataclass(frozen=True)
class ConstantForecast(CellForecast):
    """Predicts the same value regardless of time."""

    mean: float

    def predict(self, time: float) -> float:
        return self.mean

    def complexity(self) -> float:
        return 1.0


@dataclass(frozen=True)
class AffineForecast(CellForecast):
    """Predicts ``slope * time + intercept``."""

    slope: float
    intercept: float

    def predict(self, time: float) -> float:
        return time * self.slope + self.intercept

    def complexity(self) -> float:
        return 2.0


@dataclass
class TailEstimator(CellEstimator):
    """Forecasts the most recently seen value."""

    last_value: float = 0.0

    def consume(self, tv: TimeValue) -> None:
        self.last_value = tv.v

    def produce(self) -> CellForecast:
        return ConstantForecast(self.average())

    def average(self) -> float:
        return self.last_value


@dataclass
class MeanEstimator(CellEstimator):
    """Forecasts the mean of every value seen."""

    total: float = 0.0
    total_weight: float = 0.0

    def consume(self, tv: TimeValue) -> None:
        self.total += tv.v
        self.total_weight += 1.0

    def produce(self) -> CellForecast:
        return ConstantForecast(self.average())

    def average(self) -> float:
        return _div(self.total, self.total_weight)


class SimpleExponentSmoothEstimator(CellEstimator):
    """Exponentially weighted average; a high ``alpha`` leans on past values.

    The time of the first observation is taken as the time unit.
    """

    def __init__(self, alpha: float) -> None:
        if not 0.0 < alpha < 1.0:
            raise ValueError(f"alpha must lie strictly between 0 and 1, got {alpha}")
        self.alpha = alpha
        self.freq: Optional[float] = None
        self.last_time = 0.0
        self.total = 0.0
        self.total_weight = 0.0

    def consume(self, tv: TimeValue) -> None:
        if self.freq is None:
            self.freq = tv.t
        p_delta = _div(tv.t - self.last_time, self.freq)
        alpha_delta = _pow(self.alpha, p_delta)
        self.last_time = tv.t
        self.total = self.total * alpha_delta + tv.v
        self.total_weight = self.total_weight * alpha_delta + 1.0

    def produce(self) -> CellForecast:
        return ConstantForecast(self.average())

    def average(self) -> float:
        return _div(self.total, self.total_weight)

    def __repr__(self) -> str:
        return (
            f"SimpleExponentSmoothEstimator(alpha={self.alpha}, freq={self.freq}, "
            f"last_time={self.last_time}, total={self.total}, "
            f"total_weight={self.total_weight})"
        )


@dataclass
class LeastSquareAffineEstimator(CellEstimator):
    """Ordinary least-squares line fitted from running moments."""

    var_t: float = 0.0
    cov_tv: float = 0.0
    mean_t: float = 0.0
    mean_v: float = 0.0
    n: float = 0.0

    def consume(self, tv: TimeValue) -> None:
        self.n += 1.0
        dt = tv.t - self.mean_t
        dv = tv.v - self.mean_v
        correction = (self.n - 1.0) / self.n
        self.var_t += (correction * dt * dt - self.var_t) / self.n
        self.cov_tv += (correction * dt * dv - self.cov_tv) / self.n
        self.mean_t += dt / self.n
        self.mean_v += dv / self.n

    def produce(self) -> CellForecast:
        if self.var_t == 0.0:
            return AffineForecast(0.0, self.mean_v)
        slope = self.cov_tv / self.var_t
        return AffineForecast(slope, self.mean_v - slope * self.mean_t)


class AverageTrendAffineEstimator(CellEstimator):
    """Extends the last value along an averaged trend of the observed slopes."""

    def __init__(self, trend_estimator: _Averager) -> None:
        self.trend_estimator = trend_estimator
        self.last_t = 0.0
        self.last_v = 0.0

    @classmethod
    def with_tail(cls) -> "AverageTrendAffineEstimator":
        return cls(TailEstimator())

    @classmethod
    def with_mean(cls) -> "AverageTrendAffineEstimator":
        return cls(MeanEstimator())

    @classmethod
    def with_ses(cls, alpha: float) -> "AverageTrendAffineEstimator":
        return cls(SimpleExponentSmoothEstimator(alpha))

    def consume(self, tv: TimeValue) -> None:
        dt = tv.t - self.last_t
        dv = tv.v - self.last_v
        self.trend_estimator.consume(TimeValue(tv.t, _div(dv, dt)))
        self.last_t = tv.t
        self.last_v = tv.v

    def produce(self) -> CellForecast:
        slope = self.trend_estimator.average()
        return AffineForecast(slope, self.last_v - slope * self.last_t)

    def __repr__(self) -> str:
        return (
            f"AverageTrendAffineEstimator(trend_estimator={self.trend_estimator!r}, "
            f"last_t={self.last_t}, last_v={self.last_v})"
        )


@dataclass
class _ScoredEstimator:
    estimator: CellEstimator
    rolling_err: SimpleExponentSmoothEstimator = field(
        default_factory=lambda: SimpleExponentSmoothEstimator(0.75)
    )

    def consume_eval(self, train_tv: TimeValue, eval_tv: TimeValue) -> None:
        self.estimator.consume(train_tv)
        residual = eval_tv.v - self.estimator.produce().predict(eval_tv.t)
        self.rolling_err.consume(TimeValue(train_tv.t, residual * residual))

    def produce_with_error(self) -> tuple[CellForecast, float]:
        return self.estimator.produce(), self.rolling_err.average()


class ForecastSelector(CellEstimator):
    """Picks among candidate estimators by their rolling one-step-ahead error."""

    def __init__(self) -> None:
        self._candidates: list[_ScoredEstimator] = []
        self._hot_sample: Optional[TimeValue] = None
        self._num_samples = 0.0

    def include(self, estimator: CellEstimator) -> None:
        """Add a candidate estimator."""
        self._candidates.append(_ScoredEstimator(estimator))

    @classmethod
    def with_default_candidates(cls) -> "ForecastSelector":
        """A selector over the standard set of constant and affine estimators."""
        selector = cls()
        selector.include(TailEstimator())
        selector.include(MeanEstimator())
        selector.include(SimpleExponentSmoothEstimator(0.75))
        selector.include(LeastSquareAffineEstimator())
        selector.include(AverageTrendAffineEstimator.with_tail())
        selector.include(AverageTrendAffineEstimator.with_mean())
        selector.include(AverageTrendAffineEstimator.with_ses(0.5))
        return selector

    def consume(self, tv: TimeValue) -> None:
        if self._hot_sample is not None:
            for candidate in self._candidates:
                candidate.consume_eval(self._hot_sample, tv)
            self._num_samples += 1.0
        self._hot_sample = tv

    def _default_forecast(self) -> CellForecast:
        if self._hot_sample is None:
            return ConstantForecast(0.0)
        return ConstantForecast(self._hot_sample.v)

    def produce(self) -> CellForecast:
        if self._num_samples == 0.0:
            return self._default_forecast()
        best: Optional[CellForecast] = None
        best_score = 0.0
        for candidate in self._candidates:
            forecast, error = candidate.produce_with_error()
            score = -error
            if best is None:
                best, best_score = forecast, score
                continue
            if math.isnan(score) or math.isnan(best_score):
                raise ValueError("cannot rank forecasters with an undefined error")
            # ties go to the later candidate
            if score >= best_score:
                best, best_score = forecast, score
        if best is None:
            raise ValueError("no estimator installed with this ForecastSelector")
        return best

    def __repr__(self) -> str:
        return (
            f"ForecastSelector(candidates={len(self._candidates)}, "
            f"samples={self._num_samples})"
        )