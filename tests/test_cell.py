import math
import random

import pytest

from deepola.cell import (
    AffineForecast,
    AverageTrendAffineEstimator,
    ConstantForecast,
    ForecastSelector,
    LeastSquareAffineEstimator,
    MeanEstimator,
    SimpleExponentSmoothEstimator,
    TailEstimator,
    least_square,
)
from deepola.series import Series, TimeValue


def assert_forecast(actual, expected):
    rng = random.Random(1234)
    for _ in range(100):
        t = rng.uniform(0.0, 1000.0)
        assert abs(actual.predict(t) - expected.predict(t)) < 1e-4, (
            f"actual forecaster: {actual!r}, expected: {expected!r}"
        )


def make_test_candidates():
    selector = ForecastSelector()
    selector.include(TailEstimator())
    selector.include(MeanEstimator())
    selector.include(SimpleExponentSmoothEstimator(0.5))
    selector.include(LeastSquareAffineEstimator())
    selector.include(AverageTrendAffineEstimator.with_tail())
    selector.include(AverageTrendAffineEstimator.with_mean())
    selector.include(AverageTrendAffineEstimator.with_ses(0.5))
    return selector


def test_constant_tail():
    series = Series([1.0, 2.0, 3.0, 5.0], [1.0, 2.0, -6.0, 27.0])
    est = TailEstimator()
    for tv in series:
        est.consume(tv)
        assert est.produce().predict(10.0) == tv.v
        assert est.average() == tv.v


def test_constant_mean():
    series = Series([1.0, 2.0, 3.0, 5.0], [1.0, 2.0, -6.0, 27.0])
    averages = [1.0, 1.5, -1.0, 6.0]
    est = MeanEstimator()
    for tv, expected in zip(series, averages):
        est.consume(tv)
        assert est.produce().predict(10.0) == expected
        assert est.average() == expected


def test_constant_ses():
    series = Series([1.0, 2.0, 3.0, 5.0, 10000.0], [1.0, 4.0, -5.75, 15.25, 100.0])
    averages = [1.0, 3.0, -2.0, 10.0, 100.0]
    est = SimpleExponentSmoothEstimator(0.5)
    for tv, expected in zip(series, averages):
        est.consume(tv)
        assert est.produce().predict(10000.0) == expected
        assert est.average() == expected


@pytest.mark.parametrize("alpha", [0.0, 1.0, 1.5, -0.2])
def test_ses_rejects_alpha_outside_unit_interval(alpha):
    with pytest.raises(ValueError):
        SimpleExponentSmoothEstimator(alpha)


def test_affine_ols_perfect():
    truth = AffineForecast(1.0, 0.0)
    times = [1.0, 2.0, 3.0, 5.0, 10.0, 12.0]
    series = Series(times, [truth.predict(t) for t in times])
    assert_forecast(LeastSquareAffineEstimator().fit(series), truth)


def test_affine_ols_homogeneous():
    series = Series([1.0, 2.0, 2.0, 3.0, 3.0, 5.0], [1.0, 2.5, 1.5, 2.5, 3.5, 5.0])
    assert_forecast(LeastSquareAffineEstimator().fit(series), AffineForecast(1.0, 0.0))


def test_affine_ols():
    series = Series(
        [1.0, 2.0, 2.0, 3.0, 3.0, 5.0], [11.0, 12.5, 11.5, 12.5, 13.5, 15.0]
    )
    assert_forecast(LeastSquareAffineEstimator().fit(series), AffineForecast(1.0, 10.0))


def test_affine_ols_single_time_predicts_mean():
    series = Series([4.0, 4.0], [1.0, 3.0])
    forecast = LeastSquareAffineEstimator().fit(series)
    assert forecast == AffineForecast(0.0, 2.0)


def test_affine_trend_tail():
    series = Series([1.0, 2.0, 3.0, 5.0], [1.0, 2.0, -6.0, 27.0])
    targets = [10.0, 10.0, -62.0, 109.5]
    est = AverageTrendAffineEstimator.with_tail()
    for tv, expected in zip(series, targets):
        est.consume(tv)
        assert est.produce().predict(10.0) == expected


def test_affine_trend_mean():
    series = Series([1.0, 2.0, 3.0, 5.0], [1.0, 1.5, 3.0, 7.0])
    targets = [10.0, 7.5, 10.0, 13.25]
    est = AverageTrendAffineEstimator.with_mean()
    for tv, expected in zip(series, targets):
        est.consume(tv)
        assert est.produce().predict(10.0) == expected


def test_affine_trend_ses():
    series = Series([1.0, 2.0, 3.0, 5.0], [1.0, 1.25, 1.40, 2.0])
    targets = [10.0, 5.25, 3.5, 3.5]
    est = AverageTrendAffineEstimator.with_ses(0.5)
    for tv, expected in zip(series, targets):
        est.consume(tv)
        actual = est.produce().predict(10.0)
        assert abs(actual - expected) < 1e-4, f"{actual} != {expected} at {est!r}"


def test_selector_affine_perfect():
    truth = AffineForecast(5.0, 10.0)
    times = [1.0, 2.0, 3.0, 5.0, 10.0, 12.0]
    series = Series(times, [truth.predict(t) for t in times])
    assert_forecast(make_test_candidates().fit(series), truth)


def test_selector_convergent_perfect():
    times = [float(t) for t in range(1, 102)]
    series = Series(times, [100.0 - 100.0 / t for t in times])
    forecast = make_test_candidates().fit(series)
    prediction = forecast.predict(1100.0)
    assert abs(prediction - 100.0) < 10.0, f"inaccurate {forecast!r}: {prediction}"


def test_selector_ln_perfect():
    times = [float(t) for t in range(1, 100)]
    series = Series(times, [math.log(t) for t in times])
    forecast = make_test_candidates().fit(series)
    prediction = forecast.predict(200.0)
    assert abs(prediction - math.log(200.0)) < 1.0, f"inaccurate {forecast!r}"


def test_default_candidates_follow_a_line():
    truth = AffineForecast(5.0, 10.0)
    times = [1.0, 2.0, 3.0, 5.0, 10.0, 12.0]
    series = Series(times, [truth.predict(t) for t in times])
    forecast = ForecastSelector.with_default_candidates().fit(series)
    assert_forecast(forecast, truth)


def test_selector_without_samples_uses_defaults():
    selector = make_test_candidates()
    assert selector.produce() == ConstantForecast(0.0)
    selector.consume(TimeValue(1.0, 42.0))
    assert selector.produce() == ConstantForecast(42.0)


def test_selector_without_candidates_raises_once_trained():
    selector = ForecastSelector()
    selector.consume(TimeValue(1.0, 1.0))
    selector.consume(TimeValue(2.0, 2.0))
    with pytest.raises(ValueError):
        selector.produce()


def test_forecast_complexities():
    assert ConstantForecast(3.0).complexity() == 1.0
    assert AffineForecast(1.0, 2.0).complexity() == 2.0


def test_least_square_perfect_fit_has_infinite_likelihood():
    truth = AffineForecast(1.0, 0.0)
    times = [1.0, 2.0, 3.0]
    series = Series(times, [truth.predict(t) for t in times])
    score = least_square(truth.complexity(), truth, series)
    assert score.complexity == 2.0
    assert score.num_samples == 3.0
    assert score.log_likelihood == math.inf


def test_least_square_unit_variance_has_zero_likelihood():
    series = Series([1.0, 2.0], [1.0, 3.0])
    score = least_square(1.0, ConstantForecast(2.0), series)
    assert score.log_likelihood == 0.0
    assert score.num_samples == 2.0


def test_least_square_prefers_better_fit():
    series = Series([1.0, 2.0, 3.0, 4.0], [1.1, 1.9, 3.2, 3.9])
    good = least_square(2.0, AffineForecast(1.0, 0.0), series)
    bad = least_square(1.0, ConstantForecast(0.0), series)
    assert good.log_likelihood > bad.log_likelihood