# deepola

Building blocks for online, incremental analytics. The package has two
parts. The first is a set of per-cell time-series forecasters that refine
their estimate as each new observation arrives. The second is a set of small
`pandas` DataFrame operators that aggregate, transform, read and join data
one partition at a time.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Forecasting

### Series

`deepola.series.Series(times, values)` pairs two equally long sequences. If
their lengths differ it raises `ValueError`. Iterating over a series yields
frozen `TimeValue(t, v)` items, and `len()` gives the number of pairs.

### Estimators and forecasters

An estimator in `deepola.cell` takes observations one at a time through
`consume(tv)`. `produce()` returns its current forecaster.
`fit(series)` consumes every item of an iterable of `TimeValue` and then
returns `produce()`. A forecaster has `predict(time)` and `complexity()`.

```python
from deepola.series import Series
from deepola.cell import LeastSquareAffineEstimator, ForecastSelector

series = Series([1.0, 2.0, 3.0, 5.0], [11.0, 12.0, 13.0, 15.0])
forecast = LeastSquareAffineEstimator().fit(series)
forecast.predict(10.0)  # close to 20.0

selector = ForecastSelector.with_default_candidates()
best = selector.fit(series)
best.predict(10.0)
```

Forecasters:

- `ConstantForecast(mean)` predicts `mean` at every time. Its complexity is 1.
- `AffineForecast(slope, intercept)` predicts `slope * time + intercept`. Its
  complexity is 2.

Estimators:

- `TailEstimator` forecasts the last value it has seen.
- `MeanEstimator` forecasts the mean of every value it has seen.
- `SimpleExponentSmoothEstimator(alpha)` forecasts an exponentially weighted
  average. `alpha` must lie strictly between 0 and 1, otherwise it raises
  `ValueError`. The time of the first observation is used as the time unit,
  and a higher `alpha` gives more weight to past values.
- `LeastSquareAffineEstimator` fits an ordinary least-squares line from
  running moments. While all observed times are equal, it falls back to a flat
  line at the mean value.
- `AverageTrendAffineEstimator(trend_estimator)` continues from the last
  point along an averaged slope. The slopes between consecutive points are fed
  to `trend_estimator`. `with_tail()`, `with_mean()` and `with_ses(alpha)`
  build it over a tail, mean or exponential-smoothing average.
- `ForecastSelector` holds candidate estimators added with `include`. It
  trains each candidate on the previous observation and scores it by the
  squared error on the next observation, smoothed with exponential smoothing
  at alpha 0.75. `produce()` returns the forecast of the candidate with the
  lowest smoothed error, and a tie goes to the candidate included later.
  - Until two observations have been seen, `produce()` returns a constant
    forecast of the last value, or of 0.0 if nothing has been seen.
  - It raises `ValueError` if no candidate is installed or if an error is
    undefined (NaN).
  - `with_default_candidates()` sets it up with every estimator above.

### Scores

`deepola.score.Score(complexity, log_likelihood, num_samples)` provides
`aic()`, `aicc()` and `bic()`.

`deepola.cell.least_square(complexity, forecast, series)` builds a `Score`
from the residual sum of squares of `forecast` over `series`, assuming
normally distributed errors.

### Rows

`deepola.row.RowForecast` keeps one estimator per value column.

- `push_estimator(estimator)` adds the estimator for the next column.
- `fit_transform(values, time, final_time)` feeds each estimator its value at
  `time` and returns what each one now predicts for `final_time`. It raises
  `ValueError` if the number of values does not match the number of
  estimators.

## DataFrame operators

All of these work on `pandas.DataFrame` objects.

### MapAppender

`deepola.appender.MapAppender(mapper=None)` applies a stateless function to
each frame, for example a row filter, a column projection or a new derived
column. Call it with `map(df)`, with `process_msg(df)`, or by calling the
object itself. Without a mapper it returns a copy of the frame.

### SumAccumulator

`deepola.accumulator.SumAccumulator(group_key=None, aggregates=None)` keeps a
running result across every frame passed to `accumulate(df)`.
`process_msg(df)` does the same. Both return the new result, which is also
kept in the `accumulated` attribute.

- Without a group key, each frame is reduced to one row of column sums, and
  these are summed over time.
- With a group key, sums are kept per group and the value columns are named
  `<column>_sum`.
- If `aggregates` is given as `(column, [agg, ...])` pairs, each incoming
  frame is first aggregated into `<column>_<agg>` columns. These are then
  summed per group over time.

```python
import pandas as pd
from deepola.accumulator import SumAccumulator

acc = SumAccumulator()
acc.accumulate(pd.DataFrame({"temp": [20, 10], "rain": [0.2, 0.1]}))
acc.accumulate(pd.DataFrame({"temp": [7], "rain": [0.3]}))
# one row: temp 37, rain about 0.6
```

### CSVReader

`deepola.csvreader.CSVReader(delimiter=",", has_headers=False, column_names=None, projected_cols=None)`
reads CSV files with a single-character delimiter.

- `read(filename)` returns one frame.
- `read_all(filenames)` yields one frame per file, in order.
- Without headers, columns are named `column_1`, `column_2`, and so on.
- `projected_cols` keeps only the columns at the given positions.
- `column_names` renames the resulting columns. It raises `ValueError` if the
  count does not match.

### HashJoin

`deepola.hash_join.HashJoin(left_on, right_on)` performs an inner join.

- `add_right(df)` collects right-hand partitions, which must share the same
  columns.
- `process(left_df)` inner-joins a left frame against everything collected so
  far.
- The result keeps the left key column names. Other columns that appear on
  both sides get a `_right` suffix on the right-hand copy.

### truncate_df

`deepola.util.truncate_df(df, column, precision)` rounds a floating-point
column in place to `precision` decimal places, with halves rounded away from
zero. Missing values stay missing.

- It raises `KeyError` for an unknown column.
- It raises `TypeError` for a column that is not floating point.

## What this package does not do

The operators and estimators are plain objects that you call directly.
There is no execution graph, message channel or thread scheduler for wiring
them into a running pipeline. There is no ready-made operator that forecasts
whole tables keyed by columns: `RowForecast` covers a single record's values.
There is no command-line program.