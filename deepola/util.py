"""Helpers for working with data frames."""

from __future__ import annotations

import math

import pandas as pd
from pandas.api.types import is_float_dtype


def _round_half_away(x: float) -> float:
    if not math.isfinite(x):
        return x
    return math.copysign(math.floor(abs(x) + 0.5), x)


def truncate_df(df: pd.DataFrame, column: str, precision: int) -> None:
    """Round a floating-point column of ``df`` in place to ``precision`` decimals.

    A precision of 3 turns 1.0011 into 1.001. Missing values stay missing.
    """
    if column not in df.columns:
        raise KeyError(column)
    series = df[column]
    if not is_float_dtype(series):
        raise TypeError(f"column {column!r} is not floating point: {series.dtype}")
    factor = 10.0 ** precision

    def _truncate(value: float) -> float:
        if pd.isna(value):
            return value
        return _round_half_away(value * factor) / factor

    df[column] = series.map(_truncate).astype(series.dtype)