"""Running aggregation of a stream of data frames."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

import pandas as pd

# Aggregation names whose pandas spelling differs.
_AGG_ALIASES = {"n_unique": "nunique"}


class SumAccumulator:
    """Keeps up-to-date sums over every frame seen so far.

    Without a group key each frame is reduced to one row of column sums.
    With a group key the sums are kept per group; the first aggregation
    names the result columns ``<column>_sum``, or ``<column>_<agg>`` for
    every pair given in ``aggregates``.
    """

    def __init__(
        self,
        group_key: Optional[Sequence[str]] = None,
        aggregates: Optional[Iterable[tuple[str, Sequence[str]]]] = None,
    ) -> None:
        self.group_key: list[str] = list(group_key) if group_key else []
        self.aggregates: list[tuple[str, list[str]]] = [
            (column, list(aggs)) for column, aggs in (aggregates or [])
        ]
        self.accumulated: pd.DataFrame = pd.DataFrame()

    def _sum_without_groups(self, df: pd.DataFrame) -> pd.DataFrame:
        return pd.DataFrame({column: [df[column].sum()] for column in df.columns})

    def _aggregate(self, df: pd.DataFrame, accumulator: bool) -> pd.DataFrame:
        if not self.group_key:
            return self._sum_without_groups(df)
        missing = [key for key in self.group_key if key not in df.columns]
        if missing:
            raise KeyError(f"group key columns not found: {missing}")
        grouped = df.groupby(self.group_key, sort=False, dropna=False, as_index=False)
        value_columns = [c for c in df.columns if c not in self.group_key]

        if accumulator or not self.aggregates:
            summed = grouped[value_columns].sum() if value_columns else grouped.size()
            summed = summed[self.group_key + value_columns]
            if accumulator:
                summed.columns = list(df.columns)
            else:
                summed.columns = self.group_key + [f"{c}_sum" for c in value_columns]
            return summed.reset_index(drop=True)

        named = {}
        for column, aggs in self.aggregates:
            if column not in df.columns:
                raise KeyError(f"aggregated column not found: {column!r}")
            for agg in aggs:
                named[f"{column}_{agg}"] = (column, _AGG_ALIASES.get(agg, agg))
        return grouped.agg(**named).reset_index(drop=True)

    def _stack(self, df: pd.DataFrame) -> pd.DataFrame:
        if self.accumulated.columns.empty:
            return df
        if list(self.accumulated.columns) != list(df.columns):
            raise ValueError(
                "cannot stack frames with different columns: "
                f"{list(self.accumulated.columns)} and {list(df.columns)}"
            )
        return pd.concat([self.accumulated, df], ignore_index=True)

    def accumulate(self, df: pd.DataFrame) -> pd.DataFrame:
        """Fold ``df`` into the running result and return the new result."""
        df_agg = self._aggregate(df, accumulator=False)
        stacked = self._stack(df_agg)
        result = self._aggregate(stacked, accumulator=True)
        self.accumulated = result.copy()
        return result

    def process_msg(self, df: pd.DataFrame) -> Optional[pd.DataFrame]:
        """Handle one message's frame; always yields the running result."""
        return self.accumulate(df)