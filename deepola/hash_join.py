"""Inner hash join of a streamed left side against a collected right side."""

from __future__ import annotations

from typing import Sequence

import pandas as pd


class HashJoin:
    """Collects right-hand frames, then joins each left-hand frame against them.

    Only the left key columns are kept in the result; other columns that
    appear on both sides get a ``_right`` suffix on the right-hand copy.
    """

    def __init__(self, left_on: Sequence[str], right_on: Sequence[str]) -> None:
        self.left_on = list(left_on)
        self.right_on = list(right_on)
        if len(self.left_on) != len(self.right_on):
            raise ValueError(
                f"join keys differ in number: {len(self.left_on)} != {len(self.right_on)}"
            )
        self.right_df: pd.DataFrame = pd.DataFrame()

    def add_right(self, df: pd.DataFrame) -> None:
        """Append a right-hand partition to the collected right side."""
        if self.right_df.columns.empty:
            self.right_df = df.reset_index(drop=True)
            return
        if list(self.right_df.columns) != list(df.columns):
            raise ValueError(
                "cannot stack frames with different columns: "
                f"{list(self.right_df.columns)} and {list(df.columns)}"
            )
        self.right_df = pd.concat([self.right_df, df], ignore_index=True)

    def process(self, left_df: pd.DataFrame) -> pd.DataFrame:
        """Inner-join ``left_df`` with everything collected on the right."""
        missing = [c for c in self.right_on if c not in self.right_df.columns]
        if missing:
            raise KeyError(f"right join columns not found: {missing}")
        missing = [c for c in self.left_on if c not in left_df.columns]
        if missing:
            raise KeyError(f"left join columns not found: {missing}")
        right = self.right_df.rename(columns=dict(zip(self.right_on, self.left_on)))
        return pd.merge(
            left_df,
            right,
            how="inner",
            on=self.left_on,
            suffixes=("", "_right"),
        )