"""Memoryless frame-to-frame transformations such as filters and projections."""

from __future__ import annotations

from typing import Callable, Optional

import pandas as pd

Mapper = Callable[[pd.DataFrame], pd.DataFrame]


def _copy(df: pd.DataFrame) -> pd.DataFrame:
    return df.copy()


class MapAppender:
    """Applies a mapping function to every incoming data frame.

    Without a mapper the frame is passed through as a copy.
    """

    def __init__(self, mapper: Optional[Mapper] = None) -> None:
        self._mapper: Mapper = mapper if mapper is not None else _copy

    def map(self, df: pd.DataFrame) -> pd.DataFrame:
        """Transform a single frame."""
        return self._mapper(df)

    def process_msg(self, df: pd.DataFrame) -> Optional[pd.DataFrame]:
        """Handle one message's frame; always yields a result."""
        return self.map(df)

    def __call__(self, df: pd.DataFrame) -> pd.DataFrame:
        return self.map(df)