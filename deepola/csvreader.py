"""Reading CSV files into data frames."""

from __future__ import annotations

import os
from typing import Iterable, Iterator, Optional, Sequence, Union

import pandas as pd

PathLike = Union[str, "os.PathLike[str]"]


class CSVReader:
    """Reads CSV files with a fixed delimiter, header setting and projection."""

    def __init__(
        self,
        delimiter: str = ",",
        has_headers: bool = False,
        column_names: Optional[Sequence[str]] = None,
        projected_cols: Optional[Sequence[int]] = None,
    ) -> None:
        if len(delimiter) != 1:
            raise ValueError(f"delimiter must be a single character, got {delimiter!r}")
        self.delimiter = delimiter
        self.has_headers = has_headers
        self.column_names = list(column_names) if column_names is not None else None
        self.projected_cols = (
            list(projected_cols) if projected_cols is not None else None
        )

    def read(self, filename: PathLike) -> pd.DataFrame:
        """Read one file into a frame."""
        df = pd.read_csv(
            filename,
            sep=self.delimiter,
            header=0 if self.has_headers else None,
            usecols=self.projected_cols,
        )
        if not self.has_headers:
            df.columns = [f"column_{int(index) + 1}" for index in df.columns]
        if self.column_names is not None:
            if len(self.column_names) != df.shape[1]:
                raise ValueError(
                    f"{len(self.column_names)} column names given "
                    f"for {df.shape[1]} columns"
                )
            df.columns = self.column_names
        return df

    def read_all(self, filenames: Iterable[PathLike]) -> Iterator[pd.DataFrame]:
        """Yield one frame for each file name, in order."""
        for filename in filenames:
            yield self.read(filename)