"""Online forecasting of streaming time series and incremental DataFrame operations."""

__version__ = "0.1.0"

__all__ = [
    "accumulator",
    "appender",
    "cell",
    "csvreader",
    "hash_join",
    "row",
    "score",
    "series",
    "util",
]