"""Summary functions to be used with ``summarize``.

They build the aggregations computed by the
compute engine for each group::

    gapminder >> group_by("continent") >> summarize(avg_life=mean("lifeExp"), countries=n())

Functions whose name would shadow a Python builtin
have a trailing underscore: :func:`sum_`, :func:`min_`, :func:`max_`.
"""

from ..compute import (
    ColumnRef,
    CountAggregation,
    CountRowsAggregation,
    MaxAggregation,
    MeanAggregation,
    MinAggregation,
    SumAggregation,
)
from .dataframe import DataframeError


def _column(column: str | ColumnRef) -> str:
    if isinstance(column, str):
        return column
    if isinstance(column, ColumnRef):
        return column.name
    raise DataframeError(
        f"Summaries work on columns, got {column!r}. "
        "Compute the values with mutate() first and summarize the new column."
    )


def mean(column: str | ColumnRef) -> MeanAggregation:
    """Average of the values of a column."""
    return MeanAggregation(_column(column))


def sum_(column: str | ColumnRef) -> SumAggregation:
    """Total of the values of a column."""
    return SumAggregation(_column(column))


def min_(column: str | ColumnRef) -> MinAggregation:
    return MinAggregation(_column(column))


def max_(column: str | ColumnRef) -> MaxAggregation:
    return MaxAggregation(_column(column))


def count(column: str | ColumnRef) -> CountAggregation:
    """Number of values of a column that are not missing."""
    return CountAggregation(_column(column))


def n() -> CountRowsAggregation:
    """Number of rows."""
    return CountRowsAggregation()


__all__ = ("mean", "sum_", "min_", "max_", "count", "n")
