"""Verbs to manipulate Dataframes.

Each verb is a function that takes a Dataframe as its
first argument and returns a new Dataframe, they are all
:func:`pipeable`, so they can be chained with ``>>``::

    gapminder >> filter(col("continent") == "Europe") >> select("country", "pop")

or called directly::

    select(gapminder, "country", "pop")

The verbs are:

* :func:`select` picks columns.
* :func:`filter` picks rows.
* :func:`mutate` adds columns computed from other columns.
* :func:`summarize` reduces many rows to a single summary row.
* :func:`group_by` makes :func:`summarize` compute one row per group.
* :func:`arrange` sorts rows.
* :func:`head` takes the first rows, :func:`dim` tells how big the data is.
"""

from typing import Any

from ..compute import Expression
from ..compute.aggregate import Aggregation
from .dataframe import Dataframe, GroupedDataframe
from .pipe import pipeable


@pipeable
def select(df: Dataframe, *columns: str) -> Dataframe:
    """Keep only the given columns."""
    return df.select(*columns)


@pipeable
def filter(df: Dataframe, predicate: Expression) -> Dataframe:
    """Keep only the rows where ``predicate`` is true."""
    return df.filter(predicate)


@pipeable
def mutate(df: Dataframe, **expressions: Any) -> Dataframe:
    """Add columns computed from the existing ones."""
    return df.mutate(**expressions)


@pipeable
def summarize(df: Dataframe, **aggregations: Aggregation) -> Dataframe:
    """Summarize the data, one row for each group when grouped."""
    return df.summarize(**aggregations)


summarise = summarize


@pipeable
def group_by(df: Dataframe, *columns: str) -> GroupedDataframe:
    return df.group_by(*columns)


@pipeable
def ungroup(df: Dataframe) -> Dataframe:
    return df.ungroup()


@pipeable
def arrange(df: Dataframe, *columns: str, descending: bool = False) -> Dataframe:
    """Sort the rows, ``-column`` sorts that column in descending order."""
    return df.arrange(*columns, descending=descending)


@pipeable
def head(df: Dataframe, n: int = 6) -> Dataframe:
    return df.head(n)


@pipeable
def dim(df: Dataframe) -> tuple[int, int]:
    """The number of rows and columns."""
    return df.dim()


@pipeable
def collect(df: Dataframe) -> Dataframe:
    return df.collect()
