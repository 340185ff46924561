"""Dataframe library built on top of the TidyGround compute engine.

A dataframe library handles data in the form of tables
(rows and columns): it loads data, transforms it and
computes summaries out of it. The most commonly used in Python
are ``pandas`` and ``polars``, and the ``dplyr`` verbs
made popular a *grammar* of small, composable table operations.

This package implements that grammar on top of the
:mod:`tidyground.compute` engine, so that each verb is
just a new node added to a query plan:

========================  =====================================
verb                      query plan node
========================  =====================================
``select``                :class:`~tidyground.compute.ProjectNode`
``filter``                :class:`~tidyground.compute.FilterNode`
``mutate``                :class:`~tidyground.compute.ProjectNode`
``summarize``             :class:`~tidyground.compute.AggregateNode`
``arrange``               :class:`~tidyground.compute.SortNode`
``head``                  :class:`~tidyground.compute.PaginateNode`
========================  =====================================

>>> import pyarrow as pa
>>> from tidyground.dataframe import Dataframe, col, filter, select, dim
>>> data = Dataframe(pa.table({
...     "country": ["Italy", "Italy", "Japan"],
...     "year": [2002, 2007, 2007],
... }))
>>> data >> filter(col("year") == 2007) >> select("country") >> dim()
(2, 1)
"""

from ..compute import col, lit
from .dataframe import Dataframe, DataframeError, GroupedDataframe
from .pipe import Pipeable, pipeable
from .summaries import count, max_, mean, min_, n, sum_
from .verbs import (
    arrange,
    collect,
    dim,
    filter,
    group_by,
    head,
    mutate,
    select,
    summarise,
    summarize,
    ungroup,
)

__all__ = (
    "Dataframe",
    "GroupedDataframe",
    "DataframeError",
    "Pipeable",
    "pipeable",
    "col",
    "lit",
    "select",
    "filter",
    "mutate",
    "summarize",
    "summarise",
    "group_by",
    "ungroup",
    "arrange",
    "head",
    "dim",
    "collect",
    "mean",
    "sum_",
    "min_",
    "max_",
    "count",
    "n",
)
