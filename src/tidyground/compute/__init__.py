"""The TidyGround Compute Engine

The compute engine is what actually runs the analyses
requested through the Dataframe verbs. It defines
the query plan nodes and the expressions they evaluate.

The engine is built on Apache Arrow: every node consumes
:class:`pyarrow.RecordBatch` objects from its children and
emits new record batches, forming a pipeline::

    (RecordBatch)-->Node1--(RecordBatch)-->Node2--(RecordBatch)-->...

Each node knows how to execute itself, so to understand
what a step of the plan does it's enough to read its ``batches()``
method.

A query plan always starts from one ``DataSource`` node,
the leaf that provides the data:

>>> import pyarrow as pa
>>> from tidyground.compute import col, PyArrowTableDataSource, FilterNode
>>> data = pa.table({
...    "country": pa.array(["Afghanistan", "Italy", "Japan", "Zambia"]),
...    "lifeExp": pa.array([43.828, 80.546, 82.603, 42.384])
... })
>>> query = FilterNode(col("lifeExp") >= 80, child=PyArrowTableDataSource(data))
>>> for batch in query.batches():
...     print(batch)
pyarrow.RecordBatch
country: string
lifeExp: double
----
country: ["Italy","Japan"]
lifeExp: [80.546,82.603]
"""

from .aggregate import (
    AggregateNode,
    CountAggregation,
    CountRowsAggregation,
    MaxAggregation,
    MeanAggregation,
    MinAggregation,
    SumAggregation,
)
from .base import ColumnRef, Expression, Literal, QueryPlanNode, col, lit
from .datasources import CSVDataSource, DataSourceNode, PyArrowTableDataSource
from .expressions import FunctionCallExpression
from .filtering import FilterNode
from .pagination import PaginateNode
from .selection import ProjectNode
from .sorting import SortNode

__all__ = (
    "QueryPlanNode",
    "Expression",
    "DataSourceNode",
    "CSVDataSource",
    "PyArrowTableDataSource",
    "FilterNode",
    "FunctionCallExpression",
    "col",
    "lit",
    "ColumnRef",
    "Literal",
    "PaginateNode",
    "SortNode",
    "ProjectNode",
    "AggregateNode",
    "CountAggregation",
    "CountRowsAggregation",
    "MaxAggregation",
    "MeanAggregation",
    "MinAggregation",
    "SumAggregation",
)
