"""Query plan nodes that implement projection of columns.

Projecting means choosing which columns are part
of the result and computing new ones out of expressions,
like the ``SELECT`` clause of SQL or the ``select`` and
``mutate`` verbs of a Dataframe.
"""

from typing import Iterator

import pyarrow as pa

from .base import QueryPlanNode
from .expressions import Expression


class ProjectNode(QueryPlanNode):
    """Select columns and compute new ones out of expressions.

    >>> import pyarrow as pa
    >>> from tidyground.compute import col, PyArrowTableDataSource
    >>> data = pa.record_batch({"pop": [10, 20], "gdpPercap": [1.5, 2.0]})
    >>> next(ProjectNode([], {"gdp": col("pop") * col("gdpPercap")},
    ...                  PyArrowTableDataSource(data)).batches())
    pyarrow.RecordBatch
    gdp: double
    ----
    gdp: [15,40]

    Projected columns that have the same name of an existing
    column replace it in place, otherwise they are appended.
    """

    def __init__(
        self,
        select: list[str] | None,
        project: dict[str, Expression] | None,
        child: QueryPlanNode,
    ) -> None:
        """
        :param select: The list of column names to keep.
                       ``None`` means keep all columns.
                       ``[]`` means keep only the projected columns.
        :param project: The dict {name: Expression} of columns to compute,
                        each expression can refer to those computed before it.
        :param child: The node emitting the data to be projected.
        """
        self.select = select
        self.project = project or {}
        self.child = child

        if self.select is None:
            self.restrict_columns = None
        else:
            self.restrict_columns = list(self.select)
            for name in self.project:
                if name not in self.restrict_columns:
                    self.restrict_columns.append(name)

    def __str__(self) -> str:
        return f"ProjectNode(select={self.select}, project={self.project}, child={self.child})"

    def batches(self) -> Iterator[pa.RecordBatch]:
        """Compute the projections on each batch of the child, then select."""
        for batch in self.child.batches():
            for name, expr in self.project.items():
                values = expr.apply(batch)
                if isinstance(values, pa.Scalar):
                    values = pa.repeat(values, batch.num_rows)
                elif isinstance(values, pa.ChunkedArray):
                    values = values.combine_chunks()

                index = batch.schema.get_field_index(name)
                if index == -1:
                    batch = batch.append_column(name, values)
                else:
                    batch = batch.set_column(index, name, values)

            if self.restrict_columns is not None:
                batch = batch.select(self.restrict_columns)

            yield batch
