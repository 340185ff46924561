"""Query plan nodes that keep only some of the rows.

This is what the ``filter`` verb of a Dataframe
and the ``WHERE`` clause of SQL are about.
"""

from .base import QueryPlanNode
from .expressions import Expression


class FilterNode(QueryPlanNode):
    """Keep the rows for which a predicate is true.

    The predicate is applied to each batch and returns
    a boolean mask, rows where the mask is ``false``
    or ``null`` are discarded.

    >>> import pyarrow as pa
    >>> from tidyground.compute import col, PyArrowTableDataSource
    >>> data = pa.record_batch({"year": [1952, 1957, 2002, 2007]})
    >>> next(FilterNode(col("year") > 2000, PyArrowTableDataSource(data)).batches())
    pyarrow.RecordBatch
    year: int64
    ----
    year: [2002,2007]
    """

    def __init__(self, expression: Expression, child: QueryPlanNode) -> None:
        """
        :param expression: The predicate expression to filter with.
        :param child: The node emitting the data to be filtered.
        """
        self.expression = expression
        self.child = child

    def __str__(self) -> str:
        return f"FilterNode(filter={self.expression}, child={self.child})"

    def batches(self) -> QueryPlanNode.RecordBatchesGenerator:
        """Compute the mask for each batch of the child and apply it."""
        for batch in self.child.batches():
            mask = self.expression.apply(batch)
            yield batch.filter(mask)
