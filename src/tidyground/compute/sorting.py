"""Query plan nodes that sort data.

Sorting is needed to rank rows, like finding the countries
with the highest life expectancy, and to present
results in a predictable order.
"""

from typing import Iterator

import pyarrow as pa

from .base import QueryPlanNode


class SortNode(QueryPlanNode):
    """Sort data in-memory based on one or more columns.

    Columns are compared in the order they are provided,
    each one with its own direction.

    >>> import pyarrow as pa
    >>> from tidyground.compute import PyArrowTableDataSource
    >>> data = pa.record_batch({"lifeExp": [43.8, 76.4, 72.3]})
    >>> sort = SortNode(["lifeExp"], [True], PyArrowTableDataSource(data))
    >>> next(sort.batches())
    pyarrow.RecordBatch
    lifeExp: double
    ----
    lifeExp: [76.4,72.3,43.8]
    """

    def __init__(
        self, keys: list[str], descending: list[bool], child: QueryPlanNode
    ) -> None:
        """
        :param keys: The columns to sort by in the order they should be compared.
        :param descending: If each column should be sorted in a descending order.
        :param child: The node emitting the data to be sorted.
        """
        if len(keys) != len(descending):
            raise ValueError("Keys and descending must have the same length")

        self.sorting = list(
            zip(keys, ("descending" if desc else "ascending" for desc in descending))
        )
        self.child = child

    def __str__(self) -> str:
        return f"SortNode(sorting={self.sorting}, {self.child})"

    def batches(self) -> Iterator[pa.RecordBatch]:
        """Accumulate all batches of the child and emit them sorted.

        All the data has to be in memory at once,
        as rows of the last batch might have to come first.
        """
        batches = list(self.child.batches())
        if not batches:
            return
        if len(batches) == 1:
            yield batches[0].sort_by(self.sorting)
            return

        # Going through Tables is zero-copy, and Tables
        # can be concatenated without copying the chunks.
        table = pa.Table.from_batches(batches).sort_by(self.sorting)
        yield from table.combine_chunks().to_batches()
