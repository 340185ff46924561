"""Support taking only a slice of the rows of a query plan.

This is what ``head()`` on a Dataframe relies on
to show the first few rows without reading everything.
"""

from typing import Iterator

import pyarrow as pa

from .base import QueryPlanNode


class PaginateNode(QueryPlanNode):
    """Emit only ``length`` rows starting at ``offset``.

    With ``offset=1`` and ``length=2`` only the
    second and third row are emitted::

        0: skipped, before offset
        1: emitted
        2: emitted
        3: never read, length was already reached

    Once enough rows were emitted the child is closed,
    so that a large CSV file doesn't have to be read
    entirely just to look at its first rows.

    >>> import pyarrow as pa
    >>> from tidyground.compute import PyArrowTableDataSource
    >>> data = pa.record_batch({"year": [1952, 1957, 1962, 1967]})
    >>> next(PaginateNode(1, 2, PyArrowTableDataSource(data)).batches())
    pyarrow.RecordBatch
    year: int64
    ----
    year: [1957,1962]
    """

    def __init__(self, offset: int, length: int, child: QueryPlanNode) -> None:
        """
        :param offset: From which row to take data, first row is 0.
        :param length: How many rows to take after offset was reached.
        :param child: the node from which to consume the rows.
        """
        if offset < 0 or length < 0:
            raise ValueError("offset and length must not be negative")
        self.offset = offset
        self.length = length
        self.end = offset + length
        self.child = child

    def __str__(self) -> str:
        return f"PaginateNode({self.offset}:{self.end}, {self.child})"

    def batches(self) -> Iterator[pa.RecordBatch]:
        """Skip rows until offset, then emit rows until end is reached."""
        consumed_rows = 0
        emitted = False
        batch = None

        batches_generator = self.child.batches()
        try:
            for batch in batches_generator:
                batch_start = consumed_rows
                consumed_rows += batch.num_rows
                if consumed_rows <= self.offset:
                    continue

                start_in_batch = max(0, self.offset - batch_start)
                rows_in_this_batch = min(
                    batch.num_rows - start_in_batch, self.end - batch_start - start_in_batch
                )
                if rows_in_this_batch > 0 or not emitted:
                    yield batch.slice(start_in_batch, max(rows_in_this_batch, 0))
                    emitted = True
                if consumed_rows >= self.end:
                    break
        finally:
            batches_generator.close()

        if not emitted and batch is not None:
            # The offset is past the end of the data, emit
            # an empty batch so that the schema is not lost.
            yield batch.slice(0, 0)
