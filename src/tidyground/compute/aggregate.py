"""Query plan nodes that compute aggregations.

Summaries like the average life expectancy or the
total population are computed by aggregations.
They can be computed for the data as a whole or for each
group of rows sharing the same values for some key columns.

For example, given the rows::

    country, continent, year, pop
    Italy,   Europe,    2007, 58147733
    Spain,   Europe,    2007, 40448191
    Japan,   Asia,      2007, 127467972

grouping by continent and computing the sum of ``pop``
would give::

    continent, total_pop
    Europe,    98595924
    Asia,      127467972

While computing the sum with no grouping keys would
give a single row with the population of all countries.
"""

import abc
from typing import Any

import pyarrow as pa
import pyarrow.compute as pc

from .base import QueryPlanNode

__all__ = (
    "AggregateNode",
    "SumAggregation",
    "MinAggregation",
    "MaxAggregation",
    "MeanAggregation",
    "CountAggregation",
    "CountRowsAggregation",
)

# Partial results, {group key: {aggregation name: [chunk result, ...]}}
ChunksData = dict[Any, dict[str, list[Any]]]


class AggregateNode(QueryPlanNode):
    """Group data and compute aggregations.

    >>> import pyarrow as pa
    >>> from tidyground.compute import SumAggregation, PyArrowTableDataSource
    >>> data = pa.record_batch({
    ...    "country": ["Italy", "Spain", "Japan"],
    ...    "continent": ["Europe", "Europe", "Asia"],
    ...    "pop": [58147733, 40448191, 127467972],
    ... })
    >>> aggregate = AggregateNode(["continent"], {"total_pop": SumAggregation("pop")},
    ...                           PyArrowTableDataSource(data))
    >>> next(aggregate.batches())
    pyarrow.RecordBatch
    continent: string
    total_pop: int64
    ----
    continent: ["Europe","Asia"]
    total_pop: [98595924,127467972]

    Groups are emitted in the order they are first found when
    grouping by one key and sorted by key when grouping by
    more than one. With no keys at all a single row is emitted.
    """

    def __init__(
        self,
        keys: list[str],
        aggregations: dict[str, "Aggregation"],
        child: QueryPlanNode,
    ) -> None:
        """
        :param keys: The columns to group by, can be empty.
        :param aggregations: The aggregations to compute in the form of {"new_col_name": Aggregation}.
        :param child: The child node that will provide the data to aggregate.
        """
        self.keys = list(keys)
        self.aggregations = aggregations
        self.child = child

    def __str__(self) -> str:
        return f"AggregateNode(keys={self.keys}, aggregations={self.aggregations}, {self.child})"

    def batches(self) -> QueryPlanNode.RecordBatchesGenerator:
        """Consume all the batches of the child and emit the aggregated batch."""
        if not self.keys:
            yield self.global_aggregation()
        elif len(self.keys) == 1:
            yield self.single_key_aggregation()
        else:
            yield self.multi_key_aggregation()

    def _accumulate(self, chunks_data: ChunksData, key: Any, rows: pa.RecordBatch) -> None:
        """Record the partial results of all aggregations for a chunk of a group."""
        group = chunks_data.setdefault(key, {})
        for name, aggregation in self.aggregations.items():
            group.setdefault(name, []).append(aggregation.compute_chunk(rows))

    def global_aggregation(self) -> pa.RecordBatch:
        """Aggregate all rows together, as a single group."""
        chunks_data: ChunksData = {}
        for batch in self.child.batches():
            self._accumulate(chunks_data, (), batch)

        if not chunks_data:
            # The child emitted no batch at all, so there isn't even a
            # schema to know the result types. Counts are 0, the rest null.
            return pa.record_batch(
                {
                    name: pa.array([aggregation.empty_value], type=aggregation.empty_type)
                    for name, aggregation in self.aggregations.items()
                }
            )
        return self.reduce_aggregations(chunks_data)

    def single_key_aggregation(self) -> pa.RecordBatch:
        """Aggregate grouping by a single key.

        Dictionary encoding the key column gives both the distinct
        values of the key and, for each row, the index of its value.
        Comparing the indices with each distinct value
        gives the mask to pick the rows of the group.
        Nulls are encoded too, so rows without a key form their own group.
        """
        chunks_data: ChunksData = {}
        for batch in self.child.batches():
            encoded = pc.dictionary_encode(batch.column(self.keys[0]), null_encoding="encode")
            for idx, keyval in enumerate(encoded.dictionary):
                mask = pc.equal(encoded.indices, idx)
                self._accumulate(chunks_data, keyval, batch.filter(mask))
        return self.reduce_aggregations(chunks_data)

    def multi_key_aggregation(self) -> pa.RecordBatch:
        """Aggregate grouping by multiple keys.

        Dictionary encoding doesn't support struct arrays,
        so multiple keys can't be combined in a single column
        to encode. Instead each batch is sorted by the keys,
        so that all rows of a group become contiguous,
        and then it is scanned looking for the points
        where the key changes::

            Africa, 1952   <- start of a group
            Africa, 1952
            Africa, 1957   <- key changed, the previous group ends
        """
        sorting_key = [(k, "ascending") for k in self.keys]
        chunks_data: ChunksData = {}
        for batch in self.child.batches():
            sorted_batch = batch.sort_by(sorting_key)
            key_columns = [sorted_batch.column(k) for k in self.keys]
            current_key = None
            chunk_start = 0
            for row_index in range(sorted_batch.num_rows):
                row_key = tuple(column[row_index] for column in key_columns)
                if current_key is None:
                    current_key = row_key
                elif row_key != current_key:
                    chunk = sorted_batch.slice(chunk_start, row_index - chunk_start)
                    self._accumulate(chunks_data, current_key, chunk)
                    current_key = row_key
                    chunk_start = row_index

            if current_key is not None:
                chunk = sorted_batch.slice(chunk_start)
                self._accumulate(chunks_data, current_key, chunk)

        # Groups from different batches were appended in the order they were found.
        ordered = dict(sorted(chunks_data.items(), key=lambda item: _sorting_key(item[0])))
        return self.reduce_aggregations(ordered)

    def reduce_aggregations(self, chunks_data: ChunksData) -> pa.RecordBatch:
        """Combine the partial results of each group into the final values.

        Given the partial sums of the population
        for each batch where Europe was found::

            {"Europe": {"total_pop": [58147733, 40448191]}}

        The result would be::

            {"continent": ["Europe"], "total_pop": [98595924]}
        """
        result_batch_data: dict[str, list[Any]] = {
            **{k: [] for k in self.keys},
            **{k: [] for k in self.aggregations.keys()},
        }
        for keyvalue, aggregated_values in chunks_data.items():
            if not isinstance(keyvalue, tuple):
                keyvalue = (keyvalue,)
            for key, value in zip(self.keys, keyvalue):
                result_batch_data[key].append(value)
            for aggrname, aggregation in self.aggregations.items():
                result_batch_data[aggrname].append(
                    aggregation.reduce(aggregated_values[aggrname])
                )

        return pa.record_batch(
            {
                name: pa.array([v.as_py() for v in values], type=_common_type(values))
                for name, values in result_batch_data.items()
            }
        )


def _sorting_key(key: tuple[pa.Scalar, ...]) -> tuple:
    # Nulls go last, like sort_by places them, and are never compared to values.
    return tuple((v.as_py() is None, v.as_py()) for v in key)


def _common_type(values: list[pa.Scalar]) -> pa.DataType | None:
    """Type of the first non null scalar, so that all-null groups don't lose it."""
    for value in values:
        if value.type != pa.null():
            return value.type
    return None


class Aggregation(abc.ABC):
    """Base class for aggregations.

    Aggregations work in two phases, so that it's not necessary
    to keep all the data of a group in memory:
    ``compute_chunk`` computes a partial result out of
    a batch of rows of the group, and ``reduce`` combines
    all partial results into the final value.
    """

    #: Result when there is no data at all, not even a schema.
    empty_value: Any = None
    empty_type: pa.DataType = pa.null()

    def __init__(self, column: str) -> None:
        self.column = column

    def __str__(self) -> str:
        return f"{self.__class__.__name__}({self.column})"

    __repr__ = __str__

    @abc.abstractmethod
    def compute_chunk(self, batch: pa.RecordBatch) -> Any: ...

    @abc.abstractmethod
    def reduce(self, chunks: list[Any]) -> pa.Scalar: ...


class SimpleAggregation(Aggregation):
    """Aggregations that reduce partial results with the same function.

    ``max([1, 7, 3])`` is the same as ``max([max([1, 7]), 3])``.
    """

    @abc.abstractmethod
    def _aggregate(self, data: Any) -> pa.Scalar: ...

    def compute_chunk(self, batch: pa.RecordBatch) -> pa.Scalar:
        return self._aggregate(batch.column(self.column))

    def reduce(self, chunks: list[pa.Scalar]) -> pa.Scalar:
        return self._aggregate(_scalars_to_array(chunks))


class SumAggregation(SimpleAggregation):
    """Compute the sum of an aggregated column."""

    def _aggregate(self, data: Any) -> pa.Scalar:
        return pc.sum(data)


class MinAggregation(SimpleAggregation):
    """Compute the min of an aggregated column."""

    def _aggregate(self, data: Any) -> pa.Scalar:
        return pc.min(data)


class MaxAggregation(SimpleAggregation):
    """Compute the max of an aggregated column."""

    def _aggregate(self, data: Any) -> pa.Scalar:
        return pc.max(data)


class CountAggregation(Aggregation):
    """Count the non null values of a column."""

    empty_value = 0
    empty_type = pa.int64()

    def compute_chunk(self, batch: pa.RecordBatch) -> pa.Scalar:
        return pc.count(batch.column(self.column))

    def reduce(self, chunks: list[pa.Scalar]) -> pa.Scalar:
        return pc.sum(_scalars_to_array(chunks, pa.int64()))


class CountRowsAggregation(Aggregation):
    """Count the rows of the group, regardless of their values."""

    empty_value = 0
    empty_type = pa.int64()

    def __init__(self) -> None:
        super().__init__("*")

    def __str__(self) -> str:
        return f"{self.__class__.__name__}()"

    __repr__ = __str__

    def compute_chunk(self, batch: pa.RecordBatch) -> pa.Scalar:
        return pa.scalar(batch.num_rows, pa.int64())

    def reduce(self, chunks: list[pa.Scalar]) -> pa.Scalar:
        return pc.sum(_scalars_to_array(chunks, pa.int64()))


class MeanAggregation(Aggregation):
    """Compute the mean of an aggregated column.

    Each chunk provides its count and sum,
    the mean is the total sum divided by the total count.
    The result is always a floating point number.
    """

    def compute_chunk(self, batch: pa.RecordBatch) -> tuple[pa.Scalar, pa.Scalar]:
        column = batch.column(self.column)
        return (pc.count(column), pc.sum(column))

    def reduce(self, chunks: list[tuple[pa.Scalar, pa.Scalar]]) -> pa.Scalar:
        count = pc.sum(_scalars_to_array([chunk[0] for chunk in chunks], pa.int64()))
        total = pc.sum(_scalars_to_array([chunk[1] for chunk in chunks]))
        return pc.divide(pc.cast(total, pa.float64()), pc.cast(count, pa.float64()))


def _scalars_to_array(scalars: list[pa.Scalar], type: pa.DataType | None = None) -> pa.Array:
    if type is None:
        type = _common_type(scalars)
    return pa.array([s.as_py() for s in scalars], type=type)
