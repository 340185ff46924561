"""Query Plan nodes that load data

Datasources are the leaves of every query plan,
they read data from somewhere, convert it to Arrow
and hand it to the rest of the plan.
"""

from abc import abstractmethod

import pyarrow as pa
import pyarrow.csv

from .base import QueryPlanNode


class DataSourceNode(QueryPlanNode):
    """Base class for nodes that load data from a source."""

    @abstractmethod
    def poll_schema(self) -> pa.Schema:
        """Poll the schema of the data source without loading its content."""
        ...


class CSVDataSource(DataSourceNode):
    """Stream the content of a local CSV file.

    The file is read incrementally, one block at the time,
    so that nodes downstream can start working before
    the whole file was loaded.

    Column types are inferred by Arrow unless
    they are provided through ``column_types``.
    """

    def __init__(
        self,
        filename: str,
        block_size: int | None = None,
        column_types: dict[str, pa.DataType] | None = None,
    ) -> None:
        """
        :param filename: The path of the local CSV file.
        :param block_size: How many bytes to read for each batch,
                           ``None`` lets Arrow pick its default.
        :param column_types: Force the type of some columns, ``{name: type}``.
        """
        self.filename = filename
        self.block_size = block_size
        self.column_types = column_types or {}

    def __str__(self) -> str:
        return f"CSVDataSource({self.filename}, block_size={self.block_size})"

    def _open(self) -> pa.csv.CSVStreamingReader:
        return pa.csv.open_csv(
            self.filename,
            read_options=pa.csv.ReadOptions(block_size=self.block_size),
            convert_options=pa.csv.ConvertOptions(column_types=self.column_types),
        )

    def batches(self) -> QueryPlanNode.RecordBatchesGenerator:
        """Open the CSV file and emit its batches."""
        with self._open() as reader:
            for batch in reader:
                yield batch

    def poll_schema(self) -> pa.Schema:
        """Poll the schema of the CSV file, only the first block is parsed."""
        with self._open() as reader:
            return reader.schema


class PyArrowTableDataSource(DataSourceNode):
    """Use an in-memory pyarrow.Table or pyarrow.RecordBatch as a source.

    This is what a Dataframe uses once its data was collected.
    """

    def __init__(self, table: pa.Table | pa.RecordBatch) -> None:
        """
        :param table: The table or recordbatch with the data to read.
        """
        self.table = table
        self.is_recordbatch = isinstance(table, pa.RecordBatch)

    def __str__(self) -> str:
        return f"PyArrowTableDataSource(columns={self.table.column_names}, rows={self.table.num_rows})"

    def batches(self) -> QueryPlanNode.RecordBatchesGenerator:
        """Emit the data contained in the Table."""
        if self.is_recordbatch:
            yield self.table
        elif self.table.num_rows == 0:
            # to_batches() of an empty table emits nothing,
            # but the schema still has to reach the next nodes.
            yield pa.RecordBatch.from_pylist([], schema=self.table.schema)
        else:
            yield from self.table.to_batches()

    def poll_schema(self) -> pa.Schema:
        """Poll the schema of the Table."""
        return self.table.schema
