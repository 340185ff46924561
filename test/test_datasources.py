import os
import tempfile

import pyarrow as pa
import pyarrow.csv as csv
import pytest

from tidyground.compute.datasources import CSVDataSource, PyArrowTableDataSource

MOCK_PYARROW_TABLE = pa.table(
    {"country": ["Italy", "Japan", "Zambia"], "year": [2007, 2007, 2007], "pop": [5, 6, 7]}
)

MOCK_CSV_FILE = tempfile.NamedTemporaryFile(delete=False, mode="w+", suffix=".csv")


def setup_module():
    csv.write_csv(MOCK_PYARROW_TABLE, MOCK_CSV_FILE.name)
    MOCK_CSV_FILE.close()


def teardown_module():
    os.unlink(MOCK_CSV_FILE.name)


@pytest.mark.parametrize(
    "data_source_class, init_args, expected_str",
    [
        (
            CSVDataSource,
            (MOCK_CSV_FILE.name, None),
            f"CSVDataSource({MOCK_CSV_FILE.name}, block_size=None)",
        ),
        (
            PyArrowTableDataSource,
            (MOCK_PYARROW_TABLE,),
            "PyArrowTableDataSource(columns=['country', 'year', 'pop'], rows=3)",
        ),
        (
            PyArrowTableDataSource,
            (MOCK_PYARROW_TABLE.to_batches()[0],),
            "PyArrowTableDataSource(columns=['country', 'year', 'pop'], rows=3)",
        ),
    ],
)
def test_init_and_str(data_source_class, init_args, expected_str):
    data_source = data_source_class(*init_args)
    assert str(data_source) == expected_str


@pytest.mark.parametrize(
    "data_source_class, init_args",
    [
        (CSVDataSource, (MOCK_CSV_FILE.name, None)),
        (PyArrowTableDataSource, (MOCK_PYARROW_TABLE,)),
        (PyArrowTableDataSource, (MOCK_PYARROW_TABLE.to_batches()[0],)),
    ],
)
def test_batches(data_source_class, init_args):
    data_source = data_source_class(*init_args)
    batches = list(data_source.batches())
    assert pa.Table.from_batches(batches).equals(MOCK_PYARROW_TABLE)


@pytest.mark.parametrize(
    "data_source",
    [
        CSVDataSource(MOCK_CSV_FILE.name),
        PyArrowTableDataSource(MOCK_PYARROW_TABLE),
    ],
)
def test_poll_schema(data_source):
    assert data_source.poll_schema().names == ["country", "year", "pop"]


def test_csv_column_types():
    data_source = CSVDataSource(MOCK_CSV_FILE.name, column_types={"pop": pa.float64()})
    schema = data_source.poll_schema()
    assert schema.field("pop").type == pa.float64()
    assert schema.field("year").type == pa.int64()

    batch = next(data_source.batches())
    assert batch.column("pop").to_pylist() == [5.0, 6.0, 7.0]


def test_empty_table_still_emits_schema():
    empty = MOCK_PYARROW_TABLE.slice(0, 0)
    batches = list(PyArrowTableDataSource(empty).batches())
    assert len(batches) >= 1
    assert batches[0].schema.names == ["country", "year", "pop"]
    assert sum(b.num_rows for b in batches) == 0
