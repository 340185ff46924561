import pyarrow as pa
import pyarrow.compute as pc
import pytest

from tidyground.compute import (
    FunctionCallExpression,
    PyArrowTableDataSource,
    col,
    lit,
)
from tidyground.compute.selection import ProjectNode


@pytest.fixture
def mock_data():
    """A small gapminder-like table."""
    data = {
        "country": ["Italy", "Japan", "Zambia"],
        "pop": [58147733, 127467972, 11746035],
        "gdpPercap": [28569.72, 31656.07, 1271.21],
    }
    return pa.table(data)


def test_init_and_str(mock_data):
    expressions = {"gdp": FunctionCallExpression(pc.multiply, col("pop"), col("gdpPercap"))}
    project_node = ProjectNode(["country"], expressions, PyArrowTableDataSource(mock_data))
    assert str(project_node) == (
        "ProjectNode(select=['country'], project={'gdp': pyarrow.compute.multiply(ColumnRef(pop),ColumnRef(gdpPercap))}, "
        "child=PyArrowTableDataSource(columns=['country', 'pop', 'gdpPercap'], rows=3))"
    )


def test_select_columns(mock_data):
    project_node = ProjectNode(["pop", "country"], {}, PyArrowTableDataSource(mock_data))
    batches = list(project_node.batches())
    assert len(batches) == 1
    batch = batches[0]
    assert batch.column_names == ["pop", "country"]
    assert batch.column(1).to_pylist() == ["Italy", "Japan", "Zambia"]


def test_project_columns(mock_data):
    project_node = ProjectNode(
        ["country"], {"pop_k": col("pop") / 1000}, PyArrowTableDataSource(mock_data)
    )
    batch = next(project_node.batches())
    assert batch.column_names == ["country", "pop_k"]
    assert batch.column(1).to_pylist() == [58147.733, 127467.972, 11746.035]


def test_project_all_columns(mock_data):
    project_node = ProjectNode(
        None, {"big": col("pop") > 50_000_000}, PyArrowTableDataSource(mock_data)
    )
    batch = next(project_node.batches())
    assert batch.column_names == ["country", "pop", "gdpPercap", "big"]
    assert batch.column(3).to_pylist() == [True, True, False]


def test_projection_uses_previous_projections(mock_data):
    expressions = {
        "pop_k": col("pop") / 1000,
        "pop_m": col("pop_k") / 1000,
    }
    project_node = ProjectNode([], expressions, PyArrowTableDataSource(mock_data))
    batch = next(project_node.batches())
    assert batch.column_names == ["pop_k", "pop_m"]
    assert batch.column(1).to_pylist() == pytest.approx([58.147733, 127.467972, 11.746035])


def test_projection_replaces_existing_column(mock_data):
    project_node = ProjectNode(
        None, {"country": FunctionCallExpression(pc.utf8_upper, col("country"))},
        PyArrowTableDataSource(mock_data),
    )
    batch = next(project_node.batches())
    assert batch.column_names == ["country", "pop", "gdpPercap"]
    assert batch.column(0).to_pylist() == ["ITALY", "JAPAN", "ZAMBIA"]


def test_projection_of_literal_is_broadcast(mock_data):
    project_node = ProjectNode(
        ["country"], {"source": lit("gapminder")}, PyArrowTableDataSource(mock_data)
    )
    batch = next(project_node.batches())
    assert batch.column(1).to_pylist() == ["gapminder"] * 3


def test_project_column_not_selected(mock_data):
    """Projections can use columns that are not part of the selection."""
    project_node = ProjectNode(
        ["country"], {"gdp": col("pop") * col("gdpPercap")}, PyArrowTableDataSource(mock_data)
    )
    batch = next(project_node.batches())
    assert batch.column_names == ["country", "gdp"]
