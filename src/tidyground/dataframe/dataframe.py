"""The Dataframe object itself."""

import logging
from typing import Any, Callable, Self

import pyarrow as pa

from ..compute import (
    AggregateNode,
    CSVDataSource,
    FilterNode,
    PaginateNode,
    ProjectNode,
    PyArrowTableDataSource,
    SortNode,
    lit,
)
from ..compute.aggregate import Aggregation
from ..compute.base import Expression, QueryPlanNode
from ..compute.datasources import DataSourceNode
from ..utils.tabulate import tabulate

log = logging.getLogger(__name__)


class DataframeError(Exception):
    """Raised when a verb is used in a way that can't work, like selecting a missing column."""

    pass


class Dataframe:
    """Data structure that handles data in rows and columns.

    Dataframes are lazy: each verb returns a new Dataframe
    wrapping a new step of the query plan, and no data
    is computed until it's printed, collected or converted.
    The original Dataframe is never modified, so the same
    data can be transformed in many different ways::

        gapminder = Dataframe.open_csv("gapminder.csv")
        recent = gapminder.filter(col("year") >= 2000)
        asia = gapminder.filter(col("continent") == "Asia")
    """

    preview_rows = 10

    def __init__(self, node_or_table: QueryPlanNode | pa.Table | pa.RecordBatch) -> None:
        """
        :param node_or_table: A compute engine node expected to emit
                              the data for the dataframe or a `pyarrow.Table`.
        """
        if isinstance(node_or_table, (pa.Table, pa.RecordBatch)):
            node_or_table = PyArrowTableDataSource(node_or_table)

        if not isinstance(node_or_table, QueryPlanNode):
            raise ValueError("Invalid input, expected a QueryPlanNode or a PyArrow Table")

        self.node = node_or_table

    @classmethod
    def open_csv(cls, filename: str, **options: Any) -> Self:
        """Open a CSV file and create a Dataframe out of its data.

        :param filename: The path to a local CSV file.
        :param options: Forwarded to :class:`tidyground.compute.CSVDataSource`.
        """
        return cls(CSVDataSource(filename, **options))

    def _derive(self, node: QueryPlanNode) -> "Dataframe":
        """Build the Dataframe for the next step of the plan."""
        return Dataframe(node)

    @property
    def schema(self) -> pa.Schema:
        """The columns of the Dataframe and their types.

        For Dataframes that went through some transformation
        this requires computing the first batch of data.
        """
        if isinstance(self.node, DataSourceNode):
            return self.node.poll_schema()
        batches = PaginateNode(0, 0, self.node).batches()
        try:
            return next(batches).schema
        except StopIteration:
            return pa.schema([])
        finally:
            batches.close()

    @property
    def columns(self) -> list[str]:
        """Names of the columns of the Dataframe."""
        return self.schema.names

    def _check_columns(self, columns: list[str]) -> None:
        available = self.columns
        missing = [c for c in columns if c not in available]
        if missing:
            raise DataframeError(
                f"Column(s) {', '.join(missing)} not found, available columns are: {', '.join(available)}"
            )

    def select(self, *columns: str) -> "Dataframe":
        """Keep only the given columns, in the given order."""
        columns = [_column_name(c) for c in columns]
        self._check_columns(columns)
        return self._derive(ProjectNode(columns, None, self.node))

    def filter(self, expression: Expression) -> "Dataframe":
        """Keep only the rows for which the predicate is true.

        :param expression: The expression representing the predicate.
                           for example `col("year") == 2007`.
        """
        if not isinstance(expression, Expression):
            raise DataframeError(
                f"filter() expects an expression like col('year') == 2007, got {expression!r}"
            )
        return self._derive(FilterNode(expression, self.node))

    def mutate(self, **expressions: Any) -> "Dataframe":
        """Add new columns, or replace existing ones, computed from expressions.

        Values that are not expressions are used as constants.
        Each expression can use the columns created before it::

            df.mutate(gdp=col("gdpPercap") * col("pop"), gdp_billion=col("gdp") / 1e9)
        """
        project = {
            name: expr if isinstance(expr, Expression) else lit(expr)
            for name, expr in expressions.items()
        }
        return self._derive(ProjectNode(None, project, self.node))

    def summarize(self, **aggregations: Aggregation) -> "Dataframe":
        """Reduce the data to a single row of summary values."""
        return self._aggregate([], aggregations)

    def _aggregate(self, keys: list[str], aggregations: dict[str, Any]) -> "Dataframe":
        aggregations = _check_aggregations(aggregations)
        self._check_columns([a.column for a in aggregations.values() if a.column != "*"])
        return Dataframe(AggregateNode(keys, aggregations, self.node))

    summarise = summarize

    def group_by(self, *columns: str) -> "GroupedDataframe":
        """Group the rows by the values of some columns.

        The groups are used by :meth:`summarize`,
        which will compute one row for each group.
        """
        columns = [_column_name(c) for c in columns]
        if not columns:
            raise DataframeError("group_by() requires at least one column")
        self._check_columns(columns)
        return GroupedDataframe(self.node, columns)

    def ungroup(self) -> "Dataframe":
        """Drop the grouping, a plain Dataframe is already ungrouped."""
        return Dataframe(self.node)

    def arrange(self, *columns: str, descending: bool = False) -> "Dataframe":
        """Sort the rows by the given columns.

        A column name prefixed with ``-`` is sorted in descending order,
        ``arrange("continent", "-lifeExp")`` sorts by continent and then
        by decreasing life expectancy.
        """
        keys, directions = [], []
        for column in columns:
            name = _column_name(column)
            if name.startswith("-"):
                keys.append(name[1:])
                directions.append(not descending)
            else:
                keys.append(name)
                directions.append(descending)
        self._check_columns(keys)
        return self._derive(SortNode(keys, directions, self.node))

    def head(self, n: int = 6) -> "Dataframe":
        """Only the first ``n`` rows."""
        if n < 0:
            raise ValueError("head() requires a non negative number of rows")
        return self._derive(PaginateNode(0, n, self.node))

    def dim(self) -> tuple[int, int]:
        """The dimensions of the data, as ``(rows, columns)``."""
        table = self.to_arrow()
        return (table.num_rows, table.num_columns)

    @property
    def shape(self) -> tuple[int, int]:
        return self.dim()

    def pipe(self, func: Callable, *args: Any, **kwargs: Any) -> Any:
        """Call ``func(self, *args, **kwargs)``.

        The method form of the ``>>`` operator.
        """
        return func(self, *args, **kwargs)

    def collect(self) -> Self:
        """Collect all data of the dataframe in memory.

        Returns a new Dataframe that has all data from the
        previous dataframe eagerly loaded in memory.
        """
        return self._derive(PyArrowTableDataSource(self.to_arrow()))

    def to_arrow(self) -> pa.Table:
        """Collect all the data and return a pyarrow.Table"""
        batches = list(self.node.batches())
        if not batches:
            return pa.table({})
        return pa.Table.from_batches(batches)

    def to_pandas(self) -> Any:
        """Collect all the data and return a ``pandas.DataFrame``."""
        return self.to_arrow().to_pandas()

    def _header(self, table: pa.Table) -> list[str]:
        return [f"# A table: {table.num_rows} x {table.num_columns}"]

    def __str__(self) -> str:
        table = self.to_arrow()
        return "\n".join(self._header(table) + [tabulate(table, max_rows=self.preview_rows)])

    __repr__ = __str__


class GroupedDataframe(Dataframe):
    """A Dataframe whose rows are grouped by some columns.

    Grouping doesn't change the data, it only changes
    how :meth:`summarize` works: one summary row is
    computed for each group instead of one for the whole data.

    Verbs that work row by row, like ``filter`` or ``mutate``,
    keep the grouping.
    """

    def __init__(self, node_or_table: QueryPlanNode | pa.Table, groups: list[str]) -> None:
        super().__init__(node_or_table)
        self.groups = list(groups)

    def _derive(self, node: QueryPlanNode) -> "GroupedDataframe":
        return GroupedDataframe(node, self.groups)

    def select(self, *columns: str) -> "GroupedDataframe":
        """Keep only the given columns, the grouping columns are always kept."""
        columns = [_column_name(c) for c in columns]
        missing_groups = [g for g in self.groups if g not in columns]
        if missing_groups:
            log.info("Adding missing grouping columns: %s", ", ".join(missing_groups))
        return super().select(*missing_groups, *columns)

    def summarize(self, **aggregations: Aggregation) -> Dataframe:
        """Compute one row of summary values for each group."""
        return self._aggregate(self.groups, aggregations)

    summarise = summarize

    def group_by(self, *columns: str) -> "GroupedDataframe":
        """Replace the grouping with a new one."""
        return self.ungroup().group_by(*columns)

    def _header(self, table: pa.Table) -> list[str]:
        return super()._header(table) + [f"# Groups: {', '.join(self.groups)}"]


def _column_name(column: Any) -> str:
    if isinstance(column, str):
        return column
    name = getattr(column, "name", None)
    if isinstance(name, str):
        return name
    raise DataframeError(f"Expected a column name, got {column!r}")


def _check_aggregations(aggregations: dict[str, Any]) -> dict[str, Aggregation]:
    if not aggregations:
        raise DataframeError("summarize() requires at least one aggregation, like avg=mean('lifeExp')")
    for name, aggregation in aggregations.items():
        if not isinstance(aggregation, Aggregation):
            raise DataframeError(
                f"{name}={aggregation!r} is not an aggregation, use one of mean(), sum_(), min_(), max_(), count(), n()"
            )
    return aggregations
