"""Base classes and interfaces for the Compute Engine

A query plan is a tree of :class:`QueryPlanNode` objects,
each of them receiving record batches from its children
and emitting new record batches. Nodes rely on
:class:`Expression` objects whenever they need to compute
data out of a batch, like a predicate to filter rows
or the values of a new column.
"""

import abc
from typing import Any, Iterator

import pyarrow as pa
import pyarrow.compute as pc


class QueryPlanNode(abc.ABC):
    """A step of a query plan.

    A plan is executed by asking its last node for
    its batches. That node will in turn ask its children
    for their batches, transform them and forward the result.

    Loading the gapminder data and keeping only
    the rows of 2007 would look like::

        CSVDataSource("gapminder.csv") -> FilterNode(year == 2007)

    Where the ``CSVDataSource`` is the child of the ``FilterNode``.

    A node that logs how many rows go through it
    could be written as::

        class CountRowsNode(QueryPlanNode):
            def __init__(self, child):
                self.child = child

            def batches(self):
                for b in self.child.batches():
                    log.info("%s rows", b.num_rows)
                    yield b

            def __str__(self):
                return f"CountRowsNode({self.child})"
    """

    RecordBatchesGenerator = Iterator[pa.RecordBatch]

    @abc.abstractmethod
    def batches(self) -> RecordBatchesGenerator:
        """Emit the record batches produced by this step of the plan."""
        ...

    @abc.abstractmethod
    def __str__(self) -> str:
        """Human readable representation of the node."""
        ...


def _call(func: Any, *args: Any, **kwargs: Any) -> "Expression":
    # expressions.py depends on this module, import lazily.
    from .expressions import FunctionCallExpression

    return FunctionCallExpression(func, *args, **kwargs)


class Expression(abc.ABC):
    """Something that computes a column out of a RecordBatch.

    The engine is column oriented, so applying an expression
    to a batch always produces a :class:`pyarrow.Array`
    (or a scalar that the nodes will broadcast when needed).

    Expressions overload the Python operators, so that
    building them reads like regular Python code::

        (col("year") == 2007) & (col("continent") == "Asia")

    Every operator creates a
    :class:`tidyground.compute.expressions.FunctionCallExpression`
    invoking the matching :mod:`pyarrow.compute` function.
    """

    @abc.abstractmethod
    def apply(self, batch: pa.RecordBatch) -> pa.Array:
        """Compute the expression on a RecordBatch."""
        ...

    @abc.abstractmethod
    def __str__(self) -> str:
        """Human readable representation of the expression."""
        ...

    def __repr__(self) -> str:
        return str(self)

    # Comparisons
    def __eq__(self, other: Any) -> "Expression":  # type: ignore[override]
        return _call(pc.equal, self, other)

    def __ne__(self, other: Any) -> "Expression":  # type: ignore[override]
        return _call(pc.not_equal, self, other)

    def __lt__(self, other: Any) -> "Expression":
        return _call(pc.less, self, other)

    def __le__(self, other: Any) -> "Expression":
        return _call(pc.less_equal, self, other)

    def __gt__(self, other: Any) -> "Expression":
        return _call(pc.greater, self, other)

    def __ge__(self, other: Any) -> "Expression":
        return _call(pc.greater_equal, self, other)

    # Overriding __eq__ would otherwise make expressions unhashable.
    __hash__ = object.__hash__

    # Arithmetic
    def __add__(self, other: Any) -> "Expression":
        return _call(pc.add, self, other)

    def __radd__(self, other: Any) -> "Expression":
        return _call(pc.add, other, self)

    def __sub__(self, other: Any) -> "Expression":
        return _call(pc.subtract, self, other)

    def __rsub__(self, other: Any) -> "Expression":
        return _call(pc.subtract, other, self)

    def __mul__(self, other: Any) -> "Expression":
        return _call(pc.multiply, self, other)

    def __rmul__(self, other: Any) -> "Expression":
        return _call(pc.multiply, other, self)

    def __truediv__(self, other: Any) -> "Expression":
        from .expressions import true_divide

        return _call(true_divide, self, other)

    def __rtruediv__(self, other: Any) -> "Expression":
        from .expressions import true_divide

        return _call(true_divide, other, self)

    def __neg__(self) -> "Expression":
        return _call(pc.negate, self)

    # Boolean logic, using Kleene logic so that nulls behave like SQL.
    def __and__(self, other: Any) -> "Expression":
        return _call(pc.and_kleene, self, other)

    def __or__(self, other: Any) -> "Expression":
        return _call(pc.or_kleene, self, other)

    def __invert__(self) -> "Expression":
        return _call(pc.invert, self)

    def isin(self, values: list) -> "Expression":
        """True for the rows whose value is one of ``values``."""
        return _call(pc.is_in, self, value_set=pa.array(values))


class ColumnRef(Expression):
    """References a column of the record batch by name.

    Applying it returns the data of the column,
    a missing column raises :class:`KeyError`.
    """

    def __init__(self, name: str) -> None:
        """
        :param name: The name of the column being referenced.
        """
        self.name = name

    def apply(self, batch: pa.RecordBatch) -> pa.Array:
        """Get the data for the column."""
        return batch.column(self.name)

    def __str__(self) -> str:
        return f"ColumnRef({self.name})"


class Literal(Expression):
    """A constant value.

    Most compute functions accept plain Python values
    as their arguments, so literals are mostly useful
    when a constant column has to be projected, like
    ``mutate(source=lit("gapminder"))``.
    """

    def __init__(self, value: Any) -> None:
        """
        :param value: The constant value.
        """
        self.value = value

    def apply(self, batch: pa.RecordBatch) -> pa.Scalar:
        return pa.scalar(self.value)

    def __str__(self) -> str:
        return f"Literal({self.value!r})"


col = ColumnRef
lit = Literal
