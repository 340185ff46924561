"""Expressions executed by compute engine nodes.

Filters need a *predicate*, an expression that says
``true`` or ``false`` for each row, like ``year == 2007``.
Projections need an expression that computes the values
of the new column, like ``gdpPercap * pop``.

Both are represented by :class:`FunctionCallExpression`,
which invokes a compute function (usually one of
:mod:`pyarrow.compute`) on columns and constants.
"""

from typing import Any, Callable

import pyarrow as pa
import pyarrow.compute as pc

from .. import utils
from .base import Expression


def apply_expression_if_needed(batch: pa.RecordBatch, o: Any) -> Any:
    """Resolve ``o`` against the batch when it is an Expression.

    Anything else is considered to already be data
    (an array or a literal value) and is returned as is.
    """
    if isinstance(o, Expression):
        o = o.apply(batch)
    return o


def true_divide(left: Any, right: Any) -> Any:
    """Divide two values always producing floating point results.

    :func:`pyarrow.compute.divide` performs an integer division
    when both sides are integers, which would be surprising
    for something like ``pop / 1000000``.

    >>> import pyarrow as pa
    >>> true_divide(pa.array([1, 3]), 2)
    <pyarrow.lib.DoubleArray object at ...>
    [
      0.5,
      1.5
    ]
    """
    return pc.divide(_as_float(left), _as_float(right))


def _as_float(value: Any) -> Any:
    if isinstance(value, (pa.Array, pa.ChunkedArray, pa.Scalar)):
        if pa.types.is_integer(value.type):
            return pc.cast(value, pa.float64())
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    return value


class FunctionCallExpression(Expression):
    """Call a compute function on its arguments.

    Arguments that are expressions themselves are
    applied to the batch first, so expressions nest::

        FunctionCallExpression(pc.multiply, col("gdpPercap"), col("pop"))

    Keyword arguments are forwarded unchanged,
    which is how compute function options are provided::

        FunctionCallExpression(pc.is_in, col("country"), value_set=pa.array(["Italy"]))
    """

    def __init__(self, func: Callable, *args: Any, **kwargs: Any) -> None:
        """
        :param func: The function accepting the arguments.
        :param args: The arguments for the function.
        :param kwargs: Options forwarded to the function as they are.
        """
        self.func = func
        self.args = args
        self.kwargs = kwargs

    def __str__(self) -> str:
        func_qualname = utils.inspect.get_qualname(self.func)
        return f"{func_qualname}({','.join(map(str, self.args))})"

    def apply(self, batch: pa.RecordBatch) -> pa.Array:
        """Invoke the function resolving all the arguments on the batch."""
        args = tuple(apply_expression_if_needed(batch, arg) for arg in self.args)
        return self.func(*args, **self.kwargs)
