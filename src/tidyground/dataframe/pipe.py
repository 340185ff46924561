"""The ``>>`` pipe operator.

Analyses are usually a chain of steps, where the result
of a step is the input of the next one. Writing them as
nested calls makes them read inside out::

    head(select(filter(gapminder, col("year") == 2007), "country", "lifeExp"))

The pipe threads the value on its left into the first
argument of the call on its right, so the same
analysis reads top to bottom, in the order steps happen::

    (gapminder
     >> filter(col("year") == 2007)
     >> select("country", "lifeExp")
     >> head())

This works because ``filter(col("year") == 2007)``,
called without the Dataframe, doesn't run the verb yet:
it returns a :class:`Pipeable` that remembers the arguments
and waits for the Dataframe to arrive from the left of ``>>``.
"""

import functools
from typing import Any, Callable

from .. import utils
from .dataframe import Dataframe


class Pipeable:
    """A function call waiting for its first argument.

    ``data >> Pipeable(func, *args, **kwargs)`` is
    the same as ``func(data, *args, **kwargs)``.
    """

    def __init__(self, func: Callable, *args: Any, **kwargs: Any) -> None:
        self.func = func
        self.args = args
        self.kwargs = kwargs

    def __call__(self, data: Any) -> Any:
        return self.func(data, *self.args, **self.kwargs)

    def __rrshift__(self, data: Any) -> Any:
        return self(data)

    def __str__(self) -> str:
        arguments = [repr(a) for a in self.args]
        arguments += [f"{k}={v!r}" for k, v in self.kwargs.items()]
        return f"Pipeable({utils.inspect.get_qualname(self.func)}({', '.join(arguments)}))"

    __repr__ = __str__


def pipeable(func: Callable) -> Callable:
    """Make a function usable on the right side of ``>>``.

    The decorated function runs immediately when it
    receives a Dataframe as its first argument and
    returns a :class:`Pipeable` otherwise.

    >>> @pipeable
    ... def ncols(df, plus=0):
    ...     return len(df.columns) + plus
    >>> import pyarrow as pa
    >>> data = Dataframe(pa.table({"country": ["Italy"], "year": [2007]}))
    >>> ncols(data)
    2
    >>> data >> ncols(plus=1)
    3
    """

    @functools.wraps(func)
    def _wrapper(*args: Any, **kwargs: Any) -> Any:
        if args and isinstance(args[0], Dataframe):
            return func(*args, **kwargs)
        return Pipeable(func, *args, **kwargs)

    return _wrapper
