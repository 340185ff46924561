"""Provide insights about Python objects."""

import inspect
from typing import Any


def get_qualname(obj: Any) -> str:
    """Get the qualified name of the given object.

    Used to describe which function an expression calls,
    returns names like ``module.function`` or
    ``module.Class.method``.

    >>> class Aggregator:
    ...   def total(self, arg):
    ...     pass
    >>> get_qualname(Aggregator.total)
    'tidyground.utils.inspect.Aggregator.total'
    """
    module_obj = inspect.getmodule(obj)
    module = module_obj.__name__ if module_obj is not None else type(obj).__module__
    if inspect.ismethod(obj) or inspect.isfunction(obj):
        if getattr(obj, "__self__", None) is not None:
            class_name = obj.__self__.__class__.__name__
            return f"{module}.{class_name}.{obj.__name__}"
        return f"{module}.{obj.__qualname__}"
    elif inspect.isclass(obj):
        return f"{module}.{obj.__name__}"
    elif inspect.ismodule(obj):
        return obj.__name__
    return f"{module}.{obj.__class__.__name__}"
