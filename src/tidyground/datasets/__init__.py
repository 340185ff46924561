"""Datasets used in the tutorials.

Datasets are downloaded the first time they are needed
and kept in a local cache directory (see :mod:`tidyground.config`),
so that following a tutorial requires network access only once.

>>> from tidyground.datasets import load_gapminder
>>> gapminder = load_gapminder()  # doctest: +SKIP
>>> gapminder.dim()  # doctest: +SKIP
(1704, 6)
"""

from .download import DatasetError, fetch
from .gapminder import GAPMINDER_COLUMNS, load_gapminder, read_gapminder

__all__ = (
    "DatasetError",
    "fetch",
    "GAPMINDER_COLUMNS",
    "load_gapminder",
    "read_gapminder",
)
