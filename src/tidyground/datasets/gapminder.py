"""The gapminder dataset.

Gapminder is a small dataset about the countries of the world,
one row for each country every five years from 1952 to 2007:

=============  =======  =====================================
column         type     content
=============  =======  =====================================
``country``    str      Name of the country
``continent``  str      Continent the country belongs to
``year``       int      Year the row refers to
``lifeExp``    float    Life expectancy at birth, in years
``pop``        int      Population
``gdpPercap``  float    GDP per capita, in inflation adjusted dollars
=============  =======  =====================================

It's big enough to be interesting and small enough to be
understood at a glance, which makes it a classic for teaching.

The CSV files of gapminder around the web don't always agree
on the order of the columns, or even on the type of the
population (sometimes written as ``8425333.0``), so loading
always produces the columns above, in that order, with those types.
"""

import logging
import os
from pathlib import Path
from urllib.parse import urlparse

import pyarrow as pa
import pyarrow.compute as pc

from ..compute import FunctionCallExpression, col
from ..config import Config
from ..dataframe import Dataframe
from .download import DatasetError, fetch

log = logging.getLogger(__name__)

GAPMINDER_COLUMNS: dict[str, pa.DataType] = {
    "country": pa.string(),
    "continent": pa.string(),
    "year": pa.int64(),
    "lifeExp": pa.float64(),
    "pop": pa.int64(),
    "gdpPercap": pa.float64(),
}

# How each column is parsed from the CSV,
# pop goes through float to accept both 8425333 and 8425333.0
_CSV_COLUMN_TYPES = {**GAPMINDER_COLUMNS, "pop": pa.float64()}


def _round_to_int(values: pa.Array) -> pa.Array:
    return pc.cast(pc.round(values), pa.int64())


def read_gapminder(path: str | os.PathLike) -> Dataframe:
    """Load the gapminder dataset from a local CSV file.

    The data is collected in memory, it's only a few thousands rows.

    :param path: The local CSV file.
    """
    source = Dataframe.open_csv(str(path), column_types=_CSV_COLUMN_TYPES)
    try:
        available = source.columns
    except pa.ArrowInvalid as e:
        raise DatasetError(f"{path} is not a valid CSV file: {e}") from e
    missing = [c for c in GAPMINDER_COLUMNS if c not in available]
    if missing:
        raise DatasetError(
            f"{path} is not a gapminder file, missing column(s): {', '.join(missing)}"
        )

    try:
        gapminder = (
            source.select(*GAPMINDER_COLUMNS)
            .mutate(pop=FunctionCallExpression(_round_to_int, col("pop")))
            .collect()
        )
    except pa.ArrowInvalid as e:
        raise DatasetError(f"{path} contains invalid values: {e}") from e
    log.debug("Loaded gapminder from %s: %s rows", path, gapminder.dim()[0])
    return gapminder


def load_gapminder(
    url: str | None = None,
    cache_dir: str | os.PathLike | None = None,
    refresh: bool = False,
    config: Config | None = None,
) -> Dataframe:
    """Download (once) and load the gapminder dataset.

    The file is kept in the cache directory, so only the
    first call needs network access.

    :param url: Where to download the CSV file from, defaults to the configured one.
    :param cache_dir: Where to keep the downloaded file, defaults to the configured one.
    :param refresh: Download the file again even when it's cached.
    :param config: The :class:`tidyground.config.Config` providing the defaults.
    """
    config = config or Config()
    url = url or config.gapminder_url
    cache_dir = Path(cache_dir) if cache_dir is not None else config.cache_dir

    filename = os.path.basename(urlparse(url).path) or "gapminder.csv"
    destination = cache_dir / filename
    if refresh and destination.exists():
        log.info("Refreshing %s", destination)
        destination.unlink()

    path = fetch(url, destination, timeout=config.http_timeout)
    return read_gapminder(path)
