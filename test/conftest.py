import pathlib

import pytest

from tidyground.datasets import read_gapminder

DATA_DIR = pathlib.Path(__file__).parent / "data"


@pytest.fixture
def gapminder_csv():
    return DATA_DIR / "gapminder_sample.csv"


@pytest.fixture
def gapminder(gapminder_csv):
    """Four countries, four years each, loaded like the real dataset."""
    return read_gapminder(gapminder_csv)
