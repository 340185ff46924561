"""Bridge Dataframes to plotnine and render plots to images."""

import io
import logging
from typing import Any

import pandas as pd
import plotnine
import pyarrow as pa
from matplotlib import pyplot as plt

from ..dataframe import Dataframe

log = logging.getLogger(__name__)


def as_plot_data(data: Any) -> pd.DataFrame | None:
    """Convert ``data`` to the ``pandas.DataFrame`` plotnine works with.

    Accepts TidyGround Dataframes, pyarrow Tables and pandas DataFrames.
    """
    if data is None or isinstance(data, pd.DataFrame):
        return data
    if isinstance(data, Dataframe):
        return data.to_pandas()
    if isinstance(data, (pa.Table, pa.RecordBatch)):
        return data.to_pandas()
    raise TypeError(f"Can't plot data of type {type(data).__name__}")


def ggplot(data: Any = None, mapping: plotnine.aes | None = None) -> plotnine.ggplot:
    """Start a plot of ``data``, optionally with its default aesthetics.

    The mapping can also be provided first, ``ggplot(aes(...), data)``,
    like plotnine allows.
    """
    if isinstance(data, plotnine.aes):
        data, mapping = mapping, data
    return plotnine.ggplot(as_plot_data(data), mapping)


def render_png(
    plot: plotnine.ggplot,
    width: float = 6.4,
    height: float = 4.8,
    dpi: int = 96,
) -> bytes:
    """Draw the plot and return the content of a PNG image.

    Drawing is where plotnine validates the layers, so errors
    like a missing aesthetic are raised from here.

    :param width: Width of the image in inches.
    :param height: Height of the image in inches.
    :param dpi: Pixels for each inch.
    """
    figure = plot.draw()
    try:
        figure.set_size_inches(width, height)
        buffer = io.BytesIO()
        figure.savefig(buffer, format="png", dpi=dpi)
    finally:
        plt.close(figure)
    log.debug("Rendered plot to %d bytes of PNG", buffer.tell())
    return buffer.getvalue()
