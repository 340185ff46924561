"""Charts with a grammar of graphics.

Plots are described declaratively, by adding layers
on top of the data and of the *mapping* from columns
to visual properties (the aesthetics)::

    (ggplot(gapminder, aes(x="gdpPercap", y="lifeExp"))
     + geom_point()
     + scale_x_log10())

The grammar is the one provided by `plotnine <https://plotnine.org>`_,
everything is re-exported from it unchanged, except :func:`ggplot`
which also accepts TidyGround Dataframes as its data.

Layers complain when they miss a required aesthetic, for example
``geom_point`` requires both ``x`` and ``y``. As the plot is only
drawn when shown, that's also when the error is reported.
"""

from plotnine import (
    aes,
    coord_flip,
    facet_wrap,
    geom_bar,
    geom_boxplot,
    geom_col,
    geom_histogram,
    geom_line,
    geom_point,
    geom_smooth,
    labs,
    scale_x_log10,
    scale_y_log10,
    theme_bw,
    theme_minimal,
)
from plotnine.exceptions import PlotnineError

from .render import as_plot_data, ggplot, render_png

__all__ = (
    "ggplot",
    "render_png",
    "as_plot_data",
    "PlotnineError",
    "aes",
    "coord_flip",
    "facet_wrap",
    "geom_bar",
    "geom_boxplot",
    "geom_col",
    "geom_histogram",
    "geom_line",
    "geom_point",
    "geom_smooth",
    "labs",
    "scale_x_log10",
    "scale_y_log10",
    "theme_bw",
    "theme_minimal",
)
