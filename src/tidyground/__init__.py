"""TidyGround

A playground to learn data analysis with Python, built for teaching.

TidyGround ships an annotated tutorial that introduces newcomers
to data analysis: loading a table, chaining operations with a pipe,
the select/filter/mutate/summarize/group_by verbs, and simple charts.
Together with the tutorial come the pieces it relies on, each
isolated in its own package and documented in literate programming
style, so that curious students can see how they work inside:

* The Compute Engine (:mod:`tidyground.compute`), Arrow based query
  plans that actually execute the analyses.
* The Dataframe API (:mod:`tidyground.dataframe`), the verbs and the
  ``>>`` pipe, built on the compute engine.
* The Datasets (:mod:`tidyground.datasets`), downloading and caching
  the data used by the tutorials.
* The Plotting grammar (:mod:`tidyground.plotting`), charts through plotnine.
* The Tutorials (:mod:`tidyground.tutorial`), the lessons themselves,
  their execution and their rendering to HTML.
"""

from . import compute, dataframe

__all__ = ("compute", "dataframe")
