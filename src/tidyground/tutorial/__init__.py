"""Tutorials, as annotated notebooks.

A tutorial is prose interleaved with runnable code,
meant to be read top to bottom while running each
piece of code. It's written as a Markdown document
(see :mod:`tidyground.tutorial.parser` for the format)
and rendered to a static HTML page in two versions,
one with blank exercises and one with the answers::

    tutorial = load_tutorial("gapminder")
    results = TutorialExecutor().run(tutorial)
    exercise_page = render_html(tutorial, results, version="exercise")
    answers_page = render_html(tutorial, results, version="answers")

The tutorials shipped with TidyGround are:

* ``gapminder``: first steps in data analysis, loading
  a table, the pipe, the select/filter/mutate/summarize/group_by
  verbs and simple charts.
"""

from importlib import resources

from .cells import CodeCell, MarkdownCell, Tutorial
from .errors import TutorialError, TutorialExecutionError
from .executor import CellResult, Output, TutorialExecutor
from .parser import parse_tutorial
from .rendering import VERSIONS, render_html

__all__ = (
    "CodeCell",
    "MarkdownCell",
    "Tutorial",
    "TutorialError",
    "TutorialExecutionError",
    "CellResult",
    "Output",
    "TutorialExecutor",
    "parse_tutorial",
    "render_html",
    "VERSIONS",
    "list_tutorials",
    "load_tutorial",
)


def _content():
    return resources.files(__name__).joinpath("content")


def list_tutorials() -> list[str]:
    """Names of the tutorials shipped with TidyGround."""
    return sorted(
        entry.name[: -len(".md")] for entry in _content().iterdir() if entry.name.endswith(".md")
    )


def load_tutorial(name: str) -> Tutorial:
    """Load one of the tutorials shipped with TidyGround by name."""
    source = _content().joinpath(f"{name}.md")
    if not source.is_file():
        raise TutorialError(
            f"Unknown tutorial {name!r}, available tutorials are: {', '.join(list_tutorials())}"
        )
    return parse_tutorial(source.read_text("utf-8"))
