"""Parse tutorials written in Markdown.

A tutorial source is a regular Markdown document,
its fenced ``python`` code blocks are the code cells
and everything else is prose.

Words after the language of a fence are options of the cell:

* ``exercise``: the cell is an exercise (see :mod:`tidyground.tutorial.cells`).
* ``error``: the cell is expected to fail, the error is part of the lesson.
* ``no-run``: the cell is shown but never executed.

For example::

    ```python exercise
    gapminder >> head(__[10]__)
    ```

Fences of other languages are left as they are, part of the prose.
"""

from markdown_it import MarkdownIt

from .cells import CodeCell, MarkdownCell, Tutorial
from .errors import TutorialError

PYTHON_LANGUAGES = ("python", "py")
CELL_OPTIONS = ("exercise", "error", "no-run")


def parse_tutorial(text: str, title: str | None = None) -> Tutorial:
    """Split a Markdown document into the cells of a tutorial.

    :param text: The Markdown source of the tutorial.
    :param title: The title of the tutorial, when not provided
                  the first level one heading is used.

    >>> tutorial = parse_tutorial("# Hello\\n\\nSome prose\\n\\n```python exercise\\n1 + __[1]__\\n```\\n")
    >>> tutorial.title
    'Hello'
    >>> tutorial.cells
    [MarkdownCell('# Hello\\n\\nSome prose\\n'), CodeCell('1 + __[1]__', flags=['exercise'])]
    """
    tokens = MarkdownIt("commonmark").parse(text)
    lines = text.splitlines(keepends=True)

    cells: list[MarkdownCell | CodeCell] = []
    prose_start = 0
    for idx, token in enumerate(tokens):
        if title is None and token.type == "heading_open" and token.tag == "h1":
            title = tokens[idx + 1].content

        if token.type != "fence" or token.level != 0 or token.map is None:
            continue
        language, *options = token.info.split() or [""]
        if language not in PYTHON_LANGUAGES:
            continue

        unknown = [o for o in options if o not in CELL_OPTIONS]
        if unknown:
            raise TutorialError(
                f"Unknown option(s) {', '.join(unknown)} for the code cell at line {token.map[0] + 1}"
            )

        start, end = token.map
        _append_prose(cells, lines[prose_start:start])
        prose_start = end
        cells.append(
            CodeCell(
                token.content.rstrip("\n"),
                exercise="exercise" in options,
                expect_error="error" in options,
                run="no-run" not in options,
            )
        )

    _append_prose(cells, lines[prose_start:])
    return Tutorial(title or "Tutorial", cells)


def _append_prose(cells: list, lines: list[str]) -> None:
    source = "".join(lines).strip("\n")
    if source.strip():
        cells.append(MarkdownCell(source + "\n"))
