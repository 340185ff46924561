"""Render tutorials to static HTML pages.

The same tutorial renders in two versions:

* ``exercise``: the exercise cells are blank (or have blanks)
  and their output is hidden, the rest is shown as is.
  It's what students follow along with.
* ``answers``: everything is filled in and shows its output.

Both versions share the same prose, so the answers can
be handed out after the lesson as the reference.
"""

import html
import logging
from importlib import resources
from string import Template

import markdown

from .cells import CodeCell, MarkdownCell, Tutorial
from .executor import CellResult, Output

log = logging.getLogger(__name__)

VERSIONS = ("exercise", "answers")


def render_html(
    tutorial: Tutorial,
    results: list[CellResult | None] | None = None,
    version: str = "answers",
) -> str:
    """Render the tutorial as a complete HTML page.

    :param tutorial: The tutorial to render.
    :param results: What :meth:`TutorialExecutor.run` returned for the tutorial,
                    when not provided the code is shown without any output.
    :param version: ``"exercise"`` or ``"answers"``.
    """
    if version not in VERSIONS:
        raise ValueError(f"Unknown version {version!r}, expected one of {', '.join(VERSIONS)}")
    if results is None:
        results = [None] * len(tutorial.cells)
    if len(results) != len(tutorial.cells):
        raise ValueError("Expected one result for each cell of the tutorial")

    md = markdown.Markdown(extensions=["fenced_code", "tables", "toc"])
    body = []
    for cell, result in zip(tutorial.cells, results):
        if isinstance(cell, MarkdownCell):
            md.reset()
            body.append(f'<div class="prose">{md.convert(cell.source)}</div>')
        else:
            body.append(_render_code_cell(cell, result, version))

    template = resources.files(__package__).joinpath("_static/tutorial.html").read_text("utf-8")
    log.debug("Rendered %r, %s version", tutorial.title, version)
    return Template(template).substitute(
        title=html.escape(tutorial.title),
        version=version,
        body="\n".join(body),
    )


def _render_code_cell(cell: CodeCell, result: CellResult | None, version: str) -> str:
    hide_answer = version == "exercise" and cell.exercise
    source = cell.exercise_source() if hide_answer else cell.answer_source()

    classes = ["cell"]
    if cell.exercise:
        classes.append("exercise")
    if cell.expect_error:
        classes.append("expect-error")

    parts = [f'<div class="{" ".join(classes)}">']
    if cell.exercise:
        parts.append('<div class="badge">Exercise</div>')
    parts.append(
        f'<pre class="code"><code class="language-python">{html.escape(source)}</code></pre>'
    )
    if result is not None and not hide_answer:
        parts.extend(_render_output(output) for output in result.outputs)
    parts.append("</div>")
    return "\n".join(parts)


def _render_output(output: Output) -> str:
    if output.kind == "image/png":
        return f'<img class="output" alt="plot" src="data:image/png;base64,{output.content}">'
    if output.kind == "error":
        return f'<pre class="output error">{html.escape(output.content)}</pre>'
    return f'<pre class="output">{html.escape(output.content)}</pre>'
