"""Run the code cells of a tutorial.

Cells are executed in order in a single namespace,
exactly like a student would run them one after the other,
so each cell sees the variables created by the previous ones.

What a cell shows is collected the same way a notebook does:

* Everything printed while it runs.
* The value of its last line, when that's an expression.
  Plots are rendered to images, other values are shown
  through their ``repr``.
* The error it raised, if any.

Exercises always run with their answers filled in,
otherwise the cells after them couldn't work.
"""

import ast
import base64
import contextlib
import io
import logging
import traceback
from typing import Any

import plotnine
from matplotlib.figure import Figure

from ..plotting import render_png
from .cells import CodeCell, MarkdownCell, Tutorial
from .errors import TutorialExecutionError

log = logging.getLogger(__name__)


class Output:
    """Something shown by a cell.

    ``kind`` is one of ``"text"``, ``"image/png"`` (with the
    content base64 encoded) or ``"error"``.
    """

    KINDS = ("text", "image/png", "error")

    def __init__(self, kind: str, content: str) -> None:
        if kind not in self.KINDS:
            raise ValueError(f"Unknown output kind: {kind}")
        self.kind = kind
        self.content = content

    def __repr__(self) -> str:
        return f"Output({self.kind!r}, {self.content[:40]!r})"


class CellResult:
    """The outcome of running a code cell."""

    def __init__(
        self,
        cell: CodeCell,
        outputs: list[Output] | None = None,
        error: BaseException | None = None,
        executed: bool = True,
    ) -> None:
        self.cell = cell
        self.outputs = outputs or []
        self.error = error
        self.executed = executed

    @property
    def failure(self) -> str | None:
        """Why the cell didn't behave as expected, ``None`` when it did."""
        if not self.executed:
            return None
        if self.cell.expect_error and self.error is None:
            return "the cell was expected to raise an error, but it completed successfully"
        if not self.cell.expect_error and self.error is not None:
            return f"the cell raised {type(self.error).__name__}: {self.error}"
        return None

    @property
    def ok(self) -> bool:
        return self.failure is None

    def __repr__(self) -> str:
        return f"CellResult(ok={self.ok}, outputs={self.outputs})"


class TutorialExecutor:
    """Execute the code cells of tutorials in a shared namespace.

    >>> from tidyground.tutorial import parse_tutorial
    >>> tutorial = parse_tutorial("```python\\nx = 20\\nx + 1\\n```\\n")
    >>> results = TutorialExecutor().run(tutorial)
    >>> results[0].outputs
    [Output('text', '21')]
    """

    def __init__(
        self,
        namespace: dict[str, Any] | None = None,
        strict: bool = False,
        plot_dpi: int = 96,
    ) -> None:
        """
        :param namespace: The globals the cells run in, a new one when not provided.
        :param strict: Raise :class:`TutorialExecutionError` as soon as a cell
                       doesn't behave as expected, instead of just recording it.
        :param plot_dpi: Resolution of the rendered plots.
        """
        self.namespace = namespace if namespace is not None else {"__name__": "__tutorial__"}
        self.strict = strict
        self.plot_dpi = plot_dpi

    def run(self, tutorial: Tutorial) -> list[CellResult | None]:
        """Run all the code cells, in order.

        Returns one entry for each cell of the tutorial,
        ``None`` for the prose cells.
        """
        log.info("Running tutorial %r", tutorial.title)
        results: list[CellResult | None] = []
        for index, cell in enumerate(tutorial.cells):
            if isinstance(cell, MarkdownCell):
                results.append(None)
                continue
            results.append(self.run_cell(cell, index))

        failed = sum(1 for r in results if r is not None and not r.ok)
        if failed:
            log.warning("%d cell(s) of %r did not behave as expected", failed, tutorial.title)
        return results

    def run_cell(self, cell: CodeCell, index: int = 0) -> CellResult:
        """Run a single code cell and collect what it shows."""
        if not cell.run:
            return CellResult(cell, executed=False)

        filename = f"<cell {index}>"
        stdout = io.StringIO()
        outputs: list[Output] = []
        error = None
        log.debug("Running cell %d", index)
        with contextlib.redirect_stdout(stdout):
            try:
                value = self._execute(cell.answer_source(), filename)
                outputs = self._display(value)
            except Exception as e:
                error = e

        printed = stdout.getvalue()
        if printed:
            outputs.insert(0, Output("text", printed.rstrip("\n")))
        if error is not None:
            outputs.append(Output("error", _format_error(error)))

        result = CellResult(cell, outputs, error)
        if not result.ok:
            log.warning("Cell %d: %s", index, result.failure)
            if self.strict:
                raise TutorialExecutionError(f"Cell {index}: {result.failure}", index) from error
        return result

    def _execute(self, source: str, filename: str) -> Any:
        """Execute the code, returning the value of the last line if it's an expression."""
        tree = ast.parse(source, filename=filename)
        last_expression = None
        if tree.body and isinstance(tree.body[-1], ast.Expr):
            last_expression = ast.Expression(tree.body.pop().value)

        exec(compile(tree, filename, "exec"), self.namespace)
        if last_expression is not None:
            return eval(compile(last_expression, filename, "eval"), self.namespace)
        return None

    def _display(self, value: Any) -> list[Output]:
        if value is None:
            return []
        if isinstance(value, plotnine.ggplot):
            png = render_png(value, dpi=self.plot_dpi)
            return [Output("image/png", base64.b64encode(png).decode("ascii"))]
        if isinstance(value, Figure):
            buffer = io.BytesIO()
            value.savefig(buffer, format="png", dpi=self.plot_dpi)
            return [Output("image/png", base64.b64encode(buffer.getvalue()).decode("ascii"))]
        return [Output("text", repr(value))]


def _format_error(error: BaseException) -> str:
    return "".join(traceback.format_exception_only(type(error), error)).rstrip("\n")
