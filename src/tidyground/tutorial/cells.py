"""The cells a tutorial is made of.

A tutorial is a sequence of prose cells and code cells.
Code cells can be *exercises*: the student sees them
blank, or with some parts left blank, and has to fill them.
The same tutorial can then be shown with all the answers.

Parts of an exercise that have to be left blank are
marked ``__[...]__`` in the code::

    gapminder >> head(__[10]__)

shows as ``gapminder >> head(___)`` in the exercise and
as ``gapminder >> head(10)`` in the answers. An exercise cell
without any marked blank is shown entirely blank.
"""

import re

BLANK = "___"
BLANK_MARKER = re.compile(r"__\[(.*?)\]__", re.DOTALL)


class MarkdownCell:
    """Prose, written in Markdown."""

    def __init__(self, source: str) -> None:
        self.source = source

    def __repr__(self) -> str:
        return f"MarkdownCell({self.source[:30]!r})"


class CodeCell:
    """Python code, executed when the tutorial is rendered."""

    def __init__(
        self,
        source: str,
        exercise: bool = False,
        expect_error: bool = False,
        run: bool = True,
    ) -> None:
        """
        :param source: The code, with the blanks of exercises marked as ``__[answer]__``.
        :param exercise: The cell is left to the student to fill.
        :param expect_error: Running the cell is supposed to raise an error.
        :param run: Whether the cell should be executed at all.
        """
        self.source = source
        self.exercise = exercise
        self.expect_error = expect_error
        self.run = run

    @property
    def has_blanks(self) -> bool:
        return BLANK_MARKER.search(self.source) is not None

    def answer_source(self) -> str:
        """The code with all blanks filled, which is also what gets executed."""
        return BLANK_MARKER.sub(lambda m: m.group(1), self.source)

    def exercise_source(self) -> str:
        """The code as the student sees it before solving the exercise.

        >>> CodeCell("gapminder >> head(__[10]__)", exercise=True).exercise_source()
        'gapminder >> head(___)'
        >>> CodeCell("dim(gapminder)", exercise=True).exercise_source()
        ''
        """
        if not self.exercise:
            return self.answer_source()
        if not self.has_blanks:
            return ""
        return BLANK_MARKER.sub(BLANK, self.source)

    def __repr__(self) -> str:
        flags = [
            name
            for name, enabled in (
                ("exercise", self.exercise),
                ("error", self.expect_error),
                ("no-run", not self.run),
            )
            if enabled
        ]
        return f"CodeCell({self.source[:30]!r}, flags={flags})"


class Tutorial:
    """A titled sequence of cells."""

    def __init__(self, title: str, cells: list[MarkdownCell | CodeCell]) -> None:
        self.title = title
        self.cells = cells

    @property
    def code_cells(self) -> list[CodeCell]:
        return [cell for cell in self.cells if isinstance(cell, CodeCell)]

    @property
    def exercises(self) -> list[CodeCell]:
        return [cell for cell in self.code_cells if cell.exercise]

    def __repr__(self) -> str:
        return f"Tutorial({self.title!r}, cells={len(self.cells)})"
