"""Errors raised while loading or running tutorials."""


class TutorialError(Exception):
    """A tutorial can't be found or its source is invalid."""

    pass


class TutorialExecutionError(TutorialError):
    """A code cell didn't behave as the tutorial expects.

    Either it raised an unexpected error,
    or it didn't raise the error it was supposed to show.
    """

    def __init__(self, message: str, cell_index: int) -> None:
        super().__init__(message)
        self.cell_index = cell_index
