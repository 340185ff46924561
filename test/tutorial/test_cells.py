from tidyground.tutorial import CodeCell, MarkdownCell, Tutorial


def test_answer_source_fills_blanks():
    cell = CodeCell('gapminder >> select(__["country", "pop"]__) >> head(__[3]__)', exercise=True)
    assert cell.has_blanks
    assert cell.answer_source() == 'gapminder >> select("country", "pop") >> head(3)'
    assert cell.exercise_source() == "gapminder >> select(___) >> head(___)"


def test_blank_spanning_lines():
    cell = CodeCell("total = __[sum(\n    values\n)]__", exercise=True)
    assert cell.answer_source() == "total = sum(\n    values\n)"
    assert cell.exercise_source() == "total = ___"


def test_exercise_without_blanks_is_empty():
    cell = CodeCell("dim(gapminder)", exercise=True)
    assert not cell.has_blanks
    assert cell.exercise_source() == ""
    assert cell.answer_source() == "dim(gapminder)"


def test_regular_cell_shows_answers():
    cell = CodeCell("head(__[3]__)")
    assert cell.exercise_source() == "head(3)"


def test_repr():
    assert repr(CodeCell("1 / 0", expect_error=True, run=False)) == (
        "CodeCell('1 / 0', flags=['error', 'no-run'])"
    )


def test_tutorial_cell_views():
    exercise = CodeCell("x = __[1]__", exercise=True)
    plain = CodeCell("x")
    tutorial = Tutorial("Test", [MarkdownCell("Intro\n"), exercise, plain])
    assert tutorial.code_cells == [exercise, plain]
    assert tutorial.exercises == [exercise]
    assert repr(tutorial) == "Tutorial('Test', cells=3)"
