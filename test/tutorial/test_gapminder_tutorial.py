import matplotlib

matplotlib.use("Agg")

import pytest

import tidyground.datasets
from tidyground.tutorial import TutorialExecutor, load_tutorial, render_html


@pytest.fixture
def offline_gapminder(monkeypatch, gapminder):
    """Make the tutorial load the sample data instead of downloading it."""
    monkeypatch.setattr(tidyground.datasets, "load_gapminder", lambda **kwargs: gapminder)
    return gapminder


@pytest.fixture(scope="module")
def tutorial():
    return load_tutorial("gapminder")


def test_every_cell_behaves(tutorial, offline_gapminder):
    results = TutorialExecutor(plot_dpi=30).run(tutorial)
    failures = [
        (index, result.failure)
        for index, result in enumerate(results)
        if result is not None and not result.ok
    ]
    assert failures == []


def test_error_cell_shows_missing_aesthetics(tutorial, offline_gapminder):
    results = TutorialExecutor(plot_dpi=30).run(tutorial)
    (error_result,) = [r for r in results if r is not None and r.cell.expect_error]
    assert "missing aesthetics" in error_result.outputs[-1].content


def test_two_versions(tutorial, offline_gapminder):
    results = TutorialExecutor(plot_dpi=30).run(tutorial)
    exercise = render_html(tutorial, results, version="exercise")
    answers = render_html(tutorial, results, version="answers")

    assert "head(___)" in exercise
    assert "head(10)" not in exercise
    assert "head(10)" in answers
    assert 'max_(&quot;pop&quot;)' in answers
    assert exercise.count("data:image/png") < answers.count("data:image/png")
