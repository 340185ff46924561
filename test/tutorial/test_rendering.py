import pytest

from tidyground.tutorial import TutorialExecutor, parse_tutorial, render_html

SOURCE = """\
# Seconds & minutes

How many seconds in an hour?

```python exercise
__[60 * 60]__
```

```python
print("<done>")
```

```python exercise
answer = 42
```
"""


@pytest.fixture
def tutorial():
    return parse_tutorial(SOURCE)


@pytest.fixture
def results(tutorial):
    return TutorialExecutor().run(tutorial)


def test_answers_version(tutorial, results):
    page = render_html(tutorial, results, version="answers")
    assert page.startswith("<!DOCTYPE html>")
    assert "<title>Seconds &amp; minutes</title>" in page
    assert "<p>How many seconds in an hour?</p>" in page
    assert '<code class="language-python">60 * 60</code>' in page
    assert '<pre class="output">3600</pre>' in page
    assert '<pre class="output">&lt;done&gt;</pre>' in page
    assert "answer = 42" in page
    assert page.count('<div class="badge">Exercise</div>') == 2


def test_exercise_version_hides_answers(tutorial, results):
    page = render_html(tutorial, results, version="exercise")
    assert '<code class="language-python">___</code>' in page
    assert "60 * 60" not in page
    assert "3600" not in page
    assert "answer = 42" not in page
    # Cells that aren't exercises still show their output.
    assert '<pre class="output">&lt;done&gt;</pre>' in page


def test_render_without_results(tutorial):
    page = render_html(tutorial)
    assert '<pre class="output"' not in page
    assert "60 * 60" in page


def test_render_error_cells():
    tutorial = parse_tutorial("```python error\n1 / 0\n```\n")
    page = render_html(tutorial, TutorialExecutor().run(tutorial))
    assert '<div class="cell expect-error">' in page
    assert '<pre class="output error">ZeroDivisionError: division by zero</pre>' in page


def test_unknown_version(tutorial):
    with pytest.raises(ValueError):
        render_html(tutorial, version="solutions")


def test_results_must_match_cells(tutorial, results):
    with pytest.raises(ValueError):
        render_html(tutorial, results[:-1])
