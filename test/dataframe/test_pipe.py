import pyarrow as pa
import pytest

from tidyground.dataframe import (
    Dataframe,
    DataframeError,
    Pipeable,
    arrange,
    col,
    collect,
    count,
    dim,
    filter,
    group_by,
    head,
    max_,
    mean,
    min_,
    mutate,
    n,
    pipeable,
    select,
    sum_,
    summarise,
    summarize,
    ungroup,
)


def test_verbs_called_directly(gapminder):
    assert dim(gapminder) == (16, 6)
    assert select(gapminder, "country").columns == ["country"]
    assert dim(head(gapminder, 3)) == (3, 6)


def test_verbs_without_data_are_pipeable():
    step = filter(col("year") == 2007)
    assert isinstance(step, Pipeable)
    assert str(select("country", "year")) == (
        "Pipeable(tidyground.dataframe.verbs.select('country', 'year'))"
    )


def test_pipe_threads_left_value(gapminder):
    result = gapminder >> filter(col("year") == 2007) >> select("country", "lifeExp")
    assert isinstance(result, Dataframe)
    assert result.to_arrow().to_pylist() == [
        {"country": "Brazil", "lifeExp": 72.39},
        {"country": "Italy", "lifeExp": 80.546},
        {"country": "Japan", "lifeExp": 82.603},
        {"country": "Zambia", "lifeExp": 42.384},
    ]


def test_pipe_into_dim(gapminder):
    assert gapminder >> head(2) >> dim() == (2, 6)


def test_pipe_mutate_and_arrange(gapminder):
    result = (
        gapminder
        >> filter(col("year") == 2007)
        >> mutate(gdp_billion=col("gdpPercap") * col("pop") / 1e9)
        >> arrange("-gdp_billion")
        >> select("country")
        >> collect()
    )
    assert result.to_arrow().column("country").to_pylist() == [
        "Japan",
        "Brazil",
        "Italy",
        "Zambia",
    ]


def test_pipe_group_by_summarize(gapminder):
    result = (
        gapminder
        >> group_by("continent")
        >> summarize(
            avg_life=mean("lifeExp"),
            first_year=min_("year"),
            last_year=max_("year"),
            total_pop=sum_("pop"),
            rows=n(),
            measured=count(col("lifeExp")),
        )
        >> arrange("continent")
    )
    rows = result.to_arrow().to_pylist()
    assert [r["continent"] for r in rows] == ["Africa", "Americas", "Asia", "Europe"]
    europe = rows[3]
    assert europe["avg_life"] == pytest.approx((65.94 + 67.81 + 80.24 + 80.546) / 4)
    assert europe["first_year"] == 1952
    assert europe["last_year"] == 2007
    assert europe["total_pop"] == 47666000 + 49182000 + 57926999 + 58147733
    assert europe["rows"] == 4
    assert europe["measured"] == 4


def test_group_by_multiple_keys(gapminder):
    result = gapminder >> group_by("continent", "year") >> summarise(pop=sum_("pop"))
    assert result.dim() == (16, 3)
    first = result.to_arrow().slice(0, 1).to_pylist()[0]
    assert first == {"continent": "Africa", "year": 1952, "pop": 2672000}


def test_ungroup_verb(gapminder):
    result = gapminder >> group_by("continent") >> ungroup() >> summarize(rows=n())
    assert result.to_arrow().to_pylist() == [{"rows": 16}]


def test_summaries_require_columns():
    with pytest.raises(DataframeError):
        mean(col("pop") * 2)


def test_pipeable_decorator():
    @pipeable
    def countries(df, prefix=""):
        return [prefix + c for c in df.to_arrow().column("country").to_pylist()]

    data = Dataframe(pa.table({"country": ["Italy", "Japan"]}))
    assert countries(data) == ["Italy", "Japan"]
    assert data >> countries(prefix="> ") == ["> Italy", "> Japan"]
    assert countries.__name__ == "countries"


def test_pipe_into_non_pipeable(gapminder):
    with pytest.raises(TypeError):
        gapminder >> len
