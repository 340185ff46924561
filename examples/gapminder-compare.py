
def run_with_tidyground():
    from tidyground.dataframe import arrange, col, filter, group_by, mean, n, summarize
    from tidyground.datasets import load_gapminder

    result = (
        load_gapminder()
        >> filter(col("year") == 2007)
        >> group_by("continent")
        >> summarize(avg_life=mean("lifeExp"), countries=n())
        >> arrange("-avg_life")
    )
    print(result)


def run_with_pandas():
    import pandas as pd

    from tidyground.config import get_config

    config = get_config()
    df = pd.read_csv(config.cache_dir / "gapminderDataFiveYear.csv")
    df = df[df["year"] == 2007]
    print(
        df.groupby("continent")
        .agg(avg_life=("lifeExp", "mean"), countries=("country", "count"))
        .sort_values("avg_life", ascending=False)
    )


if __name__ == "__main__":
    from tidyground.datasets import load_gapminder
    from tidyground.logging_setup import setup_logging

    setup_logging("INFO")
    # Make sure the file is cached before timing anything.
    load_gapminder()

    import timeit
    print("TidyGround Timing:", timeit.timeit(run_with_tidyground, number=1))
    print("")
    print("Pandas Timing:", timeit.timeit(run_with_pandas, number=1))
