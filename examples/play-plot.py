import matplotlib

matplotlib.use("Agg")

from tidyground.dataframe import col, filter
from tidyground.datasets import load_gapminder
from tidyground.plotting import aes, geom_line, ggplot, labs, render_png

gapminder = load_gapminder()
countries = gapminder >> filter(col("country").isin(["Italy", "Japan", "Zambia"]))

plot = (
    ggplot(countries, aes(x="year", y="lifeExp", color="country"))
    + geom_line()
    + labs(x="Year", y="Life expectancy")
)
with open("life-expectancy.png", "wb") as f:
    f.write(render_png(plot, dpi=150))
print("Saved life-expectancy.png")
