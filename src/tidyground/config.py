"""Configuration of TidyGround.

Settings come from environment variables, with defaults
that work out of the box, and can be overridden
by passing a dictionary::

    config = Config({"cache_dir": "/tmp/tidyground"})

Supported environment variables:

* ``TIDYGROUND_GAPMINDER_URL``: where the gapminder CSV is downloaded from.
* ``TIDYGROUND_CACHE_DIR``: where downloaded datasets are kept.
* ``TIDYGROUND_HTTP_TIMEOUT``: seconds to wait for the download.
* ``TIDYGROUND_LOG_LEVEL``: logging level used by the command line tools.
* ``TIDYGROUND_PLOT_DPI``: resolution of the plots in rendered tutorials.
"""

import os
from pathlib import Path
from typing import Any

DEFAULT_GAPMINDER_URL = (
    "https://raw.githubusercontent.com/plotly/datasets/master/gapminderDataFiveYear.csv"
)


class Config:
    """Settings for the dataset loaders, the tutorial renderer and logging."""

    def __init__(self, config_dict: dict[str, Any] | None = None) -> None:
        """
        :param config_dict: Values that take precedence over the environment,
                            keys are the lowercase attribute names.
        """
        self.gapminder_url = os.getenv("TIDYGROUND_GAPMINDER_URL", DEFAULT_GAPMINDER_URL)
        self.cache_dir = Path(
            os.getenv("TIDYGROUND_CACHE_DIR", Path.home() / ".cache" / "tidyground")
        )
        self.http_timeout = float(os.getenv("TIDYGROUND_HTTP_TIMEOUT", "30"))
        self.log_level = os.getenv("TIDYGROUND_LOG_LEVEL", "INFO")
        self.plot_dpi = int(os.getenv("TIDYGROUND_PLOT_DPI", "96"))

        if config_dict:
            self._update_from_dict(config_dict)

    def _update_from_dict(self, config_dict: dict[str, Any]) -> None:
        for key, value in config_dict.items():
            if not hasattr(self, key):
                raise ValueError(f"Unknown configuration option: {key}")
            if key == "cache_dir":
                value = Path(value)
            setattr(self, key, value)

    def __repr__(self) -> str:
        return f"Config({vars(self)!r})"


def get_config() -> Config:
    """Configuration read from the current environment."""
    return Config()
