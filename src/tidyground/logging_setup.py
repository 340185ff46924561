"""Logging configuration.

The library modules only create their loggers,
the command line tools call :func:`setup_logging`
to decide where messages go.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int | str = logging.INFO, log_file: str | None = None) -> None:
    """Configure the ``tidyground`` logger.

    :param level: Logging level, like ``logging.DEBUG`` or ``"DEBUG"``.
    :param log_file: Optional path where to also save the logs.
    """
    if isinstance(level, str):
        level_name = level
        level = logging.getLevelName(level_name.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level_name}")

    logger = logging.getLogger("tidyground")
    logger.setLevel(level)

    # Calling setup twice must not duplicate every message.
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # matplotlib is very chatty at debug level.
    logging.getLogger("matplotlib").setLevel(logging.WARNING)

    logger.debug("Logging initialized.")
