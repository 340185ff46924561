"""Command line interface to render tutorials to HTML.

This module runs a tutorial with
:class:`tidyground.tutorial.TutorialExecutor` and writes
its exercise and answers versions as static HTML pages
using :func:`tidyground.tutorial.render_html`.
"""

import argparse
import logging
import sys
from pathlib import Path

import matplotlib

from tidyground.config import Config
from tidyground.datasets import DatasetError
from tidyground.logging_setup import setup_logging
from tidyground.tutorial import (
    VERSIONS,
    TutorialError,
    TutorialExecutor,
    list_tutorials,
    load_tutorial,
    parse_tutorial,
    render_html,
)

log = logging.getLogger(__name__)

DEFAULT_TUTORIAL = "gapminder"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run a tutorial and render it to static HTML pages."
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "-t",
        "--tutorial",
        help=f"Name of a packaged tutorial, one of: {', '.join(list_tutorials())}. "
        f"Defaults to {DEFAULT_TUTORIAL}.",
    )
    source.add_argument(
        "-s", "--source", type=Path, help="Path of a tutorial written in Markdown."
    )
    parser.add_argument(
        "-v",
        "--version",
        choices=(*VERSIONS, "both"),
        default="both",
        help="Which version of the tutorial to render.",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=Path("."),
        help="Directory where the HTML pages are written.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail as soon as a cell doesn't behave as the tutorial expects.",
    )
    parser.add_argument("--log-level", default=None, help="Logging level, like DEBUG or INFO.")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse the command line arguments and render the tutorial."""
    args = build_parser().parse_args(argv)
    config = Config()
    setup_logging(args.log_level or config.log_level)
    # Plots are only ever written to files.
    matplotlib.use("Agg")

    try:
        if args.source is not None:
            tutorial = parse_tutorial(args.source.read_text("utf-8"))
            name = args.source.stem
        else:
            name = args.tutorial or DEFAULT_TUTORIAL
            tutorial = load_tutorial(name)

        results = TutorialExecutor(strict=args.strict, plot_dpi=config.plot_dpi).run(tutorial)
    except (TutorialError, DatasetError, OSError) as e:
        log.error("%s", e)
        return 1

    # Without data the rest of the tutorial is meaningless.
    dataset_errors = [
        r.error for r in results if r is not None and isinstance(r.error, DatasetError)
    ]
    if dataset_errors:
        log.error("%s", dataset_errors[0])
        return 1

    versions = VERSIONS if args.version == "both" else (args.version,)
    args.output_dir.mkdir(parents=True, exist_ok=True)
    for version in versions:
        destination = args.output_dir / f"{name}-{version}.html"
        destination.write_text(render_html(tutorial, results, version), "utf-8")
        log.info("Wrote %s", destination)
    return 0


if __name__ == "__main__":
    sys.exit(main())
