"""Generic utilities and helpers.

Helpers that are useful across the components
of TidyGround but are not bound to any of them.
"""

from . import inspect, tabulate

__all__ = ("inspect", "tabulate")
