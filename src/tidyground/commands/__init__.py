"""Shell commands exposing TidyGround functionalities.

Render
======

``tidyground-render`` runs a tutorial and writes it as static
HTML pages, one with blank exercises and one with the answers::

    tidyground-render --tutorial gapminder --output-dir site/

Tutorials written by you can be rendered too::

    tidyground-render --source my-lesson.md --version exercise

With ``--strict`` the command fails (exit code 1) when a cell
raises an unexpected error, which is handy to check that a
tutorial still works before a lesson.
"""
