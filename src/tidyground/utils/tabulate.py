"""Format tabular data into a text table for print.

This is how Dataframes show themselves when printed,
so it tries to be friendly to people reading data for
the first time: below each column name the kind of
data it contains is reported, numbers are aligned to
the right, floats are rounded and long strings truncated.

    >>> import pyarrow as pa
    >>> data = {
    ...     "country": ["Afghanistan", "Albania"],
    ...     "year": [1952, 1952],
    ...     "lifeExp": [28.801, 55.23],
    ... }
    >>> print(tabulate(pa.table(data)))
    country     | year  | lifeExp
    <str>       | <int> | <float>
    ----------- | ----- | -------
    Afghanistan |  1952 |   28.80
    Albania     |  1952 |   55.23
"""

from typing import Any

import pyarrow as pa


def tabulate(data: pa.RecordBatch | pa.Table, max_rows: int = 20) -> str:
    """Format a RecordBatch or Table into a text table.

    Only the first ``max_rows`` rows are shown,
    a footer reports how many were left out.
    """
    cols = data.column_names
    kinds = [describe_type(field.type) for field in data.schema]
    numeric = [pa.types.is_integer(f.type) or pa.types.is_floating(f.type) for f in data.schema]
    rows = [
        [format_value(row[c]) for c in cols]
        for row in data.slice(length=max_rows).to_pylist()
    ]

    colsizes = compute_max_colsize(cols, [kinds] + rows)
    header = [
        maketablerow(cols, colsizes=colsizes),
        maketablerow(kinds, colsizes=colsizes),
    ]
    separator = [maketablerow(["-"] * len(cols), colsizes=colsizes, fillvalue="-")]
    textrows = [maketablerow(row, colsizes=colsizes, rjust=numeric) for row in rows]

    table = "\n".join(header + separator + textrows)
    if data.num_rows > max_rows:
        table += f"\n... and {data.num_rows - max_rows} more rows"
    return table


def describe_type(type: pa.DataType) -> str:
    """Short human name of an Arrow type, like ``<int>`` or ``<str>``."""
    if pa.types.is_integer(type):
        return "<int>"
    elif pa.types.is_floating(type):
        return "<float>"
    elif pa.types.is_string(type) or pa.types.is_large_string(type):
        return "<str>"
    elif pa.types.is_boolean(type):
        return "<bool>"
    elif pa.types.is_dictionary(type):
        return "<cat>"
    return f"<{type}>"


def compute_max_colsize(cols: list[str], rows: list[list[str]]) -> list[int]:
    """Compute the maximum size of each column in a table."""
    return [
        max([len(row[colidx]) for row in rows] + [len(cols[colidx])])
        for colidx, _ in enumerate(cols)
    ]


def maketablerow(
    cols: list[str],
    colsizes: list[int],
    fillvalue: str = " ",
    rjust: list[bool] | None = None,
) -> str:
    """Make a table row with the given column sizes."""
    rjust = rjust or [False] * len(cols)
    return " | ".join(
        col.rjust(colsizes[idx], fillvalue) if rjust[idx] else col.ljust(colsizes[idx], fillvalue)
        for idx, col in enumerate(cols)
    )


def format_value(v: Any) -> str:
    """Format a value to be printed in the table.

    Floats are rounded to 2 decimal places,
    nulls are shown as ``NA`` and long strings are truncated.
    """
    if v is None:
        return "NA"
    elif isinstance(v, bool):
        return "true" if v else "false"
    elif isinstance(v, float):
        return f"{v:.2f}"

    v = str(v)
    if len(v) > 30:
        v = v[:27] + "..."
    return v
