"""Output formatting utilities for CLI."""

import numbers
from typing import Iterable, List, Optional

import click
import pandas as pd

from hr_portal.register.register import MessageLevel, RegisterMessage


def format_success(message: str) -> str:
    """Format a success message with green color.

    Args:
        message: The success message to format

    Returns:
        Formatted success message with color
    """
    return click.style(f"✓ {message}", fg="green", bold=True)


def format_error(message: str) -> str:
    """Format an error message with red color."""
    return click.style(f"✗ {message}", fg="red", bold=True)


def format_warning(message: str) -> str:
    """Format a warning message with yellow color."""
    return click.style(f"⚠ {message}", fg="yellow", bold=True)


def format_info(message: str) -> str:
    """Format an info message with blue color."""
    return click.style(f"ℹ {message}", fg="blue")


_FORMATTERS = {
    MessageLevel.SUCCESS: format_success,
    MessageLevel.ERROR: format_error,
    MessageLevel.WARNING: format_warning,
    MessageLevel.INFO: format_info,
}


def format_message(message: RegisterMessage) -> str:
    """Format a register message according to its level."""
    return _FORMATTERS[message.level](message.text)


def echo_messages(messages: Iterable[RegisterMessage]) -> None:
    for message in messages:
        click.echo(format_message(message))


def format_hours(value) -> str:
    """Render an hours value without trailing zeros (``8``, ``7.5``)."""
    try:
        return f"{float(value):g}"
    except (TypeError, ValueError):
        return str(value)


def format_table(headers: List[str], rows: List[List[str]], max_width: int = 80) -> str:
    """Format data as a table.

    Args:
        headers: List of column headers
        rows: List of data rows (each row is a list of cell values)
        max_width: Maximum width for each column (default: 80)

    Returns:
        Formatted table as a string
    """
    if not headers:
        return ""

    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            if i < len(col_widths):
                col_widths[i] = max(col_widths[i], len(str(cell)))

    col_widths = [min(w, max_width) for w in col_widths]

    separator = "+" + "+".join("-" * (w + 2) for w in col_widths) + "+"

    header_row = (
        "|"
        + "|".join(
            f" {h:<{col_widths[i]}} "
            for i, h in enumerate(headers)
            if i < len(col_widths)
        )
        + "|"
    )

    data_rows = []
    for row in rows:
        formatted_cells = []
        for i, cell in enumerate(row):
            if i < len(col_widths):
                cell_str = str(cell)[: col_widths[i]]  # Truncate if needed
                formatted_cells.append(f" {cell_str:<{col_widths[i]}} ")
        data_rows.append("|" + "|".join(formatted_cells) + "|")

    table_lines = [separator, header_row, separator]
    if rows:
        table_lines.extend(data_rows)
        table_lines.append(separator)

    return "\n".join(table_lines)


def format_dataframe(df: pd.DataFrame, headers: Optional[List[str]] = None) -> str:
    """Format an hours matrix DataFrame as a table.

    Numeric cells are rendered with ``format_hours``.
    """
    rows = []
    for record in df.itertuples(index=False):
        rows.append(
            [
                format_hours(cell) if isinstance(cell, numbers.Real) else str(cell)
                for cell in record
            ]
        )
    return format_table(headers or [str(column) for column in df.columns], rows)
