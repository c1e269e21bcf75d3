"""Output formatters for CLI commands."""

import csv
import io
import json
from typing import Any

from rich.console import Console
from rich.table import Table

from ptcloud_client.cli.config import OutputFormat
from ptcloud_client.models.responses import ApiResponse, Decoded

console = Console()
error_console = Console(stderr=True)


def format_response(
    response: ApiResponse,
    output_format: OutputFormat,
    *,
    title: str | None = None,
    items_key: str | None = None,
    columns: list[str] | None = None,
) -> None:
    """Print a decoded API response.

    Args:
        response: Response to print; raw bodies are summarised, not dumped
        output_format: Output format (table, json, csv)
        title: Optional title for table output
        items_key: Key holding a list of rows (e.g. ``contents``) for table/csv
        columns: Optional column names for the rows
    """
    if not isinstance(response, Decoded):
        print_info(f"{len(response.content)} bytes ({response.content_type or 'unknown type'})")
        return

    data = response.payload
    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(data, default=str))
        return

    if isinstance(data, dict) and items_key and isinstance(data.get(items_key), list):
        data = data[items_key]

    rows = _to_rows(data)
    if output_format == OutputFormat.CSV:
        _format_csv(rows, columns)
    else:
        _format_table(rows, title, columns)


def _to_rows(data: Any) -> list[dict[str, Any]]:
    """Turn a JSON payload into table rows; scalars become a single ``value`` cell."""
    if isinstance(data, dict):
        return [data]
    if isinstance(data, list):
        return [item if isinstance(item, dict) else {"value": item} for item in data]
    return [{"value": data}]


def _column_names(rows: list[dict[str, Any]], columns: list[str] | None) -> list[str]:
    if columns is not None:
        present = [col for col in columns if any(col in row for row in rows)]
        if present:
            return present
    return list(rows[0].keys())


def _format_csv(rows: list[dict[str, Any]], columns: list[str] | None) -> None:
    """Format as CSV."""
    if not rows:
        return

    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=_column_names(rows, columns), extrasaction="ignore")
    writer.writeheader()
    writer.writerows(rows)
    console.print(output.getvalue(), end="")


def _format_table(
    rows: list[dict[str, Any]],
    title: str | None,
    columns: list[str] | None,
) -> None:
    """Format as rich table."""
    if not rows:
        console.print("[dim]No entries[/dim]")
        return

    names = _column_names(rows, columns)
    table = Table(title=title, show_header=True, header_style="bold")
    for name in names:
        table.add_column(name.replace("_", " ").capitalize())

    for row in rows:
        table.add_row(*[_cell(row.get(name)) for name in names])

    console.print(table)


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, dict | list):
        return json.dumps(value, default=str)
    return str(value)


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    error_console.print(f"[red]Error:[/red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]i[/blue] {message}")
