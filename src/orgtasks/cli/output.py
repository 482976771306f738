"""Utility functions for cli output."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/orgtasks/cli/output.py
import argparse
import sys
from typing import IO, Optional

from orgtasks.exceptions import DependencyError
from orgtasks.model.entities import Project, Task
from orgtasks.model.results import BatchResult, ParseResult
from orgtasks.model.serialization import result_to_json

TABLE_COLUMNS = ("Type", "Status", "Pri", "Title", "Context", "Scheduled", "Deadline", "Location")


def check_rich_available() -> bool:
    """Check if Rich library is available.

    Returns
    -------
    bool
        True if Rich is available, False otherwise

    """
    try:
        import rich  # noqa: F401

        return True
    except ImportError:
        return False


def should_use_rich_output(
    args: argparse.Namespace, raise_on_missing: bool = False, stream: Optional[IO[str]] = None
) -> bool:
    """Determine if Rich output should be used based on TTY and args.

    Rich output is used when the ``--rich`` flag is set, stdout (or
    ``stream``) is a TTY, and Rich is installed.

    Raises
    ------
    DependencyError
        If ``raise_on_missing`` is set and Rich is not installed

    """
    if not getattr(args, "rich", False):
        return False

    if not check_rich_available():
        if raise_on_missing:
            raise DependencyError(
                "rich-output",
                ["rich"],
                message="Rich output requires the optional 'rich' dependency. Install with: pip install orgtasks[rich]",
            )
        return False

    target = stream or sys.stdout
    isatty = getattr(target, "isatty", None)
    return bool(callable(isatty) and isatty())


def _location(entity: Task | Project) -> str:
    return f"{entity.source_path}:{entity.line}" if entity.source_path else str(entity.line)


def entity_row(entity: Task | Project) -> tuple[str, ...]:
    """Return the table cells describing one task or project."""
    if isinstance(entity, Task):
        return (
            "task",
            entity.status,
            entity.priority or "",
            entity.title,
            entity.context,
            str(entity.scheduled) if entity.scheduled else "",
            str(entity.deadline) if entity.deadline else "",
            _location(entity),
        )
    return (
        "project",
        entity.status,
        entity.priority or "",
        entity.title,
        entity.context,
        "",
        "",
        _location(entity),
    )


def _entity_rows(batch: BatchResult) -> list[tuple[str, ...]]:
    return [entity_row(entity) for result in batch.results for entity in result.entities]


def format_summary(batch: BatchResult) -> str:
    """Format one line per file with entity and diagnostic counts."""
    lines = []
    for result in batch.results:
        source = (result.metadata.source_path if result.metadata else "") or "<string>"
        error_count = sum(1 for error in result.errors if error.is_error)
        lines.append(
            f"{source}: {len(result.tasks)} tasks, {len(result.projects)} projects, "
            f"{error_count} errors, {len(result.warnings)} warnings"
        )
    lines.append(
        f"Total: {len(batch.tasks)} tasks, {len(batch.projects)} projects in {len(batch.results)} file(s)"
    )
    return "\n".join(lines)


def format_plain_table(batch: BatchResult) -> str:
    """Format all entities as a fixed-width text table."""
    rows = [TABLE_COLUMNS, *_entity_rows(batch)]
    widths = [max(len(row[index]) for row in rows) for index in range(len(TABLE_COLUMNS))]
    rendered = []
    for position, row in enumerate(rows):
        rendered.append("  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip())
        if position == 0:
            rendered.append("  ".join("-" * width for width in widths))
    return "\n".join(rendered)


def render_rich_table(batch: BatchResult, title: str = "Org Tasks") -> None:
    """Print all entities as a Rich table on stdout."""
    from rich.console import Console
    from rich.table import Table

    table = Table(title=title)
    for column in TABLE_COLUMNS:
        style = {"Title": "white", "Status": "yellow", "Location": "dim"}.get(column, "cyan")
        table.add_column(column, style=style, no_wrap=column != "Title")

    for row in _entity_rows(batch):
        table.add_row(*row)

    Console().print(table)


def format_diagnostics(result: ParseResult) -> list[str]:
    """Return ``path:line:column: severity: message`` lines for a result."""
    source = (result.metadata.source_path if result.metadata else "") or "<string>"
    return [f"{source}:{error}" if error.line else f"{source}: {error}" for error in result.errors]


def print_diagnostics(batch: BatchResult, stream: Optional[IO[str]] = None) -> None:
    """Write every diagnostic of ``batch`` to stderr (or ``stream``)."""
    target = stream or sys.stderr
    for result in batch.results:
        for line in format_diagnostics(result):
            print(line, file=target)


def print_result(batch: BatchResult, output_format: str, use_rich: bool = False) -> None:
    """Print ``batch`` on stdout in the requested format."""
    if output_format == "json":
        print(result_to_json(batch, indent=2))
    elif output_format == "table":
        if use_rich:
            render_rich_table(batch)
        else:
            print(format_plain_table(batch))
    else:
        print(format_summary(batch))
