#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/orgtasks/model/results.py
"""Parse diagnostics and result containers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Union

from orgtasks.constants import DEFAULT_SNIPPET_LENGTH
from orgtasks.model.entities import Project, Task


class ParseSeverity(str, Enum):
    """Severity levels for parse diagnostics."""

    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class ParseError:
    """A diagnostic recorded while parsing.

    This is a plain record, not an exception: the parser appends it to
    ``ParseResult.errors`` and keeps going.

    Parameters
    ----------
    severity : ParseSeverity
        ``WARNING`` for recoverable oddities, ``ERROR`` for content that
        could not be attached to any entity or for a fatal internal failure
    message : str
        Human-readable description
    line : int
        1-based line number, 0 when not tied to a line
    column : int
        1-based column number, 0 when not tied to a line
    context : str
        Short snippet of the offending source text

    """

    severity: ParseSeverity
    message: str
    line: int = 0
    column: int = 0
    context: str = ""

    @classmethod
    def create(
        cls,
        severity: ParseSeverity,
        message: str,
        line: int = 0,
        column: int = 0,
        context: str = "",
        max_context: int = DEFAULT_SNIPPET_LENGTH,
    ) -> ParseError:
        """Build a diagnostic, trimming the snippet to ``max_context`` characters."""
        return cls(severity, message, line, column, context.strip()[:max_context])

    @property
    def is_error(self) -> bool:
        return self.severity is ParseSeverity.ERROR

    def __str__(self) -> str:
        location = f"{self.line}:{self.column}: " if self.line else ""
        return f"{location}{self.severity.value}: {self.message}"


@dataclass
class ParseMetadata:
    """Information about one parse invocation.

    Parameters
    ----------
    source_path : str
        Path string supplied by the caller
    line_count : int
        Number of lines in the input
    context : str
        Default context resolved for the file (before property overrides)
    parsed_at : datetime
        Instant stamped onto created entities

    """

    source_path: str
    line_count: int
    context: str
    parsed_at: datetime


@dataclass
class ParseResult:
    """Complete output of one parse invocation.

    ``fatal`` is set when the parser failed internally; such a result holds
    no entities and exactly one ``ERROR`` diagnostic.
    """

    tasks: list[Task] = field(default_factory=list)
    projects: list[Project] = field(default_factory=list)
    errors: list[ParseError] = field(default_factory=list)
    metadata: ParseMetadata | None = None
    fatal: bool = False

    @property
    def warnings(self) -> list[ParseError]:
        return [e for e in self.errors if e.severity is ParseSeverity.WARNING]

    @property
    def has_errors(self) -> bool:
        """Whether any diagnostic has ``ERROR`` severity."""
        return any(e.is_error for e in self.errors)

    @property
    def entities(self) -> list[Union[Task, Project]]:
        """Tasks and projects together, in source order."""
        combined: list[Union[Task, Project]] = [*self.projects, *self.tasks]
        return sorted(combined, key=lambda entity: entity.line)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-compatible dictionary (see :func:`orgtasks.model.serialization.result_to_dict`)."""
        from orgtasks.model.serialization import result_to_dict

        return result_to_dict(self)


@dataclass
class FileDiagnostic:
    """A diagnostic tagged with the file it came from."""

    source_path: str
    error: ParseError


@dataclass
class BatchResult:
    """Merged output of parsing several files.

    ``results`` keeps one ``ParseResult`` per input in input order; the
    flattened lists are provided for consumers that do not care which
    file an entity came from.
    """

    results: list[ParseResult] = field(default_factory=list)

    @property
    def tasks(self) -> list[Task]:
        return [task for result in self.results for task in result.tasks]

    @property
    def projects(self) -> list[Project]:
        return [project for result in self.results for project in result.projects]

    @property
    def errors(self) -> list[FileDiagnostic]:
        diagnostics = []
        for result in self.results:
            source = result.metadata.source_path if result.metadata else ""
            diagnostics.extend(FileDiagnostic(source, error) for error in result.errors)
        return diagnostics

    @property
    def has_errors(self) -> bool:
        return any(result.has_errors for result in self.results)
