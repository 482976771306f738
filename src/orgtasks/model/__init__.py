#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Record types returned by the orgtasks parser."""

from orgtasks.model.entities import Project, Task
from orgtasks.model.results import (
    BatchResult,
    FileDiagnostic,
    ParseError,
    ParseMetadata,
    ParseResult,
    ParseSeverity,
)
from orgtasks.model.timestamps import Recurrence, Timestamp

__all__ = [
    "BatchResult",
    "FileDiagnostic",
    "ParseError",
    "ParseMetadata",
    "ParseResult",
    "ParseSeverity",
    "Project",
    "Recurrence",
    "Task",
    "Timestamp",
]
