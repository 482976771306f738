#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/orgtasks/parsers/transform.py
"""Entity transformer: parsed entries to tasks and projects.

Classification rule: an entry is a project when it is a top-level headline
(level 1) without a recognized state keyword; every other entry is a task.
A top-level headline that has children but also carries a keyword is
therefore a task.
"""

from __future__ import annotations

import hashlib
import logging
from datetime import datetime
from typing import TYPE_CHECKING, Iterable, Optional

from orgtasks.constants import (
    DEFAULT_ID_LENGTH,
    DEFAULT_PROJECT_STATUS,
    DEFAULT_SNIPPET_LENGTH,
    DEFAULT_TASK_STATE,
    PROJECT_STATUSES,
    PROPERTY_AREA,
    PROPERTY_COST,
    PROPERTY_EFFORT,
    PROPERTY_PROJECT,
    PROPERTY_STATUS,
    ProjectStatus,
)
from orgtasks.model.entities import Project, Task
from orgtasks.model.results import ParseError, ParseSeverity

if TYPE_CHECKING:
    from orgtasks.parsers.org import ParsedEntry

logger = logging.getLogger(__name__)

TOP_LEVEL = 1


def generate_entity_id(title: str, source_path: str, ordinal: int, length: int = DEFAULT_ID_LENGTH) -> str:
    """Derive a stable identifier from title, source path and entry ordinal.

    Parameters
    ----------
    title : str
        Entity title
    source_path : str
        Path string the content was read from
    ordinal : int
        Zero-based position of the entry in the file, used to tell apart
        identical titles
    length : int, default 16
        Number of hex digits to keep

    Returns
    -------
    str
        Truncated SHA-256 hex digest

    """
    payload = "\x1f".join((title, source_path, str(ordinal))).encode("utf-8")
    return hashlib.sha256(payload).hexdigest()[:length]


def is_project_candidate(entry: ParsedEntry) -> bool:
    """Return True when ``entry`` should become a :class:`Project`."""
    return entry.level == TOP_LEVEL and entry.keyword is None


def _as_float(value: object) -> float:
    return float(value) if isinstance(value, (int, float)) else 0.0


def _as_text(value: object) -> Optional[str]:
    return value if isinstance(value, str) and value else None


class EntityTransformer:
    """Map parsed entries to final entities.

    Parameters
    ----------
    source_path : str
        Path string used for identifiers and stored on each entity
    now : datetime
        Parse instant stamped onto ``created``/``modified``/``completed_at``
    id_length : int, default 16
        Hex digits kept in identifiers
    snippet_length : int, default 50
        Maximum snippet length for diagnostics

    Attributes
    ----------
    errors : list[ParseError]
        Diagnostics recorded during transformation

    """

    def __init__(
        self,
        source_path: str,
        now: datetime,
        id_length: int = DEFAULT_ID_LENGTH,
        snippet_length: int = DEFAULT_SNIPPET_LENGTH,
    ):
        """Initialize the transformer for one file."""
        self.source_path = source_path
        self.now = now
        self.id_length = id_length
        self.snippet_length = snippet_length
        self.errors: list[ParseError] = []

    def transform(self, entries: Iterable[ParsedEntry]) -> tuple[list[Task], list[Project]]:
        """Split entries into tasks and projects, preserving source order.

        Tasks nested under a project headline are associated with that
        project by title unless they carry their own ``:PROJECT:`` property.
        Any other top-level headline closes the project scope.
        """
        tasks: list[Task] = []
        projects: list[Project] = []
        enclosing: Optional[str] = None
        for entry in entries:
            if is_project_candidate(entry):
                project = self.to_project(entry)
                projects.append(project)
                enclosing = project.title or None
                continue
            if entry.level == TOP_LEVEL:
                enclosing = None
            tasks.append(self.to_task(entry, enclosing))
        logger.debug("Transformed %d tasks and %d projects from %s", len(tasks), len(projects), self.source_path)
        return tasks, projects

    def _entity_id(self, entry: ParsedEntry) -> str:
        return generate_entity_id(entry.title, self.source_path, entry.ordinal, self.id_length)

    def to_task(self, entry: ParsedEntry, enclosing_project: Optional[str] = None) -> Task:
        status = entry.state or DEFAULT_TASK_STATE
        properties = entry.properties
        return Task(
            id=self._entity_id(entry),
            title=entry.title,
            created=self.now,
            modified=self.now,
            status=status,
            priority=entry.priority,
            description=entry.description,
            project=_as_text(properties.get(PROPERTY_PROJECT)) or enclosing_project,
            context=entry.context,
            scheduled=entry.scheduled,
            scheduled_end=entry.scheduled_end,
            deadline=entry.deadline,
            deadline_end=entry.deadline_end,
            effort=_as_float(properties.get(PROPERTY_EFFORT, 0.0)),
            cost=_as_float(properties.get(PROPERTY_COST, 0.0)),
            area=_as_text(properties.get(PROPERTY_AREA)),
            tags=list(entry.tags),
            properties=dict(properties),
            level=entry.level,
            line=entry.line_num,
            source_path=self.source_path,
            completed_at=self.now if status == "completed" else None,
        )

    def to_project(self, entry: ParsedEntry) -> Project:
        return Project(
            id=self._entity_id(entry),
            title=entry.title,
            created=self.now,
            modified=self.now,
            status=self._project_status(entry),
            priority=entry.priority,
            description=entry.description,
            context=entry.context,
            area=_as_text(entry.properties.get(PROPERTY_AREA)),
            tags=list(entry.tags),
            properties=dict(entry.properties),
            level=entry.level,
            line=entry.line_num,
            source_path=self.source_path,
        )

    def _project_status(self, entry: ParsedEntry) -> ProjectStatus:
        raw = entry.properties.get(PROPERTY_STATUS)
        if not isinstance(raw, str) or not raw:
            return DEFAULT_PROJECT_STATUS

        status = raw.strip().lower()
        if status in PROJECT_STATUSES:
            return status  # type: ignore[return-value]

        self.errors.append(
            ParseError.create(
                ParseSeverity.WARNING,
                f"Unknown project status {raw!r}, using '{DEFAULT_PROJECT_STATUS}'",
                line=entry.line_num,
                column=1,
                context=entry.raw,
                max_context=self.snippet_length,
            )
        )
        return DEFAULT_PROJECT_STATUS
