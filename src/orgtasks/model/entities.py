#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/orgtasks/model/entities.py
"""Task and project records produced by the parser.

Projects do not embed their tasks. A task names its project through the
``project`` field (taken from a ``:PROJECT:`` property); grouping tasks under
projects is left to the consuming layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from orgtasks.constants import DEFAULT_PROJECT_STATUS, DEFAULT_TASK_STATE, Priority, ProjectStatus, TaskState
from orgtasks.model.timestamps import Recurrence, Timestamp


@dataclass
class Task:
    """An actionable item parsed from a headline.

    Parameters
    ----------
    id : str
        Stable identifier derived from title, source path and entry ordinal
    title : str
        Headline title without keyword, priority cookie or tags
    created : datetime
        Parse instant
    modified : datetime
        Parse instant
    status : TaskState, default "not-started"
        Lifecycle state mapped from the headline keyword
    priority : Priority or None, default None
        ``"A"``, ``"B"`` or ``"C"``; ``None`` when no cookie is present
    context : str, default "work"
        Explicit ``:CONTEXT:`` property, else the path-derived default
    project : str or None, default None
        ``:PROJECT:`` property, else the title of the enclosing project headline
    effort : float, default 0.0
        Estimated effort in hours
    cost : float, default 0.0
        Estimated cost
    completed_at : datetime or None
        Parse instant when ``status == "completed"``, otherwise ``None``

    """

    id: str
    title: str
    created: datetime
    modified: datetime
    status: TaskState = DEFAULT_TASK_STATE
    priority: Optional[Priority] = None
    description: Optional[str] = None
    project: Optional[str] = None
    context: str = "work"
    scheduled: Optional[Timestamp] = None
    scheduled_end: Optional[Timestamp] = None
    deadline: Optional[Timestamp] = None
    deadline_end: Optional[Timestamp] = None
    effort: float = 0.0
    cost: float = 0.0
    area: Optional[str] = None
    tags: list[str] = field(default_factory=list)
    properties: dict[str, Any] = field(default_factory=dict)
    level: int = 1
    line: int = 0
    source_path: str = ""
    completed_at: Optional[datetime] = None

    @property
    def is_completed(self) -> bool:
        return self.status == "completed"

    @property
    def is_open(self) -> bool:
        """Whether the task still needs attention (not completed or abandoned)."""
        return self.status not in ("completed", "abandoned")

    @property
    def recurrence(self) -> Optional[Recurrence]:
        """Repeater of the scheduled timestamp, falling back to the deadline's."""
        for stamp in (self.scheduled, self.deadline):
            if stamp is not None and stamp.recurrence is not None:
                return stamp.recurrence
        return None


@dataclass
class Project:
    """A top-level headline without a state keyword.

    Parameters
    ----------
    id : str
        Stable identifier derived from title, source path and entry ordinal
    title : str
        Headline title
    created : datetime
        Parse instant
    modified : datetime
        Parse instant
    status : ProjectStatus, default "active"
        ``:STATUS:`` property when it names a known status, else ``"active"``

    """

    id: str
    title: str
    created: datetime
    modified: datetime
    status: ProjectStatus = DEFAULT_PROJECT_STATUS
    priority: Optional[Priority] = None
    description: Optional[str] = None
    context: str = "work"
    area: Optional[str] = None
    tags: list[str] = field(default_factory=list)
    properties: dict[str, Any] = field(default_factory=dict)
    level: int = 1
    line: int = 0
    source_path: str = ""
