#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/orgtasks/model/serialization.py
"""JSON serialization for parse results.

HTTP endpoints and caches that consume parse results need a plain,
JSON-compatible shape. Timestamps are emitted both in structured form and
as their Org string so consumers can display them without re-formatting.

Examples
--------
    >>> from orgtasks import parse_org_content
    >>> from orgtasks.model.serialization import result_to_json
    >>> import json
    >>> result = parse_org_content("* TODO Call Bob", "work/inbox.org")
    >>> data = json.loads(result_to_json(result, indent=2))
    >>> data["tasks"][0]["title"], data["tasks"][0]["status"], data["metadata"]["context"]
    ('Call Bob', 'not-started', 'work')

"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from orgtasks.model.entities import Project, Task
from orgtasks.model.results import BatchResult, ParseError, ParseMetadata, ParseResult
from orgtasks.model.timestamps import Recurrence, Timestamp


def _serialize_datetime(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _serialize_recurrence(recurrence: Recurrence | None) -> dict[str, Any] | None:
    if recurrence is None:
        return None
    return {
        "amount": recurrence.amount,
        "unit": recurrence.unit,
        "mark": recurrence.mark,
        "string": recurrence.to_org(),
    }


def timestamp_to_dict(stamp: Timestamp | None) -> dict[str, Any] | None:
    """Convert a timestamp to a JSON-compatible dictionary.

    Parameters
    ----------
    stamp : Timestamp or None
        Timestamp to convert

    Returns
    -------
    dict or None
        ``{"date", "time", "end_time", "recurrence", "warning", "string"}``,
        or None when no timestamp is given

    """
    if stamp is None:
        return None
    return {
        "date": stamp.date.isoformat(),
        "time": stamp.time.strftime("%H:%M") if stamp.time else None,
        "end_time": stamp.end_time.strftime("%H:%M") if stamp.end_time else None,
        "recurrence": _serialize_recurrence(stamp.recurrence),
        "warning": stamp.warning,
        "string": stamp.to_org(),
    }


def _serialize_properties(properties: dict[str, Any]) -> dict[str, Any]:
    serialized: dict[str, Any] = {}
    for key, value in properties.items():
        if value is None or isinstance(value, (str, int, float, bool)):
            serialized[key] = value
        else:
            serialized[key] = str(value)
    return serialized


def task_to_dict(task: Task) -> dict[str, Any]:
    """Convert a task to a JSON-compatible dictionary."""
    return {
        "type": "task",
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "status": task.status,
        "priority": task.priority,
        "project": task.project,
        "context": task.context,
        "scheduled": timestamp_to_dict(task.scheduled),
        "scheduled_end": timestamp_to_dict(task.scheduled_end),
        "deadline": timestamp_to_dict(task.deadline),
        "deadline_end": timestamp_to_dict(task.deadline_end),
        "effort": task.effort,
        "cost": task.cost,
        "area": task.area,
        "tags": list(task.tags),
        "properties": _serialize_properties(task.properties),
        "level": task.level,
        "line": task.line,
        "source_path": task.source_path,
        "created": _serialize_datetime(task.created),
        "modified": _serialize_datetime(task.modified),
        "completed_at": _serialize_datetime(task.completed_at),
    }


def project_to_dict(project: Project) -> dict[str, Any]:
    """Convert a project to a JSON-compatible dictionary."""
    return {
        "type": "project",
        "id": project.id,
        "title": project.title,
        "description": project.description,
        "status": project.status,
        "priority": project.priority,
        "context": project.context,
        "area": project.area,
        "tags": list(project.tags),
        "properties": _serialize_properties(project.properties),
        "level": project.level,
        "line": project.line,
        "source_path": project.source_path,
        "created": _serialize_datetime(project.created),
        "modified": _serialize_datetime(project.modified),
    }


def error_to_dict(error: ParseError) -> dict[str, Any]:
    return {
        "type": error.severity.value,
        "message": error.message,
        "line": error.line,
        "column": error.column,
        "context": error.context,
    }


def _serialize_metadata(metadata: ParseMetadata | None) -> dict[str, Any] | None:
    if metadata is None:
        return None
    return {
        "source_path": metadata.source_path,
        "line_count": metadata.line_count,
        "context": metadata.context,
        "parsed_at": _serialize_datetime(metadata.parsed_at),
    }


def result_to_dict(result: ParseResult) -> dict[str, Any]:
    """Convert a parse result to a JSON-compatible dictionary.

    Parameters
    ----------
    result : ParseResult
        Result to convert

    Returns
    -------
    dict
        Dictionary with ``tasks``, ``projects``, ``errors`` and ``metadata`` keys

    """
    return {
        "tasks": [task_to_dict(task) for task in result.tasks],
        "projects": [project_to_dict(project) for project in result.projects],
        "errors": [error_to_dict(error) for error in result.errors],
        "metadata": _serialize_metadata(result.metadata),
    }


def batch_to_dict(batch: BatchResult) -> dict[str, Any]:
    """Convert a batch result to a dictionary keyed by file."""
    return {
        "files": [result_to_dict(result) for result in batch.results],
        "task_count": len(batch.tasks),
        "project_count": len(batch.projects),
        "error_count": sum(1 for diagnostic in batch.errors if diagnostic.error.is_error),
    }


def result_to_json(result: ParseResult | BatchResult, indent: int | None = None) -> str:
    """Serialize a parse or batch result to a JSON string.

    Parameters
    ----------
    result : ParseResult or BatchResult
        Result to serialize
    indent : int or None, default None
        JSON indentation (None for compact output)

    Returns
    -------
    str
        JSON string

    """
    data = batch_to_dict(result) if isinstance(result, BatchResult) else result_to_dict(result)
    return json.dumps(data, indent=indent, ensure_ascii=False)
