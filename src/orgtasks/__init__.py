"""orgtasks - parse Org-mode task files into tasks and projects.

orgtasks reads the Org outline format used by Emacs (headlines marked with
stars, state keywords such as TODO or DONE, priority cookies, trailing tags,
property drawers and SCHEDULED/DEADLINE planning lines) and produces typed
``Task`` and ``Project`` records together with line-accurate diagnostics.

Parsing never raises for malformed content: problems are collected in
``ParseResult.errors`` and the parser keeps going.

Requirements
------------
- Python 3.10+
- PyYAML for YAML configuration files; ``rich`` and ``chardet`` are optional

Examples
--------
Parse a string:

    >>> from orgtasks import parse_org_content
    >>> result = parse_org_content('''* Website redesign
    ... ** NEXT [#A] Draft wireframes :design:
    ...    SCHEDULED: <2025-01-15 Wed 10:00 +1w>
    ...    :PROPERTIES:
    ...    :EFFORT: 90m
    ...    :END:
    ... ''', "work/projects.org")
    >>> [p.title for p in result.projects]
    ['Website redesign']
    >>> task = result.tasks[0]
    >>> task.status, task.effort, str(task.recurrence)
    ('actionable', 1.5, '+1w')

Parse many files in parallel:

    >>> from orgtasks import parse_org_files
    >>> batch = parse_org_files(["work/inbox.org", "home/chores.org"], max_workers=4)

See Also
--------
orgtasks.options : parser configuration
orgtasks.model.serialization : JSON conversion of results

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "orgtasks requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from orgtasks.api import parse_org_content, parse_org_file, parse_org_files
from orgtasks.exceptions import (
    ConfigError,
    FileAccessError,
    FileError,
    InvalidOptionsError,
    OrgTasksError,
    ParsingError,
    ValidationError,
)
from orgtasks.model import (
    BatchResult,
    ParseError,
    ParseMetadata,
    ParseResult,
    ParseSeverity,
    Project,
    Recurrence,
    Task,
    Timestamp,
)
from orgtasks.model.serialization import result_to_dict, result_to_json
from orgtasks.options import OrgTaskParserOptions
from orgtasks.parsers.org import OrgTaskParser
from orgtasks.progress import ProgressCallback, ProgressEvent
from orgtasks.utils.context import determine_context_from_path

__all__ = [
    "__version__",
    "parse_org_content",
    "parse_org_file",
    "parse_org_files",
    "determine_context_from_path",
    "result_to_dict",
    "result_to_json",
    "OrgTaskParser",
    "OrgTaskParserOptions",
    "BatchResult",
    "ParseError",
    "ParseMetadata",
    "ParseResult",
    "ParseSeverity",
    "Project",
    "Recurrence",
    "Task",
    "Timestamp",
    "ProgressCallback",
    "ProgressEvent",
    "OrgTasksError",
    "ValidationError",
    "InvalidOptionsError",
    "FileError",
    "FileAccessError",
    "ParsingError",
    "ConfigError",
]
