#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/orgtasks/progress.py
"""Progress callbacks for batch parsing.

``parse_org_files`` reports per-file progress through a callback so that
embedders (a file watcher, a web endpoint refreshing a dashboard) can show
which files have been processed.

Examples
--------
    >>> from orgtasks import parse_org_files
    >>> events = []
    >>> batch = parse_org_files([("work/inbox.org", "* TODO Call Bob")], progress_callback=events.append)
    >>> [event.event_type for event in events]
    ['started', 'item_done', 'finished']
    >>> events[-1].current, events[-1].total
    (1, 1)

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Literal, Optional

logger = logging.getLogger(__name__)

EventType = Literal["started", "item_done", "error", "finished"]


@dataclass
class ProgressEvent:
    """Progress event emitted while a batch of files is parsed.

    Parameters
    ----------
    event_type : EventType
        - "started": the batch has begun; ``total`` is the file count
        - "item_done": one file was parsed; ``metadata["source_path"]`` names it
        - "error": a file could not be read or parsed; ``metadata["error"]`` holds the reason
        - "finished": every file has been processed
    message : str
        Human-readable description of the event
    current : int, default 0
        Number of files processed so far
    total : int, default 0
        Number of files in the batch
    metadata : dict, default empty
        Additional event-specific information

    """

    event_type: EventType
    message: str
    current: int = 0
    total: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Return human-readable string representation."""
        progress = f"({self.current}/{self.total})" if self.total > 0 else ""
        return f"[{self.event_type.upper()}] {self.message} {progress}".strip()


ProgressCallback = Callable[[ProgressEvent], None]
"""Type alias for progress callback functions.

Callbacks should not raise; exceptions they do raise are logged and ignored.
"""


def emit_progress(
    callback: Optional[ProgressCallback],
    event_type: EventType,
    message: str,
    current: int = 0,
    total: int = 0,
    **metadata: Any,
) -> None:
    """Send a progress event to ``callback`` if one is registered."""
    if callback is None:
        return
    event = ProgressEvent(event_type=event_type, message=message, current=current, total=total, metadata=metadata)
    try:
        callback(event)
    except Exception as exc:
        logger.warning("Progress callback failed on %s event: %s", event_type, exc)
