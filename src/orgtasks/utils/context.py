#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/orgtasks/utils/context.py
"""Path-based context resolution.

Files kept under a ``work`` directory default to the ``work`` context and
files under a ``home`` directory to ``home``. Only directory segments are
inspected, so ``notes/work.org`` does not count. ``work`` is checked first:
``/home/alice/work/tasks.org`` resolves to ``work``.
"""

from __future__ import annotations

import re

from orgtasks.constants import DEFAULT_CONTEXT, KNOWN_CONTEXTS

_SEPARATORS = re.compile(r"[\\/]+")


def path_segments(source_path: str) -> list[str]:
    """Return the lowercased directory segments of ``source_path``."""
    segments = [segment for segment in _SEPARATORS.split(source_path) if segment]
    return [segment.lower() for segment in segments[:-1]]


def determine_context_from_path(source_path: str, default: str = DEFAULT_CONTEXT) -> str:
    """Infer the default context for a file from its path.

    Parameters
    ----------
    source_path : str
        File path, with ``/`` or ``\\`` separators
    default : str, default "work"
        Context returned when no known segment is present

    Returns
    -------
    str
        ``"work"``, ``"home"`` or ``default`` trimmed and lowercased

    Examples
    --------
        >>> determine_context_from_path("/srv/org/home/groceries.org")
        'home'
        >>> determine_context_from_path("inbox.org", default="home")
        'home'

    """
    segments = set(path_segments(source_path))
    for context in KNOWN_CONTEXTS:
        if context in segments:
            return context
    return default.strip().lower()
