"""Pytest configuration and shared fixtures for the orgtasks test suite.

This module provides shared fixtures, test configuration, and sample Org
content used across the unit and integration tests.
"""

import os
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Phase, Verbosity, settings

    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=30)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )
    settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
except ImportError:
    # Hypothesis not installed, skip configuration
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


FIXED_NOW = datetime(2025, 1, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now() -> datetime:
    """Provide a fixed parse instant so entity timestamps are deterministic."""
    return FIXED_NOW


@pytest.fixture
def sample_org() -> str:
    """Provide a small but complete Org task file.

    Returns
    -------
    str
        Content with a project, nested tasks, a property drawer, planning
        lines and description text.

    """
    return """#+TITLE: Work inbox
Some preamble prose that belongs to no headline.

* Website redesign
  :PROPERTIES:
  :AREA: marketing
  :STATUS: active
  :END:
  Relaunch before the spring campaign.
** NEXT [#A] Draft wireframes :design:ux:
   SCHEDULED: <2025-01-15 Wed 10:00 +1w>
   :PROPERTIES:
   :EFFORT: 90m
   :COST: 120.50
   :END:
   Start with the landing page.
   Then the pricing page.
** WAITING Copy from legal
   DEADLINE: <2025-01-20 Mon>
** DONE Kickoff meeting
* TODO Renew passport :errand:
  :PROPERTIES:
  :CONTEXT: Home
  :END:
"""


@pytest.fixture
def org_tree(tmp_path: Path) -> Path:
    """Create a directory tree with work and home Org files.

    Returns
    -------
    Path
        Root directory containing ``work/inbox.org``, ``home/chores.org``
        and ``misc/notes.org``

    """
    (tmp_path / "work").mkdir()
    (tmp_path / "home").mkdir()
    (tmp_path / "misc").mkdir()
    (tmp_path / "work" / "inbox.org").write_text("* TODO Send report\n** NEXT Call Bob\n", encoding="utf-8")
    (tmp_path / "home" / "chores.org").write_text("* Garden\n** TODO Mow lawn\n", encoding="utf-8")
    (tmp_path / "misc" / "notes.org").write_text("Just some notes.\n", encoding="utf-8")
    return tmp_path
