#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the entity transformer."""

from datetime import date

import pytest

from orgtasks.model.entities import Project, Task
from orgtasks.model.timestamps import Timestamp
from orgtasks.parsers.org import ParsedEntry
from orgtasks.parsers.transform import EntityTransformer, generate_entity_id, is_project_candidate


def _entry(**kwargs) -> ParsedEntry:
    defaults = {"level": 1, "title": "Entry", "line_num": 1, "ordinal": 0, "context": "work"}
    defaults.update(kwargs)
    return ParsedEntry(**defaults)


@pytest.mark.unit
class TestProjectClassification:
    """Tests for the top-level, keyword-less project rule."""

    def test_top_level_without_keyword_is_project(self):
        assert is_project_candidate(_entry()) is True

    def test_top_level_with_keyword_is_task(self):
        """Test the known ambiguity: a keyword makes a top-level entry a task."""
        assert is_project_candidate(_entry(keyword="TODO", state="not-started")) is False

    def test_nested_without_keyword_is_task(self):
        assert is_project_candidate(_entry(level=2)) is False


@pytest.mark.unit
class TestGenerateEntityId:
    """Tests for derived identifiers."""

    def test_deterministic(self):
        assert generate_entity_id("A", "a.org", 0) == generate_entity_id("A", "a.org", 0)

    def test_inputs_change_identifier(self):
        base = generate_entity_id("A", "a.org", 0)
        assert generate_entity_id("B", "a.org", 0) != base
        assert generate_entity_id("A", "b.org", 0) != base
        assert generate_entity_id("A", "a.org", 1) != base

    def test_length(self):
        assert len(generate_entity_id("A", "a.org", 0)) == 16
        assert len(generate_entity_id("A", "a.org", 0, length=32)) == 32

    def test_hex_digits(self):
        assert all(ch in "0123456789abcdef" for ch in generate_entity_id("A", "", 0))

    def test_task_id_uses_ordinal_not_line(self, fixed_now):
        transformer = EntityTransformer("a.org", fixed_now)
        moved = transformer.to_task(_entry(level=2, title="Draft", ordinal=3, line_num=40))
        original = transformer.to_task(_entry(level=2, title="Draft", ordinal=3, line_num=12))

        assert moved.id == original.id == generate_entity_id("Draft", "a.org", 3)


@pytest.mark.unit
class TestEntityTransformer:
    """Tests for entry-to-entity mapping."""

    def test_transform_splits_tasks_and_projects(self, fixed_now):
        transformer = EntityTransformer("a.org", fixed_now)
        tasks, projects = transformer.transform(
            [_entry(title="P"), _entry(level=2, title="T", line_num=2, ordinal=1)]
        )

        assert [type(p) for p in projects] == [Project]
        assert [type(t) for t in tasks] == [Task]

    def test_task_fields(self, fixed_now):
        scheduled = Timestamp(date(2025, 1, 15))
        entry = _entry(
            level=2,
            keyword="NEXT",
            state="actionable",
            priority="B",
            title="Call Bob",
            tags=["phone"],
            properties={"effort": 0.5, "cost": 10.0, "project": "Sales", "area": "crm"},
            scheduled=scheduled,
            description_lines=["first", "second"],
            line_num=7,
            ordinal=3,
        )
        task = EntityTransformer("work/a.org", fixed_now).to_task(entry)

        assert task.id == generate_entity_id("Call Bob", "work/a.org", 3)
        assert task.status == "actionable"
        assert task.priority == "B"
        assert task.project == "Sales"
        assert task.area == "crm"
        assert task.effort == 0.5
        assert task.cost == 10.0
        assert task.scheduled is scheduled
        assert task.description == "first\nsecond"
        assert task.line == 7
        assert task.created == task.modified == fixed_now
        assert task.completed_at is None
        assert task.is_open is True

    def test_missing_keyword_defaults_to_not_started(self, fixed_now):
        task = EntityTransformer("", fixed_now).to_task(_entry(level=2))
        assert task.status == "not-started"
        assert task.effort == 0.0
        assert task.cost == 0.0

    @pytest.mark.parametrize("state", ["completed", "abandoned"])
    def test_completion_instant_only_for_completed(self, fixed_now, state):
        task = EntityTransformer("", fixed_now).to_task(_entry(level=2, keyword="X", state=state))
        assert (task.completed_at is not None) is (state == "completed")
        assert task.is_completed is (state == "completed")

    def test_project_fields(self, fixed_now):
        entry = _entry(priority="A", tags=["q1"], properties={"area": "ops", "status": "deferred"}, context="home")
        project = EntityTransformer("home/p.org", fixed_now).to_project(entry)

        assert project.status == "deferred"
        assert project.area == "ops"
        assert project.context == "home"
        assert project.priority == "A"

    def test_invalid_project_status_records_warning(self, fixed_now):
        transformer = EntityTransformer("", fixed_now)
        project = transformer.to_project(_entry(properties={"status": "paused"}, raw="* Entry"))

        assert project.status == "active"
        assert len(transformer.errors) == 1
        assert transformer.errors[0].context == "* Entry"


@pytest.mark.unit
class TestProjectAssociation:
    """Tests for linking nested tasks to their enclosing project."""

    def test_nested_task_takes_project_title(self, fixed_now):
        tasks, _ = EntityTransformer("a.org", fixed_now).transform(
            [
                _entry(title="Website"),
                _entry(level=2, title="Draft", ordinal=1, keyword="NEXT", state="actionable"),
                _entry(level=3, title="Sketch", ordinal=2),
            ]
        )
        assert [t.project for t in tasks] == ["Website", "Website"]

    def test_project_property_wins(self, fixed_now):
        tasks, _ = EntityTransformer("a.org", fixed_now).transform(
            [_entry(title="Website"), _entry(level=2, title="Draft", ordinal=1, properties={"project": "Sales"})]
        )
        assert tasks[0].project == "Sales"

    def test_top_level_task_closes_scope(self, fixed_now):
        tasks, _ = EntityTransformer("a.org", fixed_now).transform(
            [
                _entry(title="Website"),
                _entry(title="Renew passport", ordinal=1, keyword="TODO", state="not-started"),
                _entry(level=2, title="Photo", ordinal=2),
            ]
        )
        assert [t.project for t in tasks] == [None, None]

    def test_next_project_replaces_scope(self, fixed_now):
        tasks, _ = EntityTransformer("a.org", fixed_now).transform(
            [
                _entry(title="Website"),
                _entry(level=2, title="Draft", ordinal=1),
                _entry(title="Garden", ordinal=2),
                _entry(level=2, title="Mow lawn", ordinal=3),
            ]
        )
        assert [t.project for t in tasks] == ["Website", "Garden"]

    def test_to_task_without_scope(self, fixed_now):
        assert EntityTransformer("a.org", fixed_now).to_task(_entry(level=2)).project is None
