"""Integration tests for the file-level orgtasks API."""

from unittest.mock import patch

import pytest

from orgtasks import (
    OrgTaskParserOptions,
    ParseSeverity,
    ParsingError,
    parse_org_file,
    parse_org_files,
)
from orgtasks.exceptions import FileNotFoundError


@pytest.mark.integration
class TestParseOrgFile:
    """Tests for parsing single files from disk."""

    def test_context_from_directory(self, org_tree, fixed_now):
        result = parse_org_file(org_tree / "home" / "chores.org", now=fixed_now)

        assert result.metadata.context == "home"
        assert [p.title for p in result.projects] == ["Garden"]
        assert result.tasks[0].context == "home"
        assert result.tasks[0].project == "Garden"
        assert result.tasks[0].created == fixed_now

    def test_notes_without_headlines(self, org_tree):
        result = parse_org_file(org_tree / "misc" / "notes.org")

        assert result.tasks == []
        assert result.projects == []
        assert result.errors == []

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_org_file(tmp_path / "missing.org")

    def test_raise_on_fatal(self, org_tree):
        path = org_tree / "work" / "inbox.org"
        with patch("orgtasks.parsers.org.EntityTransformer.transform", side_effect=RuntimeError("boom")):
            assert parse_org_file(path).fatal is True
            with pytest.raises(ParsingError, match="boom"):
                parse_org_file(path, raise_on_fatal=True)


@pytest.mark.integration
class TestParseOrgFiles:
    """Tests for batch parsing."""

    @pytest.mark.parametrize("max_workers", [1, 4])
    def test_input_order_kept(self, org_tree, max_workers):
        paths = [org_tree / "misc" / "notes.org", org_tree / "work" / "inbox.org", org_tree / "home" / "chores.org"]
        batch = parse_org_files(paths, max_workers=max_workers)

        assert [r.metadata.source_path for r in batch.results] == [str(p) for p in paths]
        assert [r.metadata.context for r in batch.results] == ["work", "work", "home"]
        assert sorted(t.title for t in batch.tasks) == ["Call Bob", "Mow lawn", "Send report"]

    def test_missing_file_isolated(self, org_tree):
        batch = parse_org_files([org_tree / "nope.org", org_tree / "work" / "inbox.org"])

        missing, inbox = batch.results
        assert missing.metadata.line_count == 0
        assert len(missing.errors) == 1
        assert missing.errors[0].severity is ParseSeverity.ERROR
        assert len(inbox.tasks) == 2
        assert batch.has_errors

    def test_content_pairs_and_options(self):
        options = OrgTaskParserOptions(context_override="Errands")
        batch = parse_org_files([("work/a.org", "* TODO A\n"), ("home/b.org", "* TODO B\n")], options)

        assert [t.context for t in batch.tasks] == ["errands", "errands"]

    def test_identifiers_distinct_across_files(self):
        batch = parse_org_files([("a.org", "* TODO Same\n"), ("b.org", "* TODO Same\n")])
        first, second = batch.tasks
        assert first.id != second.id

    def test_progress_events(self, org_tree):
        events = []
        paths = [org_tree / "work" / "inbox.org", org_tree / "missing.org"]
        parse_org_files(paths, max_workers=1, progress_callback=events.append)

        kinds = [e.event_type for e in events]
        assert kinds == ["started", "item_done", "error", "item_done", "finished"]
        assert events[0].total == 2
        assert events[2].metadata["source_path"] == str(paths[1])
        assert events[-1].current == 2

    def test_empty_batch(self):
        batch = parse_org_files([])
        assert batch.results == []
        assert batch.has_errors is False
