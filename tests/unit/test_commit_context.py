"""
Unit tests for commit message context extraction.
"""

import pytest

from ai_code_reviewer.git.commit_context import extract_commit_context, find_ticket_id, remove_first


class TestExtractCommitContext:
    """Unit tests for extract_commit_context."""

    def test_dashed_two_part_ticket(self):
        context = extract_commit_context("Fix login bug PRJ1234-0235 urgent")
        assert context.ticket_id == "PRJ1234-0235"
        assert context.additional_info == "Fix login bug urgent"

    def test_hash_ticket(self):
        context = extract_commit_context("#42 quick fix")
        assert context.ticket_id == "#42"
        assert context.additional_info == "quick fix"

    def test_no_ticket(self):
        context = extract_commit_context("misc cleanup")
        assert context.ticket_id is None
        assert context.additional_info == "misc cleanup"

    def test_simple_project_ticket(self):
        context = extract_commit_context("PROJ-123: add retry to uploader")
        assert context.ticket_id == "PROJ-123"
        assert context.additional_info == ": add retry to uploader"

    def test_case_insensitive_letters(self):
        assert extract_commit_context("gia-123 tweak").ticket_id == "gia-123"

    def test_ticket_only_message_has_no_additional_info(self):
        context = extract_commit_context("  PROJ-77  ")
        assert context.ticket_id == "PROJ-77"
        assert context.additional_info is None

    @pytest.mark.parametrize("message", ["", "   ", "\n\n", None])
    def test_empty_message(self, message):
        context = extract_commit_context(message)
        assert context.ticket_id is None
        assert context.additional_info is None

    def test_only_first_occurrence_removed(self):
        context = extract_commit_context("PROJ-9 revert PROJ-9 changes")
        assert context.ticket_id == "PROJ-9"
        assert context.additional_info == "revert PROJ-9 changes"

    def test_multiline_message_trimmed(self):
        context = extract_commit_context("Add cache\n\nRefs #17\n")
        assert context.ticket_id == "#17"
        assert context.additional_info == "Add cache\n\nRefs"


class TestTicketPriority:
    """Priority order: dashed two-part, then PROJ-123, then #123."""

    def test_dashed_format_beats_simple_format(self):
        # The simple pattern would match ABC-1 first in the text
        assert find_ticket_id("ABC-1 and PRJ1234-0235") == "PRJ1234-0235"

    def test_simple_format_beats_hash(self):
        assert find_ticket_id("#12 relates to CORE-7") == "CORE-7"

    def test_first_match_of_winning_pattern(self):
        assert find_ticket_id("A-1 then B-2") == "A-1"

    def test_no_match(self):
        assert find_ticket_id("nothing to see") is None


class TestRemoveFirst:
    """Unit tests for remove_first."""

    def test_collapses_whitespace_at_removal_point(self):
        assert remove_first("a   X   b", "X") == "a b"

    def test_fragment_at_start(self):
        assert remove_first("X rest", "X") == "rest"

    def test_fragment_at_end(self):
        assert remove_first("rest X", "X") == "rest"

    def test_missing_fragment(self):
        assert remove_first("  rest  ", "X") == "rest"
