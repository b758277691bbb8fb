"""Tests for merge conflict detection, extraction and resolution."""

import pytest

from yarn_lockfile.config import ParserSettings
from yarn_lockfile.core import parse, parse_or_raise
from yarn_lockfile.errors import ConflictStructureError, ScanError
from yarn_lockfile.outcome import ParseStatus
from yarn_lockfile.parsers.conflicts import (
    extract_conflict_variants,
    has_merge_conflict,
    merge_comments,
)

STRICT = ParserSettings(yaml_fallback=False)

EXPECTED_MERGE = {
    "a": {"no": "yes"},
    "b": {"foo": "bar"},
    "c": {"bar": "foo"},
    "d": {"yes": "no"},
}


class TestDetection:
    """Tests for has_merge_conflict."""

    def test_all_markers_present(self, read_lockfile):
        assert has_merge_conflict(read_lockfile("conflict.lock"))

    @pytest.mark.parametrize(
        "text",
        [
            "foo bar\n",
            "<<<<<<< HEAD\nfoo 1\n=======\nfoo 2\n",
            "<<<<<<< HEAD\nfoo 1\n>>>>>>> branch\n",
        ],
    )
    def test_missing_marker(self, text):
        assert not has_merge_conflict(text)


class TestExtraction:
    """Tests for extract_conflict_variants."""

    def test_two_way_conflict(self, read_lockfile):
        ours, theirs = extract_conflict_variants(read_lockfile("conflict.lock"))
        assert ours == 'a:\n  no "yes"\nb:\n  foo "bar"\nd:\n  yes "no"\n'
        assert theirs == 'a:\n  no "yes"\nc:\n  bar "foo"\nd:\n  yes "no"\n'

    def test_ancestor_section_is_dropped(self, read_lockfile):
        ours, theirs = extract_conflict_variants(read_lockfile("conflict_ancestor.lock"))
        assert "ancestor" not in ours
        assert "ancestor" not in theirs
        assert 'b:\n  foo "bar"\nd:' in ours

    def test_crlf_lines_are_rejoined_with_lf(self):
        text = "a 1\r\n<<<<<<< HEAD\r\nb 2\r\n=======\r\nc 3\r\n>>>>>>> x\r\nd 4\r\n"
        ours, theirs = extract_conflict_variants(text)
        assert ours == "a 1\nb 2\nd 4\n"
        assert theirs == "a 1\nc 3\nd 4\n"

    def test_only_first_region_is_extracted(self):
        text = (
            "<<<<<<< HEAD\na 1\n=======\na 2\n>>>>>>> x\n"
            "<<<<<<< HEAD\nb 1\n=======\nb 2\n>>>>>>> x\n"
        )
        ours, _ = extract_conflict_variants(text)
        assert ours.startswith("a 1\n<<<<<<< HEAD\n")

    def test_missing_start_line(self):
        text = 'a "<<<<<<<"\n=======\n>>>>>>> x\n'
        with pytest.raises(ConflictStructureError, match="start marker"):
            extract_conflict_variants(text)

    def test_missing_separator_line(self):
        text = '<<<<<<< HEAD\na 1\n>>>>>>> x\nc "======="\n'
        with pytest.raises(ConflictStructureError, match="no separator") as excinfo:
            extract_conflict_variants(text)
        assert excinfo.value.variant is None

    def test_missing_end_line(self):
        text = '<<<<<<< HEAD\na 1\n=======\nb 2\nc ">>>>>>>"\n'
        with pytest.raises(ConflictStructureError, match="no end marker"):
            extract_conflict_variants(text)


class TestResolution:
    """Tests for parsing lockfiles that hold merge conflicts."""

    def test_two_way_merge(self, read_lockfile):
        outcome = parse_or_raise(read_lockfile("conflict.lock"), settings=STRICT)
        assert outcome.status is ParseStatus.MERGE
        assert outcome.merged
        assert outcome.mapping == EXPECTED_MERGE

    def test_three_way_merge_ignores_ancestor(self, read_lockfile):
        outcome = parse_or_raise(read_lockfile("conflict_ancestor.lock"), settings=STRICT)
        assert outcome.mapping == EXPECTED_MERGE
        assert "e" not in outcome.mapping

    def test_second_variant_wins_shallow(self):
        text = (
            "a:\n"
            "<<<<<<< HEAD\n"
            "  x 1\n"
            "  y 1\n"
            "=======\n"
            "  x 2\n"
            ">>>>>>> branch\n"
        )
        outcome = parse_or_raise(text, settings=STRICT)
        assert outcome.mapping == {"a": {"x": 2}}

    def test_several_conflict_regions(self):
        text = (
            "<<<<<<< HEAD\na 1\n=======\nb 2\n>>>>>>> x\n"
            "common 0\n"
            "<<<<<<< HEAD\nc 3\n=======\nd 4\n>>>>>>> x\n"
        )
        outcome = parse_or_raise(text, settings=STRICT)
        assert outcome.status is ParseStatus.MERGE
        assert outcome.mapping == {"a": 1, "b": 2, "c": 3, "d": 4, "common": 0}

    def test_comments_are_merged_without_duplicates(self):
        text = (
            "# yarn lockfile v1\n"
            "<<<<<<< HEAD\n"
            "# ours\n"
            "a 1\n"
            "=======\n"
            "# theirs\n"
            "a 2\n"
            ">>>>>>> branch\n"
        )
        outcome = parse_or_raise(text, settings=STRICT)
        assert outcome.mapping == {"a": 2}
        assert outcome.comments == [" yarn lockfile v1", " ours", " theirs"]

    def test_variant_failure_is_a_conflict_error(self):
        text = "<<<<<<< HEAD\na:\n   b 1\n=======\na 2\n>>>>>>> x\n"
        with pytest.raises(ConflictStructureError) as excinfo:
            parse_or_raise(text, settings=STRICT)
        assert excinfo.value.variant == 1
        assert isinstance(excinfo.value.__cause__, ScanError)

    def test_unterminated_string_in_variant(self):
        text = '<<<<<<< HEAD\na "1\n=======\na "2"\n>>>>>>> x\n'
        outcome = parse(text, settings=STRICT)
        assert outcome.status is ParseStatus.ERROR
        assert isinstance(outcome.error, ConflictStructureError)
        assert outcome.error.variant == 1

    def test_malformed_markers_are_returned_as_error(self):
        outcome = parse('<<<<<<< HEAD\na 1\n>>>>>>> x\nc "======="\n', settings=STRICT)
        assert not outcome.ok
        assert isinstance(outcome.error, ConflictStructureError)


class TestMergeComments:
    """Tests for merge_comments."""

    def test_keeps_first_seen_order(self):
        assert merge_comments([" a", " b"], [" b", " c", " a"]) == [" a", " b", " c"]
