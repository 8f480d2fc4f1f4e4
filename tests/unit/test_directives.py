"""Tests for directive scanning."""

from __future__ import annotations

import pytest

from mdcompose.parser.directives import (
    INVALID_OPERATION,
    MALFORMED,
    MISSING_FILE,
    MISSING_OPERATION,
    describe_malformed,
    find_directive_like_tags,
    find_malformed_tags,
    find_valid_directives,
)
from tests.conftest import directive


class TestFindValidDirectives:
    def test_finds_canonical_directive(self) -> None:
        found = find_valid_directives("# Title\n" + directive("common.mdsrc"))
        assert len(found) == 1
        assert found[0].full_match == directive("common.mdsrc")
        assert found[0].file_path == "common.mdsrc"

    def test_case_insensitive_tag_and_attributes(self) -> None:
        text = '<markdownextension OPERATION="INSERT" FILE="a.mdsrc"/>'
        found = find_valid_directives(text)
        assert [d.file_path for d in found] == ["a.mdsrc"]

    def test_flexible_whitespace(self) -> None:
        text = '<MarkDownExtension   operation="insert"\tfile="a.mdsrc"   />'
        assert len(find_valid_directives(text)) == 1

    def test_file_value_is_trimmed(self) -> None:
        found = find_valid_directives(directive("  spaced.mdsrc  "))
        assert found[0].file_path == "spaced.mdsrc"

    def test_empty_file_value_still_matches(self) -> None:
        found = find_valid_directives(directive(""))
        assert found[0].file_path == ""

    def test_multiple_in_order(self) -> None:
        text = f"{directive('one.mdsrc')} and {directive('two.mdsrc')}"
        assert [d.file_path for d in find_valid_directives(text)] == ["one.mdsrc", "two.mdsrc"]

    def test_attribute_order_is_fixed(self) -> None:
        text = '<MarkDownExtension file="a.mdsrc" operation="insert" />'
        assert find_valid_directives(text) == []

    def test_plain_text_has_no_directives(self) -> None:
        assert find_valid_directives("# Heading\n\nSome <b>html</b>.") == []


class TestMalformedTags:
    def test_valid_directive_is_not_malformed(self) -> None:
        assert find_malformed_tags(directive("a.mdsrc")) == []

    def test_loose_match_includes_valid_ones(self) -> None:
        text = f"{directive('a.mdsrc')} <MarkDownExtension file=\"b.mdsrc\" />"
        assert len(find_directive_like_tags(text)) == 2
        assert find_malformed_tags(text) == ['<MarkDownExtension file="b.mdsrc" />']


class TestDescribeMalformed:
    @pytest.mark.parametrize(
        ("tag", "message"),
        [
            ('<MarkDownExtension file="x.mdsrc" />', MISSING_OPERATION),
            ('<MarkDownExtension operation="delete" file="x.mdsrc" />', INVALID_OPERATION),
            ('<MarkDownExtension operation="insert" />', MISSING_FILE),
            ('<MarkDownExtension operation="insert" file="x.mdsrc">', MALFORMED),
            ('<MarkDownExtension file="x.mdsrc" operation="insert" />', MALFORMED),
        ],
    )
    def test_priority(self, tag: str, message: str) -> None:
        assert describe_malformed(tag) == message

    def test_missing_operation_wins_over_missing_file(self) -> None:
        assert describe_malformed("<MarkDownExtension />") == MISSING_OPERATION
