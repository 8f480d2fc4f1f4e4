"""Tests for path keys, reference resolution and classification."""

from __future__ import annotations

import pytest

from mdcompose.paths import (
    DocumentKind,
    classify,
    key_of,
    keys_equal,
    normalize_key,
    resolve_key,
    resolve_reference,
    with_markdown_extension,
)


class TestNormalizeKey:
    @pytest.mark.parametrize("value", [None, "", "   ", "\t\n"])
    def test_blank_returns_empty(self, value: str | None) -> None:
        assert normalize_key(value) == ""

    @pytest.mark.parametrize(
        "name", ["file.txt", "document.md", "template.mdext", "source.mdsrc"]
    )
    def test_bare_filename_unchanged(self, name: str) -> None:
        assert normalize_key(name) == name

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("/home/user/documents/file.md", "file.md"),
            ("C:\\Users\\User\\Documents\\file.md", "file.md"),
            ("C:\\Users/User\\Documents/file.md", "file.md"),
            ("subfolder/nested/file.md", "file.md"),
            ("/home/user/My Documents/file-name_v2.final.md", "file-name_v2.final.md"),
            ("/home/user/documents/файл.md", "файл.md"),
        ],
    )
    def test_strips_directories(self, path: str, expected: str) -> None:
        assert normalize_key(path) == expected

    @pytest.mark.parametrize("path", ["/home/user/documents/", "docs\\"])
    def test_trailing_separator_returns_empty(self, path: str) -> None:
        assert normalize_key(path) == ""

    def test_same_name_in_different_directories_aliases(self) -> None:
        assert keys_equal("a/common.mdsrc", "b/common.mdsrc")


class TestKeyComparison:
    def test_case_insensitive(self) -> None:
        assert keys_equal("FILE.MD", "file.md")
        assert keys_equal("Template.MDEXT", "template.mdext")
        assert not keys_equal("different.md", "other.md")

    def test_key_of_folds_case(self) -> None:
        assert key_of("Docs/Common.MDSRC") == "common.mdsrc"


class TestResolveReference:
    def test_template_at_root_keeps_reference(self) -> None:
        assert resolve_reference("common.mdsrc", "title.mdext") == "common.mdsrc"

    def test_joins_template_directory(self) -> None:
        assert resolve_reference("common.mdsrc", "guides/page.mdext") == "guides/common.mdsrc"

    def test_parent_reference_is_normalised(self) -> None:
        resolved = resolve_reference("../shared/common.mdsrc", "guides/page.mdext")
        assert resolved == "shared/common.mdsrc"

    def test_backslashes_are_separators(self) -> None:
        resolved = resolve_reference("..\\shared\\common.mdsrc", "guides\\page.mdext")
        assert resolved == "shared/common.mdsrc"

    def test_resolve_key_reduces_to_filename(self) -> None:
        assert resolve_key(" ../shared/common.mdsrc ", "guides/page.mdext") == "common.mdsrc"

    def test_trailing_separator_kept(self) -> None:
        assert resolve_reference("snippets/", "guides/page.mdext") == "guides/snippets/"
        assert resolve_key("snippets/", "guides/page.mdext") == ""
        assert resolve_key("snippets\\", "guides/page.mdext") == ""

    def test_dot_segments_not_folded_into_directory(self) -> None:
        assert resolve_key("x.mdsrc/..", "guides/page.mdext") == ".."
        assert resolve_key("x.mdsrc/.", "guides/page.mdext") == "."

    @pytest.mark.parametrize(
        "file_ref",
        ["common.mdsrc", "../shared/common.mdsrc", "snippets/", "x.mdsrc/..", "./a.md", "  "],
    )
    @pytest.mark.parametrize("owner", ["page.mdext", "guides/page.mdext", "a/b/c/page.mdext"])
    def test_key_independent_of_template_depth(self, file_ref: str, owner: str) -> None:
        assert resolve_key(file_ref, owner) == normalize_key(file_ref)


class TestClassify:
    @pytest.mark.parametrize(
        ("path", "kind"),
        [
            ("page.mdext", DocumentKind.TEMPLATE),
            ("PAGE.MDEXT", DocumentKind.TEMPLATE),
            ("part.mdsrc", DocumentKind.SOURCE),
            ("README.md", DocumentKind.PLAIN),
            ("notes.txt", None),
            ("archive.md.bak", None),
        ],
    )
    def test_classify(self, path: str, kind: DocumentKind | None) -> None:
        assert classify(path) is kind


class TestWithMarkdownExtension:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("title.mdext", "title.md"),
            ("guides/install.mdext", "guides/install.md"),
            ("v1.2/page.mdext", "v1.2/page.md"),
            ("noext", "noext.md"),
        ],
    )
    def test_rewrites_extension(self, path: str, expected: str) -> None:
        assert with_markdown_extension(path) == expected
