"""Shared test fixtures for mdcompose."""

from __future__ import annotations

from pathlib import Path

import pytest

from mdcompose.compiler.compiler import MarkdownCompiler
from mdcompose.compiler.validator import TemplateValidator
from mdcompose.models.document import Document


def directive(file: str) -> str:
    """An insert directive for *file* in its canonical form."""
    return f'<MarkDownExtension operation="insert" file="{file}" />'


def doc(path: str, content: str = "") -> Document:
    return Document(file_path=path, content=content)


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Create *files* (relative path -> text) under *root* and return *root*."""
    for relative, content in files.items():
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return root


SAMPLE_TREE: dict[str, str] = {
    "title.mdext": "# Title\n" + directive("common.mdsrc"),
    "common.mdsrc": "Shared content.",
    "guides/install.mdext": "# Install\n" + directive("../snippets/steps.mdsrc") + "\nDone.",
    "snippets/steps.mdsrc": "1. Download\n" + directive("common.mdsrc"),
    "README.md": "Plain readme.",
    "notes.txt": "not collected",
}


@pytest.fixture
def compiler() -> MarkdownCompiler:
    return MarkdownCompiler()


@pytest.fixture
def validator() -> TemplateValidator:
    return TemplateValidator()


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    return write_tree(tmp_path / "docs", SAMPLE_TREE)
