"""Markdown document value type and role partitioning."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from mdcompose.paths import DocumentKind, classify, normalize_key, with_markdown_extension


class Document(BaseModel):
    """A markdown file: its name, path relative to the collection root, and text."""

    model_config = ConfigDict(frozen=True)

    file_name: str = ""
    file_path: str
    content: str = ""

    @model_validator(mode="before")
    @classmethod
    def _default_file_name(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("file_name") and data.get("file_path"):
            data = {**data, "file_name": normalize_key(data["file_path"])}
        return data

    @property
    def kind(self) -> DocumentKind | None:
        return classify(self.file_name or self.file_path)

    def as_markdown(self, content: str | None = None) -> Document:
        """Copy with ``.md`` extension on name and path, optionally new content."""
        return Document(
            file_name=with_markdown_extension(self.file_name),
            file_path=with_markdown_extension(self.file_path),
            content=self.content if content is None else content,
        )


@dataclass
class DocumentSet:
    """Documents grouped by role; each document is classified exactly once."""

    templates: list[Document] = field(default_factory=list)
    sources: list[Document] = field(default_factory=list)
    plain: list[Document] = field(default_factory=list)

    @property
    def insertable(self) -> list[Document]:
        """Everything a directive may point at: fragments, plain files and templates."""
        return [*self.sources, *self.plain, *self.templates]


def partition(documents: Iterable[Document]) -> DocumentSet:
    if documents is None:
        raise TypeError("documents must not be None")
    result = DocumentSet()
    for doc in documents:
        kind = doc.kind
        if kind is DocumentKind.TEMPLATE:
            result.templates.append(doc)
        elif kind is DocumentKind.SOURCE:
            result.sources.append(doc)
        elif kind is DocumentKind.PLAIN:
            result.plain.append(doc)
    return result
