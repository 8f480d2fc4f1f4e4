"""Case-insensitive index of insertable document contents."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from mdcompose.models.document import Document
from mdcompose.paths import key_of, normalize_key


@dataclass
class _Entry:
    key: str
    path: str
    content: str


@dataclass
class SourceIndex(Mapping[str, str]):
    """Maps lookup keys to source contents for directive resolution.

    Keys are compared case-insensitively.  When two documents reduce to the
    same key the later one wins; every path seen for a key is kept in
    :attr:`aliases` so callers can report the collision.
    """

    _entries: dict[str, _Entry] = field(default_factory=dict)
    _paths: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def from_documents(cls, documents: Iterable[Document]) -> SourceIndex:
        index = cls()
        for doc in documents:
            index.add(doc.file_path, doc.content)
        return index

    @classmethod
    def from_mapping(cls, sources: Mapping[str, str]) -> SourceIndex:
        if isinstance(sources, SourceIndex):
            return sources
        index = cls()
        for path, content in sources.items():
            index.add(path, content)
        return index

    def add(self, path: str, content: str) -> None:
        key = normalize_key(path)
        folded = key.casefold()
        self._paths.setdefault(folded, []).append(path)
        self._entries[folded] = _Entry(key=key, path=path, content=content)

    def path_of(self, key: str) -> str | None:
        entry = self._entries.get(key_of(key))
        return entry.path if entry else None

    def aliases(self, key: str) -> list[str]:
        """All document paths that reduce to *key* (more than one means ambiguity)."""
        return list(self._paths.get(key_of(key), []))

    def __getitem__(self, key: str) -> str:
        return self._entries[key_of(key)].content

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key_of(key) in self._entries

    def __iter__(self) -> Iterator[str]:
        return (entry.key for entry in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)
