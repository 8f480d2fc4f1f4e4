"""Path keys, directive path resolution and document classification.

Every lookup key used by the compiler and the validator is produced here, so
both agree on what a directive such as ``file="../shared/intro.mdsrc"`` points
at.  Keys are the final path segment only: two fragments sharing a filename
in different directories map to the same key (see ``SourceIndex.aliases``).
"""

from __future__ import annotations

import posixpath
from enum import StrEnum

TEMPLATE_EXTENSION = ".mdext"
SOURCE_EXTENSION = ".mdsrc"
MARKDOWN_EXTENSION = ".md"

COLLECTED_EXTENSIONS: tuple[str, ...] = (
    MARKDOWN_EXTENSION,
    TEMPLATE_EXTENSION,
    SOURCE_EXTENSION,
)


class DocumentKind(StrEnum):
    TEMPLATE = "template"
    SOURCE = "source"
    PLAIN = "plain"


def _to_posix(path: str) -> str:
    return path.replace("\\", "/")


def normalize_key(path: str | None) -> str:
    """Reduce *path* to its final segment for use as a lookup key.

    Both ``/`` and ``\\`` count as separators on every platform.  Blank
    input and paths ending in a separator yield ``""``.
    """
    if path is None or not path.strip():
        return ""
    return _to_posix(path).rsplit("/", 1)[-1]


def key_of(path: str | None) -> str:
    """Comparable form of a key: case-insensitive, locale-independent."""
    return normalize_key(path).casefold()


def keys_equal(left: str | None, right: str | None) -> bool:
    return key_of(left) == key_of(right)


def resolve_reference(file_ref: str, owner_path: str) -> str:
    """Resolve a directive's ``file`` value relative to the owning document.

    The final segment is kept as written, so ``normalize_key`` of the result
    always equals ``normalize_key(file_ref)``.
    """
    directory = posixpath.dirname(_to_posix(owner_path))
    file_ref = _to_posix(file_ref.strip())
    if not directory:
        return file_ref
    joined = posixpath.join(directory, file_ref)
    if normalize_key(file_ref) in ("", ".", ".."):
        # normpath would drop or fold the final segment
        return joined
    return posixpath.normpath(joined)


def resolve_key(file_ref: str, owner_path: str) -> str:
    """Resolve a directive reference and reduce it to a lookup key."""
    return normalize_key(resolve_reference(file_ref, owner_path))


def has_extension(path: str, extension: str) -> bool:
    return path.lower().endswith(extension)


def classify(path: str) -> DocumentKind | None:
    """Return the role of a document from its extension, or None if not collected."""
    if has_extension(path, TEMPLATE_EXTENSION):
        return DocumentKind.TEMPLATE
    if has_extension(path, SOURCE_EXTENSION):
        return DocumentKind.SOURCE
    if has_extension(path, MARKDOWN_EXTENSION):
        return DocumentKind.PLAIN
    return None


def with_markdown_extension(path: str) -> str:
    """Swap the extension of *path* for ``.md`` (``sub/a.mdext`` -> ``sub/a.md``)."""
    last_sep = max(path.rfind("/"), path.rfind("\\"))
    dot = path.rfind(".")
    if dot > last_sep:
        return path[:dot] + MARKDOWN_EXTENSION
    return path + MARKDOWN_EXTENSION
