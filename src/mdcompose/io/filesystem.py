"""Disk access used by the collector; swappable for tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class FileSystem(Protocol):
    def list_files(self, root: Path) -> Iterator[Path]: ...

    def read_text(self, path: Path) -> str: ...


class LocalFileSystem:
    """Reads UTF-8 files from the local disk."""

    def list_files(self, root: Path) -> Iterator[Path]:
        """Yield every file below *root*, recursively.

        Failing to list *root* itself propagates; unreadable subdirectories
        are logged and skipped.
        """

        def _on_error(exc: OSError) -> None:
            if exc.filename is not None and Path(exc.filename) == root:
                raise exc
            logger.warning("Skipping unreadable directory %s: %s", exc.filename, exc.strerror)

        # os.walk swallows a failing top-level scandir unless onerror re-raises
        for dirpath, _dirnames, filenames in os.walk(root, onerror=_on_error):
            for name in filenames:
                yield Path(dirpath) / name

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")
