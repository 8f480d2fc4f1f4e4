"""Collects markdown documents from a directory tree with bounded concurrency."""

from __future__ import annotations

import asyncio
import logging
import os
from collections import Counter
from pathlib import Path

from mdcompose.errors import CollectionCancelledError
from mdcompose.io.filesystem import FileSystem, LocalFileSystem
from mdcompose.models.document import Document
from mdcompose.paths import COLLECTED_EXTENSIONS, DocumentKind, has_extension

logger = logging.getLogger(__name__)


def default_concurrency() -> int:
    return os.cpu_count() or 1


class DocumentCollector:
    """Reads every ``.md``, ``.mdext`` and ``.mdsrc`` file below a root directory.

    Reads run in worker threads, at most ``max_concurrency`` at a time
    (default: the logical processor count).  A file that cannot be read
    becomes a document with empty content rather than failing the batch.
    The returned list is in completion order, not enumeration order.
    """

    def __init__(
        self,
        filesystem: FileSystem | None = None,
        max_concurrency: int | None = None,
    ) -> None:
        if max_concurrency is not None and max_concurrency < 1:
            raise ValueError(f"max_concurrency must be positive, got {max_concurrency}")
        self._fs = filesystem or LocalFileSystem()
        self._max_concurrency = max_concurrency or default_concurrency()

    @property
    def max_concurrency(self) -> int:
        return self._max_concurrency

    async def collect(
        self,
        root: str | Path,
        cancel_event: asyncio.Event | None = None,
    ) -> list[Document]:
        """Collect all markdown documents below *root*.

        Raises ``ValueError`` for a blank root and ``FileNotFoundError`` if it
        is not an existing directory.  If *cancel_event* is set while reads
        are being scheduled, reads already in flight are awaited and
        ``CollectionCancelledError`` is raised.
        """
        root_path = self._check_root(root)
        logger.debug(
            "Collecting markdown files (%s) from directory: %s",
            ", ".join(COLLECTED_EXTENSIONS), root_path,
        )

        semaphore = asyncio.Semaphore(self._max_concurrency)
        tasks: list[asyncio.Task[Document]] = []
        cancelled = False
        try:
            for path in self._fs.list_files(root_path):
                if not any(has_extension(path.name, ext) for ext in COLLECTED_EXTENSIONS):
                    continue
                if cancel_event is not None and cancel_event.is_set():
                    cancelled = True
                    break
                await semaphore.acquire()
                tasks.append(asyncio.create_task(self._read(path, root_path, semaphore)))
        except PermissionError:
            logger.error("Access denied to directory: %s", root_path)
            await asyncio.gather(*tasks)
            raise

        documents = list(await asyncio.gather(*tasks))
        if cancelled:
            logger.info("Collection of %s cancelled after %d reads", root_path, len(tasks))
            raise CollectionCancelledError(str(root_path), len(tasks))

        kinds = Counter(doc.kind for doc in documents)
        logger.info(
            "Collected %d markdown files (%d .md, %d .mdext, %d .mdsrc) from: %s",
            len(documents),
            kinds[DocumentKind.PLAIN],
            kinds[DocumentKind.TEMPLATE],
            kinds[DocumentKind.SOURCE],
            root_path,
        )
        return documents

    def collect_sync(self, root: str | Path) -> list[Document]:
        """Blocking wrapper around :meth:`collect` for synchronous callers."""
        return asyncio.run(self.collect(root))

    @staticmethod
    def _check_root(root: str | Path) -> Path:
        if root is None or not str(root).strip():
            raise ValueError("Directory path cannot be null or empty")
        root_path = Path(root)
        if not root_path.is_dir():
            raise FileNotFoundError(f"Directory not found: {root_path}")
        return root_path

    async def _read(self, path: Path, root: Path, semaphore: asyncio.Semaphore) -> Document:
        relative = path.relative_to(root).as_posix()
        try:
            logger.debug("Reading file: %s", path)
            content = await asyncio.to_thread(self._fs.read_text, path)
        except (OSError, UnicodeDecodeError):
            logger.error("Error reading file: %s", path, exc_info=True)
            content = ""
        finally:
            semaphore.release()
        return Document(file_path=relative, content=content)
