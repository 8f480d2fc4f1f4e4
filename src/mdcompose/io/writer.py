"""Writes compiled documents into an output directory."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from mdcompose.errors import DocumentWriteError
from mdcompose.models.document import Document

logger = logging.getLogger(__name__)


class DocumentWriter:
    """Writes each document to ``output_dir / document.file_path`` as UTF-8."""

    def write(self, documents: Iterable[Document], output_dir: str | Path) -> list[Path]:
        if documents is None:
            raise TypeError("documents must not be None")
        if output_dir is None or not str(output_dir).strip():
            raise ValueError("Output folder cannot be empty or whitespace")

        out = Path(output_dir)
        document_list = list(documents)
        logger.info("Writing %d documents to folder: %s", len(document_list), out)
        try:
            out.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DocumentWriteError(str(out), f"unable to create output directory: {exc}") from exc

        root = out.resolve()
        written: list[Path] = []
        for doc in document_list:
            relative = doc.file_path or doc.file_name
            if not relative.strip():
                logger.warning("Skipping document with empty filename")
                continue
            target = out / relative.replace("\\", "/")
            if not target.resolve().is_relative_to(root):
                raise DocumentWriteError(str(target), "path escapes the output directory")
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                logger.debug("Writing document to file: %s", target)
                target.write_text(doc.content, encoding="utf-8")
            except OSError as exc:
                logger.error("IO error writing file: %s", target, exc_info=True)
                raise DocumentWriteError(str(target), exc.strerror or str(exc)) from exc
            written.append(target)

        logger.info("Wrote %d documents to folder: %s", len(written), out)
        return written
