"""Document service: collect, validate, compile and write in one place.

Reused by the CLI and the REST API so both apply the same pipeline.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from mdcompose.compiler.compiler import MarkdownCompiler
from mdcompose.compiler.validator import TemplateValidator
from mdcompose.errors import NoTemplatesError, TemplateValidationError
from mdcompose.io.collector import DocumentCollector
from mdcompose.io.filesystem import FileSystem
from mdcompose.io.writer import DocumentWriter
from mdcompose.models.document import Document, DocumentSet, partition
from mdcompose.models.errors import ValidationResult
from mdcompose.parser.sources import SourceIndex

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """Documents collected from an input directory, grouped by role."""

    root: Path
    documents: DocumentSet

    @property
    def template_count(self) -> int:
        return len(self.documents.templates)

    @property
    def source_count(self) -> int:
        return len(self.documents.sources) + len(self.documents.plain)


@dataclass
class CombineResult:
    """Outcome of compiling an input directory into an output directory."""

    output_dir: Path
    validation: ValidationResult
    written: list[Path] = field(default_factory=list)


@dataclass
class CompileOutcome:
    """Compiled documents alongside the validation that preceded them."""

    documents: list[Document]
    validation: ValidationResult


class DocumentService:
    """Stateless facade over collector, validator, compiler and writer."""

    def __init__(
        self,
        filesystem: FileSystem | None = None,
        max_concurrency: int | None = None,
    ) -> None:
        self._collector = DocumentCollector(filesystem, max_concurrency=max_concurrency)
        self._validator = TemplateValidator()
        self._compiler = MarkdownCompiler()
        self._writer = DocumentWriter()

    async def load(self, root: str | Path) -> LoadResult:
        """Collect *root*; raises ``NoTemplatesError`` if it holds no templates."""
        documents = partition(await self._collector.collect(root))
        if not documents.templates:
            raise NoTemplatesError(str(root))
        return LoadResult(root=Path(root), documents=documents)

    def validate(self, documents: DocumentSet | Iterable[Document]) -> ValidationResult:
        groups = documents if isinstance(documents, DocumentSet) else partition(documents)
        return self._validator.validate(
            groups.templates, SourceIndex.from_documents(groups.insertable)
        )

    def compile(self, documents: DocumentSet | Iterable[Document]) -> CompileOutcome:
        """Validate then compile; content errors are reported, never raised."""
        groups = documents if isinstance(documents, DocumentSet) else partition(documents)
        validation = self.validate(groups)
        compiled = self._compiler.compile_documents(
            [*groups.plain, *groups.sources, *groups.templates]
        )
        return CompileOutcome(documents=compiled, validation=validation)

    async def combine(
        self,
        input_dir: str | Path,
        output_dir: str | Path,
        *,
        stop_on_errors: bool = True,
    ) -> CombineResult:
        """Compile every template under *input_dir* and write the results.

        With *stop_on_errors* a failed validation raises
        ``TemplateValidationError`` before anything is written.  Warnings
        never stop the build.
        """
        loaded = await self.load(input_dir)
        logger.info(
            "Found %d template files and %d source files",
            loaded.template_count, loaded.source_count,
        )
        outcome = self.compile(loaded.documents)
        if stop_on_errors and not outcome.validation.is_valid:
            raise TemplateValidationError(outcome.validation)
        written = self._writer.write(outcome.documents, output_dir)
        return CombineResult(
            output_dir=Path(output_dir),
            validation=outcome.validation,
            written=written,
        )
