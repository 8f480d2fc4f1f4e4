"""Template compilation: substitutes insert directives with source content."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace

from mdcompose.models.document import Document, partition
from mdcompose.parser.directives import Directive, find_valid_directives
from mdcompose.parser.sources import SourceIndex
from mdcompose.paths import key_of, resolve_key

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 10


def missing_source_placeholder(key: str) -> str:
    return f"<!-- Missing source: {key} -->"


@dataclass(frozen=True)
class _Pending:
    """A directive awaiting substitution, with the keys of the documents it came through."""

    directive: Directive
    chain: tuple[str, ...]
    blocked: bool = False


_Segment = str | _Pending


class MarkdownCompiler:
    """Compiles ``.mdext`` templates into ``.md`` documents.

    Substitution repeats until no directive is left, so inserted fragments
    may themselves insert other fragments.  Every directive remembers the
    chain of documents it was inserted through; one that points back into
    its own chain is left verbatim, as is anything still unresolved after
    ``max_iterations`` passes.  Either way a warning is logged.

    Compilation never raises for bad content: missing sources become
    placeholders and unexpected failures fall back to the original
    template text.
    """

    def __init__(self, max_iterations: int = MAX_ITERATIONS) -> None:
        if max_iterations < 1:
            raise ValueError(f"max_iterations must be positive, got {max_iterations}")
        self._max_iterations = max_iterations

    def compile(self, template: Document, sources: Mapping[str, str]) -> Document:
        """Compile a single template against *sources* (lookup key -> content)."""
        index = SourceIndex.from_mapping(sources)
        try:
            logger.debug("Processing template: %s", template.file_path)
            content = self._process(template, index)
        except Exception:
            logger.exception(
                "Error processing template: %s at %s", template.file_name, template.file_path
            )
            return template.as_markdown()
        logger.debug("Successfully processed template: %s", template.file_name)
        return template.as_markdown(content)

    def compile_documents(self, documents: Iterable[Document]) -> list[Document]:
        """Compile every template in *documents*; plain ``.md`` files pass through.

        Source fragments are only used for insertion and are not part of the
        result.
        """
        groups = partition(documents)
        index = SourceIndex.from_documents(groups.insertable)

        logger.info(
            "Building documentation for %d templates using %d source documents",
            len(groups.templates), len(index),
        )
        if index:
            logger.debug("Available source documents: %s", ", ".join(index))
        else:
            logger.debug("No source documents provided")

        results: list[Document] = []
        for doc in groups.plain:
            logger.debug("Including regular markdown file: %s", doc.file_name)
            results.append(doc)
        for template in groups.templates:
            results.append(self.compile(template, index))

        logger.info(
            "Documentation building completed. Processed %d templates", len(groups.templates)
        )
        return results

    def _process(self, template: Document, index: SourceIndex) -> str:
        content = template.content
        if not content:
            return content

        segments = self._split(content, (key_of(template.file_name),))
        for _ in range(self._max_iterations):
            if not any(isinstance(s, _Pending) and not s.blocked for s in segments):
                break
            expanded: list[_Segment] = []
            for segment in segments:
                if isinstance(segment, str) or segment.blocked:
                    expanded.append(segment)
                    continue
                key = resolve_key(segment.directive.file_path, template.file_path)
                if key not in index:
                    expanded.append(self._missing(key, template))
                elif key_of(key) in segment.chain:
                    logger.debug(
                        "Not re-inserting %s into itself in template %s", key, template.file_path
                    )
                    expanded.append(replace(segment, blocked=True))
                else:
                    logger.debug("Inserting content from %s into %s", key, template.file_path)
                    expanded.extend(self._split(index[key], (*segment.chain, key_of(key))))
            segments = expanded

        if any(isinstance(s, _Pending) for s in segments):
            logger.warning(
                "Maximum iterations reached while processing template %s. "
                "This might indicate circular references in insert directives.",
                template.file_path,
            )
        return "".join(s if isinstance(s, str) else s.directive.full_match for s in segments)

    @staticmethod
    def _split(text: str, chain: tuple[str, ...]) -> list[_Segment]:
        """Cut *text* into literal runs and pending directives inserted via *chain*."""
        segments: list[_Segment] = []
        cursor = 0
        for directive in find_valid_directives(text):
            start = text.find(directive.full_match, cursor)
            if start > cursor:
                segments.append(text[cursor:start])
            segments.append(_Pending(directive, chain))
            cursor = start + len(directive.full_match)
        if cursor < len(text):
            segments.append(text[cursor:])
        return segments

    @staticmethod
    def _missing(key: str, template: Document) -> str:
        logger.warning(
            "Source document not found for insert directive: %s in template %s",
            key, template.file_path,
        )
        return missing_source_placeholder(key)
