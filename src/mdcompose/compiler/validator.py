"""Template validation: malformed directives, missing sources, duplicates, cycles."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from mdcompose.compiler.graph import ReferenceGraph
from mdcompose.models.document import Document, partition
from mdcompose.models.errors import ValidationIssue, ValidationResult
from mdcompose.parser.directives import (
    describe_malformed,
    find_malformed_tags,
    find_valid_directives,
)
from mdcompose.parser.sources import SourceIndex
from mdcompose.paths import key_of, resolve_key

logger = logging.getLogger(__name__)

# Windows-invalid path characters plus wildcards; separators are allowed.
_INVALID_PATH_CHARS = frozenset('"<>|?*') | frozenset(chr(c) for c in range(32))


def has_invalid_path_chars(file_ref: str) -> bool:
    return any(ch in _INVALID_PATH_CHARS for ch in file_ref)


@dataclass
class _Hop:
    """First reference from a template to a source, kept for cycle attribution."""

    key: str
    line_number: int
    context: str


@dataclass
class _TemplateReport:
    template: Document
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)

    def issue(
        self,
        message: str,
        directive_path: str | None = None,
        line_number: int | None = None,
        context: str | None = None,
    ) -> ValidationIssue:
        return ValidationIssue(
            message=message,
            directive_path=directive_path,
            source_file=self.template.file_path,
            line_number=line_number,
            source_context=context,
        )


class TemplateValidator:
    """Checks that every insert directive in a set of templates resolves safely.

    Errors (malformed directive, blank or invalid file name, missing source)
    make a template invalid.  Warnings (duplicate directive, circular
    reference, ambiguous source key) never do.
    """

    def validate(
        self,
        templates: Iterable[Document],
        sources: Mapping[str, str],
    ) -> ValidationResult:
        if templates is None:
            raise TypeError("templates must not be None")
        if sources is None:
            raise TypeError("sources must not be None")

        template_list = list(templates)
        index = SourceIndex.from_mapping(sources)
        graph = ReferenceGraph(index)
        logger.info("Validating %d template documents", len(template_list))

        valid_files = 0
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []
        for template in template_list:
            logger.debug("Validating template: %s", template.file_path)
            report = _TemplateReport(template)
            if template.content:
                self._check_template(report, index, graph)
            if not report.errors:
                valid_files += 1
                logger.debug("Template %s is valid", template.file_path)
            errors.extend(self._prefixed(template, report.errors))
            warnings.extend(self._prefixed(template, report.warnings))

        logger.info(
            "Validation completed for all templates. Found %d errors and %d warnings",
            len(errors), len(warnings),
        )
        return ValidationResult(
            valid_files_count=valid_files,
            errors=tuple(errors),
            warnings=tuple(warnings),
        )

    def validate_documents(self, documents: Iterable[Document]) -> ValidationResult:
        """Validate the templates in a mixed document list against all insertable documents."""
        groups = partition(documents)
        return self.validate(groups.templates, SourceIndex.from_documents(groups.insertable))

    # -- per-template checks -------------------------------------------------

    def _check_template(
        self, report: _TemplateReport, index: SourceIndex, graph: ReferenceGraph
    ) -> None:
        template = report.template
        seen_directives: set[str] = set()
        alias_reported: set[str] = set()
        hops: dict[str, _Hop] = {}

        for line_number, line in enumerate(template.content.split("\n"), start=1):
            context = line.strip()

            for tag in find_malformed_tags(line):
                report.errors.append(
                    report.issue(describe_malformed(tag), tag, line_number, context)
                )

            for directive in find_valid_directives(line):
                file_ref = directive.file_path
                if not file_ref:
                    report.errors.append(
                        report.issue(
                            "MarkDownExtension directive is missing filename",
                            directive.full_match, line_number, context,
                        )
                    )
                    continue
                if has_invalid_path_chars(file_ref):
                    report.errors.append(
                        report.issue(
                            "MarkDownExtension directive contains invalid filename "
                            f"characters: '{file_ref}'",
                            file_ref, line_number, context,
                        )
                    )
                    continue

                key = resolve_key(file_ref, template.file_path)
                if key not in index:
                    report.errors.append(
                        report.issue(
                            f"Source document not found: '{file_ref}' (resolved to: '{key}')",
                            file_ref, line_number, context,
                        )
                    )
                    continue

                if directive.full_match in seen_directives:
                    report.warnings.append(
                        report.issue(
                            "Duplicate MarkDownExtension directive found: "
                            f"'{directive.full_match}'",
                            file_ref, line_number, context,
                        )
                    )
                seen_directives.add(directive.full_match)

                aliases = index.aliases(key)
                if len(aliases) > 1 and key_of(key) not in alias_reported:
                    alias_reported.add(key_of(key))
                    report.warnings.append(
                        report.issue(
                            f"Ambiguous source reference: '{file_ref}' matches "
                            f"{len(aliases)} documents ({', '.join(aliases)}); "
                            f"using '{index.path_of(key)}'",
                            file_ref, line_number, context,
                        )
                    )

                hops.setdefault(key_of(key), _Hop(key, line_number, context))

        self._check_cycles(report, graph, hops.values())

    @staticmethod
    def _check_cycles(
        report: _TemplateReport, graph: ReferenceGraph, hops: Iterable[_Hop]
    ) -> None:
        root = report.template.file_name
        reported: set[str] = set()
        for hop in hops:
            for cycle in graph.find_cycles(root, hop.key):
                revisited = key_of(cycle[0])
                if revisited in reported:
                    continue
                reported.add(revisited)
                report.warnings.append(
                    report.issue(
                        f"Potential circular reference detected: {' -> '.join(cycle)}",
                        cycle[0], hop.line_number, hop.context,
                    )
                )

    @staticmethod
    def _prefixed(template: Document, issues: list[ValidationIssue]) -> list[ValidationIssue]:
        return [
            issue.model_copy(update={"message": f"[{template.file_name}] {issue.message}"})
            for issue in issues
        ]
