"""Insert directive scanning.

A directive has exactly one accepted shape (tag and attribute names are
case-insensitive)::

    <MarkDownExtension operation="insert" file="relative/or/name.mdsrc" />

Any other tag starting with ``<MarkDownExtension`` is malformed.  Scanning is
purely syntactic: nothing here knows whether the referenced file exists.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_INSERT_DIRECTIVE_RE = re.compile(
    r'<MarkDownExtension\s+operation="insert"\s+file="([^"]*)"\s*/>',
    re.IGNORECASE,
)
_DIRECTIVE_LIKE_RE = re.compile(r"<MarkDownExtension[^>]*>", re.IGNORECASE)

_OPERATION_ATTR_RE = re.compile(r"\boperation\s*=", re.IGNORECASE)
_INSERT_OPERATION_RE = re.compile(r'\boperation\s*=\s*"insert"', re.IGNORECASE)
_FILE_ATTR_RE = re.compile(r"\bfile\s*=", re.IGNORECASE)

MISSING_OPERATION = "MarkDownExtension directive is missing 'operation' attribute"
INVALID_OPERATION = "MarkDownExtension directive has invalid operation. Only 'insert' is supported"
MISSING_FILE = "MarkDownExtension directive is missing 'file' attribute"
MALFORMED = "MarkDownExtension directive is malformed"


@dataclass(frozen=True)
class Directive:
    """A strictly valid insert directive found in text."""

    full_match: str
    file_path: str


def find_valid_directives(text: str) -> list[Directive]:
    """Return every strictly valid directive in *text*, in order of appearance."""
    return [
        Directive(full_match=m.group(0), file_path=m.group(1).strip())
        for m in _INSERT_DIRECTIVE_RE.finditer(text)
    ]


def find_directive_like_tags(text: str) -> list[str]:
    """Return every tag that looks like a directive, valid or not."""
    return [m.group(0) for m in _DIRECTIVE_LIKE_RE.finditer(text)]


def find_malformed_tags(text: str) -> list[str]:
    """Return directive-like tags in *text* that fail the strict grammar."""
    tags = find_directive_like_tags(text)
    valid = {d.full_match for d in find_valid_directives(text)}
    if len(tags) <= len(valid):
        return []
    return [tag for tag in tags if tag not in valid]


def describe_malformed(tag: str) -> str:
    """Explain why *tag* is not a valid directive.

    Checked in priority order: operation attribute, operation value, file
    attribute, then a generic fallback.
    """
    if not _OPERATION_ATTR_RE.search(tag):
        return MISSING_OPERATION
    if not _INSERT_OPERATION_RE.search(tag):
        return INVALID_OPERATION
    if not _FILE_ATTR_RE.search(tag):
        return MISSING_FILE
    return MALFORMED
