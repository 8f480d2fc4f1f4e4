"""Directive scanning and source lookup for mdcompose."""

from mdcompose.parser.directives import (
    Directive,
    describe_malformed,
    find_directive_like_tags,
    find_malformed_tags,
    find_valid_directives,
)
from mdcompose.parser.sources import SourceIndex

__all__ = [
    "Directive",
    "SourceIndex",
    "describe_malformed",
    "find_directive_like_tags",
    "find_malformed_tags",
    "find_valid_directives",
]
