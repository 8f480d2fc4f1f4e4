"""Template compilation and validation for mdcompose."""

from mdcompose.compiler.compiler import MAX_ITERATIONS, MarkdownCompiler
from mdcompose.compiler.graph import ReferenceGraph
from mdcompose.compiler.validator import TemplateValidator

__all__ = [
    "MAX_ITERATIONS",
    "MarkdownCompiler",
    "ReferenceGraph",
    "TemplateValidator",
]
