"""File ingestion and output for mdcompose."""

from mdcompose.io.collector import DocumentCollector
from mdcompose.io.filesystem import FileSystem, LocalFileSystem
from mdcompose.io.writer import DocumentWriter

__all__ = [
    "DocumentCollector",
    "DocumentWriter",
    "FileSystem",
    "LocalFileSystem",
]
