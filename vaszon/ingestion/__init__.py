"""Document ingestion: uploaded files to plain-text AI context."""

from .sources import FileSource, PathFileSource, BytesFileSource
from .pipeline import DocumentIngestionPipeline, classify_file, ACCEPTED_EXTENSIONS

__all__ = [
    "FileSource",
    "PathFileSource",
    "BytesFileSource",
    "DocumentIngestionPipeline",
    "classify_file",
    "ACCEPTED_EXTENSIONS",
]
