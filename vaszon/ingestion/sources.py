"""
File sources for document ingestion.

This module defines the abstract interface the ingestion pipeline reads
uploaded files through, with implementations for files on disk and for
in-memory uploads.
"""

import asyncio
import mimetypes
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional


# Not every platform registers markdown in the mimetypes table
mimetypes.add_type("text/markdown", ".md")


class FileSource(ABC):
    """
    Abstract base class for an uploaded file.

    A source has a user-visible name and a declared MIME type; the content is
    only read when the pipeline asks for it.
    """

    def __init__(self, name: str, mime_type: str):
        self.name = name
        self.mime_type = mime_type or ""

    @abstractmethod
    async def read_bytes(self) -> bytes:
        """
        Read the raw file content.

        Returns:
            The file content

        Raises:
            OSError: If the content cannot be read
        """
        pass

    @staticmethod
    def from_path(path: str, mime_type: Optional[str] = None) -> "PathFileSource":
        """
        Create a source for a file on disk, guessing the MIME type from the name.

        Args:
            path: Path to the file
            mime_type: Declared MIME type, overrides the guess

        Returns:
            A PathFileSource for the file
        """
        if mime_type is None:
            mime_type, _ = mimetypes.guess_type(str(path))
        return PathFileSource(path, mime_type or "")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, mime_type={self.mime_type!r})"


class PathFileSource(FileSource):
    """File source backed by a path on the local filesystem."""

    def __init__(self, path: str, mime_type: str):
        self.path = Path(path)
        super().__init__(self.path.name, mime_type)

    async def read_bytes(self) -> bytes:
        return await asyncio.to_thread(self.path.read_bytes)


class BytesFileSource(FileSource):
    """File source for content that is already in memory (e.g. an HTTP upload)."""

    def __init__(self, name: str, mime_type: str, data: bytes):
        super().__init__(name, mime_type)
        self._data = data

    async def read_bytes(self) -> bytes:
        return self._data
