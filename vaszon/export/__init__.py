"""Markdown export of the canvas."""

from .serializer import (
    FULL_EXPORT,
    ITEMS_EXPORT,
    SELECTIONS_EXPORT,
    EXPORT_FILENAMES,
    CONCEPT_PLACEHOLDER,
    serialize_full,
    serialize_items,
    serialize_selections,
    build_artifact,
)

__all__ = [
    "FULL_EXPORT",
    "ITEMS_EXPORT",
    "SELECTIONS_EXPORT",
    "EXPORT_FILENAMES",
    "CONCEPT_PLACEHOLDER",
    "serialize_full",
    "serialize_items",
    "serialize_selections",
    "build_artifact",
]
