"""
Markdown export for Vászon.

This module serializes the canvas into the three downloadable documents:
the full canvas, the items only, and the selected AI suggestions. All
functions are pure: the same input always gives the same text.
"""

from typing import Dict, Iterable, List, Optional

from ..models import CanvasBlockData, ExportArtifact, UploadedDocument


FULL_EXPORT = "full"
ITEMS_EXPORT = "items"
SELECTIONS_EXPORT = "selections"

EXPORT_FILENAMES: Dict[str, str] = {
    FULL_EXPORT: "uzleti_modell.md",
    ITEMS_EXPORT: "uzleti_modell_elemek.md",
    SELECTIONS_EXPORT: "kivalasztott_otletek.md",
}

EXPORT_MIME_TYPE = "text/markdown"

CONCEPT_PLACEHOLDER = "Nincs megadva."


def _block_sections(blocks: Iterable[CanvasBlockData]) -> str:
    content = ""
    for block in blocks:
        if not block.is_empty:
            content += f"## {block.title}\n\n"
            for item in block.items:
                content += f"- {item.text}\n"
            content += "\n"
    return content


def serialize_full(business_concept: str, blocks: Iterable[CanvasBlockData],
                   document: Optional[UploadedDocument] = None,
                   summary: Optional[str] = None) -> str:
    """
    Serialize the whole canvas.

    Args:
        business_concept: The concept typed by the user
        blocks: Canvas blocks in catalog order
        document: The attached document, if any
        summary: The last AI summary, if any

    Returns:
        Markdown document with concept, document, block and summary sections
    """
    content = "# Üzleti Modell Vászon\n\n"
    content += "## Üzleti Koncepció\n\n"
    content += f"{business_concept or CONCEPT_PLACEHOLDER}\n\n"

    if document is not None:
        content += f"### Csatolt dokumentum: {document.name}\n\n"
        content += "```\n"
        content += f"{document.content}\n"
        content += "```\n\n"

    content += _block_sections(blocks)

    if summary:
        content += "## MI-generált Összefoglaló\n\n"
        content += f"{summary}\n"

    return content


def serialize_items(blocks: Iterable[CanvasBlockData]) -> str:
    """Serialize only the items of the non-empty blocks."""
    return "# Üzleti Modell Vászon - Elemek\n\n" + _block_sections(blocks)


def serialize_selections(grouped: Dict[str, List[str]]) -> str:
    """
    Serialize the selected suggestions.

    Args:
        grouped: Block title to suggestions, as produced by
            SuggestionSelectionSet.group_by_block()

    Returns:
        Markdown document with one section per block title
    """
    content = "# MI-generált ötletek\n\n"
    for block_title, suggestions in grouped.items():
        content += f"## {block_title}\n\n"
        for suggestion in suggestions:
            content += f"- {suggestion}\n"
        content += "\n"
    return content


def build_artifact(projection: str, content: str) -> ExportArtifact:
    """
    Wrap serialized content with the fixed file name of its projection.

    Raises:
        ValueError: If the projection is unknown
    """
    if projection not in EXPORT_FILENAMES:
        raise ValueError(f"Unknown export projection: {projection}")
    return ExportArtifact(
        filename=EXPORT_FILENAMES[projection],
        mime_type=EXPORT_MIME_TYPE,
        content=content
    )
