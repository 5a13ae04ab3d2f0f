"""
Tests for suggestion selections and the Markdown export projections.
"""

import unittest

from vaszon.canvas import BlockCatalog, CanvasStore, SuggestionSelectionSet
from vaszon.export import (
    CONCEPT_PLACEHOLDER,
    EXPORT_FILENAMES,
    build_artifact,
    serialize_full,
    serialize_items,
    serialize_selections,
)
from vaszon.models import BlockDefinition, UploadedDocument


class TestSuggestionSelectionSet(unittest.TestCase):
    """Test toggling and grouping of selections."""

    def setUp(self):
        self.selections = SuggestionSelectionSet()

    def test_toggle_adds_and_removes(self):
        """Test toggle adds a missing pair and removes a present one."""
        self.assertTrue(self.selections.toggle("A", "x"))
        self.assertTrue(self.selections.is_selected("A", "x"))
        self.assertEqual(len(self.selections), 1)

        self.assertFalse(self.selections.toggle("A", "x"))
        self.assertFalse(self.selections.is_selected("A", "x"))
        self.assertEqual(len(self.selections), 0)

    def test_toggle_twice_restores_state(self):
        """Test toggling the same pair twice is the identity."""
        self.selections.toggle("A", "x")
        self.selections.toggle("B", "y")
        before = self.selections.selections

        self.selections.toggle("C", "z")
        self.selections.toggle("C", "z")

        self.assertEqual(self.selections.selections, before)

    def test_pair_identity(self):
        """Test the same text under different blocks is a different selection."""
        self.selections.toggle("A", "x")
        self.selections.toggle("B", "x")

        self.assertEqual(len(self.selections), 2)
        self.selections.toggle("A", "x")
        self.assertEqual([(s.block_title, s.suggestion) for s in self.selections], [("B", "x")])

    def test_clear(self):
        """Test clear empties the set."""
        self.selections.toggle("A", "x")
        self.selections.toggle("B", "y")
        self.selections.clear()

        self.assertEqual(len(self.selections), 0)
        self.assertEqual(self.selections.group_by_block(), {})

    def test_group_by_block(self):
        """Test grouping keeps first-selection order of titles and selection order within groups."""
        self.selections.toggle("A", "x")
        self.selections.toggle("B", "y")
        self.selections.toggle("A", "z")

        grouped = self.selections.group_by_block()

        self.assertEqual(grouped, {"A": ["x", "z"], "B": ["y"]})
        self.assertEqual(list(grouped), ["A", "B"])


class TestExportSerializer(unittest.TestCase):
    """Test the three export projections."""

    def setUp(self):
        catalog = BlockCatalog([
            BlockDefinition(id="segments", title="Ügyfélszegmensek"),
            BlockDefinition(id="channels", title="Csatornák"),
            BlockDefinition(id="costs", title="Költségszerkezet"),
        ])
        self.store = CanvasStore(catalog)

    def test_full_export_empty_state(self):
        """Test the full export of an empty session holds only the concept placeholder."""
        content = serialize_full("", self.store.blocks)

        self.assertEqual(
            content,
            "# Üzleti Modell Vászon\n\n## Üzleti Koncepció\n\nNincs megadva.\n\n"
        )

    def test_full_export_all_sections(self):
        """Test the full export with concept, document, blocks and summary."""
        self.store.add_item("segments", "Egyetemisták")
        self.store.add_item("segments", "Oktatók")
        self.store.add_item("costs", "Bérleti díj")
        document = UploadedDocument(name="terv.txt", content="Részletes terv")

        content = serialize_full("Kávézó a campuson", self.store.blocks,
                                 document=document, summary="Jó ötlet.")

        expected = (
            "# Üzleti Modell Vászon\n\n"
            "## Üzleti Koncepció\n\n"
            "Kávézó a campuson\n\n"
            "### Csatolt dokumentum: terv.txt\n\n"
            "```\n"
            "Részletes terv\n"
            "```\n\n"
            "## Ügyfélszegmensek\n\n"
            "- Egyetemisták\n"
            "- Oktatók\n"
            "\n"
            "## Költségszerkezet\n\n"
            "- Bérleti díj\n"
            "\n"
            "## MI-generált Összefoglaló\n\n"
            "Jó ötlet.\n"
        )
        self.assertEqual(content, expected)

    def test_full_export_omits_empty_sections(self):
        """Test no heading is emitted for empty blocks, missing document or summary."""
        self.store.add_item("channels", "Instagram")

        content = serialize_full("Kávézó", self.store.blocks, document=None, summary=None)

        self.assertNotIn("Ügyfélszegmensek", content)
        self.assertNotIn("Csatolt dokumentum", content)
        self.assertNotIn("MI-generált", content)
        self.assertIn("## Csatornák\n\n- Instagram\n\n", content)

    def test_items_export(self):
        """Test the items-only export has just the non-empty blocks."""
        self.store.add_item("channels", "Instagram")
        self.store.add_item("channels", "Plakát")

        content = serialize_items(self.store.blocks)

        self.assertEqual(
            content,
            "# Üzleti Modell Vászon - Elemek\n\n## Csatornák\n\n- Instagram\n- Plakát\n\n"
        )

    def test_items_export_excludes_concept_and_document(self):
        """Test the items-only export never carries concept or document content."""
        self.store.add_item("channels", "Instagram")
        full = serialize_full("", self.store.blocks,
                              document=UploadedDocument(name="terv.txt", content="x"))
        items = serialize_items(self.store.blocks)

        self.assertIn(CONCEPT_PLACEHOLDER, full)
        self.assertNotIn(CONCEPT_PLACEHOLDER, items)
        self.assertNotIn("Csatolt dokumentum", items)
        self.assertNotIn("Üzleti Koncepció", items)

    def test_items_export_empty_canvas(self):
        """Test the items-only export of an empty canvas is just the header."""
        self.assertEqual(serialize_items(self.store.blocks), "# Üzleti Modell Vászon - Elemek\n\n")

    def test_selections_export(self):
        """Test the selections export follows group order."""
        selections = SuggestionSelectionSet()
        selections.toggle("Csatornák", "Podcast")
        selections.toggle("Ügyfélszegmensek", "Turisták")
        selections.toggle("Csatornák", "Hírlevél")

        content = serialize_selections(selections.group_by_block())

        self.assertEqual(
            content,
            "# MI-generált ötletek\n\n"
            "## Csatornák\n\n- Podcast\n- Hírlevél\n\n"
            "## Ügyfélszegmensek\n\n- Turisták\n\n"
        )

    def test_exports_are_deterministic(self):
        """Test serializing the same state twice gives identical text."""
        self.store.add_items("segments", ["a", "b"])
        first = serialize_full("c", self.store.blocks, summary="s")
        second = serialize_full("c", self.store.blocks, summary="s")

        self.assertEqual(first, second)

    def test_build_artifact(self):
        """Test artifacts get the fixed file name and MIME type of their projection."""
        self.assertEqual(build_artifact("full", "x").filename, "uzleti_modell.md")
        self.assertEqual(build_artifact("items", "x").filename, "uzleti_modell_elemek.md")
        artifact = build_artifact("selections", "x")
        self.assertEqual(artifact.filename, "kivalasztott_otletek.md")
        self.assertEqual(artifact.mime_type, "text/markdown")
        self.assertEqual(set(EXPORT_FILENAMES), {"full", "items", "selections"})

        with self.assertRaises(ValueError):
            build_artifact("pdf", "x")


if __name__ == '__main__':
    unittest.main()
