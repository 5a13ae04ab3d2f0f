"""
Unit tests for core Vászon components.

Tests non-AI components like configuration management, data models,
the block catalog and the agent registry.
"""

import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from pydantic import ValidationError

from vaszon.config import ConfigManager
from vaszon.canvas import BlockCatalog, DEFAULT_BLOCKS
from vaszon.models import (
    BlockDefinition,
    CanvasBlockData,
    CanvasItem,
    ExportArtifact,
    SuggestionSelection,
    UploadedDocument,
)
from vaszon.agents.registry import AgentRegistry, AgentConfig


class TestConfigManager(unittest.TestCase):
    """Test configuration management functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.config_path = Path(self.temp_dir) / "test_config.yaml"

    def tearDown(self):
        """Clean up test fixtures."""
        if self.config_path.exists():
            self.config_path.unlink()
        os.rmdir(self.temp_dir)

    def test_config_creation_with_defaults(self):
        """Test config manager falls back to defaults when file missing."""
        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.model_name, "gemini-2.5-flash")
        self.assertEqual(config.ai_base_url, "https://generativelanguage.googleapis.com/v1beta")
        self.assertEqual(config.ai_timeout, 60.0)
        self.assertEqual(config.export_directory, "export")
        self.assertEqual(config.block_definitions, [])
        self.assertEqual(config.agent_definitions, {})

    def test_config_loading_from_file(self):
        """Test loading configuration from YAML file."""
        test_config = """
ai:
  model: "test-model"
  timeout: 5.0

paths:
  export_dir: "test-export"
"""
        with open(self.config_path, 'w') as f:
            f.write(test_config)

        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.model_name, "test-model")
        self.assertEqual(config.get("ai.timeout"), 5.0)
        self.assertEqual(config.export_directory, "test-export")
        # Values missing from the file keep their defaults
        self.assertEqual(config.log_filename, "vaszon.log")
        self.assertEqual(config.get("ai.api_key_env"), "GEMINI_API_KEY")

    def test_invalid_yaml_falls_back_to_defaults(self):
        """Test a file whose root is not a mapping is ignored."""
        with open(self.config_path, 'w') as f:
            f.write("- just\n- a list\n")

        config = ConfigManager(str(self.config_path))
        self.assertEqual(config.model_name, "gemini-2.5-flash")

    def test_dot_notation_access(self):
        """Test accessing config values with dot notation."""
        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.get("ai.provider"), "gemini")
        self.assertEqual(config.get("paths.export_dir"), "export")
        self.assertEqual(config.get("nonexistent.key", "default"), "default")

    def test_api_key_from_environment(self):
        """Test the API key falls back to the configured environment variable."""
        with open(self.config_path, 'w') as f:
            f.write("ai:\n  api_key_env: 'VASZON_TEST_KEY'\n")

        config = ConfigManager(str(self.config_path))

        with patch.dict(os.environ, {"VASZON_TEST_KEY": "secret"}):
            self.assertEqual(config.api_key, "secret")
            self.assertTrue(config.is_ai_configured)

        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(config.api_key, "")
            self.assertFalse(config.is_ai_configured)

    def test_api_key_in_file_wins(self):
        """Test an explicit key in the file is used before the environment."""
        with open(self.config_path, 'w') as f:
            f.write("ai:\n  api_key: 'from-file'\n  api_key_env: 'VASZON_TEST_KEY'\n")

        config = ConfigManager(str(self.config_path))
        with patch.dict(os.environ, {"VASZON_TEST_KEY": "from-env"}):
            self.assertEqual(config.api_key, "from-file")

    def test_config_reload(self):
        """Test configuration reloading."""
        with open(self.config_path, 'w') as f:
            f.write("ai:\n  model: 'model1'")

        config = ConfigManager(str(self.config_path))
        self.assertEqual(config.model_name, "model1")

        with open(self.config_path, 'w') as f:
            f.write("ai:\n  model: 'model2'")

        config.reload()
        self.assertEqual(config.model_name, "model2")


class TestDataModels(unittest.TestCase):
    """Test data model validation and functionality."""

    def test_canvas_item_is_immutable(self):
        """Test CanvasItem cannot be changed in place."""
        item = CanvasItem(id="item-1", text="Egyetemisták")

        with self.assertRaises(ValidationError):
            item.text = "Más"

        updated = item.model_copy(update={"text": "Más"})
        self.assertEqual(updated.id, "item-1")
        self.assertEqual(updated.text, "Más")
        self.assertEqual(item.text, "Egyetemisták")

    def test_block_from_definition(self):
        """Test creating an empty block from a catalog entry."""
        definition = BlockDefinition(id="channels", title="Csatornák", description="?", color="orange")
        block = CanvasBlockData.from_definition(definition)

        self.assertEqual(block.id, "channels")
        self.assertEqual(block.title, "Csatornák")
        self.assertEqual(block.color, "orange")
        self.assertEqual(block.items, ())
        self.assertTrue(block.is_empty)

    def test_uploaded_document_defaults(self):
        """Test UploadedDocument defaults to a finished, empty document."""
        document = UploadedDocument(name="terv.txt")

        self.assertEqual(document.content, "")
        self.assertFalse(document.is_extracting)

    def test_suggestion_selection_equality(self):
        """Test selections compare and hash by both fields."""
        a = SuggestionSelection(block_title="A", suggestion="x")
        b = SuggestionSelection(block_title="A", suggestion="x")
        c = SuggestionSelection(block_title="B", suggestion="x")

        self.assertEqual(a, b)
        self.assertNotEqual(a, c)
        self.assertEqual(len({a, b, c}), 2)

    def test_export_artifact_write(self):
        """Test artifacts are written as UTF-8 under their file name."""
        with tempfile.TemporaryDirectory() as temp_dir:
            artifact = ExportArtifact(filename="uzleti_modell.md", content="# Üzleti Modell Vászon\n")
            path = artifact.write_to(os.path.join(temp_dir, "out"))

            self.assertEqual(path.name, "uzleti_modell.md")
            self.assertEqual(path.read_bytes(), "# Üzleti Modell Vászon\n".encode("utf-8"))
            self.assertEqual(artifact.mime_type, "text/markdown")


class TestBlockCatalog(unittest.TestCase):
    """Test the fixed block catalog."""

    def test_default_catalog(self):
        """Test the default catalog holds the nine canvas blocks in order."""
        catalog = BlockCatalog()

        self.assertEqual(len(catalog), 9)
        self.assertEqual(catalog.ids()[0], "key-partners")
        self.assertEqual(catalog.ids()[-1], "revenue-streams")
        self.assertIn("value-propositions", catalog)
        self.assertEqual(catalog.get("customer-segments").title, "Ügyfélszegmensek")
        self.assertIsNone(catalog.get("missing"))

    def test_duplicate_ids_rejected(self):
        """Test a catalog cannot contain the same id twice."""
        block = BlockDefinition(id="a", title="A")
        with self.assertRaises(ValueError):
            BlockCatalog([block, block])

    def test_empty_catalog_rejected(self):
        """Test a catalog needs at least one block."""
        with self.assertRaises(ValueError):
            BlockCatalog([])

    def test_from_config(self):
        """Test building the catalog from configuration, skipping invalid entries."""
        catalog = BlockCatalog.from_config([
            {"id": "problem", "title": "Probléma", "description": "Mi a gond?", "color": "red"},
            {"title": "No id"},
            "not a mapping",
            {"id": "solution", "title": "Megoldás"},
        ])

        self.assertEqual(catalog.ids(), ["problem", "solution"])
        self.assertEqual(catalog.get("solution").color, "slate")

    def test_from_config_falls_back_to_defaults(self):
        """Test an empty or fully invalid section yields the default catalog."""
        self.assertEqual(len(BlockCatalog.from_config([])), len(DEFAULT_BLOCKS))
        self.assertEqual(len(BlockCatalog.from_config([{"title": "x"}])), len(DEFAULT_BLOCKS))


class TestAgentRegistry(unittest.TestCase):
    """Test agent registry functionality."""

    def setUp(self):
        """Set up test registry."""
        self.registry = AgentRegistry()

    def test_default_agents_registered(self):
        """Test that default agents are registered."""
        agents = self.registry.list_agents()

        self.assertIn("extractor", agents)
        self.assertIn("summarizer", agents)
        self.assertIn("suggester", agents)

    def test_render_prompt(self):
        """Test rendering a user prompt template."""
        summarizer = self.registry.require_agent("summarizer")
        prompt = summarizer.render(full_concept="Kávézó", canvas_digest="Csatornák:\n- Instagram")

        self.assertIn("Kávézó", prompt)
        self.assertIn("- Instagram", prompt)

    def test_render_missing_variable(self):
        """Test a missing template variable raises ValueError."""
        with self.assertRaises(ValueError):
            self.registry.require_agent("summarizer").render(full_concept="x")

    def test_require_unknown_agent(self):
        """Test requiring an unknown agent raises ValueError."""
        self.assertIsNone(self.registry.get_agent("nonexistent"))
        with self.assertRaises(ValueError):
            self.registry.require_agent("nonexistent")

    def test_definition_overrides(self):
        """Test configuration overrides replace only the given fields."""
        registry = AgentRegistry({
            "summarizer": {"system_prompt": "Rövid legyél."},
            "custom": {
                "description": "Custom agent",
                "system_prompt": "You are custom.",
                "user_prompt_template": "Do: {task}"
            },
            "broken": {"description": "Missing prompts"},
        })

        summarizer = registry.require_agent("summarizer")
        self.assertEqual(summarizer.system_prompt, "Rövid legyél.")
        self.assertIn("{canvas_digest}", summarizer.user_prompt_template)
        self.assertEqual(registry.require_agent("custom").render(task="x"), "Do: x")
        self.assertIsNone(registry.get_agent("broken"))

    def test_custom_agent_registration(self):
        """Test registering custom agents."""
        self.registry.register_agent(AgentConfig(
            name="test_agent",
            description="Test agent",
            system_prompt="Test prompt",
            user_prompt_template="{content}"
        ))

        self.assertIn("test_agent", self.registry.list_agents())


if __name__ == '__main__':
    unittest.main()
