#!/usr/bin/env python3
"""
Vászon - Business Model Canvas Engine

Main entry point for Vászon. This driver plays the role of the user interface:
it fills a canvas, attaches a document, asks the AI for suggestions and a
summary, and writes the Markdown exports.
"""

import asyncio
import logging
import sys
import argparse
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from vaszon import __version__
from vaszon.agents import AgentRunner
from vaszon.config import ConfigManager, config as default_config
from vaszon.errors import AINotConfiguredError
from vaszon.export import EXPORT_FILENAMES
from vaszon.ingestion import FileSource
from vaszon.session import CanvasSession


def setup_logging(cfg: ConfigManager):
    """Configure logging for the application."""
    level = getattr(logging, cfg.get("logging.level", "INFO").upper())
    format_str = cfg.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    log_file = cfg.log_filename

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_file, encoding="utf-8")
        ]
    )


def load_items_file(path: str) -> Dict[str, List[str]]:
    """
    Load canvas items from a YAML file mapping block ids to lists of texts.

    Args:
        path: Path to the YAML file

    Returns:
        Block id to item texts

    Raises:
        ValueError: If the file does not contain a mapping of lists
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Items file must contain a mapping of block ids: {path}")
    for block_id, texts in data.items():
        if texts is not None and not isinstance(texts, list):
            raise ValueError(f"Items for block '{block_id}' must be a list")
    return data


def build_ai(cfg: ConfigManager) -> Optional[AgentRunner]:
    """Create the AI runner, or None when no API key is configured."""
    if not cfg.is_ai_configured:
        logging.warning("No API key configured; AI features are disabled")
        return None
    try:
        return AgentRunner(
            api_key=cfg.api_key,
            model=cfg.model_name,
            base_url=cfg.ai_base_url,
            timeout=cfg.ai_timeout
        )
    except AINotConfiguredError as e:
        logging.warning(f"AI features are disabled: {e}")
        return None


async def run_session(args: argparse.Namespace, cfg: ConfigManager) -> int:
    """
    Execute one canvas session as described by the command line.

    Returns:
        Process exit code
    """
    ai = build_ai(cfg)
    session = CanvasSession.from_config(cfg, ai=ai)
    exit_code = 0

    try:
        session.business_concept = args.concept or ""

        if args.items:
            added = session.load_items(load_items_file(args.items))
            logging.info(f"Loaded {added} items from {args.items}")

        if args.attach:
            document = await session.attach_file(FileSource.from_path(args.attach))
            if document is None:
                logging.error(f"Document not attached: {session.pipeline.error}")
                print(f"\n{session.pipeline.error}")
                exit_code = 1
            else:
                logging.info(f"Attached document {document.name} ({len(document.content)} characters)")

        for block_id in args.suggest or []:
            if not session.ai_available:
                logging.error(f"Cannot generate suggestions for {block_id}: AI is not configured")
                exit_code = 1
                continue
            if block_id not in session.store.catalog:
                logging.error(f"Unknown block id: {block_id} (known: {', '.join(session.store.catalog.ids())})")
                exit_code = 1
                continue
            state = await session.generate_suggestions(block_id)
            if state.error:
                print(f"\n{block_id}: {state.error}")
                exit_code = 1
                continue

            print(f"\nJavaslatok ({block_id}):")
            for suggestion in state.suggestions:
                print(f"  - {suggestion}")
                if args.select_all:
                    session.toggle_suggestion(block_id, suggestion)
            if args.accept:
                session.suggestions.accept(block_id, state.suggestions)

        if args.summary:
            if not session.can_generate_summary():
                logging.warning("Summary skipped: needs AI, a concept or document, and a non-empty canvas")
            else:
                state = await session.generate_summary()
                if state.error:
                    print(f"\n{state.error}")
                    exit_code = 1
                else:
                    print(f"\n{state.text}")

        projections = list(EXPORT_FILENAMES) if args.export == "all" else [args.export]
        export_dir = args.export_dir or cfg.export_directory
        for projection in projections:
            if projection == "full" and not session.can_download():
                logging.info("Full export skipped: canvas, concept and document are all empty")
                continue
            if projection == "selections" and not len(session.selections):
                logging.info("Selections export skipped: nothing selected")
                continue
            path = session.export(projection).write_to(export_dir)
            logging.info(f"Exported {projection} projection to {path}")
            print(f"Exported: {path}")

    finally:
        if ai is not None:
            await ai.aclose()

    return exit_code


def parse_arguments():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Vászon - Business Model Canvas Engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --concept "Kávézó egyetemistáknak" --items canvas.yaml
  python main.py --concept "..." --attach terv.pdf --items canvas.yaml --summary
  python main.py --concept "..." --suggest value-propositions --select-all --export all
        """
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to the configuration file (default: config.yaml)"
    )

    parser.add_argument(
        "--concept",
        type=str,
        help="The business concept in a few sentences"
    )

    parser.add_argument(
        "--items",
        type=str,
        help="YAML file mapping block ids to lists of item texts"
    )

    parser.add_argument(
        "--attach",
        type=str,
        help="Document to attach as AI context (.txt, .md, .doc, .docx, .pdf)"
    )

    parser.add_argument(
        "--suggest",
        action="append",
        metavar="BLOCK_ID",
        help="Generate AI suggestions for a block (repeatable)"
    )

    parser.add_argument(
        "--select-all",
        action="store_true",
        help="Select every generated suggestion for the selections export"
    )

    parser.add_argument(
        "--accept",
        action="store_true",
        help="Add every generated suggestion to the canvas"
    )

    parser.add_argument(
        "--summary",
        action="store_true",
        help="Generate an AI summary of the canvas"
    )

    parser.add_argument(
        "--export",
        choices=["full", "items", "selections", "all"],
        default="full",
        help="Which export to write (default: full)"
    )

    parser.add_argument(
        "--export-dir",
        type=str,
        help="Directory for the exported files (default: from config)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Vászon {__version__}"
    )

    return parser.parse_args()


def main():
    """Main entry point."""
    args = parse_arguments()
    cfg = ConfigManager(args.config) if args.config else default_config
    setup_logging(cfg)

    logging.info("Vászon - Business Model Canvas Engine")

    try:
        exit_code = asyncio.run(run_session(args, cfg))

    except KeyboardInterrupt:
        logging.info("Session interrupted by user")
        print("\nSession interrupted.")
        exit_code = 1

    except Exception as e:
        logging.error(f"Session failed: {e}", exc_info=True)
        print(f"\nSession failed: {e}")
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
