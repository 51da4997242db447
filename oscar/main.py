"""Main application entry point for OSCAR."""

import sys
import asyncio
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import OscarConfig
from .services.notes_service import NotesService

logger = logging.getLogger(__name__)


class App:

    def __init__(self, config_path: Optional[str], log_level: Optional[str] = None):
        # Load configuration
        self.config = OscarConfig(config_path) if config_path else OscarConfig.default()
        # Set up logging (override config with command line if specified)
        level = log_level or self.config.get('logging.level', 'INFO')
        setup_logging(self.config, level)
        self.console = Console()
        self.service = NotesService(self.config)

    async def record(self, updates: List[str]) -> dict:
        """Feed recognizer snapshots through the service and format the result."""
        self.service.start_recording_session()
        for text in updates:
            self.service.publisher.publish_transcript(text)
        self.service.publisher.publish_stop()
        return await self.service.stop_recording_session()

    def show_note(self, result: dict) -> None:
        if not result["success"]:
            self.console.print(Panel(result["error"], title="No note", style="yellow"))
            return

        note = result["note"]
        self.console.print(Panel(
            Text(note.formatted_text),
            title=Text(note.title or "Untitled Note", style="bold"),
            subtitle=f"{note.formatter.value} formatting",
        ))

    def show_history(self) -> None:
        notes = self.service.list_notes()
        if not notes:
            self.console.print("No saved notes.")
            return

        table = Table(title="Saved notes")
        table.add_column("Created")
        table.add_column("Title")
        table.add_column("Preview")
        for note in notes:
            preview = note.text.replace("\n", " ")
            table.add_row(note.created_at, note.title, preview[:60])
        self.console.print(table)

    def cleanup(self) -> None:
        self.service.shutdown()


def setup_logging(config, level: str = "INFO") -> None:

    """Set up logging configuration from YAML config."""
    log_file_path = config.get('logging.file_path', 'data/logs/oscar.log')
    console_output = config.get('logging.console_output', True)

    # Create logs directory if it doesn't exist
    log_dir = Path(log_file_path).parent
    log_dir.mkdir(parents=True, exist_ok=True)

    handlers = []

    # File handler - always write to file
    file_handler = logging.FileHandler(log_file_path)
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
    )
    file_handler.setFormatter(file_formatter)
    handlers.append(file_handler)

    # Console handler - only if enabled in config
    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.WARNING)  # Only show warnings and above on console
        console_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        console_handler.setFormatter(console_formatter)
        handlers.append(console_handler)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in handlers:
        root_logger.addHandler(handler)

    logger.info("="*50)
    logger.info("OSCAR starting up")
    logger.info(f"Log file: {log_file_path}")
    logger.info(f"Log level set to: {level}")
    logger.info("="*50)


def read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding='utf-8')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="OSCAR - turn spoken transcripts into clean notes",
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration YAML file (default: built-in settings)"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (default: from config, else INFO)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version="OSCAR v0.1.0"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    fmt = commands.add_parser("format", help="Format a finished transcript file ('-' for stdin)")
    fmt.add_argument("source", type=str)

    replay = commands.add_parser(
        "replay",
        help="Replay recognizer snapshots (one per line) through the reconciler, then format",
    )
    replay.add_argument("source", type=str)

    for sub in (fmt, replay):
        sub.add_argument("--save", action="store_true", help="Save the note to history")
        sub.add_argument("--export", type=str, help="Write the note to a plain-text file")

    commands.add_parser("history", help="List saved notes, newest first")

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for OSCAR."""
    args = build_parser().parse_args(argv)

    app = None
    try:
        app = App(args.config, args.log_level)
        if args.command == "history":
            app.show_history()
            return

        text = read_source(args.source)
        updates = text.splitlines() if args.command == "replay" else [text]
        result = asyncio.run(app.record(updates))
        app.show_note(result)
        if not result["success"]:
            sys.exit(1)

        if args.save:
            saved = app.service.save_note()
            if saved["success"]:
                app.console.print(f"Saved note {saved['saved'].id}")
            else:
                print(f"Error: {saved['error']}")
                sys.exit(1)
        if args.export:
            exported = app.service.export_note(args.export)
            if exported["success"]:
                app.console.print(f"Exported to {exported['path']}")
    except KeyboardInterrupt:
        print("\nGoodbye!")
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        logging.error(f"Application error: {e}")
        sys.exit(1)
    finally:
        if app is not None:
            app.cleanup()


if __name__ == "__main__":
    main()
