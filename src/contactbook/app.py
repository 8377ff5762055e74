"""
Contact Book application entry point.

Sets up logging and configuration, loads the contact book and runs the Qt
event loop.
"""

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from contactbook import __version__
from contactbook.config import ConfigManager
from contactbook.contacts import ContactBook, ContactFile


def setup_logging(level: str = "INFO", log_dir: str = "logs") -> None:
    """Configure logging."""
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    # Remove default handler
    logger.remove()

    # Console handler
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level=level,
        colorize=True,
    )

    # File handler
    logger.add(
        log_path / "contactbook.log",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        level="DEBUG",
        rotation="10 MB",
        retention="7 days",
        compression="zip",
    )


def build_book(config: ConfigManager) -> ContactBook:
    """Create the contact book for the configured data file and load it."""
    book = ContactBook(ContactFile(Path(config.get("storage.path", "contacts.json"))))
    book.load()
    return book


def run(config: ConfigManager) -> int:
    """Open the main window and block until it is closed."""
    from PyQt6.QtWidgets import QApplication

    from contactbook.ui.window import ContactManagerWindow

    qt_app = QApplication.instance() or QApplication(sys.argv)

    book = build_book(config)
    window = ContactManagerWindow(book, config)
    window.center_on_screen()
    window.show()
    window.show_load_error()

    return qt_app.exec()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Contact Book - desktop contact list manager"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=os.getenv("CONTACTBOOK_CONFIG", "config.yaml"),
        help="Path to configuration file"
    )
    parser.add_argument(
        "--data-file",
        type=str,
        default=None,
        help="Path to the contacts file (overrides storage.path)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"Contact Book {__version__}"
    )
    return parser.parse_args(argv)


def cli(argv: Optional[List[str]] = None) -> None:
    """CLI entry point."""
    args = parse_args(argv)

    config = ConfigManager(args.config)
    config.load()
    if args.data_file:
        config.set("storage.path", args.data_file)
    if args.debug:
        config.set("app.debug", True)

    level = "DEBUG" if config.get("app.debug") else str(config.get("logging.level", "INFO"))
    setup_logging(level=level, log_dir=str(config.get("logging.dir", "logs")))

    logger.info("=" * 50)
    logger.info(f"Contact Book {__version__}")
    logger.info("=" * 50)

    try:
        code = run(config)
    except KeyboardInterrupt:
        logger.info("Shutdown requested via keyboard")
        code = 0
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)
    sys.exit(code)
