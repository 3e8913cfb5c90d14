"""Typer app configuration and logging setup."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="slotcanvas",
    help="Render designed pages and fill their content slots",
    add_completion=False,
)


def register_commands() -> None:
    """Register all commands from feature modules."""
    # Import and register page commands
    from .page.commands import fill, render, slots

    app.command(name="slots")(slots)
    app.command(name="render")(render)
    app.command(name="fill")(fill)

    # Import and register preset commands
    from .preset.commands import export, presets, save

    app.command(name="presets")(presets)
    app.command(name="save")(save)
    app.command(name="export")(export)


def setup_logging(log_dir: Path, verbose: bool = False) -> None:
    """Configure logging for CLI.

    - Suppresses console output from libraries
    - Sends slotcanvas logs to ``<log_dir>/slotcanvas.log``
    """
    log_dir.mkdir(parents=True, exist_ok=True)

    # Remove any default console handlers from root logger
    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.setLevel(logging.CRITICAL)

    # Suppress loggers that might print to console
    for logger_name in ["httpx", "httpcore", "PIL", "asyncio"]:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.WARNING)
        logger.propagate = False

    engine_logger = logging.getLogger("slotcanvas")
    engine_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    engine_logger.propagate = False
    engine_logger.handlers = []  # Clear any existing handlers
    file_handler = logging.FileHandler(log_dir / "slotcanvas.log", encoding="utf-8")
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)s | %(message)s")
    )
    engine_logger.addHandler(file_handler)


@app.callback()
def main_callback(
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", envvar="SLOTCANVAS_LOG_DIR", help="Log directory"),
    verbose: bool = typer.Option(False, "--verbose", help="Log fit searches and renders"),
) -> None:
    """SlotCanvas command line."""
    setup_logging(log_dir or Path("logs"), verbose)


# Register all commands
register_commands()


def main() -> None:
    """CLI entry point."""
    app()
