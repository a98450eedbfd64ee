#!/usr/bin/env python3
"""
Toodooist CLI.

Entry point for inspecting and driving the board from a terminal.
Use --service to select what to run.

Usage:
    python cli.py --help
    python cli.py --service list
    python cli.py --service add --text "Call the plumber" --due 2024-01-12 --color mint
    python cli.py --service drag --note-id 1704888000123 --to 300 200
    python cli.py --service drag --note-id 1704888000123 --trash
    python cli.py --service config
"""

import sys
from datetime import date, datetime
from pathlib import Path

import click
import structlog
from rich.console import Console
from rich.table import Table

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from toodooist.core.logging import get_logger, setup_logging
from toodooist.schemas.note import NoteColor

STATUS_STYLES = {
    "overdue": "red",
    "due_today": "bold yellow",
    "due_soon": "yellow",
    "approaching": "cyan",
    "none": "dim",
}


def validate_project_root() -> Path:
    """Validate that we're running from the project root."""
    if not (PROJECT_ROOT / ".project_root").exists():
        click.echo(
            click.style("Error: .project_root not found. Run from project root.", fg="red"),
            err=True,
        )
        sys.exit(1)
    return PROJECT_ROOT


def _parse_viewport(value: str) -> tuple[float, float]:
    try:
        width, height = value.lower().split("x")
        return float(width), float(height)
    except ValueError:
        raise click.BadParameter(f"Expected WIDTHxHEIGHT, got {value!r}")


@click.command()
@click.option(
    "--service", "-s",
    type=click.Choice(["info", "config", "list", "add", "drag"]),
    default="info",
    help="Service or command to run.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output (INFO level logging).",
)
@click.option(
    "--debug", "-d",
    is_flag=True,
    help="Enable debug output (DEBUG level logging).",
)
@click.option("--text", default=None, help="Note description (add).")
@click.option(
    "--due",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Due date YYYY-MM-DD (add).",
)
@click.option(
    "--color",
    type=click.Choice([c.name.lower() for c in NoteColor]),
    default=None,
    help="Note color (add).",
)
@click.option("--note-id", type=int, default=None, help="Target note (drag).")
@click.option(
    "--to",
    type=(float, float),
    default=None,
    help="Drop the note's top-left at X Y (drag).",
)
@click.option("--trash", is_flag=True, help="Release the drag over the trash zone (drag).")
@click.option(
    "--viewport",
    default="1280x800",
    help="Viewport size WIDTHxHEIGHT used for drags.",
)
def main(
    service: str,
    verbose: bool,
    debug: bool,
    text: str | None,
    due: datetime | None,
    color: str | None,
    note_id: int | None,
    to: tuple[float, float] | None,
    trash: bool,
    viewport: str,
) -> None:
    """
    Toodooist CLI.

    \b
    Examples:
        python cli.py --service list
        python cli.py --service add --text "Buy milk" --color cream
        python cli.py --service drag --note-id 1704888000123 --to 320 180
        python cli.py --service drag --note-id 1704888000123 --trash
        python cli.py --service config
    """
    validate_project_root()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"

    setup_logging(level=log_level, format_type="console")

    structlog.contextvars.bind_contextvars(source="cli")

    logger = get_logger(__name__)

    logger.debug("CLI invoked", extra={"service": service, "log_level": log_level})

    if service == "info":
        show_info(logger)
    elif service == "config":
        show_config(logger)
    elif service == "list":
        list_notes(logger)
    elif service == "add":
        add_note(logger, text, due.date() if due else None, color)
    elif service == "drag":
        drag_note(logger, note_id, to, trash, _parse_viewport(viewport))


def _open_board(logger, viewport: tuple[float, float] = (1280.0, 800.0)):
    """Load the configured board behind a headless surface."""
    from toodooist.interaction.geometry import Viewport
    from toodooist.interaction.surface import HeadlessSurface
    from toodooist.services.board import Board

    try:
        return Board.from_config(HeadlessSurface(Viewport(*viewport)))
    except Exception as e:
        logger.error("Failed to open board", extra={"error": str(e)})
        click.echo(click.style(f"Error: Could not open board: {e}", fg="red"), err=True)
        sys.exit(1)


def list_notes(logger) -> None:
    """Print the board as a table."""
    board = _open_board(logger)
    views = board.views(date.today())

    if not views:
        click.echo("No notes yet. Add one with --service add --text \"...\"")
        return

    table = Table(title="Toodooist", show_header=True)
    table.add_column("ID", style="cyan")
    table.add_column("Description")
    table.add_column("Color")
    table.add_column("Due")
    table.add_column("Status")
    table.add_column("Position")

    for view in views:
        note = view.note
        status = view.due_status.value
        style = STATUS_STYLES[status]
        position = (
            "flow" if note.is_unplaced
            else f"{note.position.x:g}, {note.position.y:g}"
        )
        table.add_row(
            str(note.id),
            note.description,
            note.color.name.lower(),
            view.due_label or "-",
            f"[{style}]{status}[/{style}]",
            position,
        )

    Console().print(table)
    logger.info("Notes listed", extra={"count": len(views)})


def add_note(logger, text: str | None, due: date | None, color: str | None) -> None:
    """Create a note."""
    if text is None:
        click.echo(click.style("Error: --text is required for add.", fg="red"), err=True)
        sys.exit(2)

    from toodooist.repositories.note import Outcome

    board = _open_board(logger)
    result = board.add_note(text, due, color)

    if result.outcome is Outcome.REJECTED:
        click.echo(click.style(f"Rejected: {result.error.details}", fg="red"), err=True)
        sys.exit(1)

    click.echo(f"Created note {result.note.id}")
    if not result.saved:
        click.echo(click.style(f"Warning: not saved ({result.error.message})", fg="yellow"), err=True)
        sys.exit(1)


def drag_note(
    logger,
    note_id: int | None,
    to: tuple[float, float] | None,
    trash: bool,
    viewport: tuple[float, float],
) -> None:
    """Simulate a pointer drag of one note."""
    if note_id is None or (to is None and not trash):
        click.echo(
            click.style("Error: drag needs --note-id and either --to X Y or --trash.", fg="red"),
            err=True,
        )
        sys.exit(2)

    board = _open_board(logger, viewport)
    note = board.repository.get(note_id)
    if note is None:
        click.echo(click.style(f"Note {note_id} not found.", fg="yellow"), err=True)
        sys.exit(1)

    start = (note.position.x, note.position.y)
    if trash:
        end = (board.drag.trash_zone.width / 2, viewport[1] - board.drag.trash_zone.height / 2)
    else:
        end = to

    board.pointer_down(note_id, *start)
    board.surface.dispatch_move(*end)
    board.surface.dispatch_end(*end)

    placement = board.last_placement
    if board.repository.get(note_id) is None:
        click.echo(f"Note {note_id} moved to trash")
    elif placement is not None:
        moved = board.repository.get(note_id)
        click.echo(f"Note {note_id} placed at {moved.position.x:g}, {moved.position.y:g}")

    if board.repository.last_save_error is not None:
        click.echo(click.style("Warning: change not saved", fg="yellow"), err=True)
        sys.exit(1)


def show_config(logger) -> None:
    """Display loaded configuration."""
    click.echo("Application Configuration:\n")

    try:
        from toodooist.core.config import get_app_config

        app_config = get_app_config()

        sections = [
            ("Application Settings", app_config.application),
            ("Logging Settings", app_config.logging),
            ("Board Settings", app_config.board),
            ("Storage Settings", app_config.storage),
        ]
        for title, section in sections:
            click.echo(f"{title} (from YAML):")
            click.echo("-" * 40)
            for key, value in section.model_dump().items():
                if isinstance(value, dict):
                    click.echo(f"  {key}:")
                    for k, v in value.items():
                        click.echo(f"    {k}: {v}")
                else:
                    click.echo(f"  {key}: {value}")
            click.echo()

        logger.info("Configuration displayed successfully")

    except Exception as e:
        logger.error("Failed to load configuration", extra={"error": str(e)})
        click.echo(click.style(f"Error loading configuration: {e}", fg="red"))
        sys.exit(1)


def show_info(logger) -> None:
    """Display application information."""
    try:
        from toodooist.core.config import get_app_config
        app_config = get_app_config()
        click.echo(app_config.application.name)
        click.echo("=" * 40)
        click.echo(f"Version: {app_config.application.version}")
        click.echo(f"Description: {app_config.application.description}")
        click.echo(f"Storage: {app_config.storage.backend}")
    except Exception as e:
        logger.error(
            "Failed to load application configuration",
            extra={"error": str(e)},
        )
        click.echo(
            click.style(
                "Error: Could not load application.yaml configuration.",
                fg="red",
            ),
            err=True,
        )
        sys.exit(1)

    click.echo()
    click.echo("Services (--service):")
    click.echo("  list           Show all notes with due-date status")
    click.echo("  add            Create a note (--text, --due, --color)")
    click.echo("  drag           Drag a note (--note-id with --to X Y or --trash)")
    click.echo("  config         Display configuration")
    click.echo("  info           Show this information")
    click.echo()
    click.echo("Options:")
    click.echo("  --verbose, -v  Enable INFO level logging")
    click.echo("  --debug, -d    Enable DEBUG level logging")


if __name__ == "__main__":
    main()
