"""
Staffline CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import logging

import typer

from staffline import __version__
from staffline.cli import lanes, roster, task, timeline
from staffline.core.config.env import load_layered_env

# Help panel names for command grouping
PANEL_VIEW = "View the Schedule"
PANEL_RECORDS = "Manage Records"

app = typer.Typer(
    name="staffline",
    help="Lay out staff tasks on a timeline without overlaps",
    no_args_is_help=True,
    add_completion=False,
    context_settings={"help_option_names": ["--help", "-h"]},
)


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
) -> None:
    """
    Staffline - staff task timelines.

    Tasks of the same person that overlap in time are stacked in separate
    lanes so they never collide on the timeline.

    Quick Start:
        staffline staff add s1 "Aiko" --role designer
        staffline task add "Key visual" -a s1 -s 2024-05-01 -e 2024-05-03
        staffline timeline --week-of 2024-05-02
    """
    # Precedence: OS env > project .env > user .env
    load_layered_env()

    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    ctx.obj = {"debug": debug}


# =============================================================================
# View the Schedule
# =============================================================================

app.command(name="timeline", rich_help_panel=PANEL_VIEW)(timeline.timeline)
app.command(name="lanes", rich_help_panel=PANEL_VIEW)(lanes.lanes)


# =============================================================================
# Manage Records
# =============================================================================

app.add_typer(task.app, name="task", rich_help_panel=PANEL_RECORDS)
app.add_typer(roster.staff_app, name="staff", rich_help_panel=PANEL_RECORDS)
app.add_typer(roster.category_app, name="category", rich_help_panel=PANEL_RECORDS)
app.add_typer(roster.project_app, name="project", rich_help_panel=PANEL_RECORDS)


@app.command(rich_help_panel=PANEL_RECORDS)
def version() -> None:
    """Show staffline version and exit."""
    typer.echo(f"staffline version {__version__}")
    raise typer.Exit(0)


def cli_main() -> None:
    """Console script entry point."""
    app()


__all__ = ["app", "cli_main"]
