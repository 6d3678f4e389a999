#!/usr/bin/env python3
"""
ScoBro Logbook CLI
------------------

Command-line interface over the logbook store.

This module provides the main CLI group and shared context setup
for all logbook commands.

Command Structure:
    - Setup (init)
    - Entries (add, list, delete-entry)
    - Metadata (tags, projects, meetings)
    - Export (export csv, export markdown)

Usage:
    # Get general help
    logbook --help

    # Record a note
    logbook add 2024-01-01T09:00:00Z --type Note --content "stand-up" --tag team-a

    # Export everything
    logbook export markdown -o logbook.md
"""
import click
from pathlib import Path

from scobro.core.paths import DB_PATH, LOG_DIR
from scobro.commands import LogbookCommands
from scobro.database import LogbookDB


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    default=str(DB_PATH),
    help="Path to database file",
)
@click.option(
    "--log-dir",
    type=click.Path(),
    default=str(LOG_DIR),
    help="Path to log directory",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Show detailed errors and tracebacks",
)
@click.pass_context
def cli(ctx, db_path, log_dir, verbose):
    """ScoBro Logbook CLI"""
    ctx.ensure_object(dict)
    ctx.obj["db_path"] = Path(db_path)
    ctx.obj["log_dir"] = Path(log_dir)
    ctx.obj["verbose"] = verbose
    ctx.call_on_close(lambda: _close_db(ctx))


def _close_db(ctx) -> None:
    db = ctx.obj.pop("db", None)
    if db is not None:
        db.close()


def get_db(ctx) -> LogbookDB:
    """Get or create the store instance from context."""
    if "db" not in ctx.obj:
        ctx.obj["db"] = LogbookDB(
            db_path=ctx.obj["db_path"],
            log_dir=ctx.obj["log_dir"],
        )
        ctx.obj["logger"] = ctx.obj["db"].logger
    return ctx.obj["db"]


def get_commands(ctx) -> LogbookCommands:
    """Command surface bound to the context's store."""
    return LogbookCommands(get_db(ctx))


# Import and register command modules
# These imports must come after CLI group definition
from .entries import init, add, list_entries, delete_entry  # noqa: E402
from .metadata import tags, projects, meetings  # noqa: E402
from .export import export  # noqa: E402

# Register top-level commands
cli.add_command(init)
cli.add_command(add)
cli.add_command(list_entries)
cli.add_command(delete_entry)
cli.add_command(tags)
cli.add_command(projects)
cli.add_command(meetings)

# Register command groups
cli.add_command(export)


if __name__ == "__main__":
    cli(obj={})
