"""
Export Commands
---------------

Logbook export commands.

Commands:
    - csv: Export every item as a CSV row
    - markdown: Export entries as a Markdown report

Without --output the export is printed to stdout. A relative --output
is resolved against the exports directory.
"""
from pathlib import Path
from typing import Optional

import click

from scobro.core.logging_manager import handle_cli_error
from scobro.core.paths import EXPORT_DIR
from scobro.core.exceptions import DatabaseError
from . import get_commands, get_db


def _emit(ctx: click.Context, text: str, output: Optional[str]) -> None:
    if output is None:
        click.echo(text, nl=False)
        return

    # Relative paths land in the exports directory.
    path = get_db(ctx).export_manager.write_export(text, EXPORT_DIR / Path(output).expanduser())
    click.echo(f"✅ Export complete: {path}", err=True)


@click.group()
@click.pass_context
def export(ctx: click.Context) -> None:
    """Export the logbook to CSV or Markdown."""
    pass


@export.command("csv")
@click.option("-o", "--output", type=click.Path(), default=None, help="Output file (relative to the exports directory)")
@click.pass_context
def export_csv(ctx, output):
    """Export all items to CSV."""
    try:
        _emit(ctx, get_commands(ctx).export_entries_csv(), output)

    except DatabaseError as e:
        handle_cli_error(ctx, e, "export_csv", additional_context={"output": output})


@export.command("markdown")
@click.option("-o", "--output", type=click.Path(), default=None, help="Output file (relative to the exports directory)")
@click.pass_context
def export_markdown(ctx, output):
    """Export all entries to Markdown."""
    try:
        _emit(ctx, get_commands(ctx).export_entries_markdown(), output)

    except DatabaseError as e:
        handle_cli_error(ctx, e, "export_markdown", additional_context={"output": output})
