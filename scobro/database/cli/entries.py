"""
Entry Commands
--------------

Create, browse and delete logbook entries.

Commands:
    - init: Create the store and its tables
    - add: Record an entry with one item
    - list: Show every entry with its items
    - delete-entry: Remove an entry and everything below it
"""
import click

from scobro.core.logging_manager import handle_cli_error
from scobro.core.exceptions import DatabaseError, ValidationError
from scobro.database.models import ItemType
from . import get_commands, get_db


@click.command()
@click.pass_context
def init(ctx):
    """Initialize the logbook store."""
    try:
        db = get_db(ctx)
        click.echo("🗄️  Initializing logbook schema...")
        db.initialize_schema()
        click.echo(f"✅ Logbook ready: {db.db_path}")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "init")


@click.command()
@click.argument("timestamp")
@click.option(
    "--type",
    "item_type",
    default=ItemType.NOTE.value,
    show_default=True,
    help=f"Item type ({', '.join(ItemType.choices())} or any label)",
)
@click.option("--content", required=True, help="Item text")
@click.option("--project", default=None, help="Project name")
@click.option("--tag", "tags", multiple=True, help="Tag (repeatable)")
@click.option("--jira", multiple=True, help="Jira key (repeatable)")
@click.option("--person", "people", multiple=True, help="Person (repeatable)")
@click.pass_context
def add(ctx, timestamp, item_type, content, project, tags, jira, people):
    """Record an entry at TIMESTAMP (RFC 3339, e.g. 2024-01-01T09:00:00Z)."""
    try:
        entry = get_commands(ctx).create_entry(
            {
                "timestamp": timestamp,
                "items": [
                    {
                        "item_type": item_type,
                        "content": content,
                        "project": project,
                        "tags": list(tags),
                        "jira": list(jira),
                        "people": list(people),
                    }
                ],
            }
        )
        click.echo(f"✅ Entry created: {entry.id}")
        for item in entry.items:
            click.echo(f"  • {ItemType.emoji_for(item.item_type)} {item.item_type}: {item.id}")

    except (DatabaseError, ValidationError) as e:
        handle_cli_error(ctx, e, "add", additional_context={"timestamp": timestamp})


@click.command("list")
@click.pass_context
def list_entries(ctx):
    """Show all entries, most recent first."""
    try:
        entries = get_commands(ctx).get_all_entries()

        if not entries:
            click.echo("📭 No entries yet")
            return

        for entry in entries:
            click.echo(f"\n📅 {entry.timestamp.strftime('%Y-%m-%d %H:%M:%S')}  ({entry.id})")
            for item in entry.items:
                emoji = ItemType.emoji_for(item.item_type)
                click.echo(f"  {emoji} [{item.item_type}] {item.content}")
                if item.project:
                    click.echo(f"      project: {item.project}")
                if item.tags:
                    click.echo(f"      tags: {', '.join(item.tags)}")
                if item.jira:
                    click.echo(f"      jira: {', '.join(item.jira)}")
                if item.people:
                    click.echo(f"      people: {', '.join(item.people)}")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "list")


@click.command("delete-entry")
@click.argument("entry_id")
@click.pass_context
def delete_entry(ctx, entry_id):
    """Delete an entry with its items."""
    try:
        get_commands(ctx).delete_entry(entry_id)
        click.echo(f"🗑️  Deleted entry {entry_id}")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "delete_entry", additional_context={"entry_id": entry_id})
