"""
Metadata Commands
-----------------

Read-only listings of tags, projects and meetings.

Commands:
    - tags: List tags with their category and color
    - projects: List projects
    - meetings: List meetings, scheduled ones first
"""
import click

from scobro.core.logging_manager import handle_cli_error
from scobro.core.exceptions import DatabaseError
from . import get_commands


@click.command()
@click.pass_context
def tags(ctx):
    """List all tags."""
    try:
        all_tags = get_commands(ctx).get_all_tags()

        click.echo(f"🏷  Tags ({len(all_tags)}):")
        for tag in all_tags:
            category = f" [{tag.category}]" if tag.category else ""
            click.echo(f"  • {tag.name}{category} {tag.color}")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "list_tags")


@click.command()
@click.pass_context
def projects(ctx):
    """List all projects."""
    try:
        all_projects = get_commands(ctx).get_all_projects()

        click.echo(f"📂 Projects ({len(all_projects)}):")
        for project in all_projects:
            description = f" - {project.description}" if project.description else ""
            click.echo(f"  • {project.name}{description}")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "list_projects")


@click.command()
@click.pass_context
def meetings(ctx):
    """List all meetings."""
    try:
        all_meetings = get_commands(ctx).get_all_meetings()

        click.echo(f"🟣 Meetings ({len(all_meetings)}):")
        for meeting in all_meetings:
            when = (
                meeting.start_time.strftime("%Y-%m-%d %H:%M")
                if meeting.start_time
                else "unscheduled"
            )
            click.echo(f"  • {when}  {meeting.title} ({meeting.status})")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "list_meetings")
