"""Technique catalog command."""

import click

from ..models.technique import TECHNIQUES
from .base import format_table


@click.command()
def techniques():
    """List the available time-management techniques."""
    rows = [
        [t.id, t.name, f"{t.default_session_length} min", f"{t.default_break_length} min"]
        for t in TECHNIQUES
    ]
    click.echo()
    click.echo(format_table(["ID", "Name", "Session", "Break"], rows))
    click.echo()
    for t in TECHNIQUES:
        click.echo(f"{t.name}: {t.description}")
    click.echo()
