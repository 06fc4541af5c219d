"""Initialize project command."""

import click

from .. import config
from ..db import get_db_path, init_db
from .base import async_command, echo_info, echo_success


@click.command()
@click.option("--db", "db_path", type=click.Path(dir_okay=False), help="Database file path")
@async_command
async def init(db_path: str | None):
    """Initialize the samay-sahayak data directory and database."""
    path = get_db_path(db_path)

    echo_info(f"Initializing samay-sahayak in {path.parent}")
    await init_db(path)
    echo_success(f"Database initialized at {path}")

    if not config.OPENAI_API_KEY:
        click.echo()
        click.echo("Set OPENAI_API_KEY (in the environment or a .env file) to enable AI planning.")

    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Start the API server:")
    click.echo("     samay serve")
    click.echo()
    click.echo("  2. Plan your day:")
    click.echo("     samay plan --user me --save")
