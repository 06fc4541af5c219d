"""CLI entry point for samay-sahayak."""

import click

from . import __version__, config
from .commands import analytics, ceo, init, plan, serve, techniques, timetables


@click.group()
@click.version_option(version=__version__, prog_name="samay")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """samay: AI-assisted daily timetable planner.

    Turn a task list into a daily schedule using a time-management
    technique, then track which tasks got done.

    Example usage:

        # Initialize the database
        samay init

        # Run the API server
        samay serve

        # Plan a day and save it
        samay plan --ai --save --user me

        # Review progress
        samay analytics show --user me
    """
    if verbose:
        config.configure_logging("DEBUG")


# Register commands
main.add_command(init)
main.add_command(serve)
main.add_command(plan)
main.add_command(ceo)
main.add_command(timetables)
main.add_command(analytics)
main.add_command(techniques)


def run():
    """Run the CLI (handles async event loop)."""
    main()


if __name__ == "__main__":
    run()
