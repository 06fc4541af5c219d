"""Web server command."""

import click

from .. import config


@click.command()
@click.option("--host", default=config.HOST, show_default=True, help="Host to bind to")
@click.option("--port", "-p", default=config.PORT, show_default=True, type=int, help="Port to bind to")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
def serve(host: str, port: int, reload: bool):
    """Start the API server.

    Examples:

        # Start on the configured port (5000 by default)
        samay serve

        # Expose to network (all interfaces)
        samay serve --host 0.0.0.0

        # Development mode with auto-reload
        samay serve --reload
    """
    import uvicorn

    from ..web import create_app

    click.echo()
    click.echo(click.style("Starting samay-sahayak API server...", fg="green"))
    click.echo()
    click.echo(f"  API:    http://{host}:{port}{config.API_PREFIX}")
    click.echo(f"  Health: http://{host}:{port}{config.API_PREFIX}/health")
    click.echo()
    click.echo("Press Ctrl+C to stop the server.")
    click.echo()

    # uvicorn handles SIGINT/SIGTERM; the app lifespan then closes the database
    uvicorn.run(
        "samay_sahayak.web:create_app" if reload else create_app(),
        host=host,
        port=port,
        reload=reload,
        factory=reload,
    )
