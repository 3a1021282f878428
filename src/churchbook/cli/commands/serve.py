"""Run the JSON API."""

import click


@click.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True, help="Interface to bind")
@click.option("--port", default=8080, show_default=True, type=int, help="Port to listen on")
@click.pass_context
def serve(ctx, host: str, port: int):
    """Serve the JSON API with Flask's development server.

    Examples:
        churchbook serve
        churchbook serve --host 0.0.0.0 --port 9000
    """
    from churchbook.api import create_app

    app = create_app(settings=ctx.obj["settings"], db=ctx.obj["db"])
    app.run(host=host, port=port)


def register_commands(cli):
    """Register serve command with main CLI."""
    cli.add_command(serve)
