"""Main CLI entry point."""

import click

from churchbook.config import Settings
from churchbook.database.factories import create_database
from churchbook.logging_config import setup_logging

# Import and register all commands at module level
from churchbook.cli.commands import account, init_db, report, serve, user


@click.group()
@click.option(
    "--db-url",
    help="SQLAlchemy database URL (overrides CHURCHBOOK_DATABASE_URL environment variable)",
    envvar="CHURCHBOOK_DATABASE_URL",
)
@click.option(
    "--log-level",
    help="Log level (overrides CHURCHBOOK_LOG_LEVEL environment variable)",
    envvar="CHURCHBOOK_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_url: str | None, log_level: str | None):
    """Churchbook - church finance management.

    Track members, accounts, transactions and their receipts, expenditures
    and transfers.
    """
    ctx.ensure_object(dict)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        settings = Settings.from_env()
        setup_logging(log_level or settings.log_level, settings.json_logs)

        db = create_database(db_url or settings.database_url)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["settings"] = settings
        ctx.call_on_close(db.disconnect)


# Register all commands
init_db.register_commands(cli)
account.register_commands(cli)
user.register_commands(cli)
report.register_commands(cli)
serve.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
