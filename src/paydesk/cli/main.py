"""Main CLI entry point."""

import logging

import click
from paydesk.database.factories import create_sqlite_database

# Import and register all commands at module level
from paydesk.cli.commands import client, transaction, invoice


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides PAYDESK_DB_PATH environment variable)",
    envvar="PAYDESK_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Log progress messages to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Paydesk - client commissions, payouts and invoices.

    Record clients with their commission terms, log incoming payments and
    issue PDF or JPEG invoices for them.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
client.register_commands(cli)
transaction.register_commands(cli)
invoice.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
