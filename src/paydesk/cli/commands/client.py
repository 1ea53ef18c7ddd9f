"""Client management commands."""

import click
from paydesk.cli.client_resolution import resolve_client_or_exit
from paydesk.cli.error_handling import handle_domain_error
from paydesk.domain.client import ClientService
from paydesk.domain.entities import BankAccount, PayoutCurrency, PlatformDetail
from paydesk.domain.errors import ValidationError
from paydesk.utils.amount_parser import parse_amount
from paydesk.utils.formatting import format_percentage

CURRENCY_CHOICES = [currency.value for currency in PayoutCurrency]


def parse_bank_option(value: str) -> BankAccount:
    """Parse a --bank value of the form 'Bank|Account Number|Account Name'."""
    parts = [part.strip() for part in value.split("|")]
    if len(parts) != 3:
        raise ValidationError(
            f"Invalid bank account '{value}' (expected 'Bank|Account Number|Account Name')"
        )
    return BankAccount.from_dict(
        {"bank_name": parts[0], "account_number": parts[1], "account_name": parts[2]}
    )


def parse_platform_option(value: str) -> PlatformDetail:
    """Parse a --platform value of the form 'Name' or 'Name:payout_id'."""
    name, _, payout_id = value.partition(":")
    return PlatformDetail.from_dict({"platform_name": name, "payout_id": payout_id})


def _parse_percentage(value: str):
    return parse_amount(value.rstrip("%").strip())


@click.group()
def client_group():
    """Manage clients."""
    pass


@client_group.command("create")
@click.argument("name", metavar="CLIENT_NAME")
@click.option("--commission", required=True, help="Commission percentage (0-100)")
@click.option(
    "--currency",
    type=click.Choice(CURRENCY_CHOICES, case_sensitive=False),
    default="THB",
    show_default=True,
    help="Preferred payout currency",
)
@click.option("--phone", help="Phone number")
@click.option(
    "--bank",
    "banks",
    multiple=True,
    help="Bank account as 'Bank|Account Number|Account Name' (repeatable)",
)
@click.option(
    "--platform",
    "platforms",
    multiple=True,
    help="Platform as 'Name' or 'Name:payout_id' (repeatable)",
)
@click.pass_context
def create_client(ctx, name, commission, currency, phone, banks, platforms):
    """Create a new client.

    Examples:
        paydesk client create "Ko Aung" --commission 10
        paydesk client create "Ma Hnin" --commission 12.5 --currency MMK \\
            --bank "KBZ|0123456789|Ma Hnin" --platform "YouTube:UC-1234"
    """
    db = ctx.obj["db"]
    service = ClientService(db)

    try:
        client_id = service.create_client(
            name=name,
            commission_percentage=_parse_percentage(commission),
            preferred_payout_currency=currency,
            phone=phone,
            bank_accounts=[parse_bank_option(bank) for bank in banks],
            platform_details=[parse_platform_option(platform) for platform in platforms],
        )
        click.echo(f"Created client '{name.strip()}' (ID: {client_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@client_group.command("list")
@click.pass_context
def list_clients(ctx):
    """List all clients."""
    db = ctx.obj["db"]
    service = ClientService(db)

    clients = service.list_clients()
    if not clients:
        click.echo("No clients found.")
        return

    click.echo("\nClients:")
    click.echo("-" * 70)
    for c in clients:
        click.echo(
            f"ID: {c.id:3d} | {c.name:24s} | "
            f"Commission: {format_percentage(c.commission_percentage):>6s}% | "
            f"Payout: {c.preferred_payout_currency.value}"
        )


@client_group.command("show")
@click.argument("client", metavar="CLIENT")
@click.pass_context
def show_client(ctx, client):
    """Show a client with its bank accounts and platforms.

    CLIENT can be a client name or ID. The index and id shown for each bank
    account and platform are what 'transaction add --bank/--platform' accept.
    """
    db = ctx.obj["db"]
    service = ClientService(db)
    client_id = resolve_client_or_exit(ctx, service, client)
    c = service.require_client(client_id)

    click.echo(f"\nClient {c.id}: {c.name}")
    click.echo("-" * 60)
    click.echo(f"Phone:           {c.phone or '-'}")
    click.echo(f"Commission:      {format_percentage(c.commission_percentage)}%")
    click.echo(f"Payout currency: {c.preferred_payout_currency.value}")

    click.echo("\nBank accounts:")
    if not c.bank_accounts:
        click.echo("  (none)")
    for index, account in enumerate(c.bank_accounts):
        click.echo(
            f"  [{index}] {account.bank_name} {account.account_number} "
            f"({account.account_name})  id={account.id}"
        )

    click.echo("\nPlatforms:")
    if not c.platform_details:
        click.echo("  (none)")
    for index, platform in enumerate(c.platform_details):
        payout_id = platform.payout_id or "no payout ID"
        click.echo(f"  [{index}] {platform.platform_name} ({payout_id})  id={platform.id}")


@client_group.command("update")
@click.argument("client", metavar="CLIENT")
@click.option("--name", help="New client name")
@click.option("--phone", help="New phone number (empty string clears it)")
@click.option("--commission", help="New commission percentage (0-100)")
@click.option(
    "--currency",
    type=click.Choice(CURRENCY_CHOICES, case_sensitive=False),
    help="New preferred payout currency",
)
@click.option("--bank", "banks", multiple=True, help="Replace bank accounts (repeatable)")
@click.option("--clear-banks", is_flag=True, help="Remove all bank accounts")
@click.option("--platform", "platforms", multiple=True, help="Replace platforms (repeatable)")
@click.option("--clear-platforms", is_flag=True, help="Remove all platforms")
@click.pass_context
def update_client(
    ctx, client, name, phone, commission, currency, banks, clear_banks, platforms, clear_platforms
):
    """Update a client.

    CLIENT can be a client name or ID. Giving --bank or --platform replaces
    the whole list. Existing transactions keep the values they were recorded
    with; new invoices use the updated commission rate.

    Examples:
        paydesk client update "Ko Aung" --commission 15
        paydesk client update 3 --bank "SCB|111-2-33333-4|Ko Aung"
    """
    db = ctx.obj["db"]
    service = ClientService(db)
    client_id = resolve_client_or_exit(ctx, service, client)

    try:
        bank_accounts = None
        if clear_banks:
            bank_accounts = []
        elif banks:
            bank_accounts = [parse_bank_option(bank) for bank in banks]

        platform_details = None
        if clear_platforms:
            platform_details = []
        elif platforms:
            platform_details = [parse_platform_option(platform) for platform in platforms]

        service.update_client(
            client_id=client_id,
            name=name,
            phone=phone,
            commission_percentage=_parse_percentage(commission) if commission is not None else None,
            preferred_payout_currency=currency,
            bank_accounts=bank_accounts,
            platform_details=platform_details,
        )
        click.echo(f"Updated client {client_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@client_group.command("delete")
@click.argument("client", metavar="CLIENT")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_client(ctx, client, yes):
    """Delete a client.

    CLIENT can be a client name or ID. Clients with transactions or invoices
    cannot be deleted.
    """
    db = ctx.obj["db"]
    service = ClientService(db)
    client_id = resolve_client_or_exit(ctx, service, client)

    if not yes:
        click.confirm(f"Delete client {client_id}?", abort=True)

    try:
        service.delete_client(client_id)
        click.echo(f"Deleted client {client_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register client commands with main CLI."""
    cli.add_command(client_group, name="client")
