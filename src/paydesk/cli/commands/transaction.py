"""Transaction commands."""

import click
from paydesk.cli.client_resolution import resolve_client_or_exit
from paydesk.cli.error_handling import handle_domain_error
from paydesk.domain.calculator import ZERO
from paydesk.domain.client import ClientService
from paydesk.domain.errors import NotFoundError
from paydesk.domain.transaction import TransactionService
from paydesk.utils.amount_parser import parse_amount
from paydesk.utils.date_parser import parse_date
from paydesk.utils.formatting import format_money, format_rate


@click.group()
def transaction_group():
    """Record and view incoming payments."""
    pass


@transaction_group.command("add")
@click.option("--client", "client", required=True, help="Client name or ID")
@click.option("--amount", required=True, help="Incoming amount in THB")
@click.option("--date", "date_str", default="today", show_default=True, help="Transaction date")
@click.option("--usd", help="Original amount in USD (informational)")
@click.option("--rate", help="Exchange rate: MMK per 1 THB")
@click.option("--fees", help="Fees deducted on the invoice")
@click.option("--notes", help="Free-form notes")
@click.option("--bank", help="Bank account index or id from 'client show'")
@click.option("--platform", help="Platform index or id from 'client show', or 'Other'")
@click.pass_context
def add_transaction(ctx, client, amount, date_str, usd, rate, fees, notes, bank, platform):
    """Record an incoming payment for a client.

    The commission and payout are computed from the client's current
    commission rate and payout currency and stored with the transaction.

    Examples:
        paydesk transaction add --client "Ko Aung" --amount 100000 --bank 0
        paydesk transaction add --client 2 --amount "฿50,000" --rate 60 --platform Other
    """
    db = ctx.obj["db"]
    client_service = ClientService(db)
    service = TransactionService(db)
    client_id = resolve_client_or_exit(ctx, client_service, client)

    try:
        transaction_id = service.create_transaction(
            client_id=client_id,
            incoming_amount_thb=parse_amount(amount),
            transaction_date=parse_date(date_str),
            original_amount_usd=parse_amount(usd) if usd else None,
            exchange_rate_mmk=parse_amount(rate) if rate else ZERO,
            notes=notes,
            fees=parse_amount(fees) if fees else None,
            bank_account=bank,
            platform=platform,
        )
        transaction = service.get_transaction(transaction_id)
        click.echo(f"Recorded transaction {transaction_id}")
        click.echo(
            f"Payout: {format_money(transaction.payout_amount)} "
            f"{transaction.payout_currency.value}"
        )
    except ValueError as e:
        handle_domain_error(ctx, e)


@transaction_group.command("list")
@click.option("--client", "client", help="Only show this client's transactions")
@click.option("--uninvoiced", is_flag=True, help="Only show transactions without an invoice")
@click.pass_context
def list_transactions(ctx, client, uninvoiced):
    """List transactions, newest first."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    client_id = None
    if client is not None:
        client_id = resolve_client_or_exit(ctx, ClientService(db), client)

    transactions = service.list_transactions(client_id=client_id, uninvoiced=uninvoiced)
    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo("\nTransactions:")
    click.echo("-" * 80)
    for txn in transactions:
        payout = f"{format_money(txn.payout_amount)} {txn.payout_currency.value}"
        click.echo(
            f"ID: {txn.id:4d} | {txn.transaction_date} | Client: {txn.client_id:3d} | "
            f"{format_money(txn.incoming_amount_thb):>14s} THB | Payout: {payout}"
        )


@transaction_group.command("show")
@click.argument("transaction_id", type=int)
@click.pass_context
def show_transaction(ctx, transaction_id):
    """Show one transaction in full."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    txn = service.get_transaction(transaction_id)
    if txn is None:
        handle_domain_error(ctx, NotFoundError(f"Transaction {transaction_id} not found"))

    destination = txn.payment_destination
    click.echo(f"\nTransaction {txn.id}")
    click.echo("-" * 60)
    click.echo(f"Client ID:        {txn.client_id}")
    click.echo(f"Date:             {txn.transaction_date}")
    click.echo(f"Incoming (THB):   {format_money(txn.incoming_amount_thb)}")
    if txn.original_amount_usd is not None:
        click.echo(f"Original (USD):   {format_money(txn.original_amount_usd)}")
    click.echo(f"Fees:             {format_money(txn.fees)}")
    click.echo(f"Exchange rate:    {format_rate(txn.exchange_rate_mmk)}")
    click.echo(f"Payout:           {format_money(txn.payout_amount)} {txn.payout_currency.value}")
    click.echo(f"Source platform:  {txn.source_platform or '-'}")
    click.echo(f"Payout ID:        {txn.source_platform_payout_id or '-'}")
    if destination is not None:
        click.echo(
            f"Pay to:           {destination.bank_name} {destination.account_number} "
            f"({destination.account_name})"
        )
    else:
        click.echo("Pay to:           -")
    if txn.notes:
        click.echo(f"Notes:            {txn.notes}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
