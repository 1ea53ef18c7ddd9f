"""Invoice commands."""

import click
from paydesk.cli.client_resolution import resolve_client_or_exit, resolve_invoice_or_exit
from paydesk.cli.error_handling import handle_domain_error
from paydesk.domain.client import ClientService
from paydesk.domain.errors import DomainError
from paydesk.domain.invoice import InvoiceService
from paydesk.domain.invoice_view import Section, build_invoice_view
from paydesk.rendering.export import FORMATS, export_invoice
from paydesk.rendering.image import DEFAULT_SCALE
from paydesk.utils.formatting import format_money


@click.group()
def invoice_group():
    """Issue, view and export invoices."""
    pass


@invoice_group.command("generate")
@click.argument("transaction_id", type=int)
@click.pass_context
def generate_invoice(ctx, transaction_id):
    """Issue an invoice for a transaction.

    Each transaction can be invoiced once. Use 'transaction list --uninvoiced'
    to see which transactions are still open.
    """
    db = ctx.obj["db"]
    service = InvoiceService(db)

    try:
        invoice_id = service.generate_invoice(transaction_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    invoice = service.get_invoice(invoice_id)
    click.echo(f"Issued invoice {invoice.invoice_number} (ID: {invoice_id})")
    click.echo(f"Total:      {format_money(invoice.total_amount)} THB")
    click.echo(f"Commission: {format_money(invoice.commission_amount)} THB")
    click.echo(f"Net:        {format_money(invoice.net_amount)} THB")


@invoice_group.command("list")
@click.option("--client", "client", help="Only show this client's invoices")
@click.pass_context
def list_invoices(ctx, client):
    """List invoices, newest first."""
    db = ctx.obj["db"]
    service = InvoiceService(db)

    client_id = None
    if client is not None:
        client_id = resolve_client_or_exit(ctx, ClientService(db), client)

    invoices = service.list_invoices(client_id=client_id)
    if not invoices:
        click.echo("No invoices found.")
        return

    click.echo("\nInvoices:")
    click.echo("-" * 80)
    for inv in invoices:
        click.echo(
            f"{inv.invoice_number:12s} | ID: {inv.id:4d} | Txn: {inv.transaction_id:4d} | "
            f"{inv.created_at:%Y-%m-%d} | Net: {format_money(inv.net_amount):>14s} THB"
        )


@invoice_group.command("show")
@click.argument("invoice", metavar="INVOICE")
@click.pass_context
def show_invoice(ctx, invoice):
    """Print an invoice as text.

    INVOICE can be an invoice number (e.g. INV-000001) or ID.
    """
    db = ctx.obj["db"]
    service = InvoiceService(db)
    found = resolve_invoice_or_exit(ctx, service, invoice)

    try:
        view = build_invoice_view(service.get_document(found.id))
    except ValueError as e:
        handle_domain_error(ctx, e)

    current = None
    for entry in view.entries:
        if entry.section is not current:
            current = entry.section
            click.echo("")
        if entry.section in (Section.LINE_ITEMS, Section.PAYOUT):
            click.echo(f"{entry.label:<44s}{entry.value:>24s}")
        else:
            click.echo(entry.text)


@invoice_group.command("export")
@click.argument("invoice", metavar="INVOICE")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(list(FORMATS) + ["both"]),
    default="pdf",
    show_default=True,
    help="Output format",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False),
    default=".",
    show_default=True,
    help="Directory to write files into",
)
@click.option(
    "--scale",
    type=click.IntRange(min=1),
    default=DEFAULT_SCALE,
    show_default=True,
    help="Pixel scale for JPEG output",
)
@click.pass_context
def export_invoice_cmd(ctx, invoice, fmt, output_dir, scale):
    """Save an invoice as PDF and/or JPEG.

    Files are named after the invoice number, e.g. INV-000001.pdf.

    Examples:
        paydesk invoice export INV-000001
        paydesk invoice export 3 --format both --output-dir invoices/
    """
    db = ctx.obj["db"]
    service = InvoiceService(db)
    found = resolve_invoice_or_exit(ctx, service, invoice)

    formats = FORMATS if fmt == "both" else (fmt,)
    try:
        document = service.get_document(found.id)
        for output_format in formats:
            path = export_invoice(document, output_format, output_dir, scale=scale)
            click.echo(f"Saved {path}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register invoice commands with main CLI."""
    cli.add_command(invoice_group, name="invoice")
