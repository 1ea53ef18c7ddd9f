"""CLI helpers for client and invoice resolution."""

from __future__ import annotations

import click
from paydesk.cli.error_handling import handle_domain_error
from paydesk.domain.client import ClientService
from paydesk.domain.entities import Invoice
from paydesk.domain.invoice import InvoiceService
from paydesk.utils.client_resolver import resolve_client, resolve_invoice


def resolve_client_or_exit(
    ctx: click.Context, client_service: ClientService, client: str | int
) -> int:
    """Resolve client name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_client(client_service, client)
    except ValueError as exc:
        handle_domain_error(ctx, exc)


def resolve_invoice_or_exit(
    ctx: click.Context, invoice_service: InvoiceService, invoice: str | int
) -> Invoice:
    """Resolve invoice number or ID, or exit with a CLI error."""
    try:
        return resolve_invoice(invoice_service, invoice)
    except ValueError as exc:
        handle_domain_error(ctx, exc)
