"""Utilities for resolving client and invoice references."""

from paydesk.domain.client import ClientService
from paydesk.domain.entities import Invoice
from paydesk.domain.errors import NotFoundError
from paydesk.domain.invoice import InvoiceService


def resolve_client(client_service: ClientService, client: str | int) -> int:
    """Resolve client name or ID to client ID.

    Args:
        client_service: ClientService instance
        client: Client name (str) or ID (int or string representation of int)

    Returns:
        Client ID

    Raises:
        NotFoundError: If client is not found
    """
    if isinstance(client, int):
        if client_service.get_client(client) is None:
            raise NotFoundError(f"Client ID {client} not found")
        return client

    # Try to parse as integer (handles string IDs like "1")
    try:
        client_id = int(client)
    except (ValueError, TypeError):
        client_id = None

    if client_id is not None:
        if client_service.get_client(client_id) is None:
            raise NotFoundError(f"Client ID {client_id} not found")
        return client_id

    found = client_service.get_client_by_name(client.strip())
    if found is None:
        raise NotFoundError(f"Client '{client}' not found")
    return found.id


def resolve_invoice(invoice_service: InvoiceService, invoice: str | int) -> Invoice:
    """Resolve an invoice number or ID to the invoice.

    Invoice numbers are tried first, since they are what appears on paper.

    Raises:
        NotFoundError: If invoice is not found
    """
    if isinstance(invoice, str):
        found = invoice_service.get_invoice_by_number(invoice.strip())
        if found is not None:
            return found
        try:
            invoice = int(invoice)
        except ValueError:
            raise NotFoundError(f"Invoice '{invoice}' not found") from None

    found = invoice_service.get_invoice(invoice)
    if found is None:
        raise NotFoundError(f"Invoice ID {invoice} not found")
    return found
