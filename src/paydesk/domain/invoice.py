"""Invoice domain service."""

import logging
from typing import Optional

from paydesk.database.base import Database
from paydesk.domain import errors
from paydesk.domain.calculator import calculate_invoice_amounts
from paydesk.domain.entities import (
    Invoice as InvoiceEntity,
    InvoiceDocument,
    Transaction as TransactionEntity,
)
from paydesk.domain.errors import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


class InvoiceService:
    """Service for issuing and reading invoices."""

    def __init__(self, db: Database):
        """Initialize invoice service.

        Args:
            db: Database instance
        """
        self.db = db

    def generate_invoice(self, transaction_id: int) -> int:
        """Issue an invoice for an uninvoiced transaction.

        Commission and net amounts are computed from the client's commission
        rate as it is now, which may differ from the rate used for the
        transaction's payout amount.

        Nothing is written unless an invoice number was allocated.

        Args:
            transaction_id: Transaction to invoice

        Returns:
            Invoice ID

        Raises:
            NotFoundError: If transaction or its client doesn't exist
            ConflictError: If the transaction already has an invoice
            AllocationError: If no invoice number could be allocated
        """
        transaction = self.db.get_transaction(transaction_id)
        if transaction is None:
            raise NotFoundError(errors.transaction_not_found(transaction_id))

        existing = self.db.get_invoice_for_transaction(transaction_id)
        if existing is not None:
            raise ConflictError(
                errors.transaction_already_invoiced(transaction_id, existing.invoice_number)
            )

        client = self.db.get_client(transaction.client_id)
        if client is None:
            raise NotFoundError(errors.client_not_found(transaction.client_id))

        amounts = calculate_invoice_amounts(
            transaction.incoming_amount_thb,
            client.commission_percentage,
            transaction.fees,
        )

        invoice_number = self.db.allocate_invoice_number()

        invoice_id = self.db.create_invoice(
            client_id=client.id,
            transaction_id=transaction.id,
            invoice_number=invoice_number,
            total_amount=amounts.total_amount,
            commission_amount=amounts.commission_amount,
            net_amount=amounts.net_amount,
        )
        logger.info(
            "Issued invoice %s (ID %s) for transaction %s", invoice_number, invoice_id, transaction_id
        )
        return invoice_id

    def get_invoice(self, invoice_id: int) -> Optional[InvoiceEntity]:
        """Get invoice by ID."""
        return self.db.get_invoice(invoice_id)

    def get_invoice_by_number(self, invoice_number: str) -> Optional[InvoiceEntity]:
        """Get invoice by its display number."""
        return self.db.get_invoice_by_number(invoice_number)

    def list_invoices(self, client_id: Optional[int] = None) -> list[InvoiceEntity]:
        """List invoices, newest first."""
        return self.db.list_invoices(client_id=client_id)

    def list_uninvoiced_transactions(self) -> list[TransactionEntity]:
        """List transactions that can still be invoiced."""
        return self.db.list_transactions(uninvoiced=True)

    def get_document(self, invoice_id: int) -> InvoiceDocument:
        """Load an invoice together with its transaction and client.

        Raises:
            NotFoundError: If the invoice or a joined record is missing
        """
        invoice = self.db.get_invoice(invoice_id)
        if invoice is None:
            raise NotFoundError(errors.invoice_not_found(invoice_id))

        transaction = self.db.get_transaction(invoice.transaction_id)
        if transaction is None:
            raise NotFoundError(errors.transaction_not_found(invoice.transaction_id))

        client = self.db.get_client(invoice.client_id)
        if client is None:
            raise NotFoundError(errors.client_not_found(invoice.client_id))

        return InvoiceDocument(invoice=invoice, transaction=transaction, client=client)
