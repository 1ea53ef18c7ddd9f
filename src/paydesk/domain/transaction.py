"""Transaction domain service."""

import logging
from datetime import date
from typing import Optional

from paydesk.database.base import Database
from paydesk.domain import errors
from paydesk.domain.calculator import ZERO
from paydesk.domain.entities import PayoutCurrency, Transaction as TransactionEntity
from paydesk.domain.errors import NotFoundError
from paydesk.domain.record_builder import Selection, build_transaction_record

logger = logging.getLogger(__name__)


class TransactionService:
    """Service for recording incoming payments."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transaction(
        self,
        client_id: int,
        incoming_amount_thb,
        transaction_date: date,
        original_amount_usd=None,
        exchange_rate_mmk=ZERO,
        notes: Optional[str] = None,
        fees=None,
        bank_account: Optional[Selection] = None,
        platform: Optional[Selection] = None,
    ) -> int:
        """Record an incoming payment for a client.

        The commission, payout currency and payout amount are derived from the
        client's settings at this moment and stored with the transaction.

        Args:
            client_id: Client ID
            incoming_amount_thb: Gross amount received in THB
            transaction_date: Date of the payment
            original_amount_usd: Optional informational USD amount
            exchange_rate_mmk: THB to MMK rate, used for MMK payouts
            notes: Optional notes
            fees: Optional fees, defaults to 0
            bank_account: Index or id of the client's bank account to pay into
            platform: Index or id of the client's platform, or "Other"

        Returns:
            Transaction ID

        Raises:
            NotFoundError: If the client, bank account or platform doesn't exist
            ValidationError: If an amount is invalid
        """
        client = self.db.get_client(client_id)
        if client is None:
            raise NotFoundError(errors.client_not_found(client_id))

        record = build_transaction_record(
            client,
            incoming_amount_thb,
            transaction_date,
            original_amount_usd=original_amount_usd,
            exchange_rate_mmk=exchange_rate_mmk,
            notes=notes,
            fees=fees,
            bank_account=bank_account,
            platform=platform,
        )

        if record.payout_currency is PayoutCurrency.MMK and record.exchange_rate_mmk == ZERO:
            logger.warning(
                "Client %s is paid in MMK but no exchange rate was given; payout recorded as 0",
                client_id,
            )

        transaction_id = self.db.create_transaction(
            client_id=record.client_id,
            incoming_amount_thb=record.incoming_amount_thb,
            transaction_date=record.transaction_date,
            payout_currency=record.payout_currency,
            payout_amount=record.payout_amount,
            exchange_rate_mmk=record.exchange_rate_mmk,
            fees=record.fees,
            original_amount_usd=record.original_amount_usd,
            notes=record.notes,
            source_platform=record.source_platform,
            source_platform_payout_id=record.source_platform_payout_id,
            payment_destination=record.payment_destination,
        )
        logger.info("Recorded transaction %s for client %s", transaction_id, client_id)
        return transaction_id

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def list_transactions(
        self, client_id: Optional[int] = None, uninvoiced: bool = False
    ) -> list[TransactionEntity]:
        """List transactions, newest first.

        Args:
            client_id: Optional client ID filter
            uninvoiced: If True, only return transactions eligible for an invoice
        """
        return self.db.list_transactions(client_id=client_id, uninvoiced=uninvoiced)
