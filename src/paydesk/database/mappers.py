"""Mapper functions to convert between domain models and SQLAlchemy models.

Embedded lists are stored as JSON and validated on the way out. Entries that
are not objects or lack required fields are dropped with a warning instead of
being trusted implicitly.
"""

import logging
from decimal import Decimal
from typing import Any, Iterable, Optional

from paydesk.domain import entities as domain
from paydesk.domain.errors import ValidationError
from paydesk.database.models import (
    Client as ORMClient,
    Transaction as ORMTransaction,
    Invoice as ORMInvoice,
)

logger = logging.getLogger(__name__)


def bank_accounts_from_json(raw: Any) -> tuple[domain.BankAccount, ...]:
    """Parse a stored bank account list, skipping malformed entries."""
    if not raw:
        return ()
    if not isinstance(raw, list):
        logger.warning("Ignoring bank account data of type %s", type(raw).__name__)
        return ()

    accounts = []
    for position, entry in enumerate(raw):
        try:
            accounts.append(domain.BankAccount.from_dict(entry))
        except ValidationError as exc:
            logger.warning("Dropping bank account entry %d: %s", position, exc)
    return tuple(accounts)


def platforms_from_json(raw: Any) -> tuple[domain.PlatformDetail, ...]:
    """Parse a stored platform list, skipping malformed entries."""
    if not raw:
        return ()
    if not isinstance(raw, list):
        logger.warning("Ignoring platform data of type %s", type(raw).__name__)
        return ()

    platforms = []
    for position, entry in enumerate(raw):
        try:
            platforms.append(domain.PlatformDetail.from_dict(entry))
        except ValidationError as exc:
            logger.warning("Dropping platform entry %d: %s", position, exc)
    return tuple(platforms)


def destination_from_json(raw: Any) -> Optional[domain.BankAccount]:
    """Parse a stored payment destination snapshot."""
    if raw is None:
        return None
    try:
        return domain.BankAccount.from_dict(raw)
    except ValidationError as exc:
        logger.warning("Ignoring malformed payment destination: %s", exc)
        return None


def entries_to_json(entries: Iterable[Any]) -> Optional[list[dict]]:
    """Serialize embedded entries; an empty list is stored as NULL."""
    data = [entry.to_dict() for entry in entries]
    return data or None


def _decimal(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    return value if isinstance(value, Decimal) else Decimal(str(value))


def client_to_domain(orm_client: ORMClient) -> domain.Client:
    """Convert SQLAlchemy Client model to domain Client entity."""
    return domain.Client(
        id=orm_client.id,
        name=orm_client.name,
        phone=orm_client.phone,
        commission_percentage=_decimal(orm_client.commission_percentage) or Decimal("0"),
        preferred_payout_currency=domain.PayoutCurrency.parse(
            orm_client.preferred_payout_currency or domain.PayoutCurrency.THB
        ),
        bank_accounts=bank_accounts_from_json(orm_client.bank_account),
        platform_details=platforms_from_json(orm_client.platform_details),
        created_at=orm_client.created_at,
        updated_at=orm_client.updated_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        client_id=orm_transaction.client_id,
        incoming_amount_thb=_decimal(orm_transaction.incoming_amount_thb),
        original_amount_usd=_decimal(orm_transaction.original_amount_usd),
        fees=_decimal(orm_transaction.fees) or Decimal("0"),
        exchange_rate_mmk=_decimal(orm_transaction.exchange_rate_mmk) or Decimal("0"),
        payout_currency=domain.PayoutCurrency.parse(orm_transaction.payout_currency),
        payout_amount=_decimal(orm_transaction.payout_amount),
        transaction_date=orm_transaction.transaction_date,
        notes=orm_transaction.notes,
        source_platform=orm_transaction.source_platform,
        source_platform_payout_id=orm_transaction.source_platform_payout_id,
        payment_destination=destination_from_json(orm_transaction.payment_destination),
        created_at=orm_transaction.created_at,
        updated_at=orm_transaction.updated_at,
    )


def invoice_to_domain(orm_invoice: ORMInvoice) -> domain.Invoice:
    """Convert SQLAlchemy Invoice model to domain Invoice entity."""
    return domain.Invoice(
        id=orm_invoice.id,
        client_id=orm_invoice.client_id,
        transaction_id=orm_invoice.transaction_id,
        invoice_number=orm_invoice.invoice_number,
        total_amount=_decimal(orm_invoice.total_amount),
        commission_amount=_decimal(orm_invoice.commission_amount),
        net_amount=_decimal(orm_invoice.net_amount),
        created_at=orm_invoice.created_at,
    )
