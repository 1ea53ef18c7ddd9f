"""Build transaction records from operator selections.

Bank accounts and platforms are chosen either by position in the client's
list or by the entry's stable id. Positions match what the operator sees on a
freshly loaded client; ids stay correct even if the list is reordered.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from paydesk.domain import errors
from paydesk.domain.calculator import ZERO, calculate_payout, quantize_rate, to_decimal
from paydesk.domain.entities import (
    OTHER_PLATFORM,
    BankAccount,
    Client,
    PayoutCurrency,
    PlatformDetail,
)
from paydesk.domain.errors import NotFoundError, ValidationError

Selection = int | str


@dataclass(frozen=True)
class TransactionRecord:
    """Transaction fields ready to be persisted."""

    client_id: int
    incoming_amount_thb: Decimal
    original_amount_usd: Optional[Decimal]
    fees: Decimal
    exchange_rate_mmk: Decimal
    payout_currency: PayoutCurrency
    payout_amount: Decimal
    transaction_date: date
    notes: Optional[str]
    source_platform: Optional[str]
    source_platform_payout_id: Optional[str]
    payment_destination: Optional[BankAccount]


def _as_index(selection: Selection) -> Optional[int]:
    if isinstance(selection, bool):
        return None
    if isinstance(selection, int):
        return selection
    text = selection.strip()
    if text.isdigit():
        return int(text)
    return None


def select_bank_account(client: Client, selection: Selection) -> BankAccount:
    """Resolve a bank account by list index or entry id.

    Raises:
        NotFoundError: If no entry matches
    """
    index = _as_index(selection)
    if index is not None:
        if 0 <= index < len(client.bank_accounts):
            return client.bank_accounts[index]
        raise NotFoundError(errors.bank_account_not_found(selection))

    for account in client.bank_accounts:
        if account.id == selection.strip():
            return account
    raise NotFoundError(errors.bank_account_not_found(selection))


def select_platform(client: Client, selection: Selection) -> PlatformDetail:
    """Resolve a platform entry by list index or entry id.

    Raises:
        NotFoundError: If no entry matches
    """
    index = _as_index(selection)
    if index is not None:
        if 0 <= index < len(client.platform_details):
            return client.platform_details[index]
        raise NotFoundError(errors.platform_not_found(selection))

    for platform in client.platform_details:
        if platform.id == selection.strip():
            return platform
    raise NotFoundError(errors.platform_not_found(selection))


def resolve_source_platform(
    client: Client, selection: Optional[Selection]
) -> tuple[Optional[str], Optional[str]]:
    """Return (source_platform, source_platform_payout_id) for a selection.

    The literal "Other" records the name without a payout id.
    """
    if selection is None:
        return None, None
    if isinstance(selection, str) and selection.strip().lower() == OTHER_PLATFORM.lower():
        return OTHER_PLATFORM, None

    platform = select_platform(client, selection)
    return platform.platform_name, platform.payout_id


def build_transaction_record(
    client: Client,
    incoming_amount_thb,
    transaction_date: date,
    *,
    original_amount_usd=None,
    exchange_rate_mmk=ZERO,
    notes: Optional[str] = None,
    fees=None,
    bank_account: Optional[Selection] = None,
    platform: Optional[Selection] = None,
) -> TransactionRecord:
    """Normalize operator input into a transaction record.

    The payout is computed from the client's current commission rate and
    currency and then frozen on the record.

    Raises:
        ValidationError: If an amount is invalid
        NotFoundError: If the bank or platform selection does not exist
    """
    usd = None
    if original_amount_usd is not None:
        usd = to_decimal(original_amount_usd, "original amount (USD)")
        if usd < ZERO:
            raise ValidationError(f"Original amount (USD) cannot be negative, got {usd}")

    fee_amount = to_decimal(fees, "fees") if fees is not None else ZERO
    if fee_amount < ZERO:
        raise ValidationError(f"Fees cannot be negative, got {fee_amount}")

    rate = quantize_rate(
        to_decimal(exchange_rate_mmk if exchange_rate_mmk is not None else ZERO, "exchange rate")
    )
    split = calculate_payout(
        incoming_amount_thb,
        client.commission_percentage,
        client.preferred_payout_currency,
        rate,
    )

    destination = None
    if bank_account is not None:
        destination = select_bank_account(client, bank_account)

    source_platform, payout_id = resolve_source_platform(client, platform)

    return TransactionRecord(
        client_id=client.id,
        incoming_amount_thb=to_decimal(incoming_amount_thb, "incoming amount"),
        original_amount_usd=usd,
        fees=fee_amount,
        exchange_rate_mmk=rate,
        payout_currency=split.payout_currency,
        payout_amount=split.payout_amount,
        transaction_date=transaction_date,
        notes=notes.strip() if notes and notes.strip() else None,
        source_platform=source_platform,
        source_platform_payout_id=payout_id,
        payment_destination=destination,
    )
