"""Domain model entities for paydesk.

These are pure data classes representing business concepts, independent of
database schema. Embedded client lists (bank accounts, platforms) are typed
records here even though storage keeps them as JSON.
"""

import uuid
from dataclasses import dataclass, field, asdict
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from paydesk.domain.errors import ValidationError

OTHER_PLATFORM = "Other"


class PayoutCurrency(str, Enum):
    """Currencies a client can be paid out in."""

    THB = "THB"
    MMK = "MMK"

    @classmethod
    def parse(cls, value: "str | PayoutCurrency") -> "PayoutCurrency":
        """Parse a currency code, case-insensitively."""
        if isinstance(value, cls):
            return value
        code = str(value or "").strip().upper()
        try:
            return cls(code)
        except ValueError:
            allowed = ", ".join(c.value for c in cls)
            raise ValidationError(
                f"Unsupported payout currency '{value}' (expected one of: {allowed})"
            ) from None


def new_entry_id() -> str:
    """Return a fresh identifier for an embedded list entry."""
    return uuid.uuid4().hex[:12]


def _required_text(data: dict[str, Any], key: str, kind: str) -> str:
    value = data.get(key)
    if value is None or not str(value).strip():
        raise ValidationError(f"{kind} is missing required field '{key}'")
    return str(value).strip()


@dataclass(frozen=True)
class BankAccount:
    """Bank account entry embedded in a client."""

    bank_name: str
    account_number: str
    account_name: str
    id: str = field(default_factory=new_entry_id)

    @classmethod
    def from_dict(cls, data: Any) -> "BankAccount":
        """Build a bank account from a mapping, validating required fields.

        Raises:
            ValidationError: If data is not a mapping or a field is blank
        """
        if not isinstance(data, dict):
            raise ValidationError(f"Bank account entry must be an object, got {type(data).__name__}")
        entry_id = data.get("id")
        return cls(
            bank_name=_required_text(data, "bank_name", "Bank account"),
            account_number=_required_text(data, "account_number", "Bank account"),
            account_name=_required_text(data, "account_name", "Bank account"),
            id=str(entry_id) if entry_id else new_entry_id(),
        )

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class PlatformDetail:
    """Revenue platform entry embedded in a client."""

    platform_name: str
    payout_id: Optional[str] = None
    id: str = field(default_factory=new_entry_id)

    @classmethod
    def from_dict(cls, data: Any) -> "PlatformDetail":
        """Build a platform entry from a mapping.

        Raises:
            ValidationError: If data is not a mapping or platform_name is blank
        """
        if not isinstance(data, dict):
            raise ValidationError(f"Platform entry must be an object, got {type(data).__name__}")
        payout_id = data.get("payout_id")
        payout_id = str(payout_id).strip() if payout_id is not None else None
        entry_id = data.get("id")
        return cls(
            platform_name=_required_text(data, "platform_name", "Platform entry"),
            payout_id=payout_id or None,
            id=str(entry_id) if entry_id else new_entry_id(),
        )

    def to_dict(self) -> dict[str, Optional[str]]:
        return asdict(self)


@dataclass(frozen=True)
class Client:
    """Client domain entity."""

    id: int
    name: str
    phone: Optional[str]
    commission_percentage: Decimal
    preferred_payout_currency: PayoutCurrency
    bank_accounts: tuple[BankAccount, ...]
    platform_details: tuple[PlatformDetail, ...]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    payment_destination is a frozen copy of the bank account chosen at
    creation, so later edits to the client's list do not reach it.
    """

    id: int
    client_id: int
    incoming_amount_thb: Decimal
    original_amount_usd: Optional[Decimal]
    fees: Decimal
    exchange_rate_mmk: Decimal
    payout_currency: PayoutCurrency
    payout_amount: Optional[Decimal]
    transaction_date: date
    notes: Optional[str]
    source_platform: Optional[str]
    source_platform_payout_id: Optional[str]
    payment_destination: Optional[BankAccount]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Invoice:
    """Invoice domain entity."""

    id: int
    client_id: int
    transaction_id: int
    invoice_number: str
    total_amount: Decimal
    commission_amount: Decimal
    net_amount: Decimal
    created_at: datetime


@dataclass(frozen=True)
class InvoiceDocument:
    """Invoice joined with its client and transaction, as rendered."""

    invoice: Invoice
    transaction: Transaction
    client: Client
