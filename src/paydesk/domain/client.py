"""Client domain service."""

import logging
from typing import Any, Iterable, Optional

from paydesk.database.base import Database
from paydesk.domain import errors
from paydesk.domain.calculator import validate_percentage
from paydesk.domain.entities import (
    BankAccount,
    Client as ClientEntity,
    PayoutCurrency,
    PlatformDetail,
)
from paydesk.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _bank_accounts(entries: Iterable[Any]) -> tuple[BankAccount, ...]:
    return tuple(
        entry if isinstance(entry, BankAccount) else BankAccount.from_dict(entry)
        for entry in entries
    )


def _platforms(entries: Iterable[Any]) -> tuple[PlatformDetail, ...]:
    return tuple(
        entry if isinstance(entry, PlatformDetail) else PlatformDetail.from_dict(entry)
        for entry in entries
    )


def _clean_name(name: str) -> str:
    if name is None or not name.strip():
        raise ValidationError("Client name is required")
    return name.strip()


class ClientService:
    """Service for managing clients and their payout settings."""

    def __init__(self, db: Database):
        """Initialize client service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_client(
        self,
        name: str,
        commission_percentage,
        preferred_payout_currency: PayoutCurrency | str = PayoutCurrency.THB,
        phone: Optional[str] = None,
        bank_accounts: Iterable[Any] = (),
        platform_details: Iterable[Any] = (),
    ) -> int:
        """Create a new client.

        Bank accounts and platforms may be given as entities or as dicts with
        the same keys; each entry keeps or receives a stable id.

        Args:
            name: Client name (unique)
            commission_percentage: Commission rate between 0 and 100
            preferred_payout_currency: THB or MMK
            phone: Optional phone number
            bank_accounts: Ordered bank account entries
            platform_details: Ordered platform entries

        Returns:
            Client ID

        Raises:
            ValidationError: If a field is missing or out of range
            ConflictError: If a client with the same name exists
        """
        name = _clean_name(name)
        percentage = validate_percentage(commission_percentage)
        currency = PayoutCurrency.parse(preferred_payout_currency)
        accounts = _bank_accounts(bank_accounts)
        platforms = _platforms(platform_details)

        if self.db.get_client_by_name(name) is not None:
            raise ConflictError(errors.duplicate_client_name(name))

        client_id = self.db.create_client(
            name=name,
            commission_percentage=percentage,
            preferred_payout_currency=currency,
            phone=phone.strip() if phone and phone.strip() else None,
            bank_accounts=accounts,
            platform_details=platforms,
        )
        logger.info("Created client %s (%s)", client_id, name)
        return client_id

    def get_client(self, client_id: int) -> Optional[ClientEntity]:
        """Get client by ID.

        Args:
            client_id: Client ID

        Returns:
            Client entity or None if not found
        """
        return self.db.get_client(client_id)

    def require_client(self, client_id: int) -> ClientEntity:
        """Get client by ID or raise NotFoundError."""
        client = self.db.get_client(client_id)
        if client is None:
            raise NotFoundError(errors.client_not_found(client_id))
        return client

    def get_client_by_name(self, name: str) -> Optional[ClientEntity]:
        return self.db.get_client_by_name(name)

    def list_clients(self) -> list[ClientEntity]:
        """List all clients, newest first."""
        return self.db.list_clients()

    def update_client(
        self,
        client_id: int,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        commission_percentage=None,
        preferred_payout_currency: Optional[PayoutCurrency | str] = None,
        bank_accounts: Optional[Iterable[Any]] = None,
        platform_details: Optional[Iterable[Any]] = None,
    ) -> None:
        """Update a client.

        Only provided fields change. When bank_accounts or platform_details is
        given, that whole list is replaced; pass an empty list to clear it.
        An empty phone string clears the phone number.

        Existing transactions keep their own snapshot of the payment
        destination and payout amount, so they are unaffected.

        Raises:
            NotFoundError: If client doesn't exist
            ValidationError: If a field is invalid
            ConflictError: If the new name is taken by another client
        """
        self.require_client(client_id)

        new_name = None
        if name is not None:
            new_name = _clean_name(name)
            existing = self.db.get_client_by_name(new_name)
            if existing is not None and existing.id != client_id:
                raise ConflictError(errors.duplicate_client_name(new_name))

        percentage = None
        if commission_percentage is not None:
            percentage = validate_percentage(commission_percentage)

        currency = None
        if preferred_payout_currency is not None:
            currency = PayoutCurrency.parse(preferred_payout_currency)

        clear_phone = phone is not None and not phone.strip()

        self.db.update_client(
            client_id=client_id,
            name=new_name,
            phone=phone.strip() if phone and phone.strip() else None,
            commission_percentage=percentage,
            preferred_payout_currency=currency,
            bank_accounts=_bank_accounts(bank_accounts) if bank_accounts is not None else None,
            platform_details=_platforms(platform_details) if platform_details is not None else None,
            clear_phone=clear_phone,
        )
        logger.info("Updated client %s", client_id)

    def delete_client(self, client_id: int) -> None:
        """Delete a client.

        Raises:
            NotFoundError: If client doesn't exist
            DependencyError: If client has transactions or invoices
        """
        self.require_client(client_id)

        transaction_count = self.db.get_client_transaction_count(client_id)
        invoice_count = self.db.get_client_invoice_count(client_id)
        if transaction_count > 0 or invoice_count > 0:
            raise DependencyError(
                errors.client_delete_blocked(client_id, transaction_count, invoice_count)
            )

        self.db.delete_client(client_id)
        logger.info("Deleted client %s", client_id)
