"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from paydesk.domain.entities import (
    BankAccount,
    Client,
    Invoice,
    PayoutCurrency,
    PlatformDetail,
    Transaction,
)


class Database(ABC):
    """Abstract database interface for paydesk."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Client operations
    @abstractmethod
    def create_client(
        self,
        name: str,
        commission_percentage: Decimal,
        preferred_payout_currency: PayoutCurrency,
        phone: Optional[str] = None,
        bank_accounts: Sequence[BankAccount] = (),
        platform_details: Sequence[PlatformDetail] = (),
    ) -> int:
        """Create a client. Returns client ID."""
        pass

    @abstractmethod
    def get_client(self, client_id: int) -> Optional[Client]:
        """Get client by ID."""
        pass

    @abstractmethod
    def get_client_by_name(self, name: str) -> Optional[Client]:
        """Get client by exact name."""
        pass

    @abstractmethod
    def list_clients(self) -> list[Client]:
        """List clients, newest first."""
        pass

    @abstractmethod
    def update_client(
        self,
        client_id: int,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        commission_percentage: Optional[Decimal] = None,
        preferred_payout_currency: Optional[PayoutCurrency] = None,
        bank_accounts: Optional[Sequence[BankAccount]] = None,
        platform_details: Optional[Sequence[PlatformDetail]] = None,
        clear_phone: bool = False,
    ) -> None:
        """Update client fields. List arguments replace the stored list."""
        pass

    @abstractmethod
    def delete_client(self, client_id: int) -> None:
        """Delete a client."""
        pass

    @abstractmethod
    def get_client_transaction_count(self, client_id: int) -> int:
        """Get count of transactions recorded for a client."""
        pass

    @abstractmethod
    def get_client_invoice_count(self, client_id: int) -> int:
        """Get count of invoices issued to a client."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        client_id: int,
        incoming_amount_thb: Decimal,
        transaction_date: date,
        payout_currency: PayoutCurrency,
        payout_amount: Optional[Decimal],
        exchange_rate_mmk: Decimal = Decimal("0"),
        fees: Decimal = Decimal("0"),
        original_amount_usd: Optional[Decimal] = None,
        notes: Optional[str] = None,
        source_platform: Optional[str] = None,
        source_platform_payout_id: Optional[str] = None,
        payment_destination: Optional[BankAccount] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self, client_id: Optional[int] = None, uninvoiced: bool = False
    ) -> list[Transaction]:
        """List transactions, newest first.

        Args:
            client_id: Optional client ID filter
            uninvoiced: If True, only return transactions without an invoice
        """
        pass

    # Invoice operations
    @abstractmethod
    def allocate_invoice_number(self) -> str:
        """Issue a fresh invoice number that has never been returned before.

        Raises:
            AllocationError: If the sequence could not be advanced
        """
        pass

    @abstractmethod
    def create_invoice(
        self,
        client_id: int,
        transaction_id: int,
        invoice_number: str,
        total_amount: Decimal,
        commission_amount: Decimal,
        net_amount: Decimal,
    ) -> int:
        """Create an invoice. Returns invoice ID."""
        pass

    @abstractmethod
    def get_invoice(self, invoice_id: int) -> Optional[Invoice]:
        """Get invoice by ID."""
        pass

    @abstractmethod
    def get_invoice_by_number(self, invoice_number: str) -> Optional[Invoice]:
        """Get invoice by its display number."""
        pass

    @abstractmethod
    def get_invoice_for_transaction(self, transaction_id: int) -> Optional[Invoice]:
        """Get the invoice issued for a transaction, if any."""
        pass

    @abstractmethod
    def list_invoices(self, client_id: Optional[int] = None) -> list[Invoice]:
        """List invoices, newest first."""
        pass
