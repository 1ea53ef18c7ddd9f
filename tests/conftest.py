"""Shared pytest fixtures for paydesk tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from paydesk.database.factories import create_sqlite_database
from paydesk.domain.client import ClientService
from paydesk.domain.entities import BankAccount, PayoutCurrency, PlatformDetail
from paydesk.domain.invoice import InvoiceService
from paydesk.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path, invoice_prefix="INV-")
    # Store the path for CLI tests that open their own connection
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def client_service(temp_db):
    """Create a ClientService with a temporary database."""
    return ClientService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def invoice_service(temp_db):
    """Create an InvoiceService with a temporary database."""
    return InvoiceService(temp_db)


@pytest.fixture
def sample_client(client_service):
    """A THB client at 10% with two bank accounts and two platforms."""
    client_id = client_service.create_client(
        name="Ko Aung",
        commission_percentage=Decimal("10"),
        preferred_payout_currency=PayoutCurrency.THB,
        phone="+66 81 234 5678",
        bank_accounts=[
            BankAccount(bank_name="Kasikorn", account_number="123-4-56789-0", account_name="Aung Aung", id="kbank"),
            BankAccount(bank_name="SCB", account_number="987-6-54321-0", account_name="Aung Aung", id="scb"),
        ],
        platform_details=[
            PlatformDetail(platform_name="YouTube", payout_id="UC-777", id="yt"),
            PlatformDetail(platform_name="TikTok", payout_id=None, id="tt"),
        ],
    )
    return client_service.get_client(client_id)


@pytest.fixture
def mmk_client(client_service):
    """An MMK client at 10% with one bank account and no platforms."""
    client_id = client_service.create_client(
        name="Ma Hnin",
        commission_percentage=Decimal("10"),
        preferred_payout_currency=PayoutCurrency.MMK,
        bank_accounts=[
            {"bank_name": "KBZ", "account_number": "0011223344", "account_name": "Hnin Wai"},
        ],
    )
    return client_service.get_client(client_id)


@pytest.fixture
def sample_transaction(transaction_service, sample_client):
    """A 1000 THB transaction for the sample client, paid to the first bank."""
    transaction_id = transaction_service.create_transaction(
        client_id=sample_client.id,
        incoming_amount_thb=Decimal("1000.00"),
        transaction_date=date(2024, 3, 15),
        bank_account=0,
        platform=0,
    )
    return transaction_service.get_transaction(transaction_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI runner for testing."""
    from click.testing import CliRunner
    return CliRunner()
