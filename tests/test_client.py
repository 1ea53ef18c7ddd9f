"""Tests for client service."""

import pytest
from datetime import date
from decimal import Decimal

from paydesk.domain.entities import BankAccount, PayoutCurrency, PlatformDetail
from paydesk.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    StorageError,
    ValidationError,
)


def test_create_client(client_service):
    """Test creating a client."""
    client_id = client_service.create_client(name="Ko Aung", commission_percentage=Decimal("10"))

    client = client_service.get_client(client_id)
    assert client is not None
    assert client.name == "Ko Aung"
    assert client.commission_percentage == Decimal("10")
    assert client.preferred_payout_currency is PayoutCurrency.THB
    assert client.bank_accounts == ()
    assert client.platform_details == ()
    assert client.phone is None


def test_create_client_with_entries(client_service):
    """Bank accounts and platforms keep their order and receive ids."""
    client_id = client_service.create_client(
        name="Ma Hnin",
        commission_percentage="12.5",
        preferred_payout_currency="mmk",
        bank_accounts=[
            {"bank_name": "KBZ", "account_number": "001", "account_name": "Hnin"},
            BankAccount(bank_name="AYA", account_number="002", account_name="Hnin", id="aya"),
        ],
        platform_details=[{"platform_name": "Facebook", "payout_id": "FB-1"}],
    )

    client = client_service.get_client(client_id)
    assert client.preferred_payout_currency is PayoutCurrency.MMK
    assert client.commission_percentage == Decimal("12.5")
    assert [a.bank_name for a in client.bank_accounts] == ["KBZ", "AYA"]
    assert client.bank_accounts[0].id
    assert client.bank_accounts[1].id == "aya"
    assert client.platform_details[0].platform_name == "Facebook"
    assert client.platform_details[0].payout_id == "FB-1"


def test_create_client_requires_name(client_service):
    """Blank names are rejected."""
    with pytest.raises(ValidationError, match="name is required"):
        client_service.create_client(name="   ", commission_percentage=10)


def test_create_client_bad_percentage(client_service):
    """Commission must lie between 0 and 100."""
    with pytest.raises(ValidationError):
        client_service.create_client(name="Too Much", commission_percentage=101)


def test_create_client_incomplete_bank(client_service):
    """Bank entries need all three fields."""
    with pytest.raises(ValidationError, match="account_name"):
        client_service.create_client(
            name="Half Bank",
            commission_percentage=10,
            bank_accounts=[{"bank_name": "KBZ", "account_number": "001"}],
        )


def test_create_duplicate_client(client_service, sample_client):
    """Client names are unique."""
    with pytest.raises(ConflictError, match="already exists"):
        client_service.create_client(name="Ko Aung", commission_percentage=5)


def test_list_clients(client_service, sample_client, mmk_client):
    """All clients are listed."""
    names = {c.name for c in client_service.list_clients()}
    assert names == {"Ko Aung", "Ma Hnin"}


def test_update_client_fields(client_service, sample_client):
    """Only the given fields change."""
    client_service.update_client(
        sample_client.id, commission_percentage=Decimal("15"), preferred_payout_currency="MMK"
    )

    client = client_service.get_client(sample_client.id)
    assert client.commission_percentage == Decimal("15")
    assert client.preferred_payout_currency is PayoutCurrency.MMK
    assert client.name == "Ko Aung"
    assert client.phone == sample_client.phone
    assert client.bank_accounts == sample_client.bank_accounts


def test_update_client_replaces_lists(client_service, sample_client):
    """Giving a list replaces it; an empty list clears it."""
    client_service.update_client(
        sample_client.id,
        bank_accounts=[BankAccount("Bangkok Bank", "555", "Aung", id="bbl")],
        platform_details=[],
    )

    client = client_service.get_client(sample_client.id)
    assert [a.id for a in client.bank_accounts] == ["bbl"]
    assert client.platform_details == ()


def test_update_client_clears_phone(client_service, sample_client):
    """An empty phone string clears the phone number."""
    client_service.update_client(sample_client.id, phone="")
    assert client_service.get_client(sample_client.id).phone is None


def test_update_client_name_conflict(client_service, sample_client, mmk_client):
    """Renaming onto another client's name fails."""
    with pytest.raises(ConflictError):
        client_service.update_client(sample_client.id, name="Ma Hnin")


def test_update_missing_client(client_service):
    """Updating an unknown client fails."""
    with pytest.raises(NotFoundError):
        client_service.update_client(999, name="Nobody")


def test_delete_client(client_service, mmk_client):
    """Clients without transactions can be deleted."""
    client_service.delete_client(mmk_client.id)
    assert client_service.get_client(mmk_client.id) is None


def test_delete_client_with_transactions(client_service, transaction_service, sample_client):
    """Clients with transactions are kept."""
    transaction_service.create_transaction(
        client_id=sample_client.id,
        incoming_amount_thb=Decimal("100"),
        transaction_date=date(2024, 1, 1),
    )

    with pytest.raises(DependencyError, match="1 transaction"):
        client_service.delete_client(sample_client.id)


def test_platform_detail_without_payout_id(client_service):
    """Platforms may be stored without a payout id."""
    client_id = client_service.create_client(
        name="No Payout",
        commission_percentage=10,
        platform_details=[PlatformDetail(platform_name="Instagram")],
    )
    platform = client_service.get_client(client_id).platform_details[0]
    assert platform.platform_name == "Instagram"
    assert platform.payout_id is None


def test_commission_stored_as_rounded(client_service):
    """The stored percentage is the rounded value used in calculations."""
    client_id = client_service.create_client(name="Precise", commission_percentage="12.345678")
    assert client_service.get_client(client_id).commission_percentage == Decimal("12.3457")


def test_rejected_write_raises_storage_error(temp_db, client_service, sample_client):
    """A write the store rejects becomes a StorageError and the session stays usable."""
    with pytest.raises(StorageError, match="Database write failed"):
        temp_db.create_client(
            name="Ko Aung",
            commission_percentage=Decimal("5"),
            preferred_payout_currency=PayoutCurrency.THB,
        )

    assert [c.name for c in client_service.list_clients()] == ["Ko Aung"]
