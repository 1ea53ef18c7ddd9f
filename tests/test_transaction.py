"""Tests for transaction service."""

import pytest
from datetime import date
from decimal import Decimal

from paydesk.domain.entities import PayoutCurrency
from paydesk.domain.errors import NotFoundError, ValidationError


def test_create_thb_transaction(transaction_service, sample_client):
    """Payout is derived from the client's rate and stored."""
    transaction_id = transaction_service.create_transaction(
        client_id=sample_client.id,
        incoming_amount_thb=Decimal("1000.00"),
        transaction_date=date(2024, 3, 15),
        original_amount_usd=Decimal("28.50"),
        notes="March",
        bank_account=1,
        platform="yt",
    )

    txn = transaction_service.get_transaction(transaction_id)
    assert txn.client_id == sample_client.id
    assert txn.incoming_amount_thb == Decimal("1000.00")
    assert txn.original_amount_usd == Decimal("28.50")
    assert txn.fees == Decimal("0")
    assert txn.payout_currency is PayoutCurrency.THB
    assert txn.payout_amount == Decimal("900.00")
    assert txn.transaction_date == date(2024, 3, 15)
    assert txn.notes == "March"
    assert txn.source_platform == "YouTube"
    assert txn.source_platform_payout_id == "UC-777"
    assert txn.payment_destination.bank_name == "SCB"


def test_create_mmk_transaction(transaction_service, mmk_client):
    """MMK clients are paid net THB times the exchange rate."""
    transaction_id = transaction_service.create_transaction(
        client_id=mmk_client.id,
        incoming_amount_thb=Decimal("1000.00"),
        transaction_date=date(2024, 3, 15),
        exchange_rate_mmk=Decimal("120.00"),
    )

    txn = transaction_service.get_transaction(transaction_id)
    assert txn.payout_currency is PayoutCurrency.MMK
    assert txn.exchange_rate_mmk == Decimal("120")
    assert txn.payout_amount == Decimal("108000.00")


def test_mmk_transaction_without_rate(transaction_service, mmk_client, caplog):
    """A missing rate records a zero payout and logs a warning."""
    with caplog.at_level("WARNING"):
        transaction_id = transaction_service.create_transaction(
            client_id=mmk_client.id,
            incoming_amount_thb=Decimal("1000.00"),
            transaction_date=date(2024, 3, 15),
        )

    txn = transaction_service.get_transaction(transaction_id)
    assert txn.payout_amount == Decimal("0.00")
    assert "no exchange rate" in caplog.text


def test_payment_destination_is_a_snapshot(
    transaction_service, client_service, sample_client, sample_transaction
):
    """Editing the client's bank list later does not change the transaction."""
    client_service.update_client(sample_client.id, bank_accounts=[])

    txn = transaction_service.get_transaction(sample_transaction.id)
    assert txn.payment_destination.bank_name == "Kasikorn"
    assert txn.payment_destination.account_number == "123-4-56789-0"


def test_rate_change_does_not_touch_payout(
    transaction_service, client_service, sample_client, sample_transaction
):
    """Stored payouts never change when the client's commission changes."""
    client_service.update_client(sample_client.id, commission_percentage=Decimal("15"))

    txn = transaction_service.get_transaction(sample_transaction.id)
    assert txn.payout_amount == Decimal("900.00")


def test_other_platform(transaction_service, sample_client):
    """'Other' is stored without a payout id."""
    transaction_id = transaction_service.create_transaction(
        client_id=sample_client.id,
        incoming_amount_thb=Decimal("10"),
        transaction_date=date(2024, 3, 15),
        platform="Other",
    )

    txn = transaction_service.get_transaction(transaction_id)
    assert txn.source_platform == "Other"
    assert txn.source_platform_payout_id is None


def test_create_transaction_client_not_found(transaction_service):
    """Unknown clients are rejected before anything is written."""
    with pytest.raises(NotFoundError, match="Client 999 not found"):
        transaction_service.create_transaction(
            client_id=999,
            incoming_amount_thb=Decimal("10"),
            transaction_date=date(2024, 3, 15),
        )
    assert transaction_service.list_transactions() == []


def test_create_transaction_bad_bank_index(transaction_service, sample_client):
    """A bank index past the end of the list is rejected."""
    with pytest.raises(NotFoundError):
        transaction_service.create_transaction(
            client_id=sample_client.id,
            incoming_amount_thb=Decimal("10"),
            transaction_date=date(2024, 3, 15),
            bank_account=5,
        )
    assert transaction_service.list_transactions() == []


def test_create_transaction_negative_amount(transaction_service, sample_client):
    """Negative amounts are rejected."""
    with pytest.raises(ValidationError):
        transaction_service.create_transaction(
            client_id=sample_client.id,
            incoming_amount_thb=Decimal("-10"),
            transaction_date=date(2024, 3, 15),
        )


def test_list_transactions_by_client(transaction_service, sample_client, mmk_client):
    """Transactions can be filtered by client and come back newest first."""
    first = transaction_service.create_transaction(
        client_id=sample_client.id, incoming_amount_thb=Decimal("1"), transaction_date=date(2024, 1, 1)
    )
    second = transaction_service.create_transaction(
        client_id=sample_client.id, incoming_amount_thb=Decimal("2"), transaction_date=date(2024, 1, 2)
    )
    transaction_service.create_transaction(
        client_id=mmk_client.id, incoming_amount_thb=Decimal("3"), transaction_date=date(2024, 1, 3)
    )

    ids = [t.id for t in transaction_service.list_transactions(client_id=sample_client.id)]
    assert ids == [second, first]
    assert len(transaction_service.list_transactions()) == 3


def test_exchange_rate_rounded_before_payout(
    transaction_service, invoice_service, mmk_client
):
    """Rates beyond four places are rounded once, so payout and conversion agree."""
    from paydesk.domain.invoice_view import build_invoice_view

    transaction_id = transaction_service.create_transaction(
        client_id=mmk_client.id,
        incoming_amount_thb=Decimal("1000.00"),
        transaction_date=date(2024, 3, 15),
        exchange_rate_mmk=Decimal("120.12345"),
    )

    txn = transaction_service.get_transaction(transaction_id)
    assert txn.exchange_rate_mmk == Decimal("120.1235")
    assert txn.payout_amount == Decimal("108111.15")

    view = build_invoice_view(
        invoice_service.get_document(invoice_service.generate_invoice(transaction_id))
    )
    assert view.get("conversion").value == "108,111.15 MMK"
    assert view.get("payout").value == view.get("conversion").value
