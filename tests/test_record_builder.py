"""Tests for turning operator input into transaction records."""

import pytest
from datetime import date, datetime, UTC
from decimal import Decimal

from paydesk.domain.entities import BankAccount, Client, PayoutCurrency, PlatformDetail
from paydesk.domain.errors import NotFoundError, ValidationError
from paydesk.domain.record_builder import (
    build_transaction_record,
    resolve_source_platform,
    select_bank_account,
    select_platform,
)


def make_client(currency=PayoutCurrency.THB, percentage="10"):
    now = datetime.now(UTC)
    return Client(
        id=7,
        name="Ko Aung",
        phone=None,
        commission_percentage=Decimal(percentage),
        preferred_payout_currency=currency,
        bank_accounts=(
            BankAccount("Kasikorn", "111", "Aung", id="kbank"),
            BankAccount("SCB", "222", "Aung", id="scb"),
        ),
        platform_details=(
            PlatformDetail("YouTube", "UC-777", id="yt"),
            PlatformDetail("TikTok", None, id="tt"),
        ),
        created_at=now,
        updated_at=now,
    )


class TestSelection:
    """Tests for bank account and platform selection."""

    def test_select_bank_by_index(self):
        client = make_client()
        assert select_bank_account(client, 1).bank_name == "SCB"
        assert select_bank_account(client, "0").bank_name == "Kasikorn"

    def test_select_bank_by_id(self):
        client = make_client()
        assert select_bank_account(client, "scb").account_number == "222"

    def test_select_bank_out_of_range(self):
        client = make_client()
        with pytest.raises(NotFoundError, match="Bank account"):
            select_bank_account(client, 2)
        with pytest.raises(NotFoundError):
            select_bank_account(client, -1)

    def test_select_bank_unknown_id(self):
        client = make_client()
        with pytest.raises(NotFoundError):
            select_bank_account(client, "nope")

    def test_select_platform_by_index_and_id(self):
        client = make_client()
        assert select_platform(client, 0).platform_name == "YouTube"
        assert select_platform(client, "tt").platform_name == "TikTok"
        with pytest.raises(NotFoundError, match="Platform"):
            select_platform(client, 5)

    def test_resolve_source_platform(self):
        client = make_client()
        assert resolve_source_platform(client, 0) == ("YouTube", "UC-777")
        assert resolve_source_platform(client, "tt") == ("TikTok", None)
        assert resolve_source_platform(client, None) == (None, None)

    def test_other_platform_records_name_only(self):
        client = make_client()
        assert resolve_source_platform(client, "Other") == ("Other", None)
        assert resolve_source_platform(client, "other") == ("Other", None)


class TestBuildTransactionRecord:
    """Tests for build_transaction_record."""

    def test_thb_record(self):
        client = make_client()
        record = build_transaction_record(
            client,
            Decimal("1000.00"),
            date(2024, 3, 15),
            bank_account=0,
            platform="yt",
            notes="  March payout  ",
        )

        assert record.client_id == 7
        assert record.payout_currency is PayoutCurrency.THB
        assert record.payout_amount == Decimal("900.00")
        assert record.fees == Decimal("0")
        assert record.original_amount_usd is None
        assert record.payment_destination == client.bank_accounts[0]
        assert record.source_platform == "YouTube"
        assert record.source_platform_payout_id == "UC-777"
        assert record.notes == "March payout"

    def test_mmk_record(self):
        client = make_client(currency=PayoutCurrency.MMK)
        record = build_transaction_record(
            client, "1000", date(2024, 3, 15), exchange_rate_mmk="120"
        )

        assert record.payout_currency is PayoutCurrency.MMK
        assert record.payout_amount == Decimal("108000")
        assert record.exchange_rate_mmk == Decimal("120")

    def test_no_bank_or_platform(self):
        client = make_client()
        record = build_transaction_record(client, Decimal("50"), date(2024, 1, 1), notes="   ")

        assert record.payment_destination is None
        assert record.source_platform is None
        assert record.source_platform_payout_id is None
        assert record.notes is None

    def test_negative_fees_rejected(self):
        client = make_client()
        with pytest.raises(ValidationError, match="Fees"):
            build_transaction_record(client, Decimal("50"), date(2024, 1, 1), fees=Decimal("-1"))

    def test_negative_usd_rejected(self):
        client = make_client()
        with pytest.raises(ValidationError, match="USD"):
            build_transaction_record(
                client, Decimal("50"), date(2024, 1, 1), original_amount_usd=Decimal("-3")
            )

    def test_bad_bank_selection(self):
        client = make_client()
        with pytest.raises(NotFoundError):
            build_transaction_record(client, Decimal("50"), date(2024, 1, 1), bank_account=9)
