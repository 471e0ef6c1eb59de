"""Tests for banking value objects built from aggregator payloads."""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError as PydanticValidationError

from banksync.domain.banking.value_objects import (
    AccountBalance,
    AccountDetails,
    AggregatorTransaction,
    BankTransaction,
    Institution,
    Requisition,
    RequisitionStatus,
)
from banksync.domain.integration.value_objects import HistoryStatus, SyncStatus
from tests.shared.fixtures.factories import raw_transaction


class TestAccountBalance:
    """Test balance parsing."""

    def test_from_api(self):
        balance = AccountBalance.from_api(
            {
                "balanceAmount": {"amount": "1500.25", "currency": "DKK"},
                "balanceType": "interimAvailable",
                "referenceDate": "2024-03-15",
            },
        )

        assert balance.amount == Decimal("1500.25")
        assert balance.currency == "DKK"
        assert balance.balance_type == "interimAvailable"
        assert balance.reference_date == date(2024, 3, 15)

    def test_from_api_defaults_balance_type(self):
        balance = AccountBalance.from_api({"balanceAmount": {"amount": "-3"}})

        assert balance.amount == Decimal("-3")
        assert balance.balance_type == "closingBooked"

    def test_from_api_rejects_non_numeric_amount(self):
        with pytest.raises(PydanticValidationError):
            AccountBalance.from_api({"balanceAmount": {"amount": "n/a"}})


class TestAccountDetails:
    """Test account details parsing and naming."""

    def test_from_api(self):
        details = AccountDetails.from_api(
            "acc-1",
            {
                "account": {
                    "iban": "DK5000400440116243",
                    "currency": "DKK",
                    "ownerName": "Jane Doe",
                    "product": "Budgetkonto",
                },
            },
        )

        assert details.account_id == "acc-1"
        assert details.iban == "DK5000400440116243"
        assert details.owner_name == "Jane Doe"

    @pytest.mark.parametrize(
        ("name", "product", "expected"),
        [
            ("Lønkonto", "Budgetkonto", "Lønkonto"),
            (None, "Budgetkonto", "Budgetkonto"),
            (None, None, "Account"),
        ],
    )
    def test_display_name(self, name, product, expected):
        details = AccountDetails(account_id="acc-1", name=name, product=product)

        assert details.display_name() == expected


class TestAggregatorTransaction:
    """Test raw transaction aliases and fallbacks."""

    def test_parses_aliases(self):
        raw = AggregatorTransaction.model_validate(
            raw_transaction(creditorName="Netto", merchantCategoryCode="5411"),
        )

        assert raw.external_id == "tx-1"
        assert raw.transaction_amount.amount == Decimal("-125.50")
        assert raw.creditor_name == "Netto"
        assert raw.merchant_category_code == "5411"

    def test_internal_id_fallback(self):
        record = raw_transaction(transaction_id=None, internalTransactionId="int-9")

        assert AggregatorTransaction.model_validate(record).external_id == "int-9"

    def test_value_date_fallback(self):
        record = raw_transaction(booking_date=None, value_date="2024-03-02")

        assert AggregatorTransaction.model_validate(record).effective_date == date(
            2024,
            3,
            2,
        )

    def test_missing_amount_is_invalid(self):
        with pytest.raises(PydanticValidationError):
            AggregatorTransaction.model_validate({"transactionId": "tx-1"})


class TestBankTransaction:
    """Test the canonical transaction."""

    def test_direction_and_str(self):
        tx = BankTransaction(
            external_id="tx-1",
            account_id=1,
            transaction_date=date(2024, 3, 1),
            amount=Decimal("250.00"),
            currency="DKK",
            description="Salary",
        )

        assert tx.is_credit()
        assert not tx.is_debit()
        assert str(tx) == "2024-03-01: +250.00 DKK - Salary"

    def test_requires_description(self):
        with pytest.raises(PydanticValidationError):
            BankTransaction(
                external_id="tx-1",
                account_id=1,
                transaction_date=date(2024, 3, 1),
                amount=Decimal("1"),
                currency="DKK",
                description="",
            )


class TestInstitution:
    """Test institution parsing and name matching."""

    def test_from_api_and_match(self):
        institution = Institution.from_api(
            {
                "id": "DANSKEBANK_DABADKKK",
                "name": "Danske Bank",
                "bic": "DABADKKK",
                "transaction_total_days": "730",
                "countries": ["DK"],
            },
        )

        assert institution.transaction_total_days == 730
        assert institution.countries == ("DK",)
        assert institution.matches(["danske"])
        assert not institution.matches(["nordea"])


class TestRequisition:
    """Test requisition parsing."""

    def test_linked_requisition(self):
        requisition = Requisition.from_api(
            {
                "id": "req-1",
                "status": "LN",
                "institution_id": "DANSKEBANK_DABADKKK",
                "reference": "banksync-1710000000000",
                "accounts": ["acc-1", "acc-2"],
            },
        )

        assert requisition.is_linked
        assert requisition.accounts == ("acc-1", "acc-2")

    def test_unknown_status(self):
        requisition = Requisition.from_api({"id": "req-1", "status": "ZZ"})

        assert requisition.status == RequisitionStatus.UNKNOWN
        assert requisition.raw_status == "ZZ"
        assert not requisition.is_linked


class TestStatusEnums:
    """Test status helper predicates."""

    def test_sync_status(self):
        assert SyncStatus.IN_PROGRESS.can_finish()
        assert not SyncStatus.NEVER.can_finish()
        assert SyncStatus.ERROR.is_terminal()
        assert SyncStatus.NEVER.needs_attention()
        assert not SyncStatus.IN_PROGRESS.needs_attention()

    def test_history_status(self):
        assert HistoryStatus.SUCCESS.is_final()
        assert not HistoryStatus.IN_PROGRESS.is_final()
