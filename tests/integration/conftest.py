"""Fixtures for end-to-end sync pipeline tests."""

import pytest

from tests.shared.fixtures.aggregator import FakeAggregator
from tests.shared.fixtures.database import (  # noqa: F401
    db_session,
    postgres_container,
    postgres_engine,
    session_maker,
    sqlite_engine,
)
from tests.shared.fixtures.factories import (
    REQUISITION_REFERENCE,
    TestUserFactory,
    balance,
    raw_transactions,
)


@pytest.fixture
def current_user():
    return TestUserFactory.default_current_user()


@pytest.fixture
def aggregator():
    """Two linked accounts behind one requisition."""
    fake = FakeAggregator()
    fake.add_account(
        "acc-1",
        name="Lønkonto",
        transactions=raw_transactions(5, prefix="chk"),
        balance=balance("1234.56"),
    )
    fake.add_account(
        "acc-2",
        name="Opsparing",
        transactions=raw_transactions(3, prefix="sav"),
        balance=balance("50000.00", "interimAvailable"),
    )
    fake.add_requisition(
        "req-1",
        accounts=("acc-1", "acc-2"),
        reference=REQUISITION_REFERENCE,
    )
    return fake
