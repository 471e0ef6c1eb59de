"""
Pytest fixtures for infrastructure persistence tests.

Each test gets a fresh in-memory SQLite database (aiosqlite). The same
repositories run against PostgreSQL in tests/integration.
"""

import pytest

from tests.shared.fixtures.database import (  # noqa: F401
    db_session,
    session_maker,
    sqlite_engine,
)
from tests.shared.fixtures.factories import TestUserFactory


@pytest.fixture
def current_user():
    return TestUserFactory.default_current_user()


@pytest.fixture
def other_user():
    return TestUserFactory.bob_current_user()
