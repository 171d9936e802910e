"""Shared fixtures for the fleet account manager tests."""
from decimal import Decimal

import pytest

from fleet.models import FleetAccount
from fleet.repository import AccountRepository
from tests.fakes import FakeAuthProvider, FakeRepository

OPERATOR_EMAIL = "ops@example.com"
OPERATOR_PASSWORD = "correct horse battery"


@pytest.fixture
def fake_repo():
    return FakeRepository()


@pytest.fixture
def fake_provider():
    return FakeAuthProvider()


@pytest.fixture
def repo(db):
    return AccountRepository()


@pytest.fixture
def make_account(db):
    """Insert an account directly, bypassing the repository stamps."""
    counter = {"n": 0}

    def _make(**fields):
        counter["n"] += 1
        values = {
            "business_account_id": f"FS{100000 + counter['n']}",
            "company_name": f"Company {counter['n']}",
        }
        values.update(fields)
        if "total_sales" in values and values["total_sales"] is not None:
            values["total_sales"] = Decimal(str(values["total_sales"]))
        return FleetAccount.objects.create(**values)

    return _make


@pytest.fixture
def operator(django_user_model):
    return django_user_model.objects.create_user(
        email=OPERATOR_EMAIL, password=OPERATOR_PASSWORD, first_name="Dana", last_name="Lee",
    )


@pytest.fixture
def auth_client(client, operator):
    response = client.post("/auth/login/", {"email": OPERATOR_EMAIL, "password": OPERATOR_PASSWORD})
    assert response.status_code == 302
    return client
