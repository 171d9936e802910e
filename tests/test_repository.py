from datetime import timedelta
from decimal import Decimal
from unittest import mock
import uuid

import pytest
from django.db import DatabaseError
from django.utils import timezone

from fleet.models import FleetAccount
from fleet.repository import StatusFilter
from fleetdesk.exceptions import RepositoryError, ValidationError


@pytest.fixture
def mixed_accounts(make_account):
    return [
        make_account(company_name="Active Big", is_active=True, total_sales=900),
        make_account(company_name="Active Small", is_active=True, total_sales=10),
        make_account(company_name="Inactive", is_active=False, total_sales=500),
        make_account(company_name="Flagged", is_active=True, needs_review=True, total_sales=50),
        make_account(company_name="No Sales", is_active=False, needs_review=True, total_sales=None),
    ]


@pytest.mark.parametrize("status_filter, predicate", [
    (StatusFilter.ALL, lambda a: True),
    (StatusFilter.ACTIVE, lambda a: a.is_active),
    (StatusFilter.INACTIVE, lambda a: not a.is_active),
    (StatusFilter.NEEDS_REVIEW, lambda a: a.needs_review),
])
def test_list_filters_and_sorts_by_sales(repo, mixed_accounts, status_filter, predicate):
    rows = repo.list(status_filter)

    expected = {a.pk for a in mixed_accounts if predicate(a)}
    assert {r.pk for r in rows} == expected
    sales = [r.total_sales if r.total_sales is not None else Decimal("-1") for r in rows]
    assert sales == sorted(sales, reverse=True)


def test_list_puts_missing_sales_last(repo, mixed_accounts):
    rows = repo.list()
    assert rows[0].company_name == "Active Big"
    assert rows[-1].company_name == "No Sales"


def test_list_accepts_filter_string(repo, mixed_accounts):
    assert len(repo.list("inactive")) == 2


def test_status_filter_parse_falls_back_to_all():
    assert StatusFilter.parse("needs_review") is StatusFilter.NEEDS_REVIEW
    assert StatusFilter.parse("bogus") is StatusFilter.ALL
    assert StatusFilter.parse(None) is StatusFilter.ALL


def test_create_with_defaults(repo):
    repo.create({"business_account_id": "FS127217", "company_name": "Acme Co"})

    rows = repo.list()
    assert len(rows) == 1
    account = rows[0]
    assert account.account_type == "LOCAL"
    assert account.is_active is True
    assert account.needs_review is False
    assert account.source == "Manual Entry"
    assert account.updated_at is not None


def test_create_ignores_caller_source_and_read_only_fields(repo):
    account = repo.create({
        "business_account_id": "FS1", "company_name": "Acme",
        "source": "Import", "total_sales": "123.00",
    })
    account.refresh_from_db()
    assert account.source == "Manual Entry"
    assert account.total_sales is None


@pytest.mark.parametrize("record", [
    {"business_account_id": "", "company_name": "Acme"},
    {"business_account_id": "FS1", "company_name": "   "},
    {"company_name": "Acme"},
])
def test_create_requires_id_and_company(repo, record):
    with pytest.raises(ValidationError):
        repo.create(record)
    assert FleetAccount.objects.count() == 0


def test_update_refreshes_timestamp_and_keeps_immutable_fields(repo, make_account):
    stale = timezone.now() - timedelta(days=3)
    account = make_account(business_account_id="FS9", source="Import", updated_at=stale)

    repo.update(account.pk, {
        "company_name": "Renamed",
        "business_account_id": "HIJACK",
        "source": "Manual Entry",
    })

    account.refresh_from_db()
    assert account.company_name == "Renamed"
    assert account.business_account_id == "FS9"
    assert account.source == "Import"
    assert account.updated_at > stale


def test_update_unknown_id_raises(repo):
    with pytest.raises(RepositoryError):
        repo.update(uuid.uuid4(), {"company_name": "Nobody"})


def test_update_malformed_id_raises(repo):
    with pytest.raises(RepositoryError):
        repo.update("not-a-uuid", {"company_name": "Nobody"})


def test_quick_set_active_clears_review(repo, make_account):
    account = make_account(is_active=True, needs_review=True)

    repo.quick_set_active(account.pk, False)

    account.refresh_from_db()
    assert account.is_active is False
    assert account.needs_review is False


def test_review_flag_is_independent_of_status(repo):
    account = repo.create({"business_account_id": "FS127217", "company_name": "Acme Co"})

    repo.update(account.pk, {"needs_review": True})

    assert [a.pk for a in repo.list(StatusFilter.NEEDS_REVIEW)] == [account.pk]
    assert [a.pk for a in repo.list(StatusFilter.ACTIVE)] == [account.pk]


def test_review_alerts_newest_first_capped(repo, make_account):
    now = timezone.now()
    for i in range(7):
        make_account(company_name=f"Review {i}", needs_review=True, updated_at=now - timedelta(hours=i))
    make_account(company_name="Fine", needs_review=False, updated_at=now + timedelta(hours=1))

    alerts = repo.list_review_alerts()

    assert [a.company_name for a in alerts] == [f"Review {i}" for i in range(5)]


def test_dashboard_projection(repo, make_account):
    make_account(is_active=False, needs_review=True, total_sales=12.5)

    rows = repo.list_for_dashboard()

    assert rows == [{"is_active": False, "needs_review": True, "total_sales": Decimal("12.50")}]


def test_get_unknown_raises(repo):
    with pytest.raises(RepositoryError):
        repo.get(uuid.uuid4())


def test_database_failure_on_read_becomes_repository_error(repo):
    broken = mock.MagicMock()
    broken.values.side_effect = DatabaseError("server closed the connection")
    broken.filter.return_value.order_by.return_value.__iter__.side_effect = DatabaseError("timeout")

    with mock.patch.object(repo, "_queryset", return_value=broken):
        with pytest.raises(RepositoryError):
            repo.list_for_dashboard()
        with pytest.raises(RepositoryError):
            repo.list()


def test_database_failure_on_write_becomes_repository_error(repo):
    broken = mock.MagicMock()
    broken.create.side_effect = DatabaseError("read-only transaction")

    with mock.patch.object(repo, "_queryset", return_value=broken):
        with pytest.raises(RepositoryError) as excinfo:
            repo.create({"business_account_id": "FS1", "company_name": "Acme"})

    assert isinstance(excinfo.value.__cause__, DatabaseError)
