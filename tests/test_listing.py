import pytest

from fleet.listing import AccountListViewModel, matches_search, search_accounts
from fleet.repository import StatusFilter
from tests.fakes import FakeRepository


@pytest.fixture
def repo():
    return FakeRepository(rows=[
        {"business_account_id": "FS127217", "company_name": "Acme Co", "city": "Tulsa", "total_sales": 300},
        {"business_account_id": "NA00042", "company_name": "Blue Line Rentals", "city": "Austin",
         "is_active": False, "total_sales": 900},
        {"business_account_id": "CF555", "company_name": "Cash Haulers", "city": None,
         "needs_review": True, "total_sales": None},
    ])


@pytest.mark.parametrize("term, expected", [
    ("", {"FS127217", "NA00042", "CF555"}),
    ("acme", {"FS127217"}),
    ("ACME", {"FS127217"}),
    ("fs127", {"FS127217"}),
    ("aus", {"NA00042"}),
    ("RENT", {"NA00042"}),
    ("zzz", set()),
])
def test_search_matches_any_field_case_insensitively(repo, term, expected):
    found = search_accounts(repo.list(), term)
    assert {a["business_account_id"] for a in found} == expected


def test_search_tolerates_missing_fields():
    assert matches_search({"company_name": None}, "x") is False
    assert matches_search({}, "") is True


def test_activate_fetches_with_filter(repo):
    vm = AccountListViewModel(repo, status_filter=StatusFilter.NEEDS_REVIEW).activate()

    assert [a["business_account_id"] for a in vm.accounts] == ["CF555"]
    assert repo.calls == [("list", StatusFilter.NEEDS_REVIEW)]
    assert vm.loading is False


def test_filter_change_refetches_but_search_does_not(repo):
    vm = AccountListViewModel(repo).activate()

    vm.set_search("acme")
    assert len(repo.calls) == 1
    assert [a["company_name"] for a in vm.visible] == ["Acme Co"]

    vm.set_filter(StatusFilter.INACTIVE)
    assert repo.calls[-1] == ("list", StatusFilter.INACTIVE)
    # Search still applies on top of the new server-side filter.
    assert vm.visible == []
    vm.set_search("")
    assert [a["company_name"] for a in vm.visible] == ["Blue Line Rentals"]


def test_same_filter_does_not_refetch(repo):
    vm = AccountListViewModel(repo, status_filter="active").activate()
    assert vm.set_filter("active") is False
    assert len(repo.calls) == 1


def test_stale_fetch_is_discarded(repo):
    vm = AccountListViewModel(repo)
    vm.active = True

    first = vm.begin_fetch()
    second = vm.begin_fetch()

    assert vm.complete_fetch(second, ["newer"]) is True
    assert vm.complete_fetch(first, ["older"]) is False
    assert vm.accounts == ["newer"]


def test_result_after_deactivate_is_discarded(repo):
    vm = AccountListViewModel(repo).activate()
    before = list(vm.accounts)

    ticket = vm.begin_fetch()
    vm.deactivate()

    assert vm.complete_fetch(ticket, []) is False
    assert vm.accounts == before


def test_repository_failure_shows_no_rows():
    vm = AccountListViewModel(FakeRepository(fail=True)).activate()
    assert vm.accounts == []
    assert vm.loading is False


def test_add_and_edit_are_signals_only(repo):
    seen = []
    vm = AccountListViewModel(repo, on_add=lambda: seen.append("add"),
                              on_edit=lambda a: seen.append(a["business_account_id"]))
    vm.add()
    vm.edit({"business_account_id": "FS1"})
    assert seen == ["add", "FS1"]
    assert repo.calls == []
