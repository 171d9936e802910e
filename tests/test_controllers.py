import threading

import pytest

from fleet.controllers import AccountFormController, initial_values
from fleet.deferred import DeferredCall, schedule_manually, schedule_with_timer
from tests.fakes import FakeRepository


@pytest.fixture
def repo():
    return FakeRepository()


@pytest.fixture
def saved():
    return []


def make_controller(repo, saved, account=None):
    return AccountFormController(
        repo, account=account, on_saved=lambda: saved.append("saved"),
        schedule=schedule_manually,
    )


def test_mode_is_fixed_by_backing_record(repo, saved):
    assert make_controller(repo, saved).mode == "create"
    assert make_controller(repo, saved, account={"id": None}).mode == "create"
    assert make_controller(repo, saved, account={"id": "abc"}).mode == "edit"


def test_initial_values_fill_blanks():
    values = initial_values({
        "id": "x", "business_account_id": "FS1", "company_name": "Acme",
        "city": None, "account_type": "", "is_active": False, "needs_review": None,
    })
    assert values["city"] == ""
    assert values["account_type"] == "LOCAL"
    assert values["is_active"] is False
    assert values["needs_review"] is False


def test_create_submit_schedules_close(repo, saved):
    controller = make_controller(repo, saved)
    controller.update(business_account_id="FS127217", company_name="Acme Co")

    assert controller.submit() is True

    created = list(repo.rows.values())[0]
    assert created["source"] == "Manual Entry"
    assert controller.success is True
    assert controller.pending_close.delay == 1.0
    assert saved == []

    controller.pending_close.fire()
    assert saved == ["saved"]


def test_create_failure_stays_open(repo, saved):
    controller = make_controller(repo, saved)
    controller.update(company_name="No Id")

    assert controller.submit() is False

    assert "business_account_id" in controller.error
    assert controller.success is False
    assert controller.pending_close is None
    assert controller.loading is False
    assert repo.rows == {}


def test_edit_submit_updates_not_creates(repo, saved):
    row = repo.add(business_account_id="FS1", company_name="Old", source="Import")
    controller = make_controller(repo, saved, account=row)
    controller.update(company_name="New")

    assert controller.submit() is True

    assert [c[0] for c in repo.calls] == ["update"]
    assert repo.rows[row["id"]]["company_name"] == "New"
    assert repo.rows[row["id"]]["source"] == "Import"


def test_remote_failure_surfaces_message(saved):
    repo = FakeRepository()
    row = repo.add(business_account_id="FS1", company_name="Acme")
    repo.fail = True
    controller = make_controller(repo, saved, account=row)

    assert controller.submit() is False
    assert controller.error == "connection refused"
    # Still editable; a retry goes through once the store recovers.
    repo.fail = False
    assert controller.submit() is True


def test_quick_status_is_noop_when_creating(repo, saved):
    controller = make_controller(repo, saved)
    assert controller.quick_status(False) is False
    assert repo.calls == []


def test_quick_status_sets_active_and_clears_review(repo, saved):
    row = repo.add(business_account_id="FS1", company_name="Acme", needs_review=True)
    controller = make_controller(repo, saved, account=row)

    assert controller.quick_status(False) is True

    assert repo.rows[row["id"]]["is_active"] is False
    assert repo.rows[row["id"]]["needs_review"] is False
    assert len(repo.calls) == 1
    controller.pending_close.fire()
    assert saved == ["saved"]


def test_dispose_cancels_pending_close(repo, saved):
    row = repo.add(business_account_id="FS1", company_name="Acme")
    controller = make_controller(repo, saved, account=row)
    controller.quick_status(True)

    controller.dispose()

    assert controller.pending_close.fire() is False
    assert saved == []


def test_reset_replaces_values_on_identity_change(repo, saved):
    first = repo.add(business_account_id="FS1", company_name="First", city="Tulsa")
    second = repo.add(business_account_id="FS2", company_name="Second")
    controller = make_controller(repo, saved, account=first)
    controller.update(contact_name="typed but unsaved")

    assert controller.reset(first) is False
    assert controller.values["contact_name"] == "typed but unsaved"

    assert controller.reset(second) is True
    assert controller.values["company_name"] == "Second"
    assert controller.values["city"] == ""
    assert controller.values["contact_name"] == ""


def test_unknown_field_rejected(repo, saved):
    with pytest.raises(KeyError):
        make_controller(repo, saved).update(source="Manual Entry")


def test_deferred_call_fires_once():
    calls = []
    call = DeferredCall(1, lambda: calls.append(1))
    assert call.fire() is True
    assert call.fire() is False
    assert calls == [1]


def test_timer_schedule_runs_callback():
    done = threading.Event()
    call = schedule_with_timer(0.01, done.set)
    assert done.wait(2)
    assert call.fired is True


def test_timer_schedule_cancelled_before_delay():
    done = threading.Event()
    call = schedule_with_timer(0.2, done.set)
    call.cancel()
    assert not done.wait(0.4)


def test_default_schedule_closes_on_timer(repo):
    done = threading.Event()
    controller = AccountFormController(repo, on_saved=done.set, close_delay=0.01)
    controller.update(business_account_id="FS1", company_name="Acme")

    assert controller.submit() is True
    assert done.wait(2)
    assert controller.pending_close.fired is True
