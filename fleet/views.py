"""Account list and add/edit views."""
from django.contrib.auth.decorators import login_required
from django.http import Http404, HttpResponse
from django.shortcuts import render
from django.urls import reverse
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from fleetdesk.exceptions import RepositoryError
from fleetdesk.shell import Screen, shows
from .controllers import AccountFormController
from .deferred import schedule_manually
from .forms import AccountFilterForm, FleetAccountForm, QuickStatusForm
from .listing import AccountListViewModel
from .repository import AccountRepository, StatusFilter

LIST_STATUS_KEY = "fleet.list_status"


def _repository():
    return AccountRepository()


def _with_deferred_close(response, controller):
    """Hand a pending close to the browser as a Refresh header, then drop it here."""
    call = controller.pending_close
    if call is not None and call.pending:
        response["Refresh"] = f"{call.delay:g}; url={reverse('fleet:account_list')}"
    controller.dispose()
    return response


def _load_account(account_id):
    try:
        return _repository().get(account_id)
    except RepositoryError as exc:
        raise Http404(str(exc)) from exc


# ---------------------------------------------------------------------------
# Account List
# ---------------------------------------------------------------------------
@shows(Screen.ACCOUNTS)
@login_required
@require_GET
def account_list_view(request):
    filters = AccountFilterForm(request.GET or None)
    search, status = "", StatusFilter.ALL
    if filters.is_valid():
        search = filters.cleaned_data["search"]
        status = StatusFilter.parse(filters.cleaned_data["status"])

    htmx = bool(request.headers.get("HX-Request"))
    if htmx and request.session.get(LIST_STATUS_KEY) == status.value:
        # Rows for this filter are already on the page; search runs in the browser.
        return HttpResponse(status=204)

    vm = AccountListViewModel(
        _repository(), status_filter=status, search=search,
        on_add=request.shell.add, on_edit=request.shell.edit,
    ).activate()
    request.session[LIST_STATUS_KEY] = vm.status_filter.value
    shown = {a.pk for a in vm.visible}

    context = {
        "filters": filters if filters.is_bound else AccountFilterForm(),
        "accounts": vm.visible,
        "rows": [(a, a.pk in shown) for a in vm.accounts],
        "fetched_count": len(vm.accounts),
        "status_filter": vm.status_filter,
        "search": vm.search,
        "page_title": "Fleet Accounts",
        "active_page": "accounts",
    }

    if htmx:
        return render(request, "partials/account_rows.html", context)

    return render(request, "fleet/account_list.html", context)


# ---------------------------------------------------------------------------
# Add / Edit
# ---------------------------------------------------------------------------
def _render_form(request, form, controller, status=200):
    response = render(request, "fleet/account_form.html", {
        "form": form,
        "controller": controller,
        "account": controller.account if controller.is_editing else None,
        "page_title": "Edit Account" if controller.is_editing else "Add New Account",
        "active_page": "accounts",
    }, status=status)
    return _with_deferred_close(response, controller)


@shows(Screen.ACCOUNTS)
@login_required
@require_http_methods(["GET", "POST"])
def account_create_view(request):
    request.shell.add()
    controller = AccountFormController(
        _repository(), on_saved=request.shell.form_saved, schedule=schedule_manually,
    )
    if request.method == "POST":
        form = FleetAccountForm(request.POST)
        if form.is_valid():
            controller.update(**form.cleaned_data)
            controller.submit()
    else:
        form = FleetAccountForm(initial=controller.values)
    return _render_form(request, form, controller)


@shows(Screen.ACCOUNTS)
@login_required
@require_http_methods(["GET", "POST"])
def account_edit_view(request, account_id):
    account = _load_account(account_id)
    request.shell.edit(account)
    controller = AccountFormController(
        _repository(), account=account, on_saved=request.shell.form_saved,
        schedule=schedule_manually,
    )
    if request.method == "POST":
        form = FleetAccountForm(request.POST, initial=controller.values, editing=True)
        if form.is_valid():
            changes = dict(form.cleaned_data)
            changes.pop("business_account_id", None)
            controller.update(**changes)
            controller.submit()
    else:
        form = FleetAccountForm(initial=controller.values, editing=True)
    return _render_form(request, form, controller)


@shows(Screen.ACCOUNTS)
@login_required
@require_POST
def account_quick_status_view(request, account_id):
    account = _load_account(account_id)
    request.shell.edit(account)
    controller = AccountFormController(
        _repository(), account=account, on_saved=request.shell.form_saved,
        schedule=schedule_manually,
    )
    status_form = QuickStatusForm(request.POST)
    if status_form.is_valid():
        controller.quick_status(status_form.cleaned_data["is_active"])
    else:
        controller.error = "Choose Mark Active or Mark Inactive."
    form = FleetAccountForm(initial=controller.values, editing=True)
    return _render_form(request, form, controller, status=200 if controller.success else 400)
