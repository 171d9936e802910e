"""Dashboard view – aggregate stats and the review alert list."""
from django.contrib.auth.decorators import login_required
from django.shortcuts import redirect, render
from django.views.decorators.http import require_GET, require_POST

from fleet.repository import AccountRepository
from fleetdesk.shell import Screen, shows
from .viewmodels import DashboardViewModel


@shows(Screen.DASHBOARD)
@login_required
@require_GET
def summary_view(request):
    """Stat cards plus the five most recently updated accounts needing review."""
    vm = DashboardViewModel(AccountRepository(), on_view_alerts=request.shell.view_alerts).activate()

    context = {
        "stats": vm.stats,
        "alerts": vm.alerts,
        "page_title": "Dashboard",
        "active_page": "dashboard",
    }

    if request.headers.get("HX-Request"):
        return render(request, "partials/dashboard_content.html", context)

    return render(request, "dashboard/summary.html", context)


@login_required
@require_POST
def view_alerts_view(request):
    """'View all' on the alert panel – switch to the account list, unfiltered."""
    DashboardViewModel(AccountRepository(), on_view_alerts=request.shell.view_alerts).view_all_alerts()
    return redirect("fleet:account_list")
