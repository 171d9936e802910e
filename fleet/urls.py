from django.urls import path
from . import views

app_name = "fleet"

urlpatterns = [
    path("", views.account_list_view, name="account_list"),
    path("new/", views.account_create_view, name="account_create"),
    path("<uuid:account_id>/edit/", views.account_edit_view, name="account_edit"),
    path("<uuid:account_id>/status/", views.account_quick_status_view, name="account_quick_status"),
]
