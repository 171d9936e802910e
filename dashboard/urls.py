from django.urls import path
from . import views

app_name = "dashboard"

urlpatterns = [
    path("", views.summary_view, name="summary"),
    path("alerts/", views.view_alerts_view, name="view_alerts"),
]
