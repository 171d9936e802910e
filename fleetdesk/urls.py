"""URL configuration."""
from django.contrib import admin
from django.shortcuts import redirect
from django.urls import include, path


urlpatterns = [
    path("", lambda request: redirect("dashboard:summary")),
    path("auth/", include("users.urls")),
    path("dashboard/", include("dashboard.urls")),
    path("accounts/", include("fleet.urls")),
    path("django-admin/", admin.site.urls),
]
