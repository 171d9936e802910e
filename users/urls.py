from django.urls import path
from . import views

app_name = "users"

urlpatterns = [
    path("login/", views.login_view, name="login"),
    path("logout/", views.logout_view, name="logout"),
    path("password-reset/", views.password_reset_request_view, name="password_reset"),
    path("recover/<str:token>/", views.recover_view, name="recover"),
    path("reset-password/", views.reset_password_view, name="reset_password"),
]
