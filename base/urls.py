# base/urls.py
from django.urls import path

from .views import (
    home_view,
    login_view, logout_view, password_change_view, forgot_password_view, health_view,
    UserListView, UserCreateView, UserUpdateView, UserDeleteView,
)


app_name = "base"

urlpatterns = [

    path("", home_view, name="home"),

    # Auth (relayed to the backend)
    path("login/",   login_view,  name="login"),
    path("logout/",  logout_view, name="logout"),
    path("password-change/", password_change_view, name="password_change"),
    path("forgot-password/", forgot_password_view, name="forgot_password"),

    # Backend health passthrough
    path("health/", health_view, name="health"),

    # Users (admin)
    path("admin/users/", UserListView.as_view(), name="admin_user_list"),
    path("admin/users/new/", UserCreateView.as_view(), name="admin_user_create"),
    path("admin/users/<str:pk>/edit/", UserUpdateView.as_view(), name="admin_user_edit"),
    path("admin/users/<str:pk>/delete/", UserDeleteView.as_view(), name="admin_user_delete"),
]
