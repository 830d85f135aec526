# base/views/__init__.py
# أعِد تصدير كل ما تريد استخدامه خارج الحزمة
from .mixins import LoginRequired, RoleRequiredMixin, role_required
from .user_views import (
    login_view, logout_view, password_change_view, forgot_password_view, health_view,
)
from .admin_views import UserListView, UserCreateView, UserUpdateView, UserDeleteView
from .dashboard import home_view

__all__ = [
    # mixins
    "LoginRequired", "RoleRequiredMixin", "role_required",
    # auth
    "login_view", "logout_view", "password_change_view", "forgot_password_view", "health_view",
    # admin users
    "UserListView", "UserCreateView", "UserUpdateView", "UserDeleteView",
    # dashboards
    "home_view",
]
