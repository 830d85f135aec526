# base/forms/__init__.py

from .base import TailwindFormMixin
from .auth_forms import LoginForm, PasswordChangeForm, ForgotPasswordForm
from .user_forms import UserForm

__all__ = [
    "TailwindFormMixin",
    "LoginForm", "PasswordChangeForm", "ForgotPasswordForm",
    "UserForm",
]
