# base/views/mixins.py
from functools import wraps
from typing import Iterable, Optional

from django.conf import settings
from django.core.exceptions import PermissionDenied
from django.http import HttpResponseRedirect
from django.shortcuts import resolve_url
from django.utils.http import urlencode


def _login_redirect(request):
    login_url = resolve_url(settings.LOGIN_URL)
    return HttpResponseRedirect(f"{login_url}?{urlencode({'next': request.get_full_path()})}")


class LoginRequired:
    """Require a backend session for all views."""

    def dispatch(self, request, *args, **kwargs):
        if not getattr(request, "session_user", None):
            return _login_redirect(request)
        return super().dispatch(request, *args, **kwargs)


class RoleRequiredMixin(LoginRequired):
    """
    Enforce portal roles.
    - Set `allowed_roles` to an iterable of Role; None means any logged-in role.
    - Anonymous → login page, wrong role → 403.
    """
    allowed_roles: Optional[Iterable] = None

    def dispatch(self, request, *args, **kwargs):
        user = getattr(request, "session_user", None)
        if user and self.allowed_roles is not None and user.role not in self.allowed_roles:
            raise PermissionDenied("This page is not available for your role.")
        return super().dispatch(request, *args, **kwargs)


def role_required(*roles):
    """Function-view counterpart of RoleRequiredMixin."""
    def decorator(view_func):
        @wraps(view_func)
        def _wrapped(request, *args, **kwargs):
            user = getattr(request, "session_user", None)
            if not user:
                return _login_redirect(request)
            if roles and user.role not in roles:
                raise PermissionDenied("This page is not available for your role.")
            return view_func(request, *args, **kwargs)
        return _wrapped
    return decorator
