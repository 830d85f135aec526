import logging

from django.contrib import messages
from django.http import JsonResponse
from django.shortcuts import render, redirect
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_POST

from ..forms import LoginForm, PasswordChangeForm, ForgotPasswordForm
from ..roles import UnknownRoleError, home_url_name
from ..services.backend import BackendAuthError, BackendError
from ..session import SessionUser, end_session, extract_auth, start_session
from .mixins import role_required

logger = logging.getLogger(__name__)


# ===== Helpers =====
def _safe_next(request):
    next_url = request.POST.get("next") or request.GET.get("next")
    if next_url and url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
        return next_url
    return None


# ===== Auth =====
def login_view(request):
    if request.session_user:
        return redirect(home_url_name(request.session_user.role))
    form = LoginForm(data=request.POST or None)
    if request.method == "POST" and form.is_valid():
        try:
            payload = request.backend.login(form.cleaned_data["email"], form.cleaned_data["password"])
        except BackendAuthError as exc:
            form.add_error(None, exc.message or "Invalid credentials")
        except BackendError as exc:
            logger.warning("Login failed for %s: %s", form.cleaned_data["email"], exc)
            form.add_error(None, exc.message if exc.status_code < 500 else "Network error")
        else:
            token, user_payload = extract_auth(payload)
            if not token or not user_payload or not user_payload.get("email"):
                form.add_error(None, "Malformed login response")
            else:
                try:
                    user = SessionUser.from_payload(user_payload)
                except UnknownRoleError as exc:
                    # دور غير معروف → لا نبدأ جلسة
                    logger.warning("Login rejected for %s: %s", user_payload.get("email"), exc)
                    form.add_error(None, "Your account role is not recognized by this portal.")
                else:
                    start_session(request, token, user)
                    logger.info("User %s logged in as %s", user.email, user.role.value)
                    return redirect(_safe_next(request) or home_url_name(user.role))
    return render(request, "base/users/login.html", {"form": form, "next": _safe_next(request) or ""})


@require_POST
def logout_view(request):
    if request.session_user:
        try:
            request.backend.logout()
        except BackendError:
            # الجلسة المحلية تُمسح في كل الأحوال
            logger.warning("Backend logout failed for %s", request.session_user.email)
    end_session(request)
    messages.info(request, "Logged out.")
    return redirect("base:login")


@role_required()
def password_change_view(request):
    form = PasswordChangeForm(data=request.POST or None)
    if request.method == "POST" and form.is_valid():
        try:
            request.backend.change_password(
                form.cleaned_data["current_password"], form.cleaned_data["new_password1"]
            )
        except BackendError as exc:
            form.add_error(None, exc.message if exc.status_code < 500 else "Failed to change password")
        else:
            messages.success(request, "Your password has been changed successfully.")
            return redirect(home_url_name(request.session_user.role))
    return render(request, "base/users/password_change.html", {"form": form})


def forgot_password_view(request):
    form = ForgotPasswordForm(data=request.POST or None)
    if request.method == "POST" and form.is_valid():
        try:
            request.backend.forgot_password(form.cleaned_data["email"])
        except BackendError as exc:
            form.add_error(None, exc.message if exc.status_code < 500 else "Failed to process forgot password request")
        else:
            messages.success(request, "If the account exists, a reset link has been sent to your email.")
            return redirect("base:login")
    return render(request, "base/users/forgot_password.html", {"form": form})


def health_view(request):
    # تمرير حالة الـ backend كما هي
    try:
        data = request.backend.health()
    except BackendError as exc:
        if exc.status_code >= 500:
            return JsonResponse({"status": "error", "message": "Failed to connect to backend"}, status=500)
        return JsonResponse(exc.payload or {"status": "error", "message": exc.message}, status=exc.status_code)
    return JsonResponse(data if isinstance(data, dict) else {"status": "ok"})
