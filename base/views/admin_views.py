# base/views/admin_views.py
# إدارة المستخدمين (دور admin فقط) عبر الـ backend
import logging

from django.contrib import messages
from django.http import Http404
from django.shortcuts import redirect
from django.views.generic import FormView, TemplateView

from ..forms import UserForm
from ..roles import Role, try_normalize_role
from ..services.backend import BackendError, unwrap_list
from .mixins import RoleRequiredMixin

logger = logging.getLogger(__name__)


def _user_id(row):
    return str(row.get("id") or row.get("_id") or "")


class AdminRequired(RoleRequiredMixin):
    allowed_roles = (Role.ADMIN,)

    def fetch_users(self):
        return unwrap_list(self.request.backend.list_users(), "users")

    def find_user(self, pk):
        try:
            users = self.fetch_users()
        except BackendError:
            logger.warning("Could not load users while looking up %s", pk, exc_info=True)
            users = []
        for row in users:
            if _user_id(row) == str(pk):
                return row
        raise Http404("User not found.")


class UserListView(AdminRequired, TemplateView):
    template_name = "base/users/user_list.html"

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        users = []
        try:
            users = self.fetch_users()
        except BackendError:
            messages.error(self.request, "Failed to fetch users")
        rows = []
        for row in users:
            role = try_normalize_role(row.get("role"))
            rows.append({
                "id": _user_id(row),
                "name": row.get("name") or "",
                "email": row.get("email") or "",
                "role": role.label if role else (row.get("role") or "—"),
                "department": row.get("department") or "",
            })
        ctx["users"] = rows
        return ctx


class UserCreateView(AdminRequired, FormView):
    form_class = UserForm
    template_name = "base/users/user_form.html"

    def form_valid(self, form):
        try:
            self.request.backend.add_user(form.to_payload())
        except BackendError as exc:
            form.add_error(None, exc.message if exc.status_code < 500 else "Failed to add user")
            return self.form_invalid(form)
        messages.success(self.request, f"User {form.cleaned_data['email']} added.")
        return redirect("base:admin_user_list")


class UserUpdateView(AdminRequired, FormView):
    form_class = UserForm
    template_name = "base/users/user_form.html"

    def get_form_kwargs(self):
        kwargs = super().get_form_kwargs()
        kwargs["is_editing"] = True
        return kwargs

    def get_initial(self):
        row = self.find_user(self.kwargs["pk"])
        role = try_normalize_role(row.get("role"))
        return {
            "name": row.get("name") or "",
            "email": row.get("email") or "",
            "role": role.value if role else "",
            "department": row.get("department") or "",
            "designation": row.get("designation") or "",
        }

    def form_valid(self, form):
        try:
            self.request.backend.update_user(form.to_payload(user_id=self.kwargs["pk"]))
        except BackendError as exc:
            form.add_error(None, exc.message if exc.status_code < 500 else "Failed to update user")
            return self.form_invalid(form)
        messages.success(self.request, "User updated.")
        return redirect("base:admin_user_list")


class UserDeleteView(AdminRequired, TemplateView):
    template_name = "base/users/confirm_delete.html"

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        ctx["target"] = self.find_user(self.kwargs["pk"])
        return ctx

    def post(self, request, *args, **kwargs):
        row = self.find_user(self.kwargs["pk"])
        try:
            request.backend.delete_user(_user_id(row), row.get("role") or "")
        except BackendError:
            messages.error(request, "Failed to delete user")
        else:
            messages.success(request, "User deleted.")
        return redirect("base:admin_user_list")
