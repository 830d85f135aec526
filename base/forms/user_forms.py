# base/forms/user_forms.py
from django import forms
from django.core.exceptions import ValidationError

from ..roles import Role
from .auth_forms import MIN_PASSWORD_LENGTH
from .base import TailwindFormMixin


class UserForm(TailwindFormMixin, forms.Form):
    """
    إضافة/تعديل مستخدم عبر الـ backend.
    - كلمة المرور إلزامية عند الإنشاء، واختيارية عند التعديل (وإن أُدخلت ≥ 6).
    """
    name = forms.CharField(label="Name", max_length=150, error_messages={"required": "Name is required"})
    email = forms.EmailField(
        label="Email",
        error_messages={"required": "Email is required", "invalid": "Invalid email format"},
    )
    password = forms.CharField(label="Password", strip=False, required=False, widget=forms.PasswordInput)
    role = forms.ChoiceField(
        label="Role",
        choices=[("", "Select a role")] + Role.choices(),
        error_messages={"required": "Role is required"},
    )
    department = forms.CharField(label="Department", max_length=100, required=False)
    designation = forms.CharField(label="Designation", max_length=100, required=False)

    def __init__(self, *args, is_editing=False, **kwargs):
        self.is_editing = is_editing
        super().__init__(*args, **kwargs)
        if is_editing:
            self.fields["password"].help_text = "Leave blank to keep the current password."

    def clean_name(self):
        name = (self.cleaned_data.get("name") or "").strip()
        if not name:
            raise ValidationError("Name is required")
        return name

    def clean_email(self):
        return (self.cleaned_data.get("email") or "").strip().lower()

    def clean_password(self):
        password = self.cleaned_data.get("password") or ""
        if not password and not self.is_editing:
            raise ValidationError("Password is required")
        if password and len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        return password

    def to_payload(self, user_id=None) -> dict:
        data = {
            "name": self.cleaned_data["name"],
            "email": self.cleaned_data["email"],
            "role": self.cleaned_data["role"],
            "department": self.cleaned_data.get("department") or "",
            "designation": self.cleaned_data.get("designation") or "",
        }
        if self.cleaned_data.get("password"):
            data["password"] = self.cleaned_data["password"]
        if user_id:
            data["id"] = user_id
        return data
