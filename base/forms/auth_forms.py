# base/forms/auth_forms.py
from django import forms
from django.core.exceptions import ValidationError

from .base import TailwindFormMixin

MIN_PASSWORD_LENGTH = 6


class LoginForm(TailwindFormMixin, forms.Form):
    # الدخول بالبريد وكلمة المرور؛ التحقق الفعلي يتم في الـ backend
    email = forms.EmailField(label="Email", widget=forms.EmailInput(attrs={"autocomplete": "email"}))
    password = forms.CharField(
        label="Password",
        strip=False,
        widget=forms.PasswordInput(attrs={"autocomplete": "current-password"}),
    )

    def clean_email(self):
        return (self.cleaned_data.get("email") or "").strip().lower()


class PasswordChangeForm(TailwindFormMixin, forms.Form):
    """
    تغيير كلمة المرور:
    - كلمة المرور الجديدة ≥ 6 أحرف
    - يجب أن تطابق التأكيد
    """
    current_password = forms.CharField(
        label="Current password",
        strip=False,
        widget=forms.PasswordInput(attrs={"autocomplete": "current-password"}),
    )
    new_password1 = forms.CharField(
        label="New password",
        strip=False,
        min_length=MIN_PASSWORD_LENGTH,
        widget=forms.PasswordInput(attrs={"autocomplete": "new-password"}),
        help_text=f"Use at least {MIN_PASSWORD_LENGTH} characters.",
    )
    new_password2 = forms.CharField(
        label="Confirm new password",
        strip=False,
        widget=forms.PasswordInput(attrs={"autocomplete": "new-password"}),
    )

    def clean_new_password2(self):
        p1 = self.cleaned_data.get("new_password1")
        p2 = self.cleaned_data.get("new_password2")
        if p1 and p2 and p1 != p2:
            raise ValidationError("Passwords do not match.")
        return p2


class ForgotPasswordForm(TailwindFormMixin, forms.Form):
    email = forms.EmailField(label="Email", error_messages={"required": "Email is required"})
