# -*- coding: utf-8 -*-
from django import forms

from base.forms import TailwindFormMixin

from ..constants import EXTERNAL_DESIGNATIONS


class ExternalReviewerForm(TailwindFormMixin, forms.Form):
    """
    تسجيل مقيّم خارجي:
    - الاسم والإيميل والمسمى الوظيفي مطلوبة
    - الباقي اختياري
    """
    full_name = forms.CharField(label="Full Name", max_length=150)
    mail = forms.EmailField(label="Email")
    mob = forms.CharField(label="Mobile", max_length=20, required=False)
    designation = forms.ChoiceField(
        label="Designation",
        choices=[("", "Select designation")] + [(d, d) for d in EXTERNAL_DESIGNATIONS],
    )
    specialization = forms.CharField(label="Specialization", max_length=150, required=False)
    organization = forms.CharField(label="Organization", max_length=150, required=False)
    address = forms.CharField(label="Address", required=False, widget=forms.Textarea(attrs={"rows": 2}))

    def clean_mail(self):
        return (self.cleaned_data.get("mail") or "").strip().lower()

    def to_payload(self) -> dict:
        return {name: (self.cleaned_data.get(name) or "").strip() for name in self.fields}


class AssignExternalForm(TailwindFormMixin, forms.Form):
    """Pick one external reviewer for a faculty record; choices come from the backend."""
    external_id = forms.ChoiceField(label="External Reviewer")

    def __init__(self, *args, externals=(), **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["external_id"].choices = [("", "Select reviewer")] + [
            (str(row.get("id") or row.get("_id") or ""), self._label(row)) for row in externals
        ]

    @staticmethod
    def _label(row) -> str:
        name = row.get("full_name") or row.get("name") or row.get("mail") or ""
        org = row.get("organization") or ""
        return f"{name} ({org})" if org else name
