# -*- coding: utf-8 -*-
# appraisal/forms/review_forms.py
# فورمات المراجعين: فريق التحقق، رئيس القسم/العميد، المدير، المقيّم الخارجي
from django import forms
from django.core.exceptions import ValidationError

from ..constants import (
    DIRECTOR_MARKS_MAX,
    INTERACTION_CRITERIA,
    PART_B_SECTIONS,
    PART_D_SUPERIOR_MAX,
)
from ..services.scoring import interaction_total, non_negative_int, validate_director_marks
from .base import AppraisalFormMixin, CountField, ScoreField


def verified_field(key):
    return f"verified_{key}"


# ============================================================
# Verification team: Part B
# ============================================================

class VerificationForm(AppraisalFormMixin, forms.Form):
    """
    claimed/proofs are display only (come from the faculty's Part B).
    confirm is required only for the final submit.
    """
    confirm = forms.BooleanField(
        required=False,
        label="I confirm the verified counts above are final.",
    )

    def __init__(self, *args, claimed=None, proofs=None, submitting=False, **kwargs):
        self.claimed_values = claimed or {}
        self.proof_links = proofs or {}
        self.submitting = submitting
        super().__init__(*args, **kwargs)
        for _, _, items in PART_B_SECTIONS:
            for key, label in items:
                name = verified_field(key)
                self.fields[name] = CountField(label=label, disabled=self.locked)
                self._style_field(name, self.fields[name])

    @staticmethod
    def initial_from(verified: dict) -> dict:
        return {verified_field(key): value for key, value in (verified or {}).items()}

    def clean(self):
        cleaned = super().clean()
        if self.submitting and not cleaned.get("confirm"):
            raise ValidationError({"confirm": "Please confirm before submitting the verification."})
        return cleaned

    def sections(self):
        rows = []
        for section_id, title, items in PART_B_SECTIONS:
            entries = []
            claimed_sum = 0
            for key, label in items:
                claimed = non_negative_int(self.claimed_values.get(key))
                claimed_sum += claimed
                entries.append({
                    "key": key,
                    "label": label,
                    "claimed": claimed,
                    "proof": self.proof_links.get(key) or "",
                    "verified": self[verified_field(key)],
                })
            rows.append({"id": section_id, "title": title, "items": entries, "claimed_total": claimed_sum})
        return rows

    def verified_values(self) -> dict:
        return {
            key: self.cleaned_data.get(verified_field(key), 0)
            for _, _, items in PART_B_SECTIONS for key, _ in items
        }

    def raw_values(self) -> dict:
        """Submitted values as typed, for the session draft."""
        return {
            key: self.data.get(self.add_prefix(verified_field(key)), "")
            for _, _, items in PART_B_SECTIONS for key, _ in items
        }


# ============================================================
# HOD / Dean: Part D superior mark
# ============================================================

class PortfolioMarksForm(AppraisalFormMixin, forms.Form):
    marks = ScoreField(max_score=PART_D_SUPERIOR_MAX, label="Superior Marks", required=True)


# ============================================================
# Director
# ============================================================

class DirectorMarksForm(AppraisalFormMixin, forms.Form):
    marks = forms.IntegerField(label="Director Marks", min_value=0, max_value=DIRECTOR_MARKS_MAX)

    def clean_marks(self):
        try:
            return validate_director_marks(self.cleaned_data.get("marks"))
        except ValueError as exc:
            raise ValidationError(str(exc))


# ============================================================
# External / college-external interaction evaluation
# ============================================================

class InteractionEvaluationForm(AppraisalFormMixin, forms.Form):
    comments = forms.CharField(label="Comments", required=False, widget=forms.Textarea(attrs={"rows": 4}))

    def __init__(self, *args, submitting=False, **kwargs):
        self.submitting = submitting
        super().__init__(*args, **kwargs)
        for key, label, mx, description in INTERACTION_CRITERIA:
            self.fields[key] = ScoreField(max_score=mx, label=label, help_text=description, disabled=self.locked)
            self._style_field(key, self.fields[key])

    def clean(self):
        cleaned = super().clean()
        if self.submitting:
            missing = [
                key for key, _, _, _ in INTERACTION_CRITERIA
                if self.data.get(self.add_prefix(key), "") in ("", None)
            ]
            if missing:
                raise ValidationError("Please fill in all criteria.")
        return cleaned

    def criteria(self):
        return [(self[key], mx) for key, _, mx, _ in INTERACTION_CRITERIA]

    def scores(self) -> dict:
        return {key: self.cleaned_data.get(key, 0) for key, _, _, _ in INTERACTION_CRITERIA}

    def total(self):
        return interaction_total(self.scores())

    def raw_values(self) -> dict:
        values = {key: self.data.get(self.add_prefix(key), "") for key, _, _, _ in INTERACTION_CRITERIA}
        values["comments"] = self.data.get(self.add_prefix("comments"), "")
        return values
