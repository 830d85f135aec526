# -*- coding: utf-8 -*-
# appraisal/forms/part_forms.py
# فورمات الأجزاء التي يعبئها عضو هيئة التدريس بنفسه (A, B, D, E)
from django import forms

from ..constants import (
    PART_A_FIELDS,
    PART_B_SECTIONS,
    PART_D_SELF_MAX,
    PART_E_MAX,
    PORTFOLIO_BOTH,
    PORTFOLIO_DEPARTMENT,
    PORTFOLIO_INSTITUTE,
    PORTFOLIO_TYPES,
)
from ..services.scoring import completion_percent
from .base import AppraisalFormMixin, CountField, FirstTimeMixin, ScoreField


# ============================================================
# Part A: Academic Involvement
# ============================================================

class PartAForm(AppraisalFormMixin, FirstTimeMixin):
    """ثمانية درجات فرعية، كل واحدة مقصوصة إلى حدها الأعلى."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for key, label, mx in PART_A_FIELDS:
            self.fields[key] = ScoreField(max_score=mx, label=label, disabled=self.locked)
            self._style_field(key, self.fields[key])

    @staticmethod
    def initial_from(data: dict) -> dict:
        return {key: data.get(key, 0) for key, _, _ in PART_A_FIELDS}

    def subscores(self) -> dict:
        return {key: self.cleaned_data.get(key, 0) for key, _, _ in PART_A_FIELDS}

    def score_fields(self):
        return [(self[key], mx) for key, _, mx in PART_A_FIELDS]

    def progress(self) -> float:
        return completion_percent(self[key].value() for key, _, _ in PART_A_FIELDS)


# ============================================================
# Part B: research claims (claimed count + proof link per category)
# ============================================================

def claimed_field(key):
    return f"claimed_{key}"


def proof_field(key):
    return f"proof_{key}"


class PartBClaimsForm(AppraisalFormMixin, FirstTimeMixin):

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for _, _, items in PART_B_SECTIONS:
            for key, label in items:
                self.fields[claimed_field(key)] = CountField(label=label, disabled=self.locked)
                self.fields[proof_field(key)] = forms.URLField(
                    label=f"{label} proof", required=False, disabled=self.locked,
                )
                self._style_field(claimed_field(key), self.fields[claimed_field(key)])
                self._style_field(proof_field(key), self.fields[proof_field(key)])

    @staticmethod
    def initial_from(data: dict) -> dict:
        claimed = data.get("claimed") or {}
        proofs = data.get("proofs") or {}
        initial = {}
        for _, _, items in PART_B_SECTIONS:
            for key, _ in items:
                initial[claimed_field(key)] = claimed.get(key, 0)
                initial[proof_field(key)] = proofs.get(key, "")
        return initial

    def sections(self):
        rows = []
        for section_id, title, items in PART_B_SECTIONS:
            rows.append({
                "id": section_id,
                "title": title,
                "items": [
                    {"key": key, "label": label, "claimed": self[claimed_field(key)], "proof": self[proof_field(key)]}
                    for key, label in items
                ],
            })
        return rows

    def claimed(self) -> dict:
        return {
            key: self.cleaned_data.get(claimed_field(key), 0)
            for _, _, items in PART_B_SECTIONS for key, _ in items
        }

    def proofs(self) -> dict:
        return {
            key: self.cleaned_data.get(proof_field(key)) or ""
            for _, _, items in PART_B_SECTIONS for key, _ in items
        }


# ============================================================
# Part D: Portfolio
# ============================================================

class PartDForm(AppraisalFormMixin, FirstTimeMixin):
    portfolio_type = forms.ChoiceField(choices=PORTFOLIO_TYPES, initial=PORTFOLIO_BOTH, widget=forms.RadioSelect)
    institute_portfolio = forms.CharField(
        label="Institute Level Portfolio", required=False, widget=forms.Textarea(attrs={"rows": 5}),
    )
    department_portfolio = forms.CharField(
        label="Department Level Portfolio", required=False, widget=forms.Textarea(attrs={"rows": 5}),
    )
    self_marks = ScoreField(max_score=PART_D_SELF_MAX, label="Self Awarded Marks")

    def __init__(self, *args, is_admin=False, **kwargs):
        self.is_admin = is_admin
        super().__init__(*args, **kwargs)
        if is_admin:
            # المسار الإداري: نوع البورتفوليو لا ينطبق
            self.fields["portfolio_type"].required = False
            self.fields["portfolio_type"].widget = forms.HiddenInput()

    def clean_portfolio_type(self):
        value = self.cleaned_data.get("portfolio_type")
        return value or PORTFOLIO_BOTH

    @staticmethod
    def initial_from(record: dict) -> dict:
        admin = bool(record.get("isAdministrativeRole"))
        return {
            "portfolio_type": record.get("portfolioType") or PORTFOLIO_BOTH,
            "institute_portfolio": record.get("instituteLevelPortfolio") or "",
            "department_portfolio": record.get("departmentLevelPortfolio") or "",
            "self_marks": record.get("adminSelfAwardedMarks" if admin else "selfAwardedMarks") or 0,
        }

    def apply_to(self, record: dict) -> dict:
        """Merge the edited values into the full Part D record."""
        data = dict(record)
        cd = self.cleaned_data
        if self.is_admin:
            data["adminSelfAwardedMarks"] = cd["self_marks"]
        else:
            data["portfolioType"] = cd["portfolio_type"]
            data["selfAwardedMarks"] = cd["self_marks"]
        return data

    def shows_institute(self) -> bool:
        return self.is_admin or self["portfolio_type"].value() in (PORTFOLIO_INSTITUTE, PORTFOLIO_BOTH)

    def shows_department(self) -> bool:
        return self.is_admin or self["portfolio_type"].value() in (PORTFOLIO_DEPARTMENT, PORTFOLIO_BOTH)

    def progress(self) -> float:
        values = [self["self_marks"].value()]
        if self.shows_institute():
            values.append(self["institute_portfolio"].value())
        if self.shows_department():
            values.append(self["department_portfolio"].value())
        return completion_percent(values)


# ============================================================
# Part E: Extra Contributions
# ============================================================

class PartEForm(AppraisalFormMixin, FirstTimeMixin):
    bullet_points = forms.CharField(
        label="Contributions", required=False, widget=forms.Textarea(attrs={"rows": 8}),
    )
    total_marks = ScoreField(max_score=PART_E_MAX, label="Self Awarded Marks")

    @staticmethod
    def initial_from(data: dict) -> dict:
        return {"bullet_points": data.get("bullet_points") or "", "total_marks": data.get("total_marks") or 0}

    def progress(self) -> float:
        return completion_percent([self["bullet_points"].value(), self["total_marks"].value()])
