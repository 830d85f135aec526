# -*- coding: utf-8 -*-
from django import forms

from base.forms import TailwindFormMixin

from ..services.scoring import clamp, non_negative_int


class ScoreField(forms.FloatField):
    """
    حقل درجة: القيمة تُقصّ إلى [0, max_score] بدل رفضها،
    والفراغ يُعتبر 0 ما لم يكن الحقل إلزاميًا.
    """
    widget = forms.NumberInput

    def __init__(self, *, max_score, **kwargs):
        self.max_score = max_score
        kwargs.setdefault("required", False)
        super().__init__(**kwargs)

    def widget_attrs(self, widget):
        attrs = super().widget_attrs(widget)
        attrs.update({"min": 0, "max": self.max_score, "step": "any"})
        return attrs

    def to_python(self, value):
        if value in self.empty_values:
            # الحقل الإلزامي يرفض الفراغ
            return None if self.required else 0
        value = super().to_python(value)
        return clamp(value, 0, self.max_score)

    def clean(self, value):
        value = super().clean(value)
        # 12.0 → 12
        return int(value) if float(value).is_integer() else value


class CountField(forms.IntegerField):
    """Non-negative count without an upper bound; blanks and negatives become 0."""
    widget = forms.NumberInput

    def __init__(self, **kwargs):
        kwargs.setdefault("required", False)
        super().__init__(**kwargs)

    def widget_attrs(self, widget):
        attrs = super().widget_attrs(widget)
        attrs.update({"min": 0, "step": 1})
        return attrs

    def to_python(self, value):
        return non_negative_int(value)


class FirstTimeMixin(forms.Form):
    """isFirstTime travels with the form between GET and POST."""
    is_first_time = forms.BooleanField(required=False, widget=forms.HiddenInput)


class LockableFormMixin:
    """
    locked=True → كل الحقول للعرض فقط.
    الحقول المعطّلة تتجاهل بيانات POST وتعود للقيم الأولية.
    """

    def __init__(self, *args, locked=False, **kwargs):
        self.locked = locked
        super().__init__(*args, **kwargs)
        if locked:
            for field in self.fields.values():
                field.disabled = True


class AppraisalFormMixin(LockableFormMixin, TailwindFormMixin):
    pass
