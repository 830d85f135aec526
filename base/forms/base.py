# -*- coding: utf-8 -*-
from django import forms


class TailwindFormMixin:
    """
    يضيف أصناف Tailwind/DaisyUI المناسبة لكل الحقول تلقائيًا
    للحفاظ على اتساق الواجهات بين التطبيقات.
    """
    base_input_cls = "input input-bordered w-full"
    base_select_cls = "select select-bordered w-full"
    base_textarea_cls = "textarea textarea-bordered w-full"
    base_number_cls = "input input-bordered w-24 text-right tabular-nums"

    def _style_field(self, name, field):
        w = field.widget
        # نص متعدد الأسطر
        if isinstance(w, forms.Textarea):
            w.attrs.setdefault("class", self.base_textarea_cls)
            return
        # سيلكت
        if isinstance(w, (forms.Select, forms.SelectMultiple)) and not isinstance(w, forms.RadioSelect):
            w.attrs.setdefault("class", self.base_select_cls)
            return
        # شيك/راديو/مخفي: نتركها كما هي
        if isinstance(w, (forms.CheckboxInput, forms.RadioSelect, forms.HiddenInput)):
            return
        # أرقام: عرض ثابت ومحاذاة لليمين
        if isinstance(w, forms.NumberInput):
            w.attrs.setdefault("class", self.base_number_cls)
            return
        # افتراضي (نص/إيميل/رابط…)
        w.attrs.setdefault("class", self.base_input_cls)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for name, field in self.fields.items():
            self._style_field(name, field)
