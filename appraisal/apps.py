# -*- coding: utf-8 -*-
from django.apps import AppConfig

class AppraisalConfig(AppConfig):
    name = "appraisal"
    verbose_name = "Faculty Appraisal"
