"""
URL configuration for Fams project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/4.2/topics/http/urls/
"""
# Fams/urls.py
from django.urls import path, include
from django.conf import settings

urlpatterns = [

    # ضمّن جميع مسارات تطبيق base (login/، users/، health/ ...)
    path("", include(("base.urls", "base"), namespace="base")),

    # أجزاء التقييم ولوحات الأدوار
    path("appraisal/", include(("appraisal.urls", "appraisal"), namespace="appraisal")),
]

# Helpers أثناء التطوير
if settings.DEBUG:
    # Live reload (django_browser_reload)
    urlpatterns += [path("__reload__/", include("django_browser_reload.urls"))]
