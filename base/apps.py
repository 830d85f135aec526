# base/apps.py
from django.apps import AppConfig
import logging


logger = logging.getLogger(__name__)


class BaseConfig(AppConfig):
    name = "base"
    verbose_name = "Base"

    def ready(self):
        from django.conf import settings
        logger.debug("Appraisal backend at %s", settings.BACKEND_URL)
