# Fams/test_settings.py
# إعدادات الاختبار: قيم ثابتة بدل ملف .env
import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-only")
os.environ.setdefault("BACKEND_URL", "http://backend.test")
os.environ.setdefault("SESSION_COOKIE_SECURE", "False")
os.environ.setdefault("DEBUG", "False")

from .settings import *  # noqa: F401,F403,E402

ALLOWED_HOSTS = ["testserver", "localhost"]
AUTH_REVALIDATE_SECONDS = 300

# caplog يلتقط السجلات عبر الـ root logger
for _logger in LOGGING["loggers"].values():  # noqa: F405
    _logger["propagate"] = True
