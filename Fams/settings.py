"""
Django settings for Fams project (Faculty Appraisal Management System).
"""

# استخدام مكتبة django-environ لقراءة القيم من .env
import environ
from pathlib import Path
import os

BASE_DIR = Path(__file__).resolve().parent.parent


# تعريف env مع قيم افتراضية
# القيم الحساسة مثل SECRET_KEY → لا علاقة لها بـ default.
env = environ.Env(
    DEBUG=(bool, False),
    BACKEND_TIMEOUT=(float, 10.0),
    AUTH_REVALIDATE_SECONDS=(int, 300),
    SESSION_COOKIE_SECURE=(bool, True),
    LOG_LEVEL=(str, "INFO"),
)

# تحميل ملف .env
environ.Env.read_env(os.path.join(BASE_DIR, ".env"))

# ========== Debug ==========
DEBUG = env("DEBUG")
SECRET_KEY = env("SECRET_KEY")
ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=["127.0.0.1", "localhost"])

# ========== Backend ==========
# كل البيانات (المستخدمون، أجزاء التقييم، الحالات) تعيش في الـ backend الخارجي.
BACKEND_URL = env("BACKEND_URL", default="http://127.0.0.1:5000")
BACKEND_TIMEOUT = env("BACKEND_TIMEOUT")

# كل كم ثانية نعيد التحقق من التوكن عبر /auth/me
AUTH_REVALIDATE_SECONDS = env("AUTH_REVALIDATE_SECONDS")

# ========== Database ==========
# لا توجد قاعدة بيانات محلية: الجلسات موقّعة داخل الكوكي.
DATABASES = {}


# -------------------------------------------------
# Applications
# -------------------------------------------------
INSTALLED_APPS = [
    # Django
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",

    # Third-party
    "tailwind",
    "theme",
    "widget_tweaks",

    # "django_browser_reload"  # سيُضاف تلقائياً بالأسفل عندما DEBUG=True

    # Project apps
    "base.apps.BaseConfig",         # ← session relay + roles (يجب أن يأتي أولاً)
    "appraisal.apps.AppraisalConfig",
]

# -------------------------------------------------
# Middleware
# -------------------------------------------------
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "base.middleware.BackendSessionMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

# -------------------------------------------------
# URLs / WSGI
# -------------------------------------------------
ROOT_URLCONF = "Fams.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [os.path.join(BASE_DIR, "templates")],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.messages.context_processors.messages",
                "base.context_processors.session_user",
            ],
        },
    },
]

WSGI_APPLICATION = "Fams.wsgi.application"


# -------------------------------------------------
# Sessions / Auth
# -------------------------------------------------
# التوكن يُحفظ داخل الجلسة فقط (كوكي موقّعة HttpOnly) ولا يُحفظ في متغيرات عامة.
SESSION_ENGINE = "django.contrib.sessions.backends.signed_cookies"
SESSION_COOKIE_HTTPONLY = True
SESSION_COOKIE_SAMESITE = "Lax"
SESSION_COOKIE_SECURE = env("SESSION_COOKIE_SECURE")
MESSAGE_STORAGE = "django.contrib.messages.storage.session.SessionStorage"

# Auth redirects
# إذا حاول فتح أي رابط مباشر بدون تسجيل الدخول → يتحول تلقائيًا لصفحة تسجيل الدخول.
LOGIN_URL = "base:login"

# -------------------------------------------------
# I18N / TZ
# -------------------------------------------------
LANGUAGE_CODE = "en-us"
TIME_ZONE = "Asia/Kolkata"
USE_I18N = True
USE_TZ = True

# -------------------------------------------------
# Static
# -------------------------------------------------
STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# -------------------------------------------------
# Logging
# -------------------------------------------------
LOG_LEVEL = env("LOG_LEVEL")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "base": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "appraisal": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
    },
}

# -------------------------------------------------
# Tailwind
# -------------------------------------------------
TAILWIND_APP_NAME = "theme"

# -------------------------------------------------
# Dev helpers
# -------------------------------------------------
if DEBUG:
    INSTALLED_APPS += ["django_browser_reload"]
    MIDDLEWARE += ["django_browser_reload.middleware.BrowserReloadMiddleware"]
