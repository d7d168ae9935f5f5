import os

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "py-gix-local-history-browser")
DEBUG = os.environ.get("DJANGO_DEBUG", "1") == "1"
ALLOWED_HOSTS = ["localhost", "127.0.0.1", "[::1]"]

INSTALLED_APPS = [
    "history_app",
]

MIDDLEWARE = [
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "django_core.urls"
DATABASES = {}
USE_TZ = True

GIX_REPO = os.environ.get("GIX_REPO", os.getcwd())
