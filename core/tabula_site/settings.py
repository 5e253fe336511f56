"""
tabula - Scaffold List Rendering for Django
Copyright © 2025 The tabula Authors

This file is part of tabula.

tabula is free software: you can redistribute it and/or modify
it under the terms of the GNU Affero General Public License as
published by the Free Software Foundation, either version 3 of
the License, or (at your option) any later version.

tabula is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
GNU Affero General Public License for more details.

You should have received a copy of the GNU Affero General Public License
along with tabula. If not, see <https://www.gnu.org/licenses/>.
"""

from pathlib import Path

from utils.env import crud_section, env_bool, env_list, env_str

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = env_str("SECRET_KEY", "tabula-dev-only-secret-key")
DEBUG = env_bool("DEBUG", False)
ALLOWED_HOSTS = env_list("ALLOWED_HOSTS", ["localhost", "127.0.0.1", "testserver"])

INSTALLED_APPS = [
  "django.contrib.auth",
  "django.contrib.contenttypes",
  "django.contrib.sessions",
  "django.contrib.messages",
  "scaffold",
  "catalog",
]

MIDDLEWARE = [
  "django.contrib.sessions.middleware.SessionMiddleware",
  "django.middleware.common.CommonMiddleware",
  "django.middleware.csrf.CsrfViewMiddleware",
  "django.contrib.auth.middleware.AuthenticationMiddleware",
  "django.contrib.messages.middleware.MessageMiddleware",
  "crum.CurrentRequestUserMiddleware",
]

ROOT_URLCONF = "tabula_site.urls"

TEMPLATES = [
  {
    "BACKEND": "django.template.backends.django.DjangoTemplates",
    "DIRS": [],
    "APP_DIRS": True,
    "OPTIONS": {
      "context_processors": [
        "django.template.context_processors.request",
        "django.contrib.auth.context_processors.auth",
        "django.contrib.messages.context_processors.messages",
      ],
    },
  },
]

DATABASES = {
  "default": {
    "ENGINE": "django.db.backends.sqlite3",
    "NAME": env_str("DB_PATH", str(BASE_DIR / "db.sqlite3")),
  }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LANGUAGE_CODE = env_str("LANGUAGE_CODE", "en-us")
TIME_ZONE = env_str("TIME_ZONE", "UTC")
USE_I18N = True
USE_TZ = True

LOGIN_URL = "/accounts/login/"

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
    "scaffold": {
      "handlers": ["console"],
      "level": env_str("LOG_LEVEL", "INFO"),
    },
  },
}

# ------------------------------------------------------------
# Scaffold list rendering
# ------------------------------------------------------------
# TABULA_CRUD_SCAFFOLD may hold a JSON object overriding single keys.
# date_format applies to date values, datetime_format to datetimes.
TABULA_CRUD = {
  "scaffold": crud_section("scaffold", {
    "empty_field_text": "-",
    "associated_limit": 3,
    "associated_number": True,
    "truncate_length": 50,
    "date_format": None,
    "datetime_format": None,
    "boolean_labels": {"true": "Yes", "false": "No"},
    "exclude": [],
  }),
}
