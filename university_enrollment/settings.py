"""Django settings for the university enrollment reporting project."""
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

INSTALLED_APPS = [
    "enrollments.apps.EnrollmentsConfig",
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("ENROLLMENT_DB_PATH", BASE_DIR / "university_enrollment.db"),
    }
}

# Semester used by the complete-enrollment report when none is given
ENROLLMENT_DEFAULT_SEMESTER = os.environ.get("ENROLLMENT_DEFAULT_SEMESTER", "Fall2025")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "loggers": {
        "enrollments": {
            "handlers": ["console"],
            "level": os.environ.get("ENROLLMENT_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}
