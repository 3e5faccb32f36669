import os
import sys
from pathlib import Path
from dotenv import load_dotenv
import dj_database_url

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")

SECRET_KEY = os.environ.get("SECRET_KEY", os.environ.get("DJANGO_SECRET_KEY", "changeme"))
DEBUG = os.getenv("DEBUG", os.getenv("DJANGO_DEBUG", "True")) == "True"
ALLOWED_HOSTS = os.getenv("ALLOWED_HOSTS", "127.0.0.1,localhost").split(",")

# Include Django's manage.py test invocation.
TESTING = (
    "PYTEST_CURRENT_TEST" in os.environ
    or "pytest" in sys.argv
    or "test" in sys.argv
)

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "accounts.apps.AccountsConfig",
    "companies.apps.CompaniesConfig",
    "topics.apps.TopicsConfig",
    "jobs.apps.JobsConfig",
    "applications.apps.ApplicationsConfig",
]

# =============================================================================
# Database Configuration
# =============================================================================
DATABASES = {
    "default": dj_database_url.config(
        env="DATABASE_URL",
        default=f"sqlite:///{BASE_DIR / 'db.sqlite3'}",
        conn_max_age=600,
    )
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# Media files (company logos)
MEDIA_URL = os.getenv("MEDIA_URL", "/media/")
MEDIA_ROOT = Path(os.getenv("MEDIA_ROOT", str(BASE_DIR / "media")))

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

AUTH_USER_MODEL = "accounts.User"

# =============================================================================
# Companies
# =============================================================================
COMPANY_LOGO_MAX_BYTES = int(os.getenv("COMPANY_LOGO_MAX_BYTES", str(5 * 1024 * 1024)))
COMPANY_LOGO_EXTENSIONS = os.getenv(
    "COMPANY_LOGO_EXTENSIONS",
    ".png,.jpg,.jpeg,.gif,.webp",
).split(",")
COMPANY_SEARCH_LIMIT = int(os.getenv("COMPANY_SEARCH_LIMIT", "10"))

# =============================================================================
# Jobs
# =============================================================================
JOB_DEFAULT_CURRENCY = os.getenv("JOB_DEFAULT_CURRENCY", "NPR")
JOBS_PAGE_SIZE = int(os.getenv("JOBS_PAGE_SIZE", "10"))

# =============================================================================
# Structured Logging Configuration
# =============================================================================
from ops.logging_config import get_logging_config
LOGGING = get_logging_config(DEBUG)

# Application version (set via CI/CD)
VERSION = os.getenv("APP_VERSION", "dev")
