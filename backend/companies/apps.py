# companies/apps.py
"""Companies app configuration."""

from django.apps import AppConfig


class CompaniesConfig(AppConfig):
    """Configuration for the companies app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "companies"
    verbose_name = "Companies & Memberships"
