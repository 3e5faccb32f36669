# topics/apps.py
"""Topics app configuration."""

from django.apps import AppConfig


class TopicsConfig(AppConfig):
    """Configuration for the topics app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "topics"
    verbose_name = "Topics"
