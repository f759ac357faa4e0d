"""
Publishing — App Configuration
================================
Holds the abstract PublishedByPeriodModel. No tables of its own.
"""

from django.apps import AppConfig


class PublishingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core.publishing"
    label = "publishing"
    verbose_name = "Published By Period"
