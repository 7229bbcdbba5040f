"""Django app configuration for dashboard app."""

from django.apps import AppConfig


class DashboardConfig(AppConfig):
    """Configuration for the dashboard shell."""

    name = "dashboard"
    verbose_name = "Dashboard"
