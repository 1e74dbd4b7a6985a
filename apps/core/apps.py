from django.apps import AppConfig


class CoreConfig(AppConfig):
    """
    Configuration for Core application

    This app contains:
        - Organization model (multi-tenancy)
        - ApiKey model (public API credentials)
        - Public API authentication and configuration

    The core app is fundamental to the CRM system as it provides:
        - Multi-tenant isolation
        - Caller authentication for every public API route
    """
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.core'
    verbose_name = 'Core'

    public_api = None

    def ready(self):
        from django.conf import settings
        from .conf import PublicApiConfig

        self.public_api = PublicApiConfig.from_settings(settings)
