"""
Public API configuration

The PUBLIC_API_* settings are read once, when the core app is ready,
into an immutable PublicApiConfig. Views receive it from the
public_api_view decorator instead of reading settings themselves.
"""

from dataclasses import dataclass

from django.apps import apps
from django.core.exceptions import ImproperlyConfigured


@dataclass(frozen=True)
class PublicApiConfig:
    enabled: bool = True
    key_header: str = 'X-Api-Key'
    default_limit: int = 50
    min_limit: int = 1
    max_limit: int = 100
    phone_region: str = None

    def __post_init__(self):
        if not 1 <= self.min_limit <= self.max_limit:
            raise ImproperlyConfigured(
                f"PUBLIC_API_MIN_LIMIT ({self.min_limit}) must be >= 1 and "
                f"<= PUBLIC_API_MAX_LIMIT ({self.max_limit})"
            )
        if not self.min_limit <= self.default_limit <= self.max_limit:
            raise ImproperlyConfigured(
                f"PUBLIC_API_DEFAULT_LIMIT ({self.default_limit}) must be between "
                f"{self.min_limit} and {self.max_limit}"
            )

    @classmethod
    def from_settings(cls, settings):
        return cls(
            enabled=getattr(settings, 'PUBLIC_API_ENABLED', True),
            key_header=getattr(settings, 'PUBLIC_API_KEY_HEADER', 'X-Api-Key'),
            default_limit=getattr(settings, 'PUBLIC_API_DEFAULT_LIMIT', 50),
            min_limit=getattr(settings, 'PUBLIC_API_MIN_LIMIT', 1),
            max_limit=getattr(settings, 'PUBLIC_API_MAX_LIMIT', 100),
            phone_region=getattr(settings, 'PUBLIC_API_PHONE_REGION', None) or None,
        )


def get_public_api_config():
    """Config built by CoreConfig.ready()"""
    return apps.get_app_config('core').public_api
