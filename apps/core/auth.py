"""
Public API authentication

Resolves the caller's API key to exactly one Organization.
The result carries either the organization or the status/body to
send back; callers pass that body through unchanged.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from .exceptions import store_errors
from .models import ApiKey, Organization

logger = logging.getLogger(__name__)


@dataclass
class AuthResult:
    ok: bool
    organization: Optional[Organization] = None
    api_key: Optional[ApiKey] = None
    status: int = 200
    body: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def success(cls, api_key):
        return cls(ok=True, organization=api_key.organization, api_key=api_key)

    @classmethod
    def failure(cls, status, error, code):
        return cls(ok=False, status=status, body={'error': error, 'code': code})


def get_raw_api_key(request, config):
    """
    Read the key from the configured header, falling back to
    "Authorization: Bearer <key>"
    """
    raw_key = request.headers.get(config.key_header, '').strip()
    if raw_key:
        return raw_key

    authorization = request.headers.get('Authorization', '').strip()
    scheme, _, token = authorization.partition(' ')
    if scheme.lower() == 'bearer':
        return token.strip()
    return ''


def authenticate_public_api(request, config):
    """
    Raises StoreError when the key lookup itself fails.

    Checks:
    1. Public API is enabled
    2. A key was sent
    3. The key exists and is active
    4. The organization it belongs to is active
    """
    if not config.enabled:
        return AuthResult.failure(503, 'Public API is disabled', 'API_DISABLED')

    raw_key = get_raw_api_key(request, config)
    if not raw_key:
        return AuthResult.failure(401, 'Missing API key', 'AUTH_MISSING')

    try:
        with store_errors():
            api_key = ApiKey.objects.get_by_raw_key(raw_key)
    except ApiKey.DoesNotExist:
        logger.warning(f"Rejected API key with prefix {raw_key[:ApiKey.DISPLAY_PREFIX_LENGTH]!r}")
        return AuthResult.failure(401, 'Invalid API key', 'AUTH_INVALID')

    if not api_key.organization.is_active:
        logger.warning(f"API key {api_key.prefix} used for inactive organization {api_key.organization_id}")
        return AuthResult.failure(403, 'Organization is inactive', 'ORG_INACTIVE')

    with store_errors():
        api_key.touch()
    return AuthResult.success(api_key)
