# Decorators in this file:
# 1. public_api_view - API key auth + tenant scope + JSON error handling
# ==============================================================================

import logging
from functools import wraps

from django.http import JsonResponse

from .auth import authenticate_public_api
from .conf import get_public_api_config
from .exceptions import PublicApiError

logger = logging.getLogger(__name__)


def error_response(error):
    return JsonResponse(error.as_dict(), status=error.status)


def public_api_view(view_func):
    """
    Decorator: authenticate a public API request and scope it to a tenant

    Checks:
    1. The caller presents an API key that resolves to one organization
    2. Any PublicApiError raised by the view becomes {"error", "code"}

    The view is called with two extra keyword arguments:
        organization: the caller's Organization
        config: the PublicApiConfig loaded at startup

    Usage:
        @csrf_exempt
        @require_http_methods(["GET"])
        @public_api_view
        def contact_detail_view(request, contact_id, organization, config):
            ...
    """

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        config = get_public_api_config()

        try:
            auth = authenticate_public_api(request, config)
        except PublicApiError as error:
            return error_response(error)
        if not auth.ok:
            # Auth failures keep the collaborator's own status and body
            return JsonResponse(auth.body, status=auth.status)

        try:
            return view_func(
                request,
                *args,
                organization=auth.organization,
                config=config,
                **kwargs
            )
        except PublicApiError as error:
            logger.info(
                f"{request.method} {request.path} failed for organization "
                f"{auth.organization.pk}: {error.code} {error.message}"
            )
            return error_response(error)

    return wrapper
