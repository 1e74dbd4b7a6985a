"""
Error taxonomy for the public API.

Every error a handler can raise maps to one JSON body of the form
{"error": <message>, "code": <code>} and one HTTP status.
Auth failures are not part of this module: the auth collaborator
builds its own body and the view decorator returns it unchanged.
"""

import logging
from contextlib import contextmanager

from django.db import DatabaseError

logger = logging.getLogger(__name__)


class PublicApiError(Exception):
    """
    Base class for request-terminating public API errors

    Subclasses set `code` and `status`; the message is what the
    client sees in the "error" field.
    """
    code = 'ERROR'
    status = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def as_dict(self):
        return {'error': self.message, 'code': self.code}


class ValidationError(PublicApiError):
    code = 'VALIDATION_ERROR'
    status = 422


class NotFoundError(PublicApiError):
    code = 'NOT_FOUND'
    status = 404


class StoreError(PublicApiError):
    code = 'DB_ERROR'
    status = 500


@contextmanager
def store_errors():
    """
    Translate database failures into StoreError

    Usage:
        with store_errors():
            contact.save()
    """
    try:
        yield
    except DatabaseError as exc:
        logger.error(f"Store error: {exc}")
        raise StoreError(str(exc)) from exc
