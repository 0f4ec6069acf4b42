"""
API error boundary.

Domain errors are turned into responses by the views. Anything the store
raises below that is logged here and reported as a single generic failure,
so no request leaks database details to the client.
"""

import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    """DRF exception handler: generic 500 for store failures, default otherwise."""
    if isinstance(exc, DatabaseError):
        view = context.get('view')
        logger.exception(
            "Store operation failed in %s",
            view.__class__.__name__ if view is not None else 'unknown view',
            exc_info=exc
        )
        return Response({'error': 'Operation failed'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return exception_handler(exc, context)
