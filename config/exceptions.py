"""
Project-wide DRF exception handler.

Known API errors keep DRF's rendering. Anything else escaping a view is
logged with its traceback and surfaced as a JSON 500 carrying the message.
"""
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get('view')
    logger.exception(
        "Unhandled error in %s", view.__class__.__name__ if view else 'unknown view'
    )
    return Response(
        {'error': 'Internal server error', 'details': str(exc)},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
