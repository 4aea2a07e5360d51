"""
API exception handling.

Model-level ``django.core.exceptions.ValidationError`` raised by the
activity and notification services is not understood by DRF's default
handler; translate it into a regular 400 response so views can call the
services directly.
"""
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.views import exception_handler


def api_exception_handler(exc, context):
    if isinstance(exc, DjangoValidationError):
        if hasattr(exc, "message_dict"):
            detail = exc.message_dict
        else:
            detail = exc.messages
        exc = DRFValidationError(detail=detail)
    return exception_handler(exc, context)
