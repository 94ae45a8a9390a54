import logging

from django.db import IntegrityError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from domain.shared.exceptions import (
    CircularReferenceException,
    DomainException,
    EntityNotFoundException,
    StoreException,
    TreeLimitExceededException,
    ValidationException,
)

logger = logging.getLogger(__name__)

DOMAIN_STATUS_CODES = {
    EntityNotFoundException: status.HTTP_404_NOT_FOUND,
    ValidationException: status.HTTP_400_BAD_REQUEST,
    TreeLimitExceededException: status.HTTP_422_UNPROCESSABLE_ENTITY,
    CircularReferenceException: status.HTTP_409_CONFLICT,
    StoreException: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def domain_exception_response(exc: DomainException) -> Response:
    status_code = status.HTTP_400_BAD_REQUEST
    for exc_type, code in DOMAIN_STATUS_CODES.items():
        if isinstance(exc, exc_type):
            status_code = code
            break

    if status_code >= 500:
        logger.error("BOM request failed: %s", exc.message)

    return Response(
        {
            'detail': exc.message,
            'code': exc.code,
            'details': exc.details,
        },
        status=status_code,
    )


def custom_exception_handler(exc, context):
    """
    Map domain exceptions onto HTTP responses, then defer to DRF's handler.
    """
    if isinstance(exc, DomainException):
        return domain_exception_response(exc)

    if isinstance(exc, IntegrityError):
        return Response(
            {
                'detail': 'Нарушение целостности данных (возможны связанные записи).',
                'error': 'integrity_error',
            },
            status=status.HTTP_409_CONFLICT,
        )

    return exception_handler(exc, context)
