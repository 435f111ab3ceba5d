# ===========================================================
# ems_backend/exceptions.py
# ===========================================================
"""
Domain exceptions shared by the services, plus the DRF exception
handler that renders every API error in the common envelope:

    {"success": false, "message": "...", "errors": ["..."]}
"""

import logging

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger("ems")


class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "The request could not be processed."

    def __init__(self, message=None, errors=None):
        self.message = message or self.default_message
        self.errors = list(errors or [])
        super().__init__(self.message)


class RuleViolation(DomainError):
    """Raised when input data breaks a business rule."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid or the account is locked."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"


class AccessDenied(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You do not have permission to perform this action."


class NotFoundError(DomainError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found."


class Conflict(DomainError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "The resource already exists."


# ===========================================================
# DRF EXCEPTION HANDLER
# ===========================================================
def _flatten(detail, prefix=""):
    """Turn DRF error detail (dict / list / str) into a flat list of strings."""
    if isinstance(detail, dict):
        items = []
        for field, value in detail.items():
            label = "" if field in ("non_field_errors", "detail") else f"{field}: "
            items.extend(_flatten(value, prefix=label))
        return items
    if isinstance(detail, (list, tuple)):
        items = []
        for value in detail:
            items.extend(_flatten(value, prefix=prefix))
        return items
    return [f"{prefix}{detail}"]


def envelope_error(message, errors=None, status_code=status.HTTP_400_BAD_REQUEST):
    return Response(
        {"success": False, "message": message, "errors": list(errors or [])},
        status=status_code,
    )


def api_exception_handler(exc, context):
    """Render DomainError and DRF exceptions in the API envelope."""
    if isinstance(exc, DomainError):
        logger.info(f"{exc.__class__.__name__}: {exc.message}")
        return envelope_error(exc.message, exc.errors or [exc.message], exc.status_code)

    if isinstance(exc, Http404):
        exc = drf_exceptions.NotFound()
    elif isinstance(exc, DjangoPermissionDenied):
        exc = drf_exceptions.PermissionDenied()

    response = exception_handler(exc, context)
    if response is None:
        view = context.get("view")
        logger.exception(f"Unhandled error in {view.__class__.__name__ if view else 'API'}: {exc}")
        return None

    errors = _flatten(response.data)
    if isinstance(exc, drf_exceptions.ValidationError):
        message = errors[0] if len(errors) == 1 else "Validation failed."
    else:
        message = errors[0] if errors else str(exc)

    response.data = {"success": False, "message": message, "errors": errors}
    return response
