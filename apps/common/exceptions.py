import logging
from http.client import responses

from django.utils import timezone
from rest_framework import status
from rest_framework.exceptions import APIException, NotFound, ValidationError
from rest_framework.response import Response
from rest_framework.settings import api_settings
from rest_framework.views import exception_handler, set_rollback

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


class ResourceNotFound(NotFound):
    default_detail = "Resource not found."


class DuplicateSku(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "A product with this SKU already exists."
    default_code = "duplicate_sku"

    def __init__(self, sku):
        self.sku = sku
        super().__init__(f"A product with SKU '{sku}' already exists.")


class DuplicateEmail(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "A contact with this email already exists."
    default_code = "duplicate_email"

    def __init__(self, email):
        self.email = email
        super().__init__(f"A contact with email '{email}' already exists.")


class InsufficientStock(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Insufficient stock."
    default_code = "insufficient_stock"

    def __init__(self, current, requested):
        self.current = current
        self.requested = requested
        super().__init__(f"Insufficient stock. Current stock: {current}, requested: {requested}.")


def _first_message(value):
    if isinstance(value, (list, tuple)):
        return _first_message(value[0]) if value else ""
    if isinstance(value, dict):
        return {key: _first_message(item) for key, item in value.items()}
    return str(value)


def field_errors(detail):
    """Collapse DRF validation detail into a flat ``{field: message}`` map."""
    if isinstance(detail, dict):
        return {field: _first_message(messages) for field, messages in detail.items()}
    return {api_settings.NON_FIELD_ERRORS_KEY: _first_message(detail)}


def _timestamp():
    return timezone.localtime(timezone.now()).strftime("%Y-%m-%dT%H:%M:%S")


def error_body(status_code, message, path, errors=None):
    body = {
        "timestamp": _timestamp(),
        "status": status_code,
        "error": responses.get(status_code, "Error"),
        "message": message,
        "path": path,
    }
    if errors is not None:
        body["errors"] = errors
    return body


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)
    request = context.get("request")
    path = request.path if request is not None else ""

    if response is None:
        logger.exception("Unhandled error while processing %s", path)
        set_rollback()
        return Response(
            error_body(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE, path),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, ValidationError):
        response.data = error_body(response.status_code, "Validation failed", path, field_errors(response.data))
    elif isinstance(response.data, dict) and "detail" in response.data:
        response.data = error_body(response.status_code, str(response.data["detail"]), path)
    else:
        response.data = error_body(response.status_code, "Request failed", path)
    return response
