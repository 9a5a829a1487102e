from django.http import JsonResponse
from rest_framework import status

from apps.common.exceptions import INTERNAL_ERROR_MESSAGE, error_body


def not_found(request, exception=None):
    return JsonResponse(
        error_body(status.HTTP_404_NOT_FOUND, f"No route matches {request.method} {request.path}.", request.path),
        status=status.HTTP_404_NOT_FOUND,
    )


def server_error(request):
    return JsonResponse(
        error_body(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE, request.path),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
