"""
API error types and the project-wide exception handler.

Every error leaves the API as ``{"error": <message>, "details": ...}``
where ``details`` is optional.  Serializer failures are flattened into a
list of ``{"path", "message"}`` entries so a client can attach messages
to form fields (``availableSlots.0.endTime``).
"""
from __future__ import annotations

import logging

from django.db import IntegrityError
from django.db.models import ProtectedError
from django.http import JsonResponse
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.settings import api_settings
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class ApiError(exceptions.APIException):
    """An APIException that can carry structured ``details``."""

    def __init__(self, detail=None, details=None, code=None):
        super().__init__(detail, code)
        self.details = details


class BadRequest(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Bad request'
    default_code = 'bad_request'


class Conflict(ApiError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Conflict'
    default_code = 'conflict'


def flatten_errors(data, path: str = '') -> list[dict]:
    """Turn DRF's nested error structure into ``[{path, message}]``."""
    if isinstance(data, dict):
        items = []
        for key, value in data.items():
            key = str(key)
            if key == api_settings.NON_FIELD_ERRORS_KEY:
                child = path
            else:
                child = f'{path}.{key}' if path else key
            items.extend(flatten_errors(value, child))
        return items
    if isinstance(data, list):
        if all(isinstance(item, str) for item in data):
            return [{'path': path, 'message': str(item)} for item in data]
        items = []
        for index, value in enumerate(data):
            if value:
                items.extend(flatten_errors(value, f'{path}.{index}' if path else str(index)))
        return items
    return [{'path': path, 'message': str(data)}]


def _message(data) -> str:
    if isinstance(data, dict) and 'detail' in data:
        return str(data['detail'])
    if isinstance(data, list) and data:
        return str(data[0])
    return str(data)


def api_exception_handler(exc, context):
    if isinstance(exc, ProtectedError):
        return Response(
            {'error': 'Resource is still referenced', 'details': 'Remove dependent appointments first'},
            status=status.HTTP_409_CONFLICT,
        )
    if isinstance(exc, IntegrityError):
        logger.warning('Integrity error: %s', exc)
        return Response({'error': 'Conflict', 'details': 'Duplicate or conflicting record'},
                        status=status.HTTP_409_CONFLICT)

    resp = drf_exception_handler(exc, context)
    if resp is None:
        view = context.get('view')
        logger.error('Unhandled error in %s', view.__class__.__name__ if view else 'view', exc_info=exc)
        return Response({'error': 'Internal Server Error'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, exceptions.ValidationError):
        resp.data = {'error': 'Validation failed', 'details': flatten_errors(resp.data)}
        return resp

    body = {'error': _message(resp.data)}
    details = getattr(exc, 'details', None)
    if details is not None:
        body['details'] = details
    resp.data = body
    return resp


def not_found_view(request, exception=None):
    """JSON body for URLs that match no route."""
    return JsonResponse({'error': 'Not found'}, status=404)
