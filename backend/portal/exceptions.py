"""
Domain errors and the API exception handler.
"""
from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import status, exceptions as drf_exceptions
import logging

logger = logging.getLogger(__name__)


class DomainError(drf_exceptions.APIException):
    """A business rule was violated; subclasses pick the HTTP status."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'The request could not be completed.'
    default_code = 'domain_error'


class NotFound(DomainError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not found.'
    default_code = 'not_found'


class Conflict(DomainError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'The record is not in a state that allows this action.'
    default_code = 'conflict'


class InsufficientCredits(DomainError):
    status_code = status.HTTP_402_PAYMENT_REQUIRED
    default_detail = 'Employer has no interview credits remaining.'
    default_code = 'insufficient_credits'


def _collect_messages_from_response_data(response_data):
    """Build a list of human-readable messages from DRF error response data."""
    messages = []
    if isinstance(response_data, dict):
        # DRF returns {'field': ['msg']} or {'detail': 'msg'}
        if 'detail' in response_data and not isinstance(response_data.get('detail'), (dict, list)):
            messages.append(str(response_data['detail']))
        for field, value in response_data.items():
            if field == 'detail':
                continue
            if isinstance(value, (list, tuple)) and value:
                msg = str(value[0])
            else:
                msg = str(value)
            field_label = str(field).replace('_', ' ').capitalize()
            messages.append(f"{field_label}: {msg}")
    elif isinstance(response_data, (list, tuple)):
        for v in response_data:
            if v:
                messages.append(str(v))
    elif response_data:
        messages.append(str(response_data))
    return messages


def custom_exception_handler(exc, context):
    """
    Flatten every API error into one shape.

    Returns:
        {"error": "message", "code": "error_code", "details": {...}}
        where ``details`` only appears for field errors. Unhandled exceptions
        become a 500 with just ``{"error": message}``.
    """
    response = exception_handler(exc, context)

    if response is not None:
        messages = _collect_messages_from_response_data(response.data)
        data = {
            'error': messages[0] if messages else get_error_message(exc, response.data),
            'code': get_error_code(exc, response.status_code),
        }
        if isinstance(response.data, dict):
            details = {}
            for field, errors in response.data.items():
                if field == 'detail':
                    continue
                if isinstance(errors, list):
                    details[field] = str(errors[0]) if errors else 'Invalid value'
                else:
                    details[field] = str(errors)
            if details:
                data['details'] = details
        response.data = data
        return response

    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return Response({'error': str(exc) or 'An unexpected error occurred.'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


def get_error_code(exc, status_code):
    """Generate error code from exception."""
    if hasattr(exc, 'default_code'):
        return exc.default_code

    code_map = {
        400: 'bad_request',
        401: 'unauthorized',
        402: 'payment_required',
        403: 'forbidden',
        404: 'not_found',
        405: 'method_not_allowed',
        409: 'conflict',
        500: 'internal_server_error',
    }
    return code_map.get(status_code, 'error')


def get_error_message(exc, response_data):
    """Extract user-friendly error message."""
    if hasattr(exc, 'detail'):
        detail = exc.detail
        if isinstance(detail, dict):
            for value in detail.values():
                if isinstance(value, list) and value:
                    return str(value[0])
                return str(value)
        return str(detail)
    return 'An error occurred'
