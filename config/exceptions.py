import logging

from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

ERROR_MESSAGES = {
    400: 'Invalid Data',
    401: 'Sign In Required',
    403: 'Read-Only Access',
    404: 'Not Found',
    405: 'Method Not Allowed',
    500: 'Internal Server Error',
}


def custom_exception_handler(exc, context):
    """
    Wrap every API error in the same envelope so the dashboard and the public
    pages can show one message regardless of which endpoint failed.
    """
    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.exception("Unhandled API error in %s", type(view).__name__ if view else 'unknown view')
        return None

    data = response.data
    response.data = {
        'success': False,
        'error': {
            'status_code': response.status_code,
            'message': get_error_message(response.status_code),
            'details': data if isinstance(data, dict) else {'errors': data},
        }
    }
    return response


def get_error_message(status_code):
    return ERROR_MESSAGES.get(status_code, 'An error occurred')
