"""
Custom exception handlers for consistent API responses
"""
from rest_framework.views import exception_handler
from rest_framework import status
import logging

logger = logging.getLogger(__name__)

STATUS_MESSAGES = {
    status.HTTP_400_BAD_REQUEST: 'Validation error',
    status.HTTP_401_UNAUTHORIZED: 'Authentication required',
    status.HTTP_403_FORBIDDEN: 'Permission denied',
    status.HTTP_404_NOT_FOUND: 'Resource not found',
    status.HTTP_405_METHOD_NOT_ALLOWED: 'Method not allowed',
    status.HTTP_409_CONFLICT: 'Conflict',
}


class PromotionUsageError(Exception):
    """Raised inside an atomic block when a redemption cannot be recorded.

    Raising it rolls the surrounding transaction back so the usage row and the
    usage counter stay consistent.
    """

    def __init__(self, promotion_id, message="Promotion usage could not be recorded"):
        self.promotion_id = promotion_id
        super().__init__(f"{message} (promotion {promotion_id})")


def custom_exception_handler(exc, context):
    """
    Custom exception handler that returns the {code, msg, errors} envelope
    """
    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)

    if response is None:
        return response

    if response.status_code >= 500:
        logger.error(f"API Exception: {exc}", exc_info=True)
    else:
        logger.warning(f"API request rejected ({response.status_code}): {exc}")

    custom_response_data = {
        'code': response.status_code,
        'msg': STATUS_MESSAGES.get(response.status_code, 'An error occurred'),
        'errors': response.data
    }

    if response.status_code >= 500:
        custom_response_data['msg'] = 'Internal server error'
        # Don't expose internal errors to non-staff callers
        request = context.get('request')
        if request is None or not getattr(request.user, 'is_staff', False):
            custom_response_data['errors'] = {'detail': 'Internal server error'}

    response.data = custom_response_data
    return response
