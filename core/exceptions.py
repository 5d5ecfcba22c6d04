"""
Core — Exception Handling

Ledger exceptions and the DRF exception handler for consistent API
error envelopes.

@file core/exceptions.py
"""

import logging

from django.core.exceptions import PermissionDenied, ValidationError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger('fuelledger')


# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------

class BusinessRuleViolation(APIException):
    """Raised when a business rule is violated at the service layer."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Business rule violation.'
    default_code = 'BUSINESS_RULE_VIOLATION'


class ResourceNotFoundError(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Resource not found.'
    default_code = 'RESOURCE_NOT_FOUND'


class UnknownUnit(ResourceNotFoundError):
    """Referenced storage unit does not exist."""
    default_detail = 'Unknown storage unit.'
    default_code = 'UNKNOWN_UNIT'


class LotNotFound(ResourceNotFoundError):
    default_detail = 'Fuel lot not found.'
    default_code = 'LOT_NOT_FOUND'


class VolumeOutOfRange(BusinessRuleViolation):
    """Volume is not positive or exceeds the storage unit's capacity."""
    default_detail = 'Volume must be positive and within unit capacity.'
    default_code = 'VOLUME_OUT_OF_RANGE'


class InvalidTransferKind(BusinessRuleViolation):
    """Transfer kind does not match the source or destination unit types."""
    default_detail = 'Transfer kind does not match the storage units involved.'
    default_code = 'INVALID_TRANSFER_KIND'


class InsufficientBalance(APIException):
    """Raised when a debit would take a lot's used volume past its loaded volume."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Insufficient balance in lot for this operation.'
    default_code = 'INSUFFICIENT_BALANCE'


class LotCodeConflict(APIException):
    """The generated lot code is already held by another lot."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Lot code already in use.'
    default_code = 'LOT_CODE_CONFLICT'


# ---------------------------------------------------------------------------
# Internal conditions (never rendered to API clients)
# ---------------------------------------------------------------------------

class SequenceContention(Exception):
    """The per-(unit, date) sequence counter could not be claimed on this attempt."""


class ActivityTrailWriteFailed(Exception):
    """An activity event could not be persisted. Never fatal to the ledger."""


# ---------------------------------------------------------------------------
# Standard exception handler
# ---------------------------------------------------------------------------

def standard_exception_handler(exc, context):
    """
    Wraps every error response in the standard envelope:
      { "success": false, "errors": {...}, "code": "ERROR_CODE" }
    """
    if isinstance(exc, Http404):
        exc = ResourceNotFoundError()
    elif isinstance(exc, PermissionDenied):
        exc = APIException(detail='Permission denied.', code='PERMISSION_DENIED')
        exc.status_code = status.HTTP_403_FORBIDDEN
    elif isinstance(exc, ValidationError):
        data = {
            'success': False,
            'errors': exc.message_dict if hasattr(exc, 'message_dict') else {'detail': exc.messages},
            'code': 'VALIDATION_ERROR',
        }
        return Response(data, status=status.HTTP_400_BAD_REQUEST)

    response = exception_handler(exc, context)

    if response is not None:
        errors = {}
        code = getattr(exc, 'default_code', 'ERROR')

        if isinstance(response.data, dict):
            errors = response.data
            code = response.data.pop('code', code) if 'code' in response.data else code
        elif isinstance(response.data, list):
            errors = {'detail': response.data}
        else:
            errors = {'detail': [str(response.data)]}

        response.data = {
            'success': False,
            'errors': errors,
            'code': code,
        }

    if response is None:
        logger.exception('Unhandled exception in view: %s', exc)
        return Response(
            {'success': False, 'errors': {'detail': ['Internal server error.']}, 'code': 'INTERNAL_ERROR'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return response
