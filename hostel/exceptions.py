import logging

from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class HostelConflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'The request conflicts with the current hostel state.'
    default_code = 'conflict'


class RoomUnavailable(HostelConflict):
    default_detail = 'This room is already full.'
    default_code = 'room_unavailable'


class AlreadyBooked(HostelConflict):
    default_detail = 'You have already booked a room. Please go to Room Change if you wish to change it.'
    default_code = 'already_booked'


class NotBooked(HostelConflict):
    default_detail = 'You do not have a room booking yet.'
    default_code = 'not_booked'


class RequestAlreadyProcessed(HostelConflict):
    default_detail = 'This request has already been processed.'
    default_code = 'already_processed'


class HostelNotSeeded(HostelConflict):
    default_detail = 'Hostel data has not been seeded yet.'
    default_code = 'not_seeded'


class HostelAlreadySeeded(HostelConflict):
    default_detail = 'Hostel data has already been seeded.'
    default_code = 'already_seeded'


def _first_message(detail):
    if isinstance(detail, list) and detail:
        return _first_message(detail[0])
    if isinstance(detail, dict) and detail:
        return _first_message(next(iter(detail.values())))
    return detail


def api_exception_handler(exc, context):
    """Render every API error as ``{'ok': False, 'error': {'code', 'message'}}``."""
    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception("Unhandled error in %s", context.get("view").__class__.__name__)
        return Response({'ok': False, 'error': {'code': 'server_error', 'message': 'Internal server error.'}}, status=500)
    code = 'api_error'
    if isinstance(exc, APIException):
        codes = exc.get_codes()
        code = codes if isinstance(codes, str) else getattr(exc, 'default_code', code)
    error = {'code': code}
    if isinstance(resp.data, dict) and 'detail' in resp.data:
        error['message'] = resp.data['detail']
    else:
        error['message'] = _first_message(resp.data)
        if isinstance(exc, ValidationError) and isinstance(resp.data, dict):
            error['fields'] = resp.data
    resp.data = {'ok': False, 'error': error}
    return resp
