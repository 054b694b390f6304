import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.response import Response

logger = logging.getLogger(__name__)


class BackendError(APIException):
    """A query or insert against the database failed.

    The message is shown to the user as-is; nothing is retried.
    """
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'Error al comunicarse con la base de datos.'
    default_code = 'backend_error'


class ExportError(APIException):
    """Rendering a history document failed; no partial file is returned."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'No se pudo exportar el historial.'
    default_code = 'export_error'


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception('Unhandled error in %s', context.get('view'))
        return Response({'ok': False, 'error': {'code': 'server_error', 'message': str(exc)}}, status=500)
    # normalize response
    code = 'api_error'
    if isinstance(exc, APIException):
        codes = exc.get_codes()
        code = codes if isinstance(codes, str) else exc.default_code
    detail = None
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = str(resp.data) if not isinstance(resp.data, list) else resp.data
    headers = {h: resp[h] for h in ('WWW-Authenticate', 'Retry-After') if resp.has_header(h)}
    return Response({'ok': False, 'error': {'code': code, 'message': detail}}, status=resp.status_code,
                    headers=headers)
