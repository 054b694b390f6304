"""
Clinical history views: aggregated listing, detail and document downloads.
"""
from __future__ import annotations

from django.http import HttpResponse
from django.utils.http import content_disposition_header
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from historiales.permissions import IsClinicStaff
from historiales.serializers.history import HistoryListQuerySerializer
from historiales.services import history


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsClinicStaff])
def list_histories(request):
    """Patients with consultation counts, last visit and activity status.

    ``q`` filters by name or DNI; a blank ``q`` lists everyone.  ``seq`` is
    returned unchanged so a client can ignore responses to superseded
    searches.
    """
    q = HistoryListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    data = history.history_listing(q.validated_data.get('q'))
    return Response({'ok': True, 'seq': q.validated_data.get('seq'), **data})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsClinicStaff])
def history_detail(request, pk: int):
    return Response({'ok': True, 'historial': history.history_detail(pk)})


def _attachment(content: bytes, filename: str, content_type: str) -> HttpResponse:
    resp = HttpResponse(content, content_type=content_type)
    resp['Content-Disposition'] = content_disposition_header(True, filename)
    return resp


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsClinicStaff])
def export_history_pdf(request, pk: int):
    content, filename = history.export_pdf(pk)
    return _attachment(content, filename, history.PDF_CONTENT_TYPE)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsClinicStaff])
def export_history_word(request, pk: int):
    content, filename = history.export_word(pk)
    return _attachment(content, filename, history.WORD_CONTENT_TYPE)
