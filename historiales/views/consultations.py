from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from historiales.permissions import IsClinicStaff
from historiales.serializers.consultation import ConsultationCreateSerializer
from historiales.services.consultations import create_consultation
from historiales.services.history import consultation_overview
from historiales.services.patients import get_patient


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsClinicStaff])
def list_consultations(request):
    """Consultations grouped per patient (latest first) plus period counts."""
    return Response({'ok': True, **consultation_overview()})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsClinicStaff])
def new_consultation(request, pk: int):
    s = ConsultationCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    patient = get_patient(pk)
    c = create_consultation(patient, s.validated_data)
    return Response({
        'ok': True,
        'id': c.id,
        'fecha': c.fecha.isoformat(),
        'hora': c.hora.strftime('%H:%M:%S'),
    }, status=status.HTTP_201_CREATED)
