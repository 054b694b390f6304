"""
Patient views.

Staff list the most recent patients, register new ones (patient,
responsible person and antecedents in one request) and open a patient's
overview before recording a consultation.
"""
from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from historiales.permissions import IsClinicStaff
from historiales.serializers.patient import PatientRegisterSerializer
from historiales.services.consultations import patient_consultations
from historiales.services.patients import get_patient_overview, list_recent_patients, register_patient

logger = logging.getLogger(__name__)

RECENT_LIMIT = 10


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsClinicStaff])
def list_patients(request):
    rows, total = list_recent_patients(RECENT_LIMIT)
    return Response({'ok': True, 'pacientes': rows, 'total': total})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsClinicStaff])
def patient_register(request):
    """Register a patient together with its antecedent row.

    Validation (required fields, 8 character DNI) happens before any
    database access.  Gyneco-obstetric fields are ignored for male
    patients.
    """
    s = PatientRegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    patient_data, antecedent_data = s.split()
    patient = register_patient(patient_data, antecedent_data)
    logger.info('Patient %s registered by %s', patient.id, request.user.username)
    return Response({'ok': True, 'id': patient.id, 'edad': patient.edad}, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsClinicStaff])
def patient_detail(request, pk: int):
    paciente = get_patient_overview(pk)
    consultas = patient_consultations(pk)
    return Response({'ok': True, 'paciente': paciente, 'consultas': consultas})
