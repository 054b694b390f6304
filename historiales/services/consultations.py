import logging
from typing import Any, Dict, Iterable, List

from django.db.models import F
from django.utils import timezone

from historiales.models import Consultation, Patient
from historiales.services.backend import membership_ids, translate_db_errors

logger = logging.getLogger(__name__)

LISTING_FIELDS = ('id', 'paciente_id', 'fecha')
SUMMARY_FIELDS = ('id', 'paciente_id', 'fecha', 'hora', 'motivo_consulta', 'diagnostico')
DETAIL_FIELDS = (
    'id', 'fecha', 'hora', 'motivo_consulta', 'presion_arterial', 'pulso', 'temperatura',
    'saturacion_o2', 'peso', 'talla', 'examen_fisico', 'diagnostico', 'medicamentos', 'indicaciones',
)


def all_consultations():
    return Consultation.objects.values(*LISTING_FIELDS)


def consultations_for_patients(patient_ids: Iterable[int]):
    """Consultations whose patient is in ``patient_ids``; an empty set matches nothing."""
    return Consultation.objects.filter(paciente_id__in=membership_ids(patient_ids)).values(*LISTING_FIELDS)


@translate_db_errors
def consultations_with_patient() -> List[Dict[str, Any]]:
    """Every consultation, newest first, with the patient's contact fields."""
    qs = (Consultation.objects
          .order_by('-fecha', '-hora', '-id')
          .values(*SUMMARY_FIELDS,
                  paciente_nombre=F('paciente__nombre'),
                  paciente_dni=F('paciente__dni'),
                  paciente_edad=F('paciente__edad'),
                  paciente_telefono=F('paciente__telefono'),
                  paciente_direccion=F('paciente__domicilio_actual')))
    return list(qs)


@translate_db_errors
def patient_consultations(patient_id: int) -> List[Dict[str, Any]]:
    return list(
        Consultation.objects.filter(paciente_id=patient_id)
        .order_by('-fecha', '-hora', '-id')
        .values(*DETAIL_FIELDS)
    )


@translate_db_errors
def create_consultation(patient: Patient, data: Dict[str, Any]) -> Consultation:
    """Append a consultation, stamping the local date and time."""
    now = timezone.localtime()
    consultation = Consultation.objects.create(
        paciente=patient,
        fecha=now.date(),
        hora=now.time().replace(microsecond=0),
        **data,
    )
    logger.info('Consultation %s created for patient %s', consultation.id, patient.id)
    return consultation
