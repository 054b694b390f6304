from typing import Any, Dict, List, Optional, Tuple

from django.db import transaction
from django.db.models import Q
from rest_framework.exceptions import NotFound

from historiales.models import Antecedent, Consultation, Patient
from historiales.services.backend import translate_db_errors

# Field order of the exported record, as shown in the history documents.
RECORD_PATIENT_FIELDS = [
    'nombre', 'edad', 'sexo', 'raza', 'telefono', 'dni', 'estado_civil',
    'lugar_nacimiento', 'fecha_nacimiento', 'grado_instruccion', 'domicilio_actual',
    'lugar_procedencia', 'tiempo_procedencia', 'tipo_seguro', 'persona_responsable',
    'celular_responsable', 'dni_responsable', 'direccion_responsable', 'estado',
]
RECORD_ANTECEDENT_FIELDS = [
    'ocupacion', 'religion', 'tabaquismo', 'alcoholismo', 'drogas', 'alimentacion',
    'actividad_fisica', 'inmunizaciones', 'diagnostico_previo', 'enfermedades_infancia',
    'cirugias_previas', 'alergias', 'medicamentos_actuales', 'menarca', 'ritmo_menstrual',
    'uso_anticonceptivos', 'numero_embarazos',
]
RECORD_CONSULTATION_FIELDS = [
    'motivo_consulta', 'presion_arterial', 'pulso', 'temperatura', 'saturacion_o2',
    'peso', 'talla', 'examen_fisico', 'diagnostico', 'medicamentos', 'indicaciones',
    'fecha', 'hora',
]

GYNECO_FIELDS = ('menarca', 'ritmo_menstrual', 'uso_anticonceptivos', 'numero_embarazos')

LISTING_FIELDS = ('id', 'nombre', 'dni', 'edad', 'estado')
RECENT_FIELDS = ('id', 'nombre', 'dni', 'edad', 'sexo', 'telefono', 'tipo_seguro', 'estado', 'created_at')


def search_patients(term: Optional[str]):
    """Listing queryset; a blank term means the unfiltered full list."""
    qs = Patient.objects.order_by('-id').values(*LISTING_FIELDS)
    term = (term or '').strip()
    if not term:
        return qs
    return qs.filter(Q(nombre__icontains=term) | Q(dni__icontains=term))


@translate_db_errors
def list_recent_patients(limit: int = 10) -> Tuple[List[Dict[str, Any]], int]:
    rows = list(Patient.objects.order_by('-id').values(*RECENT_FIELDS)[:limit])
    return rows, Patient.objects.count()


@translate_db_errors
def register_patient(patient_data: Dict[str, Any], antecedent_data: Dict[str, Any]) -> Patient:
    """Create a patient and its antecedent row in one transaction.

    Gyneco-obstetric fields are dropped unless the patient is female.
    If the antecedent insert fails the patient row is rolled back too.
    """
    antecedent_data = dict(antecedent_data)
    if patient_data.get('sexo') != 'Femenino':
        for field in GYNECO_FIELDS:
            antecedent_data.pop(field, None)
    with transaction.atomic():
        patient = Patient.objects.create(**patient_data)
        Antecedent.objects.create(paciente=patient, **antecedent_data)
    return patient


@translate_db_errors
def get_patient_overview(pk: int) -> Dict[str, Any]:
    row = Patient.objects.filter(pk=pk).values('id', 'nombre', 'dni', 'edad', 'sexo', 'telefono').first()
    if not row:
        raise NotFound('Paciente no encontrado')
    return row


@translate_db_errors
def get_patient_record(pk: int) -> Dict[str, Any]:
    """Denormalized record: patient fields plus embedded antecedents and consultations."""
    row = Patient.objects.filter(pk=pk).values(*RECORD_PATIENT_FIELDS).first()
    if not row:
        raise NotFound('Paciente no encontrado')
    record = {field: row[field] for field in RECORD_PATIENT_FIELDS}
    record['antecedentes'] = list(
        Antecedent.objects.filter(paciente_id=pk).order_by('id').values(*RECORD_ANTECEDENT_FIELDS)
    )
    record['consultas'] = list(
        Consultation.objects.filter(paciente_id=pk).order_by('fecha', 'hora', 'id').values(*RECORD_CONSULTATION_FIELDS)
    )
    return record


@translate_db_errors
def get_patient(pk: int) -> Patient:
    patient = Patient.objects.filter(pk=pk).first()
    if not patient:
        raise NotFound('Paciente no encontrado')
    return patient
