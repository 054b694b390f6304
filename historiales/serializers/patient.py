import datetime as dt

import bleach
from django.utils import timezone
from rest_framework import serializers

PATIENT_TEXT_FIELDS = [
    'raza', 'telefono', 'estado_civil', 'lugar_nacimiento', 'grado_instruccion',
    'domicilio_actual', 'lugar_procedencia', 'tiempo_procedencia', 'tipo_seguro',
    'persona_responsable', 'dni_responsable', 'celular_responsable', 'direccion_responsable',
]
ANTECEDENT_TEXT_FIELDS = [
    'ocupacion', 'religion', 'tabaquismo', 'alcoholismo', 'drogas', 'alimentacion',
    'actividad_fisica', 'inmunizaciones', 'diagnostico_previo', 'enfermedades_infancia',
    'cirugias_previas', 'alergias', 'medicamentos_actuales',
    'menarca', 'ritmo_menstrual', 'uso_anticonceptivos',
]


def clean_text(v):
    v = bleach.clean((v or '').strip(), strip=True)
    return v or None


def calculate_age(birth_date: dt.date, today=None) -> int:
    today = today or timezone.localdate()
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def _optional_text(max_length=None):
    kwargs = {'required': False, 'allow_blank': True, 'allow_null': True}
    if max_length:
        kwargs['max_length'] = max_length
    return serializers.CharField(**kwargs)


class PatientRegisterSerializer(serializers.Serializer):
    """Registration payload: patient, responsible person and antecedents in one body."""
    nombre = serializers.CharField(max_length=255)
    dni = serializers.CharField()
    fecha_nacimiento = serializers.DateField()
    sexo = serializers.ChoiceField(choices=['Masculino', 'Femenino'])
    edad = serializers.IntegerField(required=False, allow_null=True, min_value=0)

    raza = _optional_text(64)
    telefono = _optional_text(32)
    estado_civil = _optional_text(32)
    lugar_nacimiento = _optional_text(255)
    grado_instruccion = _optional_text(64)
    domicilio_actual = _optional_text(255)
    lugar_procedencia = _optional_text(255)
    tiempo_procedencia = _optional_text(64)
    tipo_seguro = _optional_text(64)

    persona_responsable = _optional_text(255)
    dni_responsable = _optional_text(8)
    celular_responsable = _optional_text(32)
    direccion_responsable = _optional_text(255)

    ocupacion = _optional_text(255)
    religion = _optional_text(64)
    tabaquismo = _optional_text(64)
    alcoholismo = _optional_text(64)
    drogas = _optional_text(64)
    alimentacion = _optional_text(255)
    actividad_fisica = _optional_text(255)
    inmunizaciones = _optional_text()
    diagnostico_previo = _optional_text()
    enfermedades_infancia = _optional_text()
    cirugias_previas = _optional_text()
    alergias = _optional_text()
    medicamentos_actuales = _optional_text()
    menarca = _optional_text(64)
    ritmo_menstrual = _optional_text(64)
    uso_anticonceptivos = _optional_text(64)
    numero_embarazos = serializers.IntegerField(required=False, allow_null=True, min_value=0)

    def validate_nombre(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('El nombre es obligatorio.')
        return v

    def validate_dni(self, v):
        v = (v or '').strip()
        if len(v) != 8:
            raise serializers.ValidationError('El DNI debe tener 8 dígitos.')
        return v

    def validate(self, attrs):
        for field in PATIENT_TEXT_FIELDS + ANTECEDENT_TEXT_FIELDS:
            if field in attrs:
                attrs[field] = clean_text(attrs[field])
        # age is derived from the birth date
        attrs['edad'] = calculate_age(attrs['fecha_nacimiento'])
        return attrs

    def split(self):
        """(patient_data, antecedent_data) ready for ``register_patient``."""
        vd = self.validated_data
        patient = {
            'nombre': vd['nombre'],
            'dni': vd['dni'],
            'fecha_nacimiento': vd['fecha_nacimiento'],
            'edad': vd['edad'],
            'sexo': vd['sexo'],
        }
        patient.update({f: vd.get(f) for f in PATIENT_TEXT_FIELDS})
        antecedent = {f: vd.get(f) for f in ANTECEDENT_TEXT_FIELDS}
        antecedent['numero_embarazos'] = vd.get('numero_embarazos')
        return patient, antecedent
