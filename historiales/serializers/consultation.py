import re

import bleach
from rest_framework import serializers

BLOOD_PRESSURE_RE = re.compile(r'^\d{2,3}/\d{2,3}$')

TEXT_FIELDS = ('motivo_consulta', 'examen_fisico', 'diagnostico', 'medicamentos', 'indicaciones')


class ConsultationCreateSerializer(serializers.Serializer):
    motivo_consulta = serializers.CharField()
    diagnostico = serializers.CharField()
    examen_fisico = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    medicamentos = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    indicaciones = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    presion_arterial = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=16)
    pulso = serializers.IntegerField(required=False, allow_null=True, min_value=0)
    temperatura = serializers.DecimalField(max_digits=4, decimal_places=1, required=False, allow_null=True)
    saturacion_o2 = serializers.IntegerField(required=False, allow_null=True, min_value=0, max_value=100)
    peso = serializers.DecimalField(max_digits=5, decimal_places=1, required=False, allow_null=True)
    talla = serializers.DecimalField(max_digits=5, decimal_places=1, required=False, allow_null=True)

    def validate_presion_arterial(self, v):
        v = (v or '').strip()
        if v and not BLOOD_PRESSURE_RE.match(v):
            raise serializers.ValidationError('Formato esperado: sistólica/diastólica (ej. 120/80).')
        return v or None

    def validate(self, attrs):
        for field in TEXT_FIELDS:
            if field in attrs:
                attrs[field] = bleach.clean((attrs[field] or '').strip(), strip=True) or None
        for field in ('motivo_consulta', 'diagnostico'):
            if not attrs.get(field):
                raise serializers.ValidationError({field: 'Este campo es obligatorio.'})
        return attrs
