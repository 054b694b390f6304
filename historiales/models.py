"""
Database models for the clinical history service.

Column and table names follow the clinic's existing database (Spanish
names such as ``pacientes`` and ``consultas``) so that the JSON
payloads exchanged with the front-end keep the same keys.
"""
from __future__ import annotations

from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """Staff account with a role.

    Only clinic staff log in; patients never hold accounts.
    """
    ROLE_CHOICES = [
        ('admin', 'Administrador'),
        ('medico', 'Médico'),
    ]
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default='medico')

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"


class Patient(models.Model):
    """Subject of care, identified by a national ID (``dni``)."""
    SEXO_CHOICES = [
        ('Masculino', 'Masculino'),
        ('Femenino', 'Femenino'),
    ]

    nombre = models.CharField(max_length=255, db_index=True)
    dni = models.CharField(max_length=8, db_index=True)
    fecha_nacimiento = models.DateField(null=True, blank=True)
    edad = models.PositiveIntegerField(null=True, blank=True)
    sexo = models.CharField(max_length=10, choices=SEXO_CHOICES, blank=True)
    raza = models.CharField(max_length=64, blank=True, null=True)
    telefono = models.CharField(max_length=32, blank=True, null=True)
    estado_civil = models.CharField(max_length=32, blank=True, null=True)
    lugar_nacimiento = models.CharField(max_length=255, blank=True, null=True)
    grado_instruccion = models.CharField(max_length=64, blank=True, null=True)
    domicilio_actual = models.CharField(max_length=255, blank=True, null=True)
    lugar_procedencia = models.CharField(max_length=255, blank=True, null=True)
    tiempo_procedencia = models.CharField(max_length=64, blank=True, null=True)
    tipo_seguro = models.CharField(max_length=64, blank=True, null=True)
    # Persona responsable
    persona_responsable = models.CharField(max_length=255, blank=True, null=True)
    dni_responsable = models.CharField(max_length=8, blank=True, null=True)
    celular_responsable = models.CharField(max_length=32, blank=True, null=True)
    direccion_responsable = models.CharField(max_length=255, blank=True, null=True)
    estado = models.CharField(max_length=20, default='Activo')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'pacientes'
        ordering = ['-id']

    def __str__(self) -> str:
        return f"{self.nombre} ({self.dni})"


class Antecedent(models.Model):
    """Medical and social history of a patient.

    Practically one row per patient.  The gyneco-obstetric block
    (``menarca`` .. ``numero_embarazos``) is only filled in for female
    patients.
    """
    paciente = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='antecedentes')
    ocupacion = models.CharField(max_length=255, blank=True, null=True)
    religion = models.CharField(max_length=64, blank=True, null=True)
    tabaquismo = models.CharField(max_length=64, blank=True, null=True)
    alcoholismo = models.CharField(max_length=64, blank=True, null=True)
    drogas = models.CharField(max_length=64, blank=True, null=True)
    alimentacion = models.CharField(max_length=255, blank=True, null=True)
    actividad_fisica = models.CharField(max_length=255, blank=True, null=True)
    inmunizaciones = models.TextField(blank=True, null=True)
    diagnostico_previo = models.TextField(blank=True, null=True)
    # Comma separated lists
    enfermedades_infancia = models.TextField(blank=True, null=True)
    cirugias_previas = models.TextField(blank=True, null=True)
    alergias = models.TextField(blank=True, null=True)
    medicamentos_actuales = models.TextField(blank=True, null=True)
    menarca = models.CharField(max_length=64, blank=True, null=True)
    ritmo_menstrual = models.CharField(max_length=64, blank=True, null=True)
    uso_anticonceptivos = models.CharField(max_length=64, blank=True, null=True)
    numero_embarazos = models.PositiveIntegerField(blank=True, null=True)

    class Meta:
        db_table = 'antecedentes'

    def __str__(self) -> str:
        return f"Antecedentes de {self.paciente_id}"


class Consultation(models.Model):
    """A dated medical visit with vitals and notes.  Rows are append-only."""
    paciente = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='consultas')
    # fecha/hora are stamped by the server on creation
    fecha = models.DateField(db_index=True)
    hora = models.TimeField()
    motivo_consulta = models.TextField()
    # "sistolica/diastolica"
    presion_arterial = models.CharField(max_length=16, blank=True, null=True)
    pulso = models.PositiveIntegerField(blank=True, null=True)
    temperatura = models.DecimalField(max_digits=4, decimal_places=1, blank=True, null=True)
    saturacion_o2 = models.PositiveIntegerField(blank=True, null=True)
    peso = models.DecimalField(max_digits=5, decimal_places=1, blank=True, null=True)
    talla = models.DecimalField(max_digits=5, decimal_places=1, blank=True, null=True)
    examen_fisico = models.TextField(blank=True, null=True)
    diagnostico = models.TextField()
    medicamentos = models.TextField(blank=True, null=True)
    indicaciones = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'consultas'

    def __str__(self) -> str:
        return f"Consulta {self.id} ({self.fecha})"
