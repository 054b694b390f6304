"""
Shared pieces of the clinical history exporters.

A *record* is the denormalized dict produced by
:func:`historiales.services.patients.get_patient_record`: the patient's
own fields followed by an ``antecedentes`` list and a ``consultas`` list.
"""
from __future__ import annotations

from typing import Any, Dict, Iterator, List, Tuple

RELATION_KEYS = ('antecedentes', 'consultas')

MISSING = 'N/A'
MISSING_VALUE = '-'

TITLE = 'Historial Clínico'
SECTION_PATIENT = 'Datos del Paciente'
SECTION_ANTECEDENTS = 'Antecedentes'
SECTION_CONSULTATIONS = 'Consultas'

# (heading, consultation field) for the long free-text blocks
TEXT_SECTIONS = (
    ('Examen Físico', 'examen_fisico'),
    ('Diagnóstico', 'diagnostico'),
    ('Medicamentos', 'medicamentos'),
    ('Indicaciones', 'indicaciones'),
)

# (label, consultation field, unit)
VITAL_SIGNS = (
    ('Presión Arterial', 'presion_arterial', ''),
    ('Pulso', 'pulso', 'lpm'),
    ('Temperatura', 'temperatura', '°C'),
    ('Saturación O2', 'saturacion_o2', '%'),
    ('Peso', 'peso', 'kg'),
    ('Talla', 'talla', 'cm'),
)


def field_label(key: str) -> str:
    return key.replace('_', ' ')


def display(value: Any, fallback: str = MISSING) -> str:
    if value is None or value == '':
        return fallback
    return str(value)


def patient_lines(record: Dict[str, Any]) -> Iterator[str]:
    """``label: value`` for every non-relational field of the record."""
    for key, value in record.items():
        if key in RELATION_KEYS:
            continue
        yield f"{field_label(key)}: {display(value)}"


def split_list(value: Any) -> List[str]:
    if not value:
        return []
    return [part.strip() for part in str(value).split(',') if part.strip()]


def antecedent_lists(record: Dict[str, Any]) -> Tuple[List[str], List[str]]:
    """Childhood illnesses and allergies of the first antecedent row."""
    antecedentes = record.get('antecedentes') or []
    if not antecedentes:
        return [], []
    first = antecedentes[0]
    return split_list(first.get('enfermedades_infancia')), split_list(first.get('alergias'))


def antecedent_summary_lines(record: Dict[str, Any]) -> List[str]:
    enfermedades, alergias = antecedent_lists(record)
    return [
        f"Enfermedades: {', '.join(enfermedades) if enfermedades else MISSING}",
        f"Alergias: {', '.join(alergias) if alergias else MISSING}",
    ]


def vital_text(consulta: Dict[str, Any], field: str, unit: str) -> str:
    value = display(consulta.get(field), MISSING_VALUE)
    return f"{value} {unit}" if unit else value


def consultation_heading(index: int, consulta: Dict[str, Any]) -> str:
    return f"Consulta {index} - {display(consulta.get('fecha'), MISSING_VALUE)}"


def motive_line(consulta: Dict[str, Any]) -> str:
    return f"Motivo: {display(consulta.get('motivo_consulta'), MISSING_VALUE)}"


def pdf_filename(record: Dict[str, Any]) -> str:
    dni = (record.get('dni') or '').strip()
    return f"historial_{dni}.pdf" if dni else 'historial.pdf'


def word_filename(record: Dict[str, Any]) -> str:
    nombre = (record.get('nombre') or '').strip()
    return f"Historial_{nombre}.docx" if nombre else 'historial.docx'
