"""
Aggregation of consultation rows into per-patient summaries.

Everything in this module is a pure function over plain row dicts as
returned by ``QuerySet.values()``; nothing here touches the database.

A consultation row carries at least ``paciente_id`` and ``fecha`` and,
where available, ``hora``, ``id``, ``motivo_consulta`` and
``diagnostico``.  Dates may be :class:`datetime.date` objects or ISO
strings.  A date that cannot be parsed is treated as missing: the row is
still counted but it never becomes the patient's latest consultation.
"""
from __future__ import annotations

import datetime as dt
import logging
import math
from typing import Any, Dict, Iterable, List, Optional, Tuple

from django.utils import timezone

logger = logging.getLogger(__name__)

# A patient with a consultation in the last ACTIVITY_WINDOW_DAYS days is active.
ACTIVITY_WINDOW_DAYS = 90

STATUS_ACTIVE = 'Activo'
STATUS_INACTIVE = 'Inactivo'


def parse_date(value: Any) -> Optional[dt.date]:
    """Coerce ``value`` to a date, returning ``None`` when it is missing or malformed."""
    if value is None or value == '':
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    try:
        return dt.date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        logger.warning('Ignoring malformed consultation date %r', value)
        return None


def parse_time(value: Any) -> dt.time:
    if isinstance(value, dt.time):
        return value
    if value:
        try:
            return dt.time.fromisoformat(str(value).strip())
        except ValueError:
            logger.warning('Ignoring malformed consultation time %r', value)
    return dt.time.min


def _chronological_key(row: Dict[str, Any]) -> Optional[Tuple[dt.date, dt.time]]:
    fecha = parse_date(row.get('fecha'))
    if fecha is None:
        return None
    return fecha, parse_time(row.get('hora'))


def summarize_consultations(rows: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Fold consultation rows into exactly one summary per patient.

    The result does not depend on the order of ``rows``: a row replaces the
    stored latest consultation only when its ``(fecha, hora)`` is strictly
    later, so ties keep the row seen first.  Summaries come out in the
    order in which each patient first appears.

    Extra ``paciente_*`` keys on the first row of a patient (name, dni...)
    are copied onto its summary.
    """
    summaries: Dict[Any, Dict[str, Any]] = {}
    latest_keys: Dict[Any, Optional[Tuple[dt.date, dt.time]]] = {}

    for row in rows:
        pid = row['paciente_id']
        summary = summaries.get(pid)
        if summary is None:
            summary = {
                'paciente_id': pid,
                'total_consultas': 0,
                'ultima_consulta': None,
                'ultima_hora': None,
                'ultimo_motivo': None,
                'ultimo_diagnostico': None,
                'id_ultima_consulta': None,
            }
            summary.update({k: v for k, v in row.items() if k.startswith('paciente_') and k != 'paciente_id'})
            summaries[pid] = summary
            latest_keys[pid] = None

        summary['total_consultas'] += 1

        key = _chronological_key(row)
        if key is None:
            continue
        current = latest_keys[pid]
        if current is None or key > current:
            latest_keys[pid] = key
            summary['ultima_consulta'] = key[0]
            summary['ultima_hora'] = row.get('hora')
            summary['ultimo_motivo'] = row.get('motivo_consulta')
            summary['ultimo_diagnostico'] = row.get('diagnostico')
            summary['id_ultima_consulta'] = row.get('id')

    return list(summaries.values())


def activity_status(last_date: Any, today: Optional[dt.date] = None) -> str:
    """``Activo`` when the last consultation is at most ACTIVITY_WINDOW_DAYS old."""
    last = parse_date(last_date)
    if last is None:
        return STATUS_INACTIVE
    today = today or timezone.localdate()
    days_since = (today - last).days
    return STATUS_ACTIVE if days_since <= ACTIVITY_WINDOW_DAYS else STATUS_INACTIVE


def merge_patient_listing(patients: Iterable[Dict[str, Any]],
                          consultation_rows: Iterable[Dict[str, Any]],
                          today: Optional[dt.date] = None) -> List[Dict[str, Any]]:
    """One listing row per patient, including patients without consultations."""
    today = today or timezone.localdate()
    by_patient = {s['paciente_id']: s for s in summarize_consultations(consultation_rows)}
    listing = []
    for p in patients:
        summary = by_patient.get(p['id'])
        last = summary['ultima_consulta'] if summary else None
        listing.append({
            **p,
            'total_consultas': summary['total_consultas'] if summary else 0,
            'ultima_consulta': last,
            'estado_calculado': activity_status(last, today),
        })
    return listing


def listing_stats(listing: List[Dict[str, Any]], total_consultas: Optional[int] = None) -> Dict[str, int]:
    total_pacientes = len(listing)
    if total_consultas is None:
        total_consultas = sum(row.get('total_consultas', 0) for row in listing)
    return {
        'totalPacientes': total_pacientes,
        'activos': sum(1 for row in listing if row.get('estado_calculado') == STATUS_ACTIVE),
        'totalConsultas': total_consultas,
        'promedioPorPaciente': math.floor(total_consultas / total_pacientes + 0.5) if total_pacientes else 0,
    }


def consultation_period_stats(rows: Iterable[Dict[str, Any]], today: Optional[dt.date] = None) -> Dict[str, int]:
    """Consultations held today, in the last 7 days and in the last 30 days."""
    today = today or timezone.localdate()
    week_start = today - dt.timedelta(days=7)
    month_start = today - dt.timedelta(days=30)
    stats = {'hoy': 0, 'semana': 0, 'mes': 0}
    for row in rows:
        fecha = parse_date(row.get('fecha'))
        if fecha is None:
            continue
        if fecha == today:
            stats['hoy'] += 1
        if fecha >= week_start:
            stats['semana'] += 1
        if fecha >= month_start:
            stats['mes'] += 1
    return stats
