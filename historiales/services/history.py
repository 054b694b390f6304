"""
Clinical history use cases: listing, detail and document export.

The listing issues its two independent queries (patients and their
consultations) concurrently and folds the results with the aggregation
functions.  Exports load the denormalized record and hand it to one of
the renderers; any renderer failure becomes an :class:`ExportError`.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Tuple

from historiales.exceptions import ExportError
from historiales.exporters import pdf_filename, render_pdf, render_word, word_filename
from historiales.services import aggregation
from historiales.services.backend import fetch_all
from historiales.services.consultations import (
    all_consultations,
    consultations_for_patients,
    consultations_with_patient,
    patient_consultations,
)
from historiales.services.patients import get_patient_record, search_patients

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = 'application/pdf'
WORD_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.wordprocessingml.document'


def history_listing(term: Optional[str] = None) -> Dict[str, Any]:
    term = (term or '').strip()
    if not term:
        patients, consultations = fetch_all(search_patients(''), all_consultations())
    else:
        # the consultation filter depends on the matched ids
        (patients,) = fetch_all(search_patients(term))
        (consultations,) = fetch_all(consultations_for_patients([p['id'] for p in patients]))
    listing = aggregation.merge_patient_listing(patients, consultations)
    return {
        'pacientes': listing,
        'stats': aggregation.listing_stats(listing, len(consultations)),
    }


def consultation_overview() -> Dict[str, Any]:
    rows = consultations_with_patient()
    return {
        'consultas': aggregation.summarize_consultations(rows),
        'stats': aggregation.consultation_period_stats(rows),
    }


def history_detail(patient_id: int) -> Dict[str, Any]:
    record = get_patient_record(patient_id)
    consultas = patient_consultations(patient_id)
    last = consultas[0]['fecha'] if consultas else None
    record['consultas'] = consultas
    record['id'] = patient_id
    record['total_consultas'] = len(consultas)
    record['estado_calculado'] = aggregation.activity_status(last)
    return record


def _export(patient_id: int, render: Callable[[Dict[str, Any]], bytes],
            filename: Callable[[Dict[str, Any]], str], kind: str) -> Tuple[bytes, str]:
    record = get_patient_record(patient_id)
    try:
        content = render(record)
    except Exception as e:
        logger.exception('%s export failed for patient %s', kind, patient_id)
        raise ExportError() from e
    logger.info('%s export generated for patient %s (%d bytes)', kind, patient_id, len(content))
    return content, filename(record)


def export_pdf(patient_id: int) -> Tuple[bytes, str]:
    return _export(patient_id, render_pdf, pdf_filename, 'PDF')


def export_word(patient_id: int) -> Tuple[bytes, str]:
    return _export(patient_id, render_word, word_filename, 'Word')
