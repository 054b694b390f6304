"""
Word (.docx) rendering of a clinical history.

All content goes into the single section python-docx creates with the
document; no section or page breaks are inserted between parts.
"""
from __future__ import annotations

import io
from typing import Any, Dict

from docx import Document
from docx.shared import Pt

from . import base

TITLE_SIZE = Pt(16)
SECTION_SIZE = Pt(12)


def _bold_paragraph(doc, text: str, size=None):
    paragraph = doc.add_paragraph()
    run = paragraph.add_run(text)
    run.bold = True
    if size is not None:
        run.font.size = size
    return paragraph


def _vitals_table(doc, consulta: Dict[str, Any]):
    """3x4 table: two label/value pairs per row."""
    vitals = base.VITAL_SIGNS
    table = doc.add_table(rows=3, cols=4)
    table.style = 'Table Grid'
    for row_index in range(3):
        cells = table.rows[row_index].cells
        for pair in range(2):
            label, field, unit = vitals[row_index * 2 + pair]
            cells[pair * 2].text = label
            cells[pair * 2 + 1].text = base.vital_text(consulta, field, unit)
    return table


def _antecedent_row_text(row: Dict[str, Any]) -> str:
    return ', '.join(f"{base.field_label(k)}: {base.display(v)}" for k, v in row.items())


def build_document(record: Dict[str, Any]):
    doc = Document()

    _bold_paragraph(doc, base.TITLE, TITLE_SIZE)
    doc.add_paragraph(' ')

    _bold_paragraph(doc, base.SECTION_PATIENT, SECTION_SIZE)
    for line in base.patient_lines(record):
        doc.add_paragraph(line)
    doc.add_paragraph(' ')

    _bold_paragraph(doc, base.SECTION_ANTECEDENTS, SECTION_SIZE)
    antecedentes = record.get('antecedentes') or []
    if antecedentes:
        for row in antecedentes:
            doc.add_paragraph(_antecedent_row_text(row))
    else:
        for line in base.antecedent_summary_lines(record):
            doc.add_paragraph(line)
    doc.add_paragraph(' ')

    _bold_paragraph(doc, base.SECTION_CONSULTATIONS, SECTION_SIZE)
    consultas = record.get('consultas') or []
    if not consultas:
        doc.add_paragraph(base.MISSING)
    for index, consulta in enumerate(consultas, start=1):
        _bold_paragraph(doc, base.consultation_heading(index, consulta))
        doc.add_paragraph(base.motive_line(consulta))
        _vitals_table(doc, consulta)
        for heading, field in base.TEXT_SECTIONS:
            _bold_paragraph(doc, heading)
            doc.add_paragraph(base.display(consulta.get(field), base.MISSING_VALUE))

    return doc


def render_word(record: Dict[str, Any]) -> bytes:
    buf = io.BytesIO()
    build_document(record).save(buf)
    return buf.getvalue()
