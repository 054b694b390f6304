"""
Paginated PDF rendering of a clinical history.

The page is filled top-down with a vertical cursor.  Pagination is
checked for every emitted line after wrapping, so a long paragraph can
continue on the next page half way through.
"""
from __future__ import annotations

import io
from typing import Any, Dict

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from . import base

MARGIN = 12 * mm
LINE_HEIGHT = 6 * mm
FONT = 'Helvetica'
FONT_BOLD = 'Helvetica-Bold'
BODY_SIZE = 12
TITLE_SIZE = 16


class PdfHistoryRenderer:
    """Render one denormalized patient record to PDF bytes."""

    def __init__(self, record: Dict[str, Any]):
        self.record = record
        self.page_width, self.page_height = A4
        self.max_width = self.page_width - 2 * MARGIN
        self.page_count = 0
        self._buffer = io.BytesIO()
        self._canvas = None
        self._y = MARGIN

    # -- low level drawing -------------------------------------------------
    def _new_page(self) -> None:
        self._canvas.showPage()
        self.page_count += 1
        self._y = MARGIN

    def add_text(self, text: str, bold: bool = False, size: int = BODY_SIZE) -> None:
        font = FONT_BOLD if bold else FONT
        lines = simpleSplit(str(text), font, size, self.max_width) or ['']
        for line in lines:
            if self._y + LINE_HEIGHT > self.page_height - MARGIN:
                self._new_page()
            self._canvas.setFont(font, size)
            # the cursor counts from the top edge, reportlab from the bottom
            self._canvas.drawString(MARGIN, self.page_height - self._y - size * 0.8, line)
            self._y += LINE_HEIGHT

    def add_spacer(self, height: float = 4 * mm) -> None:
        if self._y + height > self.page_height - MARGIN:
            self._new_page()
        self._y += height

    # -- sections ------------------------------------------------------------
    def _patient_section(self) -> None:
        self.add_text(base.SECTION_PATIENT, bold=True)
        for line in base.patient_lines(self.record):
            self.add_text(line)
        self.add_spacer()

    def _antecedent_section(self) -> None:
        self.add_text(base.SECTION_ANTECEDENTS, bold=True)
        for line in base.antecedent_summary_lines(self.record):
            self.add_text(line)
        self.add_spacer()

    def _consultation_section(self) -> None:
        self.add_text(base.SECTION_CONSULTATIONS, bold=True)
        consultas = self.record.get('consultas') or []
        if not consultas:
            self.add_text(base.MISSING)
        for index, consulta in enumerate(consultas, start=1):
            self.add_text(base.consultation_heading(index, consulta), bold=True)
            self.add_text(base.motive_line(consulta))
            for label, field, unit in base.VITAL_SIGNS:
                self.add_text(f"{label}: {base.vital_text(consulta, field, unit)}")
            for heading, field in base.TEXT_SECTIONS:
                self.add_text(heading, bold=True)
                self.add_text(base.display(consulta.get(field), base.MISSING_VALUE))
            self.add_spacer()

    def render(self) -> bytes:
        self._canvas = canvas.Canvas(self._buffer, pagesize=A4)
        self._canvas.setTitle(base.TITLE)
        self.page_count = 1
        self._y = MARGIN

        self.add_text(base.TITLE, bold=True, size=TITLE_SIZE)
        self.add_spacer(2 * mm)
        self._patient_section()
        self._antecedent_section()
        self._consultation_section()

        self._canvas.save()
        return self._buffer.getvalue()


def render_pdf(record: Dict[str, Any]) -> bytes:
    return PdfHistoryRenderer(record).render()
