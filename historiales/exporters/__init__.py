"""Clinical history exporters (PDF and Word)."""
from .base import pdf_filename, word_filename
from .pdf import PdfHistoryRenderer, render_pdf
from .word import build_document, render_word

__all__ = [
    'PdfHistoryRenderer',
    'build_document',
    'pdf_filename',
    'render_pdf',
    'render_word',
    'word_filename',
]
