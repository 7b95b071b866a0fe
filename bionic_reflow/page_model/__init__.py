"""
Page Model Module
=================
Line building and page-level structures for fragment layout analysis.
"""

from .model import (
    PageModel, LineBuilder, LineConfig, build_lines, build_page_model,
    page_from_pdfplumber, pages_from_pdfplumber,
)

__all__ = [
    'PageModel', 'LineBuilder', 'LineConfig',
    'build_lines', 'build_page_model', 'page_from_pdfplumber', 'pages_from_pdfplumber',
]
