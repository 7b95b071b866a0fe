"""
Bionic Reflow Engine
====================
Reflows positioned PDF text fragments into a single-column reading order,
then applies Chinese/English bionic emphasis to the paragraphs.

Architecture:
- page_model: Fragment-to-line clustering
- layout: Footer/title/author/abstract regions and column detection
- paragraphs: Line-to-paragraph assembly with hyphenation repair
- bionic: Partial-bolding markup for reflowed paragraphs

Usage:
    from bionic_reflow import ReflowPipeline, bionic_html
    pipeline = ReflowPipeline()
    doc, debug = pipeline.run(pages)
    html = bionic_html(doc.body_paragraphs[0])
"""

from .types import (
    FOOTNOTE_MARKER,
    TextFragment,
    Page,
    TextLine,
    SingleColumn,
    DoubleColumn,
    ColumnMode,
    ReflowedDocument,
    is_footnote_marker,
)
from .pipeline import ReflowPipeline, ReflowConfig, DebugBundle, reflow_pages, run_reflow_pipeline
from .bionic import BionicOptions, bionic_html, render_document, render_paragraph

__all__ = [
    'FOOTNOTE_MARKER',
    'TextFragment',
    'Page',
    'TextLine',
    'SingleColumn',
    'DoubleColumn',
    'ColumnMode',
    'ReflowedDocument',
    'is_footnote_marker',
    'ReflowPipeline',
    'ReflowConfig',
    'DebugBundle',
    'reflow_pages',
    'run_reflow_pipeline',
    'BionicOptions',
    'bionic_html',
    'render_document',
    'render_paragraph',
]

__version__ = '1.0.0'
