"""
Bionic Emphasis Module
======================
Chinese sentence-start and English word-prefix bolding for reflowed paragraphs.
"""

from .emphasis import (
    BionicOptions,
    bionic_html,
    clamp_chinese_n,
    clamp_english_percent,
    escape_markup,
    render_document,
    render_paragraph,
    split_english_word,
)

__all__ = [
    'BionicOptions', 'bionic_html', 'clamp_chinese_n', 'clamp_english_percent',
    'escape_markup', 'render_document', 'render_paragraph', 'split_english_word',
]
