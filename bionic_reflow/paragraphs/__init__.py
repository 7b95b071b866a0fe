"""
Paragraph Module
================
Merges ordered lines into paragraphs and footer lines into footnotes.
"""

from .assembler import ParagraphAssembler, ParagraphConfig, join_line, lines_to_paragraphs

__all__ = ['ParagraphAssembler', 'ParagraphConfig', 'join_line', 'lines_to_paragraphs']
