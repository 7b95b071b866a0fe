"""
Layout Module
=============
Page layout classification:
- regions: footer band and first-page title/author/abstract bands
- columns: single vs double column detection and line ordering
"""

from .regions import (
    RegionClassifier, RegionConfig, FrontMatter, classify_regions, split_footer,
    looks_like_section_heading, strip_abstract_heading,
)
from .columns import ColumnDetector, ColumnConfig, assign_to_centers, detect_columns, order_lines

__all__ = [
    'RegionClassifier', 'RegionConfig', 'FrontMatter', 'classify_regions', 'split_footer',
    'looks_like_section_heading', 'strip_abstract_heading',
    'ColumnDetector', 'ColumnConfig', 'assign_to_centers', 'detect_columns', 'order_lines',
]
