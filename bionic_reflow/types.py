"""
Unified Data Types for the Reflow Engine
========================================
Shared input, line and output types; stage-local results (FrontMatter,
PageResult, PageStats) live beside the stage that produces them.

Type Hierarchy:
- TextFragment: One decoded glyph run with page-relative position (input)
- Page: A page's fragments plus its pixel dimensions (input)
- TextLine: A cluster of fragments sharing a vertical position
- ColumnMode: SingleColumn | DoubleColumn (tagged union)
- ReflowedDocument: Title/authors/abstract/body reading order (output)
"""

import math
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union


# Marker paragraph emitted before a page's footer-derived paragraphs
FOOTNOTE_MARKER = "【附注】"


# ============================================================
# Input Types
# ============================================================

@dataclass(frozen=True)
class TextFragment:
    """
    A single decoded run of text on a page.

    Attributes:
        page_number: 1-indexed page number
        text: Decoded text of the run
        x, y: Origin in page pixels (x grows right, y grows down)
        width, height: Glyph box size
        page_width, page_height: Dimensions of the owning page
    """
    page_number: int
    text: str
    x: float
    y: float
    width: float
    height: float
    page_width: float
    page_height: float

    @classmethod
    def from_pdfplumber(
        cls,
        word: Dict[str, Any],
        page_number: int,
        page_width: float,
        page_height: float,
    ) -> 'TextFragment':
        """Create from a pdfplumber word (or char) dictionary"""
        x0 = float(word.get('x0', 0) or 0)
        x1 = float(word.get('x1', x0) or x0)
        top = float(word.get('top', 0) or 0)
        bottom = float(word.get('bottom', top) or top)
        return cls(
            page_number=page_number,
            text=word.get('text', ''),
            x=x0,
            y=bottom,
            width=x1 - x0,
            height=bottom - top,
            page_width=page_width,
            page_height=page_height,
        )


@dataclass(frozen=True)
class Page:
    """A page of fragments. Fragment order carries no layout meaning."""
    page_number: int
    page_width: float
    page_height: float
    fragments: Tuple[TextFragment, ...] = ()

    @classmethod
    def from_fragments(
        cls,
        page_number: int,
        page_width: float,
        page_height: float,
        fragments: Iterable[TextFragment],
    ) -> 'Page':
        return cls(page_number, page_width, page_height, tuple(fragments))


# ============================================================
# Derived Types
# ============================================================

@dataclass(frozen=True)
class TextLine:
    """
    A horizontally ordered line of fragments.

    Attributes:
        y: Running centroid of the fragments' y
        x_min: Leftmost fragment x
        x_max: Rightmost fragment x + width
        height: Median fragment height
        text: Joined fragment text (never blank)
    """
    y: float
    x_min: float
    x_max: float
    height: float
    text: str

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    def with_text(self, text: str) -> 'TextLine':
        """Copy of this line carrying different text"""
        return replace(self, text=text)


@dataclass(frozen=True)
class SingleColumn:
    """One reading column"""


@dataclass(frozen=True)
class DoubleColumn:
    """Two reading columns split at split_x"""
    split_x: float
    left_center: float
    right_center: float


ColumnMode = Union[SingleColumn, DoubleColumn]


# ============================================================
# Output Type
# ============================================================

@dataclass(frozen=True)
class ReflowedDocument:
    """
    Final single-column reading order of a document.

    UI Display Contract:
        - title / authors: rendered as headings when present
        - abstract_paragraphs: rendered under an abstract heading
        - body_paragraphs: main reading flow; a paragraph equal to
          FOOTNOTE_MARKER is a structural heading, not body text
    """
    title: Optional[str] = None
    authors: Optional[str] = None
    abstract_paragraphs: Tuple[str, ...] = ()
    body_paragraphs: Tuple[str, ...] = ()

    def paragraphs(self) -> Iterator[str]:
        """Abstract paragraphs followed by body paragraphs"""
        yield from self.abstract_paragraphs
        yield from self.body_paragraphs

    @property
    def has_footnotes(self) -> bool:
        return any(is_footnote_marker(p) for p in self.body_paragraphs)


# ============================================================
# Helper Functions
# ============================================================

def is_footnote_marker(text: str) -> bool:
    """True if the paragraph is the footnote marker heading"""
    return text.strip() == FOOTNOTE_MARKER


def finite_positive(values: Iterable[float]) -> List[float]:
    """Keep only finite, strictly positive values"""
    return [v for v in values if v is not None and math.isfinite(v) and v > 0]


def median(values: Sequence[float]) -> float:
    """
    Median of values; 0.0 when empty.
    Even-sized inputs average the two middle values.
    """
    if not values:
        return 0.0
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2
    return ordered[mid]


def percentile(values: Sequence[float], p: float) -> float:
    """
    Nearest-rank percentile using index floor(p * (n - 1)).
    Returns 0.0 when empty.
    """
    if not values:
        return 0.0
    ordered = sorted(values)
    idx = min(len(ordered) - 1, max(0, math.floor(p * (len(ordered) - 1))))
    return ordered[idx]
