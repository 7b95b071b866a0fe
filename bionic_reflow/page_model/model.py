"""
Page Data Model
===============
Structures for representing page content with line grouping.
Used by region, column and paragraph stages for consistent position analysis.
"""

from dataclasses import dataclass, field
from functools import reduce
from typing import List, Dict, Any, Tuple, Optional, Iterable, Iterator, NamedTuple

from ..script import join_text_pieces
from ..types import Page, TextFragment, TextLine, finite_positive, median


@dataclass
class LineConfig:
    """Configuration for line building"""
    default_height: float = 10.0   # used when no fragment has a usable height
    min_tolerance: float = 2.0
    tolerance_ratio: float = 0.6   # y tolerance as a share of median height


class _Cluster(NamedTuple):
    """Fragments gathered for one line; y is the running centroid"""
    y: float
    fragments: Tuple[TextFragment, ...]

    def add(self, frag: TextFragment) -> '_Cluster':
        count = len(self.fragments) + 1
        centroid = (self.y * (count - 1) + frag.y) / count
        return _Cluster(centroid, self.fragments + (frag,))


class _FoldState(NamedTuple):
    finished: Tuple[_Cluster, ...]
    current: Optional[_Cluster]


class LineBuilder:
    """
    Cluster page fragments into text lines.

    Process:
    1. Median fragment height -> vertical tolerance
    2. Sort fragments by (y, x)
    3. Fold into clusters by distance to the running y-centroid
    4. Join each cluster left to right with script-aware spacing
    5. Drop blank lines
    """

    def __init__(self, config: Optional[LineConfig] = None):
        self.config = config or LineConfig()

    def tolerance(self, fragments: Iterable[TextFragment]) -> float:
        """Vertical tolerance for grouping fragments into one line"""
        heights = finite_positive(f.height for f in fragments)
        med = median(heights) or self.config.default_height
        return max(self.config.min_tolerance, med * self.config.tolerance_ratio)

    def build(self, fragments: Iterable[TextFragment]) -> List[TextLine]:
        """
        Build lines from fragments.

        Returns:
            Lines in construction order (ascending y, then x of first fragment)
        """
        frags = list(fragments)
        if not frags:
            return []

        tol = self.tolerance(frags)
        ordered = sorted(frags, key=lambda f: (f.y, f.x))

        def step(state: _FoldState, frag: TextFragment) -> _FoldState:
            cur = state.current
            if cur is None:
                return _FoldState(state.finished, _Cluster(frag.y, (frag,)))
            if abs(frag.y - cur.y) > tol:
                return _FoldState(state.finished + (cur,), _Cluster(frag.y, (frag,)))
            return _FoldState(state.finished, cur.add(frag))

        final = reduce(step, ordered, _FoldState((), None))
        clusters = final.finished + ((final.current,) if final.current else ())

        lines = [self._to_line(c) for c in clusters]
        return [ln for ln in lines if "".join(ln.text.split()) != ""]

    @staticmethod
    def _to_line(cluster: _Cluster) -> TextLine:
        frags = sorted(cluster.fragments, key=lambda f: f.x)
        return TextLine(
            y=cluster.y,
            x_min=min(f.x for f in frags),
            x_max=max(f.x + (f.width or 0) for f in frags),
            height=median([f.height for f in frags]),
            text=join_text_pieces(f.text for f in frags),
        )


@dataclass
class PageModel:
    """
    A page with its fragments grouped into lines.
    """
    page_number: int  # 1-indexed
    width: float
    height: float
    lines: List[TextLine] = field(default_factory=list)

    @property
    def text(self) -> str:
        """Full page text with newlines"""
        return '\n'.join(line.text for line in self.lines)

    @property
    def median_line_height(self) -> float:
        """Median of usable line heights (10.0 when none)"""
        return median(finite_positive(ln.height for ln in self.lines)) or 10.0

    def normalized_y(self, line: TextLine) -> float:
        """Line y as a share of page height"""
        if self.height <= 0:
            return 0.0
        return line.y / self.height


def build_lines(
    fragments: Iterable[TextFragment],
    config: Optional[LineConfig] = None
) -> List[TextLine]:
    """
    Convenience function for line building.
    """
    return LineBuilder(config).build(fragments)


def build_page_model(page: Page, config: Optional[LineConfig] = None) -> PageModel:
    """
    Build a PageModel from a page of fragments.

    Args:
        page: Input page
        config: Line building thresholds

    Returns:
        PageModel with fragments grouped into lines
    """
    return PageModel(
        page_number=page.page_number,
        width=page.page_width,
        height=page.page_height,
        lines=build_lines(page.fragments, config),
    )


def page_from_pdfplumber(
    words: List[Dict[str, Any]],
    page_number: int,
    page_width: float = 612.0,
    page_height: float = 792.0,
) -> Page:
    """
    Build a Page from pdfplumber words.

    Whitespace-only words are skipped; origin is already top-left in pdfplumber.
    """
    fragments = [
        TextFragment.from_pdfplumber(w, page_number, page_width, page_height)
        for w in words
        if "".join(str(w.get('text', '')).split()) != ""
    ]
    return Page.from_fragments(page_number, page_width, page_height, fragments)


def pages_from_pdfplumber(pdf) -> Iterator[Page]:
    """
    Generator yielding a Page for each page of an open pdfplumber document.

    Pages are numbered from 1; a missing page size falls back to US Letter.
    """
    for i, page in enumerate(pdf.pages):
        yield page_from_pdfplumber(
            page.extract_words(),
            page_number=i + 1,
            page_width=page.width or 612.0,
            page_height=page.height or 792.0,
        )
