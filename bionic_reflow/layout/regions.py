"""
Region Classification
=====================
Separates a page's lines into footer band and, on the front-matter page,
title / author / abstract bands relative to the median body line height.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple

from ..types import TextLine


@dataclass
class RegionConfig:
    """Configuration for region classification (y values are page-height shares)"""
    footer_band: float = 0.88
    small_footer_band: float = 0.75
    small_footer_height_ratio: float = 0.85

    top_band: float = 0.22
    title_height_ratio: float = 1.25
    author_min_ratio: float = 0.9
    author_max_ratio: float = 1.25

    abstract_search_limit: float = 0.5
    abstract_heading_max_len: int = 40
    abstract_stop: float = 0.65


@dataclass
class FrontMatter:
    """
    Lines claimed by the front-matter page.

    Attributes:
        title_lines: Tall lines in the top band
        author_lines: Body-height lines in the top band
        abstract_lines: Abstract content (inline heading text first, if any)
        consumed: Every line to remove from the body flow, heading included
    """
    title_lines: List[TextLine] = field(default_factory=list)
    author_lines: List[TextLine] = field(default_factory=list)
    abstract_lines: List[TextLine] = field(default_factory=list)
    consumed: Set[TextLine] = field(default_factory=set)

    def is_empty(self) -> bool:
        return not (self.title_lines or self.author_lines or self.abstract_lines)


# "Abstract" as a whole ASCII word, any case
ABSTRACT_PATTERN = re.compile(r'\bAbstract\b', re.IGNORECASE | re.ASCII)
ABSTRACT_ZH_TOKEN = "摘要"
ABSTRACT_HEADING_PREFIX = re.compile(r'^\s*(摘要|Abstract)\s*[:：]?\s*', re.IGNORECASE)

SECTION_MARKERS = ("引言", "参考文献", "致谢", "结论")
NUMBERED_HEADING = re.compile(r'^\d+(\.\d+)*\s+\S+', re.ASCII)


def strip_abstract_heading(line_text: str) -> str:
    """Remove a leading abstract heading token (and colon) from a line"""
    return ABSTRACT_HEADING_PREFIX.sub("", line_text, count=1).strip()


def looks_like_section_heading(text: str) -> bool:
    """
    Minimal heuristic: "1 Introduction", "2.1 Method", "引言", "参考文献"...

    A numbered list item inside an abstract also matches and ends capture.
    """
    t = text.strip()
    if t == "":
        return False
    if t.startswith(SECTION_MARKERS):
        return True
    return NUMBERED_HEADING.match(t) is not None


def split_footer(
    lines: List[TextLine],
    page_height: float,
    median_height: float,
    config: Optional[RegionConfig] = None
) -> Tuple[List[TextLine], List[TextLine]]:
    """
    Split lines into (footer, non_footer), preserving order.

    A line is footer if it sits below footer_band, or below small_footer_band
    while shorter than small_footer_height_ratio of the median height.
    """
    cfg = config or RegionConfig()
    if page_height <= 0:
        return [], list(lines)

    footer: List[TextLine] = []
    rest: List[TextLine] = []
    for ln in lines:
        y_norm = ln.y / page_height
        if y_norm > cfg.footer_band:
            footer.append(ln)
        elif y_norm > cfg.small_footer_band and ln.height < median_height * cfg.small_footer_height_ratio:
            footer.append(ln)
        else:
            rest.append(ln)
    return footer, rest


class RegionClassifier:
    """
    Classify front-matter regions of the first page.

    Bands:
    - Title: top band, height > title_height_ratio x median
    - Authors: remaining top band lines with height in the author ratio band
    - Abstract: lines after an "Abstract"/"摘要" heading until a section
      heading or the abstract stop line
    """

    def __init__(self, config: Optional[RegionConfig] = None):
        self.config = config or RegionConfig()

    def classify(
        self,
        lines: List[TextLine],
        page_height: float,
        median_height: float
    ) -> FrontMatter:
        """
        Classify non-footer lines of the front-matter page.

        Args:
            lines: Non-footer lines in construction order
            page_height: Page height in pixels
            median_height: Median line height of the page

        Returns:
            FrontMatter with the claimed lines
        """
        result = FrontMatter()
        if page_height <= 0 or not lines:
            return result

        cfg = self.config

        top = [ln for ln in lines if ln.y / page_height < cfg.top_band]
        result.title_lines = [ln for ln in top if ln.height > median_height * cfg.title_height_ratio]
        result.author_lines = [
            ln for ln in top
            if ln not in result.title_lines
            and median_height * cfg.author_min_ratio <= ln.height <= median_height * cfg.author_max_ratio
        ]

        head_idx = self._find_abstract_heading(lines, page_height)
        if head_idx is not None:
            result.abstract_lines = self._capture_abstract(lines, head_idx, page_height)
            result.consumed.add(lines[head_idx])

        result.consumed.update(result.title_lines)
        result.consumed.update(result.author_lines)
        result.consumed.update(result.abstract_lines)
        return result

    def _find_abstract_heading(self, lines: List[TextLine], page_height: float) -> Optional[int]:
        """Index of the abstract heading; English heading wins over Chinese"""
        cfg = self.config

        def candidate(ln: TextLine) -> bool:
            return (
                ln.y / page_height < cfg.abstract_search_limit
                and len(ln.text.strip()) <= cfg.abstract_heading_max_len
            )

        for i, ln in enumerate(lines):
            if candidate(ln) and ABSTRACT_PATTERN.search(ln.text):
                return i
        for i, ln in enumerate(lines):
            if candidate(ln) and ABSTRACT_ZH_TOKEN in ln.text:
                return i
        return None

    def _capture_abstract(
        self,
        lines: List[TextLine],
        head_idx: int,
        page_height: float
    ) -> List[TextLine]:
        head = lines[head_idx]
        captured: List[TextLine] = []

        for ln in lines[head_idx:]:
            if ln.y <= head.y:
                continue
            if ln.y / page_height > self.config.abstract_stop:
                break
            if looks_like_section_heading(ln.text):
                break
            captured.append(ln)

        # Heading line may carry content, e.g. "摘要：本文..."
        inline = strip_abstract_heading(head.text)
        if inline:
            captured.insert(0, head.with_text(inline))
        return captured


def classify_regions(
    lines: List[TextLine],
    page_height: float,
    median_height: float,
    config: Optional[RegionConfig] = None
) -> FrontMatter:
    """
    Convenience function for front-matter classification.
    """
    return RegionClassifier(config).classify(lines, page_height, median_height)
