"""
Column Detection
================
Decides single- vs double-column layout from body line left edges
using a small 2-means clustering.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..types import ColumnMode, DoubleColumn, SingleColumn, TextLine, percentile


@dataclass
class ColumnConfig:
    """Configuration for column detection"""
    wide_line_ratio: float = 0.75      # wider lines likely span both columns
    min_lines: int = 8
    max_iterations: int = 10
    min_separation_ratio: float = 0.25  # of page width
    min_cluster_share: float = 0.2      # of the clustering sample


def assign_to_centers(xs: List[float], c1: float, c2: float) -> Tuple[List[float], List[float]]:
    """Split xs by nearest center; a point equally close to both goes to c1"""
    g1 = [x for x in xs if abs(x - c1) <= abs(x - c2)]
    g2 = [x for x in xs if abs(x - c1) > abs(x - c2)]
    return g1, g2


class ColumnDetector:
    """
    Detect the reading column layout of a page.

    Process:
    1. Drop wide lines from the sample (fall back to all lines if too few remain)
    2. 2-means on x_min, seeded at the 25th / 75th percentiles
    3. Reject weak separation or a too-small minority cluster
    """

    def __init__(self, config: Optional[ColumnConfig] = None):
        self.config = config or ColumnConfig()

    def clustering_sample(self, lines: List[TextLine], page_width: float) -> List[TextLine]:
        """Lines used for clustering"""
        if page_width <= 0:
            return list(lines)
        narrow = [ln for ln in lines if ln.width / page_width <= self.config.wide_line_ratio]
        return narrow if len(narrow) >= self.config.min_lines else list(lines)

    def detect(self, lines: List[TextLine], page_width: float) -> ColumnMode:
        """
        Detect column mode.

        Args:
            lines: Body lines of the page
            page_width: Page width in pixels

        Returns:
            SingleColumn or DoubleColumn
        """
        cfg = self.config
        if page_width <= 0:
            return SingleColumn()

        sample = self.clustering_sample(lines, page_width)
        if len(sample) < cfg.min_lines:
            return SingleColumn()

        xs = [ln.x_min for ln in sample]
        a, b = percentile(xs, 0.25), percentile(xs, 0.75)
        c1, c2 = min(a, b), max(a, b)

        for _ in range(cfg.max_iterations):
            g1, g2 = assign_to_centers(xs, c1, c2)
            if not g1 or not g2:
                return SingleColumn()
            c1 = sum(g1) / len(g1)
            c2 = sum(g2) / len(g2)
            if c1 > c2:
                c1, c2 = c2, c1

        split_x = (c1 + c2) / 2
        left = sum(1 for x in xs if x <= split_x)
        right = len(xs) - left

        if c2 - c1 < page_width * cfg.min_separation_ratio:
            return SingleColumn()
        if min(left, right) < len(sample) * cfg.min_cluster_share:
            return SingleColumn()

        return DoubleColumn(split_x=split_x, left_center=c1, right_center=c2)


def detect_columns(
    lines: List[TextLine],
    page_width: float,
    config: Optional[ColumnConfig] = None
) -> ColumnMode:
    """
    Convenience function for column detection.
    """
    return ColumnDetector(config).detect(lines, page_width)


def order_lines(lines: List[TextLine], mode: ColumnMode) -> List[TextLine]:
    """
    Arrange lines in reading order for a column mode.

    Double: left column by y, then right column by y.
    Single: all lines by y.
    """
    if isinstance(mode, DoubleColumn):
        left = [ln for ln in lines if ln.x_min <= mode.split_x]
        right = [ln for ln in lines if ln.x_min > mode.split_x]
        return sorted(left, key=lambda ln: ln.y) + sorted(right, key=lambda ln: ln.y)
    if isinstance(mode, SingleColumn):
        return sorted(lines, key=lambda ln: ln.y)
    raise TypeError(f"Unknown column mode: {mode!r}")
