"""
Paragraph Assembly
==================
Merges reading-ordered lines into paragraphs using vertical gaps,
hyphenation repair and script-aware spacing.
"""

from dataclasses import dataclass
from typing import List, Optional

from ..script import HYPHENS, ends_with_hyphen, needs_space_between, starts_with_letter
from ..types import FOOTNOTE_MARKER, TextLine, median


@dataclass
class ParagraphConfig:
    """Configuration for paragraph assembly"""
    default_gap: float = 10.0     # used when no positive line gap exists
    break_gap_ratio: float = 1.6  # gap > ratio x median gap starts a paragraph


class ParagraphAssembler:
    """
    Assemble paragraphs from lines already in reading order.

    Process:
    1. Median of positive gaps between consecutive lines
    2. Break at the first line and at every oversized gap
    3. Join within a paragraph: hyphen repair, else spacing rule
    4. Trim and drop empty paragraphs
    """

    def __init__(self, config: Optional[ParagraphConfig] = None):
        self.config = config or ParagraphConfig()

    def typical_gap(self, lines: List[TextLine]) -> float:
        gaps = [b.y - a.y for a, b in zip(lines, lines[1:])]
        return median([g for g in gaps if g > 0]) or self.config.default_gap

    def assemble(self, lines: List[TextLine]) -> List[str]:
        """
        Merge ordered lines into paragraph strings.

        Args:
            lines: Lines in final reading order (not re-sorted)

        Returns:
            Trimmed, non-empty paragraphs in encounter order
        """
        if not lines:
            return []

        threshold = self.typical_gap(lines) * self.config.break_gap_ratio
        paragraphs: List[str] = []
        current = ""
        prev: Optional[TextLine] = None

        for line in lines:
            piece = line.text.strip()
            if prev is None or line.y - prev.y > threshold:
                if current.strip():
                    paragraphs.append(current.strip())
                current = piece
            else:
                current = join_line(current, piece)
            prev = line

        if current.strip():
            paragraphs.append(current.strip())
        return paragraphs

    def assemble_footnotes(self, footer_lines: List[TextLine]) -> List[str]:
        """
        Assemble footer lines (sorted by y) with the marker paragraph first.

        Returns:
            [] when the footer yields no text
        """
        notes = self.assemble(sorted(footer_lines, key=lambda ln: ln.y))
        if not notes:
            return []
        return [FOOTNOTE_MARKER] + notes


def join_line(current: str, piece: str) -> str:
    """
    Append a line's text to a paragraph.

    "exam-" + "ple" -> "example"; otherwise the spacing rule applies.
    """
    if current == "":
        return piece
    if ends_with_hyphen(current) and starts_with_letter(piece):
        trimmed = current.rstrip()
        if trimmed[-1] in HYPHENS:
            trimmed = trimmed[:-1]
        return trimmed + piece.lstrip()
    return current + (f" {piece}" if needs_space_between(current, piece) else piece)


def lines_to_paragraphs(
    lines: List[TextLine],
    config: Optional[ParagraphConfig] = None
) -> List[str]:
    """
    Convenience function: sort lines by y and assemble paragraphs.
    """
    return ParagraphAssembler(config).assemble(sorted(lines, key=lambda ln: ln.y))
