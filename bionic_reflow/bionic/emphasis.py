"""
Bionic Emphasis
===============
Partial bolding for guided reading:
- English: bold the first 40-50% of every word
- Chinese: bold the first N Han characters of every sentence

Output is HTML: escaped text with <strong> spans.
"""

import math
import re
from dataclasses import dataclass, replace
from typing import Any, List, NamedTuple, Optional, Tuple

from ..script import is_han, is_sentence_boundary, is_sentence_start_skip
from ..types import FOOTNOTE_MARKER, ReflowedDocument, is_footnote_marker


DEFAULT_CHINESE_N = 4
MIN_CHINESE_N = 2
MAX_CHINESE_N = 6

DEFAULT_ENGLISH_PERCENT = 0.45
MIN_ENGLISH_PERCENT = 0.4
MAX_ENGLISH_PERCENT = 0.5

WORD_PATTERN = re.compile(r"[A-Za-z][A-Za-z']*")

_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
)


def clamp_chinese_n(n: Any) -> int:
    """Coerce N to an int in [2, 6]; unusable values fall back to 4"""
    if isinstance(n, int):
        # Arbitrary-size ints never go through float()
        return min(MAX_CHINESE_N, max(MIN_CHINESE_N, n))
    try:
        value = float(n)
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_CHINESE_N
    if not math.isfinite(value):
        return DEFAULT_CHINESE_N
    return min(MAX_CHINESE_N, max(MIN_CHINESE_N, math.floor(value)))


def clamp_english_percent(p: Any) -> float:
    """Coerce P to a float in [0.4, 0.5]; unusable values fall back to 0.45"""
    if isinstance(p, int):
        return MAX_ENGLISH_PERCENT if p > MAX_ENGLISH_PERCENT else MIN_ENGLISH_PERCENT
    try:
        value = float(p)
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_ENGLISH_PERCENT
    if not math.isfinite(value):
        return DEFAULT_ENGLISH_PERCENT
    return min(MAX_ENGLISH_PERCENT, max(MIN_ENGLISH_PERCENT, value))


@dataclass(frozen=True)
class BionicOptions:
    """Emphasis parameters (clamped on use, never rejected)"""
    chinese_bold_n: int = DEFAULT_CHINESE_N
    english_bold_percent: float = DEFAULT_ENGLISH_PERCENT

    def normalized(self) -> 'BionicOptions':
        return replace(
            self,
            chinese_bold_n=clamp_chinese_n(self.chinese_bold_n),
            english_bold_percent=clamp_english_percent(self.english_bold_percent),
        )


def escape_markup(text: str) -> str:
    for raw, entity in _ESCAPES:
        text = text.replace(raw, entity)
    return text


def _strong(text: str) -> str:
    return f"<strong>{escape_markup(text)}</strong>"


def split_english_word(word: str, percent: float) -> Tuple[str, str]:
    """
    Split a word into (bold head, plain tail).

    Head length is ceil(len * percent) clamped to [1, len].
    """
    p = clamp_english_percent(percent)
    cut = max(1, min(len(word), math.ceil(len(word) * p)))
    return word[:cut], word[cut:]


class _ScanState(NamedTuple):
    at_sentence_start: bool
    chinese_bolded: int


_SENTENCE_START = _ScanState(True, 0)


def _step(text: str, i: int, state: _ScanState, opts: BionicOptions) -> Tuple[_ScanState, str, int]:
    """
    One scan step at index i.

    Returns:
        (next state, markup emitted, characters consumed)
    """
    word = WORD_PATTERN.match(text, i)
    if word:
        head, tail = split_english_word(word.group(0), opts.english_bold_percent)
        return state, _strong(head) + escape_markup(tail), len(word.group(0))

    ch = text[i]
    if is_sentence_boundary(ch):
        return _SENTENCE_START, escape_markup(ch), 1

    if not state.at_sentence_start:
        return state, escape_markup(ch), 1

    if is_sentence_start_skip(ch):
        return state, escape_markup(ch), 1

    if is_han(ch) and state.chinese_bolded < opts.chinese_bold_n:
        bolded = state.chinese_bolded + 1
        return _ScanState(bolded < opts.chinese_bold_n, bolded), _strong(ch), 1

    # Leading non-Han content ends the sentence-start opportunity
    return _ScanState(False, state.chinese_bolded), escape_markup(ch), 1


def bionic_html(text: str, options: Optional[BionicOptions] = None) -> str:
    """
    Apply bionic emphasis to one paragraph.

    Every call starts a fresh sentence; the result depends only on the
    arguments.
    """
    opts = (options or BionicOptions()).normalized()
    out: List[str] = []
    state = _SENTENCE_START
    i = 0
    while i < len(text):
        state, markup, consumed = _step(text, i, state, opts)
        out.append(markup)
        i += consumed
    return "".join(out)


def render_paragraph(text: str, options: Optional[BionicOptions] = None) -> str:
    """
    Render a paragraph as a block element.

    The footnote marker becomes a heading; bracket-led notes get the note class.
    """
    if is_footnote_marker(text):
        return f'<h2 class="noteBox">{FOOTNOTE_MARKER}</h2>'
    css = ' class="noteBox"' if text.lstrip().startswith("【") else ""
    return f"<p{css}>{bionic_html(text, options)}</p>"


def render_document(doc: ReflowedDocument, options: Optional[BionicOptions] = None) -> str:
    """Reading-view markup for a whole reflowed document"""
    parts: List[str] = []
    parts.append(f"<h1>{escape_markup(doc.title) if doc.title else 'Reading View'}</h1>")
    if doc.authors:
        parts.append(f'<p class="authors">{escape_markup(doc.authors)}</p>')
    if doc.abstract_paragraphs:
        parts.append("<h2>摘要 / Abstract</h2>")
        parts.extend(render_paragraph(p, options) for p in doc.abstract_paragraphs)
    parts.append("<h2>正文</h2>")
    parts.extend(render_paragraph(p, options) for p in doc.body_paragraphs)
    return "\n".join(parts)
