"""
Script Classification
=====================
Single-character predicates (Han / Latin / boundary / skip) and the
script-aware joining rule shared by line building and paragraph assembly.
"""

import re
from typing import Iterable


# Unicode Han script code-point ranges (inclusive)
_HAN_RANGES = (
    (0x2E80, 0x2E99),    # CJK Radicals Supplement
    (0x2E9B, 0x2EF3),
    (0x2F00, 0x2FD5),    # Kangxi Radicals
    (0x3005, 0x3005),    # 々
    (0x3007, 0x3007),    # 〇
    (0x3021, 0x3029),    # Hangzhou numerals
    (0x3038, 0x303B),
    (0x3400, 0x4DBF),    # Extension A
    (0x4E00, 0x9FFF),    # CJK Unified Ideographs
    (0xF900, 0xFA6D),    # Compatibility Ideographs
    (0xFA70, 0xFAD9),
    (0x16FE2, 0x16FE3),  # Ideographic marks
    (0x16FF0, 0x16FF1),
    (0x20000, 0x2A6DF),  # Extension B
    (0x2A700, 0x2EBEF),  # Extensions C-F
    (0x2EBF0, 0x2EE5D),  # Extension I
    (0x2F800, 0x2FA1F),  # Compatibility Supplement
    (0x30000, 0x3134F),  # Extension G
    (0x31350, 0x323AF),  # Extension H
)

HYPHENS = frozenset("-‑–—")

# Characters that attach to the following word (no space after the left piece)
OPENING_CHARS = frozenset("([{\"'“‘《【（")

# Characters that attach to the preceding word (no space before the right piece)
CLOSING_CHARS = frozenset(")}]\"'”’》】）")

SENTENCE_BOUNDARIES = frozenset("。！？；：，、.!?;:,\n")

SKIP_AT_SENTENCE_START = frozenset([
    " ", "\t", "\n", "\r",
    "“", "”", "‘", "’",
    "「", "」", "『", "』",
    "（", "）", "(", ")",
    "[", "]", "【", "】",
    "《", "》",
    "—", "–", "-",
    "·", "…",
])

_ASCII_LETTER = re.compile(r"[A-Za-z]")
_ASCII_ALNUM = re.compile(r"[A-Za-z0-9]")


def is_han(ch: str) -> bool:
    """True if ch is a single Han-script character"""
    if len(ch) != 1:
        return False
    cp = ord(ch)
    for lo, hi in _HAN_RANGES:
        if cp < lo:
            return False
        if cp <= hi:
            return True
    return False


def is_latin_letter(ch: str) -> bool:
    return len(ch) == 1 and _ASCII_LETTER.match(ch) is not None


def is_latin_alnum(ch: str) -> bool:
    return len(ch) == 1 and _ASCII_ALNUM.match(ch) is not None


def is_hyphen(ch: str) -> bool:
    return ch in HYPHENS


def is_sentence_boundary(ch: str) -> bool:
    return ch in SENTENCE_BOUNDARIES


def is_sentence_start_skip(ch: str) -> bool:
    """Whitespace and quote/bracket/dash characters passed over at sentence start"""
    return ch in SKIP_AT_SENTENCE_START or ch.isspace()


def needs_space_between(a: str, b: str) -> bool:
    """
    Decide whether joining a and b needs a separating space.

    Rules (on the boundary characters after trimming):
    - No space around Han characters or whitespace
    - No space after an opening bracket/quote on the right side
    - No space before a closing bracket/quote or after a hyphen
    - Otherwise only between two Latin letters/digits
    """
    a_trim = a.rstrip()
    b_trim = b.lstrip()
    if not a_trim or not b_trim:
        return False
    last = a_trim[-1]
    first = b_trim[0]
    if is_han(last) or is_han(first):
        return False
    if last.isspace() or first.isspace():
        return False
    if first in OPENING_CHARS:
        return False
    if last in CLOSING_CHARS:
        return False
    if is_hyphen(last):
        return False
    return is_latin_alnum(last) and is_latin_alnum(first)


def join_text_pieces(pieces: Iterable[str]) -> str:
    """Concatenate pieces left to right using needs_space_between"""
    out = ""
    for piece in pieces:
        if out == "":
            out = piece
            continue
        out += f" {piece}" if needs_space_between(out, piece) else piece
    return out


def ends_with_hyphen(text: str) -> bool:
    trimmed = text.rstrip()
    return bool(trimmed) and is_hyphen(trimmed[-1])


def starts_with_letter(text: str) -> bool:
    trimmed = text.lstrip()
    return bool(trimmed) and is_latin_letter(trimmed[0])
