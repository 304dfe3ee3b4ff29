"""Word / non-word segmentation with left-elision splitting."""
from __future__ import annotations

from dataclasses import dataclass
import unicodedata

from .normalization import APOSTROPHES


@dataclass(frozen=True)
class Span:
    start: int
    end: int
    text: str
    is_word: bool


@dataclass(frozen=True)
class ElisionMatch:
    left: str
    apostrophe: str
    right: str
    left_start: int
    left_end: int
    right_start: int
    right_end: int


def is_letter(ch: str) -> bool:
    return unicodedata.category(ch).startswith("L")


def is_word_continuation(ch: str) -> bool:
    category = unicodedata.category(ch)
    return category.startswith("L") or category.startswith("M") or category == "Nd"


def match_elision_at(text: str, index: int) -> ElisionMatch | None:
    """Match ``Letter+ ws* Apostrophe Letter+`` anchored at ``index``."""
    length = len(text)
    cursor = index
    while cursor < length and is_letter(text[cursor]):
        cursor += 1
    if cursor == index:
        return None
    left_letters_end = cursor
    while cursor < length and text[cursor].isspace():
        cursor += 1
    if cursor >= length or text[cursor] not in APOSTROPHES:
        return None
    apostrophe = text[cursor]
    left_end = cursor + 1
    cursor = left_end
    while cursor < length and is_letter(text[cursor]):
        cursor += 1
    if cursor == left_end:
        return None
    return ElisionMatch(
        left=text[index:left_letters_end],
        apostrophe=apostrophe,
        right=text[left_end:cursor],
        left_start=index,
        left_end=left_end,
        right_start=left_end,
        right_end=cursor,
    )


def _match_word_at(text: str, index: int) -> int:
    if not is_letter(text[index]):
        return index
    cursor = index + 1
    while cursor < len(text) and is_word_continuation(text[cursor]):
        cursor += 1
    return cursor


def tokenize(text: str) -> list[Span]:
    """Split text into contiguous spans; elided fragments keep their apostrophe.

    ``"qu'il"`` gives ``["qu'", "il"]``, both word spans. Spans cover the input
    exactly, so joining their texts reproduces ``text``.
    """
    spans: list[Span] = []
    index = 0
    length = len(text)
    while index < length:
        elision = match_elision_at(text, index)
        if elision is not None:
            spans.append(
                Span(
                    elision.left_start,
                    elision.left_end,
                    text[elision.left_start : elision.left_end],
                    True,
                )
            )
            spans.append(
                Span(
                    elision.right_start,
                    elision.right_end,
                    text[elision.right_start : elision.right_end],
                    True,
                )
            )
            index = elision.right_end
            continue

        word_end = _match_word_at(text, index)
        if word_end > index:
            spans.append(Span(index, word_end, text[index:word_end], True))
            index = word_end
            continue

        # Python strings index code points, so astral characters are one unit.
        spans.append(Span(index, index + 1, text[index], False))
        index += 1
    return spans
