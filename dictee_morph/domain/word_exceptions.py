"""Closed list of surfaces handled outside the lemma model."""
from __future__ import annotations

from dataclasses import dataclass

from .normalization import normalize_key


@dataclass(frozen=True)
class WordException:
    surfaces: tuple[str, ...]
    exception_type: str
    description: str = ""


WORD_EXCEPTIONS: tuple[WordException, ...] = (
    WordException(
        surfaces=("au", "aux", "du", "des"),
        exception_type="article contracté",
        description="Contraction of a preposition (à/de) with a definite article (le/les).",
    ),
)


def get_word_exception(surface: str) -> str | None:
    """Return the exception type of ``surface`` or ``None``."""
    normalized = normalize_key(surface)
    if not normalized:
        return None
    for exception in WORD_EXCEPTIONS:
        if any(normalize_key(item) == normalized for item in exception.surfaces):
            return exception.exception_type
    return None


def get_all_exceptional_words() -> dict[str, str]:
    return {
        surface: exception.exception_type
        for exception in WORD_EXCEPTIONS
        for surface in exception.surfaces
    }
