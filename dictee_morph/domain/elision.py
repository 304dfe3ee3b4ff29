"""Base words for left-elided fragments ("qu'" -> "que", "l'" -> "le" / "la")."""
from __future__ import annotations

import re

from .normalization import APOSTROPHES

ELISION_BASES: dict[str, tuple[str, ...]] = {
    "c": ("ce",),
    "d": ("de",),
    "j": ("je",),
    "l": ("le", "la"),
    "m": ("me",),
    "n": ("ne",),
    "s": ("se",),
    "t": ("te",),
    "qu": ("que",),
    "lorsqu": ("lorsque",),
    "puisqu": ("puisque",),
    "quoiqu": ("quoique",),
    "presqu": ("presque",),
}

_ELIDED_TOKEN_RE = re.compile(rf"^([^\W\d_]+)\s*[{APOSTROPHES}]$")
_BARE_MARKER_LETTERS = "".join(key for key in ELISION_BASES if len(key) == 1)
_BARE_MARKER_RE = re.compile(rf"^[{_BARE_MARKER_LETTERS}]\s*[{APOSTROPHES}]$", re.IGNORECASE)


def elided_bases_for(fragment_lower: str) -> list[str]:
    """Return candidate base words for a lowercase fragment without apostrophe."""
    return list(ELISION_BASES.get(fragment_lower, ()))


def elided_bases_from_token_text(text: str) -> list[str]:
    match = _ELIDED_TOKEN_RE.match(text)
    if match is None:
        return []
    return elided_bases_for(match.group(1).lower())


def is_bare_elision_marker(text: str) -> bool:
    return bool(_BARE_MARKER_RE.match(text))
