"""Lookup-key normalization shared by the lexicon builder and runtime store."""
from __future__ import annotations

import re
import unicodedata

# ASCII quote, right/left curly quotes, modifier letter apostrophe, fullwidth apostrophe.
APOSTROPHES = "'\u2019\u2018\u02BC\uFF07"

_SMART_APOSTROPHE_RE = re.compile("[\u2019\u2018\u02BC\uFF07]")
_UNICODE_DASH_RE = re.compile("[\u2010-\u2015\u2212\uFE58\uFE63\uFF0D]")
_UNICODE_SPACE_RE = re.compile("[\u00A0\u202F\u2000-\u200A\u2028\u2029\u3000]")
_MULTI_SPACE_RE = re.compile(r" +")


def normalize_key(raw: str | None) -> str:
    """Return a lowercase, accent-less key with apostrophes, dashes and spaces folded."""
    if not raw:
        return ""
    if raw.isascii():
        return _MULTI_SPACE_RE.sub(" ", raw.lower()).strip()
    value = unicodedata.normalize("NFKD", raw)
    value = _SMART_APOSTROPHE_RE.sub("'", value)
    value = _UNICODE_DASH_RE.sub("-", value)
    value = _UNICODE_SPACE_RE.sub(" ", value)
    value = value.lower()
    value = "".join(ch for ch in value if not unicodedata.category(ch).startswith("M"))
    # lower() can emit combining marks (e.g. dotted capital I), strip them again.
    value = unicodedata.normalize("NFKD", value)
    value = "".join(ch for ch in value if not unicodedata.category(ch).startswith("M"))
    return _MULTI_SPACE_RE.sub(" ", value).strip()


def canonical_form(raw: str | None) -> str:
    """Return the display form: accents kept, punctuation and spaces unified, NFC."""
    if not raw:
        return ""
    value = _SMART_APOSTROPHE_RE.sub("'", raw)
    value = _UNICODE_DASH_RE.sub("-", value)
    value = _UNICODE_SPACE_RE.sub(" ", value)
    value = unicodedata.normalize("NFC", value)
    return _MULTI_SPACE_RE.sub(" ", value).strip()


def same_surface(left: str, right: str) -> bool:
    return canonical_form(left).lower() == canonical_form(right).lower()
