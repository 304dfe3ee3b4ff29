"""Selected-word records and their one-time upgrade from legacy shapes.

Stored vocabulary went through several shapes: bare ``{"lemma": ...}`` or
``{"surface": ...}`` dicts, ``{"word": {...}}`` base-word records, and the
current records tagged with ``kind``. ``upgrade_word_record`` turns any of them
into one of the three tagged dataclasses below; code past the storage boundary
only dispatches on those types.
"""
from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Any, Iterable, Mapping, Union

from .normalization import normalize_key

# Codes whose surface form is shown instead of the dictionary lemma.
CLITIC_POS_CODES = {"cla", "cld", "cln", "clr", "clg", "cll", "ilimp", "caimp"}
DISPLAY_FORM_POS_CODES = CLITIC_POS_CODES | {"det"}

POS_LABELS: dict[str, str] = {
    "nc": "nom commun",
    "np": "nom propre",
    "adj": "adjectif",
    "det": "déterminant",
    "v": "verbe",
    "auxEtre": "verbe auxiliaire",
    "auxAvoir": "verbe auxiliaire",
    "adv": "adverbe",
    "prep": "préposition",
    "pres": "présentatif",
    "coo": "conjonction",
    "csu": "conjonction",
    "que": "conjonction",
    "que_restr": "conjonction",
    "prel": "pronom relatif",
    "pro": "pronom",
    "pri": "pronom interrogatif",
    "cla": "pronom",
    "cld": "pronom",
    "cln": "pronom",
    "clr": "pronom",
    "clg": "pronom",
    "cll": "pronom",
    "ilimp": "pronom impersonnel",
    "caimp": "pronom démonstratif",
}

_TRAILING_PUNCT_RE = re.compile(r"([?!:;])$")


@dataclass(frozen=True)
class LemmaWord:
    lemma: str
    lemma_display: str
    pos: str
    kind: str = "lemma"


@dataclass(frozen=True)
class ExoticWord:
    surface: str
    kind: str = "exotic"


@dataclass(frozen=True)
class ExceptionalWord:
    surface: str
    exception_type: str
    kind: str = "exceptional"


SelectedWord = Union[LemmaWord, ExoticWord, ExceptionalWord]


def lemma_display_for(form: str, lemma: str, pos: str) -> str | None:
    """Return the display override for clitics and determiners, else ``None``."""
    if pos in DISPLAY_FORM_POS_CODES:
        return form
    return None


def upgrade_word_record(raw: Any) -> SelectedWord | None:
    """Convert a stored word record of any known shape into a tagged word."""
    if isinstance(raw, (LemmaWord, ExoticWord, ExceptionalWord)):
        return raw
    if not isinstance(raw, Mapping):
        return None

    nested = raw.get("word")
    if isinstance(nested, Mapping):
        return _lemma_word_from_entry(nested)

    kind = str(raw.get("kind") or "").strip()
    surface = str(raw.get("surface") or "").strip()
    lemma = str(raw.get("lemma") or "").strip()
    exception_type = str(raw.get("exceptionType") or "").strip()

    if kind == "exceptional" or (not kind and surface and exception_type):
        if not surface or not exception_type:
            return None
        return ExceptionalWord(surface=surface, exception_type=exception_type)
    if kind == "lemma" or (not kind and lemma):
        if not lemma:
            return None
        display = str(raw.get("lemmaDisplay") or "").strip() or lemma
        return LemmaWord(lemma=lemma, lemma_display=display, pos=str(raw.get("pos") or ""))
    if kind == "exotic" or (not kind and surface):
        if not surface:
            return None
        return ExoticWord(surface=surface)
    return None


def _lemma_word_from_entry(entry: Mapping) -> LemmaWord | None:
    lemma = str(entry.get("lemma") or "").strip()
    if not lemma:
        return None
    pos = str(entry.get("pos") or "").strip()
    form = str(entry.get("form") or "").strip() or lemma
    display = lemma_display_for(form, lemma, pos) or lemma
    return LemmaWord(lemma=lemma, lemma_display=display, pos=pos)


def upgrade_word_records(records: Iterable[Any]) -> list[SelectedWord]:
    upgraded: list[SelectedWord] = []
    for record in records:
        word = upgrade_word_record(record)
        if word is not None:
            upgraded.append(word)
    return upgraded


def known_vocabulary_keys(records: Iterable[Any]) -> frozenset[str]:
    """Build the normalized known-vocabulary set from stored word records."""
    keys: set[str] = set()
    for word in upgrade_word_records(records):
        if isinstance(word, LemmaWord):
            keys.add(normalize_key(word.lemma))
            keys.add(normalize_key(word.lemma_display))
        else:
            keys.add(normalize_key(word.surface))
    keys.discard("")
    return frozenset(keys)


def get_mapped_pos(pos: str) -> str:
    return POS_LABELS.get(pos, pos)


def format_lemma_display(lemma: str) -> str:
    return _TRAILING_PUNCT_RE.sub(r" \1", lemma)


def render_word(word: SelectedWord) -> str:
    if isinstance(word, LemmaWord):
        return f"{format_lemma_display(word.lemma_display)} ({get_mapped_pos(word.pos)})"
    if isinstance(word, ExceptionalWord):
        return f"{word.surface} ({word.exception_type})"
    return word.surface


def word_key(word: SelectedWord) -> str:
    if isinstance(word, LemmaWord):
        return f"lemma:{word.lemma}:{word.pos}"
    if isinstance(word, ExceptionalWord):
        return f"exceptional:{word.surface}:{word.exception_type}"
    return f"exotic:{word.surface}"


def words_are_equal(first: SelectedWord, second: SelectedWord) -> bool:
    if isinstance(first, LemmaWord) and isinstance(second, LemmaWord):
        return first.lemma == second.lemma and first.pos == second.pos
    return type(first) is type(second) and first == second


def word_to_dict(word: SelectedWord) -> dict[str, str]:
    if isinstance(word, LemmaWord):
        return {
            "kind": word.kind,
            "lemma": word.lemma,
            "lemmaDisplay": word.lemma_display,
            "pos": word.pos,
        }
    if isinstance(word, ExceptionalWord):
        return {"kind": word.kind, "surface": word.surface, "exceptionType": word.exception_type}
    return {"kind": word.kind, "surface": word.surface}
