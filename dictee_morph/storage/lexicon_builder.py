"""Offline build of the three lexicon lookup tables from a LEFFF .mlex dump."""
from __future__ import annotations

from dataclasses import dataclass, field
import json
import logging
import os
from typing import Iterable
import unicodedata

from ..domain.grammar import find_ambiguous_traits
from ..domain.models import LexicalEntry
from ..domain.normalization import canonical_form, normalize_key
from .assets import FORM_TO_ANALYSES_ASSET, LEMMA_POS_TO_FORMS_ASSET, LEMMA_TO_FORMS_ASSET

logger = logging.getLogger(__name__)

# Clitic codes are keyed by surface form so "je" and "il" stay distinct.
SURFACE_LEMMA_POS_CODES = {"cln", "cla", "cld", "clr", "clg", "cll", "ilimp"}


@dataclass
class BuildStats:
    total_lines: int = 0
    empty_or_comment: int = 0
    malformed: int = 0
    processed: int = 0
    ambiguous_traits: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "total_lines": self.total_lines,
            "empty_or_comment": self.empty_or_comment,
            "malformed": self.malformed,
            "processed": self.processed,
            "ambiguous_traits": self.ambiguous_traits,
        }


@dataclass(frozen=True)
class LexiconBuild:
    form_to_analyses: dict[str, list[LexicalEntry]]
    lemma_to_forms: dict[str, list[str]]
    lemma_pos_to_forms: dict[str, list[str]]
    stats: BuildStats = field(default_factory=BuildStats)

    def payloads(self) -> dict[str, dict[str, object]]:
        """Return the JSON-ready tables keyed by asset file name."""
        return {
            FORM_TO_ANALYSES_ASSET: {
                key: [entry.to_dict() for entry in entries]
                for key, entries in self.form_to_analyses.items()
            },
            LEMMA_TO_FORMS_ASSET: dict(self.lemma_to_forms),
            LEMMA_POS_TO_FORMS_ASSET: dict(self.lemma_pos_to_forms),
        }


def effective_lemma(form: str, pos: str, lemma: str) -> str:
    if pos in SURFACE_LEMMA_POS_CODES:
        return form
    return lemma


def lemma_pos_key(lemma: str, pos: str) -> str:
    return normalize_key(f"{lemma} {pos}")


def collation_key(value: str) -> tuple[str, str, str]:
    """Sort key approximating a French base-strength collation.

    Accents, case and punctuation are ignored first; ties fall back to an
    accent-aware comparison and finally the raw string, so the order never
    depends on input order.
    """
    primary = "".join(ch for ch in normalize_key(value) if ch.isalnum())
    decomposed = unicodedata.normalize("NFD", value.casefold())
    secondary = "".join(
        ch for ch in decomposed if ch.isalnum() or unicodedata.category(ch).startswith("M")
    )
    return primary, secondary, value


def sort_forms(forms: Iterable[str]) -> list[str]:
    return sorted(set(forms), key=collation_key)


def _trimmed_or_none(value: str | None) -> str | None:
    if value is None:
        return None
    trimmed = value.strip()
    return trimmed or None


def build_lexicon(lines: Iterable[str]) -> LexiconBuild:
    """Parse dump lines (``form\\tpos\\tlemma\\ttraits``) into lookup tables."""
    stats = BuildStats()
    form_to_analyses: dict[str, list[LexicalEntry]] = {}
    seen_entries: dict[str, set[LexicalEntry]] = {}
    lemma_forms: dict[str, set[str]] = {}
    lemma_pos_forms: dict[str, set[str]] = {}

    for line_number, line in enumerate(lines, start=1):
        stats.total_lines += 1
        raw = line.strip()
        if not raw or raw.startswith("#"):
            stats.empty_or_comment += 1
            continue

        parts = raw.split("\t")
        if len(parts) < 3:
            stats.malformed += 1
            logger.debug("Skipping malformed line %s: %r", line_number, raw)
            continue

        raw_form = _trimmed_or_none(parts[0])
        raw_pos = _trimmed_or_none(parts[1])
        raw_lemma = _trimmed_or_none(parts[2])
        traits = _trimmed_or_none(parts[3]) if len(parts) > 3 else None
        if not raw_form or not raw_pos or not raw_lemma:
            stats.malformed += 1
            logger.debug("Skipping line %s with empty mandatory field: %r", line_number, raw)
            continue

        form = canonical_form(raw_form)
        lemma = effective_lemma(form, raw_pos, canonical_form(raw_lemma))
        entry = LexicalEntry(form=form, lemma=lemma, pos=raw_pos, traits=traits)

        form_key = normalize_key(raw_form)
        known_entries = seen_entries.setdefault(form_key, set())
        if entry not in known_entries:
            known_entries.add(entry)
            form_to_analyses.setdefault(form_key, []).append(entry)

        lemma_forms.setdefault(normalize_key(lemma), set()).add(form)
        lemma_pos_forms.setdefault(lemma_pos_key(lemma, raw_pos), set()).add(form)

        if find_ambiguous_traits(raw_pos, traits):
            stats.ambiguous_traits += 1
        stats.processed += 1

    return LexiconBuild(
        form_to_analyses=form_to_analyses,
        lemma_to_forms={key: sort_forms(forms) for key, forms in lemma_forms.items()},
        lemma_pos_to_forms={key: sort_forms(forms) for key, forms in lemma_pos_forms.items()},
        stats=stats,
    )


def build_lexicon_from_file(path: str) -> LexiconBuild:
    if not os.path.isfile(path):
        raise FileNotFoundError(
            f"Input file not found: {path} (expected lines 'form\\tPOS\\tlemma\\ttraits')"
        )
    with open(path, "r", encoding="utf-8") as handle:
        build = build_lexicon(handle)
    logger.info(
        "Lexicon dump parsed: lines=%s processed=%s malformed=%s skipped=%s ambiguous_traits=%s",
        build.stats.total_lines,
        build.stats.processed,
        build.stats.malformed,
        build.stats.empty_or_comment,
        build.stats.ambiguous_traits,
    )
    return build


def serialize_table(table: dict[str, object]) -> str:
    return json.dumps(table, ensure_ascii=False, separators=(",", ":"), sort_keys=True) + "\n"


def write_lexicon(build: LexiconBuild, output_dir: str) -> list[str]:
    """Write the three JSON tables into ``output_dir`` and return their paths."""
    os.makedirs(output_dir, exist_ok=True)
    written: list[str] = []
    for name, table in build.payloads().items():
        path = os.path.join(output_dir, name)
        with open(path, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(serialize_table(table))
        written.append(path)
    logger.info(
        "Lexicon exported: forms=%s lemmas=%s lemma_pos=%s dir=%s",
        len(build.form_to_analyses),
        len(build.lemma_to_forms),
        len(build.lemma_pos_to_forms),
        output_dir,
    )
    return written
