"""Per-surface disambiguation: casing preference, dedup and display ranking."""
from __future__ import annotations

from typing import Sequence

from .grammar import (
    TYPE_ADJECTIVE,
    TYPE_ADVERB,
    TYPE_COMMON_NOUN,
    TYPE_CONJUNCTION,
    TYPE_DETERMINER,
    TYPE_PREPOSITION,
    TYPE_PRONOUN,
    TYPE_PROPER_NOUN,
    TYPE_VERB,
)
from .models import Analysis
from .normalization import same_surface

TYPE_ORDER = (
    TYPE_PRONOUN,
    TYPE_DETERMINER,
    TYPE_CONJUNCTION,
    TYPE_PREPOSITION,
    TYPE_ADVERB,
    TYPE_VERB,
    TYPE_ADJECTIVE,
    TYPE_COMMON_NOUN,
    TYPE_PROPER_NOUN,
)
_TYPE_RANK = {word_type: index for index, word_type in enumerate(TYPE_ORDER)}
UNRANKED = 99


def prefer_exact_form_match(surface: str, analyses: Sequence[Analysis]) -> list[Analysis]:
    exact = [analysis for analysis in analyses if same_surface(analysis.form, surface)]
    return exact if exact else list(analyses)


def dedup_key(analysis: Analysis) -> str:
    grammar = analysis.grammar
    return "|".join(
        [
            analysis.form,
            analysis.lemma_key,
            analysis.pos,
            analysis.traits or "",
            grammar.type,
            grammar.auxiliary or "",
            "1" if grammar.clitic else "",
            grammar.role or "",
            grammar.gender or "",
            grammar.number or "",
            grammar.mood or "",
            grammar.tense or "",
            grammar.participle or "",
            "".join(str(person) for person in grammar.persons or ()),
        ]
    )


def dedup_analyses(analyses: Sequence[Analysis]) -> list[Analysis]:
    seen: set[str] = set()
    out: list[Analysis] = []
    for analysis in analyses:
        key = dedup_key(analysis)
        if key in seen:
            continue
        seen.add(key)
        out.append(analysis)
    return out


def rank_type(word_type: str) -> int:
    return _TYPE_RANK.get(word_type, UNRANKED)


def sort_human_readable(analyses: Sequence[Analysis]) -> list[Analysis]:
    return sorted(analyses, key=lambda analysis: rank_type(analysis.grammar.type))


def apply_per_form_rules(surface: str, analyses: Sequence[Analysis]) -> list[Analysis]:
    """Filter and order the candidate analyses of one surface form.

    The steps run in a fixed order: exact-casing preference, dedup, then a
    stable sort by word-type rank. Ambiguity between word types is kept.
    """
    out = prefer_exact_form_match(surface, analyses)
    out = dedup_analyses(out)
    return sort_human_readable(out)
