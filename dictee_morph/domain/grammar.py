"""Decode LEFFF POS codes and compact trait strings into structured grammar.

Decoding runs in two phases. The static phase maps the POS code alone to a
word type plus the fixed auxiliary/clitic/role flags of a few codes. The trait
phase only runs for verb-family codes and reads mood, tense, participle and
persons out of the trait string. Gender and number are read for every code.

Trait markers are not mutually exclusive substrings ("PS" contains "P" and
"S"), so each field is decoded by an ordered tuple of ``(predicate, value)``
rules where the first match wins. The order of every rule table below is part
of the decoding contract.
"""
from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Callable

TYPE_VERB = "verbe"
TYPE_COMMON_NOUN = "nom commun"
TYPE_PROPER_NOUN = "nom propre"
TYPE_ADJECTIVE = "adjectif"
TYPE_ADVERB = "adverbe"
TYPE_DETERMINER = "déterminant"
TYPE_PRONOUN = "pronom"
TYPE_PREPOSITION = "préposition"
TYPE_CONJUNCTION = "conjonction"
TYPE_OTHER = "autre"

WORD_TYPES = (
    TYPE_VERB,
    TYPE_COMMON_NOUN,
    TYPE_PROPER_NOUN,
    TYPE_ADJECTIVE,
    TYPE_ADVERB,
    TYPE_DETERMINER,
    TYPE_PRONOUN,
    TYPE_PREPOSITION,
    TYPE_CONJUNCTION,
    TYPE_OTHER,
)

MOOD_INDICATIVE = "indicatif"
MOOD_SUBJUNCTIVE = "subjonctif"
MOOD_IMPERATIVE = "impératif"
MOOD_INFINITIVE = "infinitif"
MOOD_PARTICIPLE = "participe"
MOOD_GERUND = "gérondif"
MOOD_CONDITIONAL = "conditionnel"

NON_FINITE_MOODS = {MOOD_INFINITIVE, MOOD_GERUND, MOOD_PARTICIPLE}

TENSE_PRESENT = "présent"
TENSE_IMPERFECT = "imparfait"
TENSE_FUTURE = "futur"
TENSE_SIMPLE_PAST = "passé simple"

VERB_POS_CODES = {"v", "auxEtre", "auxAvoir"}

# pos -> (type, auxiliary, clitic, role)
_STATIC_POS_TABLE: dict[str, tuple[str, str | None, bool | None, str | None]] = {
    "v": (TYPE_VERB, None, None, None),
    "auxEtre": (TYPE_VERB, "être", None, None),
    "auxAvoir": (TYPE_VERB, "avoir", None, None),
    "nc": (TYPE_COMMON_NOUN, None, None, None),
    "np": (TYPE_PROPER_NOUN, None, None, None),
    "adj": (TYPE_ADJECTIVE, None, None, None),
    "adv": (TYPE_ADVERB, None, None, None),
    "det": (TYPE_DETERMINER, None, None, None),
    "prep": (TYPE_PREPOSITION, None, None, None),
    "coo": (TYPE_CONJUNCTION, None, None, None),
    "csu": (TYPE_CONJUNCTION, None, None, None),
    "prel": (TYPE_CONJUNCTION, None, None, None),
    "pri": (TYPE_CONJUNCTION, None, None, None),
    "que": (TYPE_CONJUNCTION, None, None, None),
    "que_restr": (TYPE_CONJUNCTION, None, None, None),
    "pro": (TYPE_PRONOUN, None, None, None),
    "cla": (TYPE_PRONOUN, None, True, "objet direct"),
    "cld": (TYPE_PRONOUN, None, True, "objet indirect"),
    "clr": (TYPE_PRONOUN, None, True, "réfléchi"),
    "clg": (TYPE_PRONOUN, None, True, "adverbial"),
    "cll": (TYPE_PRONOUN, None, True, "adverbial"),
    "cln": (TYPE_PRONOUN, None, True, "sujet"),
    "ilimp": (TYPE_PRONOUN, None, None, "impersonnel"),
}

_CAPS_RE = re.compile(r"[A-Z]+")
_PERSONS_RE = re.compile(r"([123]{1,3})([sp])?", re.IGNORECASE)
_LEADING_PRESENT_RE = re.compile(r"^P(?!S)")

Rule = tuple[Callable[[str], bool], str]


@dataclass(frozen=True)
class Grammar:
    type: str
    gender: str | None = None
    number: str | None = None
    mood: str | None = None
    tense: str | None = None
    participle: str | None = None
    persons: tuple[int, ...] | None = None
    role: str | None = None
    clitic: bool | None = None
    auxiliary: str | None = None

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {"type": self.type}
        for name in (
            "gender",
            "number",
            "mood",
            "tense",
            "participle",
            "persons",
            "role",
            "clitic",
            "auxiliary",
        ):
            value = getattr(self, name)
            if value is None:
                continue
            payload[name] = list(value) if name == "persons" else value
        return payload


def _has(marker: str) -> Callable[[str], bool]:
    return lambda caps: marker in caps


def _leading_present(caps: str) -> bool:
    return bool(_LEADING_PRESENT_RE.match(caps))


# Non-finite markers first, future folds into the indicative, and the
# two-letter "PS" is checked before the bare "S".
MOOD_RULES: tuple[Rule, ...] = (
    (_has("W"), MOOD_INFINITIVE),
    (_has("G"), MOOD_GERUND),
    (_has("Y"), MOOD_IMPERATIVE),
    (_has("K"), MOOD_PARTICIPLE),
    (_has("F"), MOOD_INDICATIVE),
    (_has("PS"), MOOD_SUBJUNCTIVE),
    (_has("S"), MOOD_SUBJUNCTIVE),
    (_has("C"), MOOD_CONDITIONAL),
    (_has("I"), MOOD_INDICATIVE),
    (_leading_present, MOOD_INDICATIVE),
    (_has("J"), MOOD_INDICATIVE),
)

INDICATIVE_TENSE_RULES: tuple[Rule, ...] = (
    (lambda caps: caps.startswith("P") and "S" not in caps, TENSE_PRESENT),
    (_has("I"), TENSE_IMPERFECT),
    (_has("F"), TENSE_FUTURE),
    (_has("J"), TENSE_SIMPLE_PAST),
)

SUBJUNCTIVE_TENSE_RULES: tuple[Rule, ...] = (
    (_has("PS"), TENSE_PRESENT),
    (_has("S"), TENSE_PRESENT),
)

PARTICIPLE_RULES: tuple[Rule, ...] = (
    (lambda caps: "K" in caps and "P" in caps, "présent"),
    (_has("K"), "passé"),
)

GENDER_RULES: tuple[Rule, ...] = (
    (_has("m"), "masculin"),
    (_has("f"), "féminin"),
)

NUMBER_RULES: tuple[Rule, ...] = (
    (_has("s"), "singulier"),
    (_has("p"), "pluriel"),
)


def first_match(rules: tuple[Rule, ...], value: str) -> str | None:
    for predicate, result in rules:
        if predicate(value):
            return result
    return None


def trait_markers(traits: str | None) -> str:
    """Return the uppercase markers of a trait string, joined ("P3s" -> "P")."""
    if not traits:
        return ""
    return "".join(_CAPS_RE.findall(traits))


def is_verb_pos(pos: str) -> bool:
    return pos in VERB_POS_CODES


def decode_mood(traits: str | None) -> str | None:
    caps = trait_markers(traits)
    if not caps:
        return None
    return first_match(MOOD_RULES, caps)


def decode_tense(traits: str | None, mood: str | None) -> str | None:
    caps = trait_markers(traits)
    if not caps or mood is None or mood in NON_FINITE_MOODS:
        return None
    if mood == MOOD_INDICATIVE:
        return first_match(INDICATIVE_TENSE_RULES, caps)
    if mood == MOOD_SUBJUNCTIVE:
        return first_match(SUBJUNCTIVE_TENSE_RULES, caps)
    if mood == MOOD_CONDITIONAL:
        return TENSE_PRESENT
    return None


def decode_participle(traits: str | None) -> str | None:
    caps = trait_markers(traits)
    if not caps:
        return None
    return first_match(PARTICIPLE_RULES, caps)


def decode_persons(traits: str | None) -> tuple[int, ...] | None:
    if not traits:
        return None
    match = _PERSONS_RE.search(traits)
    if match is None:
        return None
    return tuple(int(digit) for digit in match.group(1))


def decode_gender(traits: str | None) -> str | None:
    if not traits:
        return None
    return first_match(GENDER_RULES, traits)


def decode_number(traits: str | None) -> str | None:
    if not traits:
        return None
    return first_match(NUMBER_RULES, traits)


def decode_grammar(pos: str, traits: str | None = None) -> Grammar:
    word_type, auxiliary, clitic, role = _STATIC_POS_TABLE.get(
        pos, (TYPE_OTHER, None, None, None)
    )
    gender = decode_gender(traits)
    number = decode_number(traits)
    if not is_verb_pos(pos):
        return Grammar(
            type=word_type,
            gender=gender,
            number=number,
            role=role,
            clitic=clitic,
            auxiliary=auxiliary,
        )

    mood = decode_mood(traits)
    return Grammar(
        type=word_type,
        gender=gender,
        number=number,
        mood=mood,
        tense=decode_tense(traits, mood),
        participle=decode_participle(traits) if mood == MOOD_PARTICIPLE else None,
        persons=decode_persons(traits),
        role=role,
        clitic=clitic,
        auxiliary=auxiliary,
    )


def find_ambiguous_traits(pos: str, traits: str | None) -> list[str]:
    """List marker combinations that only decode through rule precedence.

    Used by the lexicon builder to flag entries for linguistic review.
    """
    if not is_verb_pos(pos):
        return []
    caps = trait_markers(traits)
    if not caps:
        return []
    notes: list[str] = []
    if "PS" in caps:
        notes.append("PS read as subjonctif présent")
    if "F" in caps and any(marker in caps for marker in "PSCIJ"):
        notes.append("F read as indicatif futur over other finite markers")
    if "S" in caps and "PS" not in caps and any(marker in caps for marker in "CIJ"):
        notes.append("S read as subjonctif over other finite markers")
    return notes
