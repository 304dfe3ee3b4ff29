"""Value types produced by the lexicon and the analysis pipeline."""
from __future__ import annotations

from dataclasses import dataclass, field

from .grammar import Grammar


@dataclass(frozen=True)
class LexicalEntry:
    form: str
    lemma: str
    pos: str
    traits: str | None = None

    def to_dict(self) -> dict[str, str]:
        payload = {"form": self.form, "lemma": self.lemma, "pos": self.pos}
        if self.traits:
            payload["traits"] = self.traits
        return payload


@dataclass(frozen=True)
class Analysis:
    form: str
    lemma: str
    lemma_key: str
    pos: str
    grammar: Grammar
    traits: str | None = None
    lemma_display: str | None = None

    @property
    def display_lemma(self) -> str:
        return self.lemma_display or self.lemma

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "form": self.form,
            "lemma": self.lemma,
            "lemmaKey": self.lemma_key,
            "pos": self.pos,
            "grammar": self.grammar.to_dict(),
        }
        if self.traits:
            payload["traits"] = self.traits
        if self.lemma_display:
            payload["lemmaDisplay"] = self.lemma_display
        return payload


@dataclass(frozen=True)
class LemmaGroup:
    lemma: str
    lemma_key: str
    lemma_display: str
    pos: tuple[str, ...]
    grammar: Grammar

    def to_dict(self) -> dict[str, object]:
        return {
            "lemma": self.lemma,
            "lemmaKey": self.lemma_key,
            "lemmaDisplay": self.lemma_display,
            "pos": list(self.pos),
            "grammar": self.grammar.to_dict(),
        }


@dataclass(frozen=True)
class LemmaWithForms:
    word: str
    pos: str
    forms: tuple[str, ...]
    kind: str = "lemma"

    def to_dict(self) -> dict[str, object]:
        return {"kind": self.kind, "word": self.word, "pos": self.pos, "forms": list(self.forms)}


@dataclass(frozen=True)
class AnalyzedToken:
    start: int
    end: int
    text: str
    is_word: bool
    found: bool = False
    known: bool = False
    ambiguous: bool = False
    analyses: tuple[Analysis, ...] = field(default_factory=tuple)
    lemmas: tuple[LemmaGroup, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, object]:
        return {
            "start": self.start,
            "end": self.end,
            "text": self.text,
            "isWord": self.is_word,
            "found": self.found,
            "known": self.known,
            "ambiguous": self.ambiguous,
            "analyses": [analysis.to_dict() for analysis in self.analyses],
            "lemmas": [group.to_dict() for group in self.lemmas],
        }


@dataclass(frozen=True)
class AnalyzeStats:
    total_words: int = 0
    found_words: int = 0
    ambiguous_words: int = 0
    unique_lemmas: int = 0
    known: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "totalWords": self.total_words,
            "foundWords": self.found_words,
            "ambiguousWords": self.ambiguous_words,
            "uniqueLemmas": self.unique_lemmas,
            "known": self.known,
        }


@dataclass(frozen=True)
class AnalyzeResult:
    tokens: tuple[AnalyzedToken, ...]
    stats: AnalyzeStats

    def to_dict(self) -> dict[str, object]:
        return {
            "tokens": [token.to_dict() for token in self.tokens],
            "stats": self.stats.to_dict(),
        }
