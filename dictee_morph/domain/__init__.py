"""Pure domain logic: tokenization, grammar decoding and disambiguation."""

from .elision import elided_bases_for, elided_bases_from_token_text, is_bare_elision_marker
from .grammar import Grammar, decode_grammar, find_ambiguous_traits
from .models import (
    Analysis,
    AnalyzedToken,
    AnalyzeResult,
    AnalyzeStats,
    LemmaGroup,
    LemmaWithForms,
    LexicalEntry,
)
from .normalization import canonical_form, normalize_key
from .rules import apply_per_form_rules, dedup_key, sort_human_readable
from .tokenizer import Span, match_elision_at, tokenize
from .word_exceptions import get_all_exceptional_words, get_word_exception
from .words import (
    ExceptionalWord,
    ExoticWord,
    LemmaWord,
    SelectedWord,
    get_mapped_pos,
    known_vocabulary_keys,
    render_word,
    upgrade_word_record,
    word_key,
    words_are_equal,
)

__all__ = [
    "Analysis",
    "AnalyzeResult",
    "AnalyzeStats",
    "AnalyzedToken",
    "ExceptionalWord",
    "ExoticWord",
    "Grammar",
    "LemmaGroup",
    "LemmaWithForms",
    "LemmaWord",
    "LexicalEntry",
    "SelectedWord",
    "Span",
    "apply_per_form_rules",
    "canonical_form",
    "decode_grammar",
    "dedup_key",
    "elided_bases_for",
    "elided_bases_from_token_text",
    "find_ambiguous_traits",
    "get_all_exceptional_words",
    "get_mapped_pos",
    "get_word_exception",
    "is_bare_elision_marker",
    "known_vocabulary_keys",
    "match_elision_at",
    "normalize_key",
    "render_word",
    "sort_human_readable",
    "tokenize",
    "upgrade_word_record",
    "word_key",
    "words_are_equal",
]
