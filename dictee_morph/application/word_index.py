"""Normalized inflected-form sets used to match selected words against raw text."""
from __future__ import annotations

import threading

from ..domain.normalization import normalize_key
from ..domain.words import LemmaWord, SelectedWord
from ..storage.lexicon_store import LexiconStore


class WordIndex:
    def __init__(self, store: LexiconStore) -> None:
        self.store = store
        self._cache: dict[tuple[str, str], frozenset[str]] = {}
        self._lock = threading.Lock()

    def forms_for_word(self, word: SelectedWord) -> frozenset[str]:
        """Return the normalized forms under which ``word`` can appear in text.

        Lemma words expand to every inflected form of the lemma for their POS;
        exotic and exceptional words only match their own surface.
        """
        if not isinstance(word, LemmaWord):
            key = normalize_key(word.surface)
            return frozenset({key}) if key else frozenset()

        cache_key = (word.lemma, word.pos)
        with self._lock:
            cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        forms = self._lookup_forms(word)
        normalized = frozenset(key for key in (normalize_key(form) for form in forms) if key)
        with self._lock:
            self._cache[cache_key] = normalized
        return normalized

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def _lookup_forms(self, word: LemmaWord) -> tuple[str, ...]:
        forms = self.store.get_forms_for_lemma_and_pos(word.lemma, word.pos)
        if forms or not word.pos:
            return forms or self.store.get_forms_for_lemma(word.lemma)
        # No lemma+POS row: keep the lemma's forms that have an analysis with this POS.
        return tuple(
            form
            for form in self.store.get_forms_for_lemma(word.lemma)
            if any(
                analysis.pos == word.pos and analysis.lemma_key == normalize_key(word.lemma)
                for analysis in self.store.get_analyses(form)
            )
        )
