"""Per-document analysis: tokenize, resolve every word and aggregate statistics."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
import logging
import threading
from typing import Iterable, Sequence

from ..config import DEFAULT_PARALLEL_MIN_TOKENS
from ..domain.elision import elided_bases_from_token_text, is_bare_elision_marker
from ..domain.models import Analysis, AnalyzedToken, AnalyzeResult, AnalyzeStats, LemmaGroup
from ..domain.normalization import normalize_key
from ..domain.rules import apply_per_form_rules
from ..domain.tokenizer import Span, tokenize
from ..storage.lexicon_store import LexiconStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Resolution:
    span: Span
    analyses: tuple[Analysis, ...]


def group_lemmas(analyses: Sequence[Analysis]) -> tuple[LemmaGroup, ...]:
    """Group analyses by ``(lemma_key, display lemma)`` keeping first-seen order.

    POS codes of repeated lemma/display pairs are merged into the group; the
    grammar of a group is the one of its first analysis.
    """
    groups: dict[tuple[str, str], LemmaGroup] = {}
    for analysis in analyses:
        display = analysis.display_lemma
        key = (analysis.lemma_key, display)
        group = groups.get(key)
        if group is None:
            groups[key] = LemmaGroup(
                lemma=analysis.lemma,
                lemma_key=analysis.lemma_key,
                lemma_display=display,
                pos=(analysis.pos,),
                grammar=analysis.grammar,
            )
        elif analysis.pos not in group.pos:
            groups[key] = replace(group, pos=group.pos + (analysis.pos,))
    return tuple(groups.values())


def is_ambiguous(analyses: Sequence[Analysis]) -> bool:
    if len(analyses) > 1:
        return True
    return len({analysis.grammar.type for analysis in analyses}) > 1


class AnalysisService:
    """Analyze French text against a loaded :class:`LexiconStore`.

    Word tokens are resolved independently, so documents with at least
    ``parallel_min_tokens`` words fan out over a thread pool when
    ``max_workers`` is above one. Results come back in token order either way.
    """

    def __init__(
        self,
        store: LexiconStore,
        known_words: Iterable[str] = (),
        *,
        max_workers: int = 1,
        parallel_min_tokens: int = DEFAULT_PARALLEL_MIN_TOKENS,
        logger_instance=None,
    ) -> None:
        self.store = store
        self.known_words = frozenset(known_words)
        self.max_workers = max(1, int(max_workers))
        self.parallel_min_tokens = max(1, int(parallel_min_tokens))
        self.logger = logger_instance or logger
        self._executor: ThreadPoolExecutor | None = None
        self._executor_lock = threading.Lock()

    def resolve(self, surface: str) -> list[Analysis]:
        """Return the ranked analyses of one word token's raw text."""
        bases = elided_bases_from_token_text(surface)
        if bases:
            candidates: list[Analysis] = []
            for base in bases:
                candidates.extend(self.store.get_analyses(base))
        else:
            candidates = list(self.store.get_analyses(surface))
        return apply_per_form_rules(surface, candidates)

    def analyze(self, text: str, known_words: Iterable[str] | None = None) -> AnalyzeResult:
        known = self.known_words if known_words is None else frozenset(known_words)
        spans = tokenize(text or "")
        resolutions = self._resolve_spans(spans)

        total_words = 0
        found_words = 0
        ambiguous_words = 0
        known_count = 0
        unique_lemmas: set[str] = set()
        tokens: list[AnalyzedToken] = []

        for resolution in resolutions:
            span = resolution.span
            analyses = resolution.analyses
            if not span.is_word or (not analyses and is_bare_elision_marker(span.text)):
                tokens.append(AnalyzedToken(span.start, span.end, span.text, is_word=False))
                continue

            total_words += 1
            if analyses:
                lemmas = group_lemmas(analyses)
                for group in lemmas:
                    unique_lemmas.add(group.lemma_display)
                ambiguous = is_ambiguous(analyses)
                is_known = normalize_key(lemmas[0].lemma_display) in known
                found_words += 1
                if ambiguous:
                    ambiguous_words += 1
                tokens.append(
                    AnalyzedToken(
                        span.start,
                        span.end,
                        span.text,
                        is_word=True,
                        found=True,
                        known=is_known,
                        ambiguous=ambiguous,
                        analyses=analyses,
                        lemmas=lemmas,
                    )
                )
            else:
                is_known = normalize_key(span.text) in known
                tokens.append(
                    AnalyzedToken(span.start, span.end, span.text, is_word=True, known=is_known)
                )
            if is_known:
                known_count += 1

        stats = AnalyzeStats(
            total_words=total_words,
            found_words=found_words,
            ambiguous_words=ambiguous_words,
            unique_lemmas=len(unique_lemmas),
            known=known_count,
        )
        self.logger.debug(
            "Analyzed text: chars=%s words=%s found=%s ambiguous=%s",
            len(text or ""),
            total_words,
            found_words,
            ambiguous_words,
        )
        return AnalyzeResult(tokens=tuple(tokens), stats=stats)

    def close(self) -> None:
        with self._executor_lock:
            executor = self._executor
            self._executor = None
        if executor is not None:
            executor.shutdown(wait=True)

    def _resolve_span(self, span: Span) -> _Resolution:
        if not span.is_word:
            return _Resolution(span, ())
        return _Resolution(span, tuple(self.resolve(span.text)))

    def _resolve_spans(self, spans: list[Span]) -> list[_Resolution]:
        word_count = sum(1 for span in spans if span.is_word)
        if self.max_workers <= 1 or word_count < self.parallel_min_tokens:
            return [self._resolve_span(span) for span in spans]
        return list(self._get_executor().map(self._resolve_span, spans))

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.max_workers,
                    thread_name_prefix="analyze",
                )
            return self._executor
