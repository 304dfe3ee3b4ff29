"""In-memory lexicon tables loaded once from serialized assets."""
from __future__ import annotations

from dataclasses import dataclass
import json
import logging
import threading
from typing import TYPE_CHECKING, Any, Mapping
import unicodedata

from ..domain.grammar import decode_grammar
from ..domain.models import Analysis, LemmaWithForms
from ..domain.normalization import normalize_key
from ..domain.words import lemma_display_for
from .assets import FORM_TO_ANALYSES_ASSET, LEMMA_POS_TO_FORMS_ASSET, LEMMA_TO_FORMS_ASSET
from .lexicon_builder import collation_key, lemma_pos_key

if TYPE_CHECKING:
    from ..application.ports import AssetReader

logger = logging.getLogger(__name__)

MIN_SUGGESTION_PREFIX = 4


class LexiconError(RuntimeError):
    """Base class for lexicon store failures."""


class NotLoadedError(LexiconError):
    """Raised when the lexicon is queried before a successful load."""


class LoadFailedError(LexiconError):
    """Raised when reading or parsing the lexicon assets fails."""


@dataclass(frozen=True)
class LexiconTables:
    form_to_analyses: Mapping[str, tuple[Analysis, ...]]
    lemma_to_forms: Mapping[str, tuple[str, ...]]
    lemma_pos_to_forms: Mapping[str, tuple[str, ...]]


class LexiconStore:
    """Process-wide lexicon handle with a guarded, write-once load.

    ``load`` may be called from several threads; callers arriving during an
    in-flight load wait on the lock and then see the published tables. A failed
    load leaves the store unloaded so the next call starts from scratch.
    """

    def __init__(
        self,
        reader: "AssetReader",
        *,
        form_asset: str = FORM_TO_ANALYSES_ASSET,
        lemma_asset: str = LEMMA_TO_FORMS_ASSET,
        lemma_pos_asset: str = LEMMA_POS_TO_FORMS_ASSET,
        logger_instance=None,
    ) -> None:
        self.reader = reader
        self.form_asset = form_asset
        self.lemma_asset = lemma_asset
        self.lemma_pos_asset = lemma_pos_asset
        self.logger = logger_instance or logger
        self._lock = threading.Lock()
        self._tables: LexiconTables | None = None

    @property
    def is_loaded(self) -> bool:
        return self._tables is not None

    def load(self) -> None:
        if self._tables is not None:
            return
        with self._lock:
            if self._tables is not None:
                return
            try:
                tables = self._read_tables()
            except Exception as exc:
                self._tables = None
                self.logger.exception("Failed to load lexicon assets")
                raise LoadFailedError(f"Failed to load lexicon assets: {exc}") from exc
            self._tables = tables
            self.logger.info(
                "Lexicon loaded: forms=%s lemmas=%s lemma_pos=%s",
                len(tables.form_to_analyses),
                len(tables.lemma_to_forms),
                len(tables.lemma_pos_to_forms),
            )

    def reset(self) -> None:
        with self._lock:
            self._tables = None

    def get_analyses(self, surface: str) -> tuple[Analysis, ...]:
        return self._require_tables().form_to_analyses.get(normalize_key(surface), ())

    def get_forms_for_lemma(self, lemma: str) -> tuple[str, ...]:
        return self._require_tables().lemma_to_forms.get(normalize_key(lemma), ())

    def get_forms_for_lemma_and_pos(self, lemma: str, pos: str) -> tuple[str, ...]:
        return self._require_tables().lemma_pos_to_forms.get(lemma_pos_key(lemma, pos), ())

    def get_word_lemmas(self, word: str) -> list[LemmaWithForms]:
        """Return one lemma entry per POS of ``word`` with the forms for that POS."""
        seen_pos: set[str] = set()
        out: list[LemmaWithForms] = []
        for analysis in self.get_analyses(word):
            if analysis.pos in seen_pos:
                continue
            seen_pos.add(analysis.pos)
            out.append(
                LemmaWithForms(
                    word=analysis.display_lemma,
                    pos=analysis.pos,
                    forms=self.get_forms_for_lemma_and_pos(analysis.lemma, analysis.pos),
                )
            )
        return out

    def get_lemma_suggestions(self, prefix: str) -> list[str]:
        """Return collated lemma forms starting with ``prefix`` (accent-sensitive)."""
        tables = self._require_tables()
        if len(prefix) < MIN_SUGGESTION_PREFIX:
            return []
        key_prefix = normalize_key(prefix)
        if not key_prefix:
            return []

        wanted = _accent_sensitive(prefix)
        suggestions: set[str] = set()
        for lemma_key, forms in tables.lemma_to_forms.items():
            if not lemma_key.startswith(key_prefix):
                continue
            canonical = next((form for form in forms if normalize_key(form) == lemma_key), None)
            if canonical and _starts_with(canonical, wanted) and _is_clean(canonical):
                suggestions.add(canonical)
                continue
            match = next((form for form in forms if _starts_with(form, wanted)), None)
            if match and _is_clean(match):
                suggestions.add(match)
        return sorted(suggestions, key=collation_key)

    def _require_tables(self) -> LexiconTables:
        tables = self._tables
        if tables is None:
            raise NotLoadedError("Lexicon assets not loaded.")
        return tables

    def _read_tables(self) -> LexiconTables:
        forms_payload = _parse_json_object(self.reader.read_text(self.form_asset), self.form_asset)
        lemma_payload = _parse_json_object(
            self.reader.read_text(self.lemma_asset), self.lemma_asset
        )
        lemma_pos_payload = _parse_json_object(
            self.reader.read_text(self.lemma_pos_asset), self.lemma_pos_asset
        )

        form_to_analyses: dict[str, tuple[Analysis, ...]] = {}
        for raw_key, records in forms_payload.items():
            if not isinstance(records, list):
                raise ValueError(f"{self.form_asset}: value for {raw_key!r} must be a list")
            analyses = tuple(_analysis_from_record(record) for record in records)
            key = normalize_key(raw_key)
            form_to_analyses[key] = form_to_analyses.get(key, ()) + analyses

        return LexiconTables(
            form_to_analyses=form_to_analyses,
            lemma_to_forms=_forms_table(lemma_payload, self.lemma_asset),
            lemma_pos_to_forms=_forms_table(lemma_pos_payload, self.lemma_pos_asset),
        )


def _parse_json_object(raw: str, name: str) -> dict[str, Any]:
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"{name}: invalid JSON: {exc.msg}") from exc
    if not isinstance(payload, dict):
        raise ValueError(f"{name}: expected a JSON object")
    return payload


def _analysis_from_record(record: object) -> Analysis:
    if not isinstance(record, dict):
        raise ValueError("analysis record must be a JSON object")
    form = str(record.get("form") or "")
    lemma = str(record.get("lemma") or "")
    pos = str(record.get("pos") or "")
    if not form or not lemma or not pos:
        raise ValueError(f"analysis record is missing form/lemma/pos: {record!r}")
    traits = str(record.get("traits") or "") or None
    return Analysis(
        form=form,
        lemma=lemma,
        lemma_key=str(record.get("lemmaKey") or "") or normalize_key(lemma),
        pos=pos,
        grammar=decode_grammar(pos, traits),
        traits=traits,
        lemma_display=lemma_display_for(form, lemma, pos),
    )


def _forms_table(payload: dict[str, Any], name: str) -> dict[str, tuple[str, ...]]:
    table: dict[str, tuple[str, ...]] = {}
    for raw_key, forms in payload.items():
        if not isinstance(forms, list):
            raise ValueError(f"{name}: value for {raw_key!r} must be a list")
        key = normalize_key(raw_key)
        table[key] = table.get(key, ()) + tuple(str(form) for form in forms)
    return table


def _accent_sensitive(value: str) -> str:
    return unicodedata.normalize("NFC", value).casefold()


def _starts_with(form: str, wanted: str) -> bool:
    return _accent_sensitive(form).startswith(wanted)


def _is_clean(value: str) -> bool:
    return bool(value) and all(ch.isalpha() or ch in "'’ -" for ch in value)


