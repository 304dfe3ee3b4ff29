"""Application bootstrap assembly for the lexicon and analysis services."""
from __future__ import annotations

from dataclasses import dataclass
import json
import os

import psutil

from ..config import AppConfig
from ..domain.words import known_vocabulary_keys
from ..storage.assets import FileAssetReader
from ..storage.lexicon_store import LexiconStore
from ..utils import format_bytes
from .analysis_service import AnalysisService
from .word_index import WordIndex


@dataclass(frozen=True)
class AppServices:
    asset_reader: FileAssetReader
    lexicon_store: LexiconStore
    analysis_service: AnalysisService
    word_index: WordIndex
    known_words: frozenset[str]


def load_known_words(path: str, logger) -> frozenset[str]:
    """Read stored word records (a JSON list, or ``{"baseWords": [...]}``)."""
    if not path:
        return frozenset()
    if not os.path.isfile(path):
        logger.warning("Known words file not found: %s", path)
        return frozenset()
    with open(path, "r", encoding="utf-8") as handle:
        try:
            payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Known words file is not valid JSON: {path}") from exc
    if isinstance(payload, dict):
        payload = payload.get("baseWords", [])
    if not isinstance(payload, list):
        raise ValueError(f"Known words file must hold a list of word records: {path}")
    keys = known_vocabulary_keys(payload)
    logger.info("Known words loaded: path=%s records=%s keys=%s", path, len(payload), len(keys))
    return keys


def initialize_services(*, config: AppConfig, logger) -> AppServices:
    """Construct all runtime services and return a typed service bundle."""
    asset_reader = FileAssetReader(config.lexicon_assets_dir)
    lexicon_store = LexiconStore(asset_reader, logger_instance=logger)
    logger.info("Lexicon assets directory: %s", config.lexicon_assets_dir or "<unset>")

    if config.lexicon_preload:
        lexicon_store.load()
        rss = psutil.Process().memory_info().rss
        logger.info("Process RSS after lexicon load: %s", format_bytes(rss))

    known_words = load_known_words(config.known_words_path, logger)
    analysis_service = AnalysisService(
        lexicon_store,
        known_words,
        max_workers=config.analyze_workers,
        parallel_min_tokens=config.analyze_parallel_min_tokens,
        logger_instance=logger,
    )
    return AppServices(
        asset_reader=asset_reader,
        lexicon_store=lexicon_store,
        analysis_service=analysis_service,
        word_index=WordIndex(lexicon_store),
        known_words=known_words,
    )
