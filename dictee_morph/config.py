"""Configuration loading from environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .utils import parse_int_env, resolve_path

DEFAULT_PARALLEL_MIN_TOKENS = 256


@dataclass(frozen=True)
class AppConfig:
    log_level: str
    file_log_level: str
    log_dir: str
    log_file: str
    lexicon_assets_dir: str
    lexicon_dump_path: str
    known_words_path: str
    analyze_workers: int = 1
    analyze_parallel_min_tokens: int = DEFAULT_PARALLEL_MIN_TOKENS
    lexicon_preload: bool = True


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_path(name: str, default: str, base_dir: str) -> str:
    raw = os.getenv(name, default).strip()
    return resolve_path(raw, base_dir) if raw else ""


def load_config() -> AppConfig:
    base_dir = str(Path(__file__).resolve().parents[1])
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    file_log_level = os.getenv("FILE_LOG_LEVEL", "DEBUG").upper()
    log_dir = resolve_path(os.getenv("LOG_DIR", "logs"), base_dir)
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(
        log_dir, f"dictee_{datetime.now().strftime('%Y%m%d_%H%M%S_%f')}.log"
    )
    return AppConfig(
        log_level=log_level,
        file_log_level=file_log_level,
        log_dir=log_dir,
        log_file=log_file,
        lexicon_assets_dir=_env_path("LEXICON_ASSETS_DIR", "data/lexicon", base_dir),
        lexicon_dump_path=_env_path("LEXICON_DUMP_PATH", "data/lefff.mlex", base_dir),
        known_words_path=_env_path("KNOWN_WORDS_PATH", "", base_dir),
        analyze_workers=parse_int_env("ANALYZE_WORKERS", 1, min_value=1, max_value=32),
        analyze_parallel_min_tokens=parse_int_env(
            "ANALYZE_PARALLEL_MIN_TOKENS",
            DEFAULT_PARALLEL_MIN_TOKENS,
            min_value=1,
        ),
        lexicon_preload=_env_flag("LEXICON_PRELOAD", "1"),
    )
