import os

from dictee_morph.config import DEFAULT_PARALLEL_MIN_TOKENS, load_config
from dictee_morph.utils import format_bytes, parse_int_env, resolve_path


def test_resolve_path_handles_relative_and_absolute(tmp_path):
    base_dir = str(tmp_path)
    relative = "nested/file.txt"
    absolute = str(tmp_path / "absolute.txt")

    assert resolve_path(relative, base_dir) == os.path.join(base_dir, relative)
    assert resolve_path(absolute, base_dir) == absolute
    assert resolve_path("", base_dir) == ""


def test_parse_int_env_applies_default_and_bounds(monkeypatch):
    monkeypatch.setenv("INT_ENV_TEST", "not-a-number")
    assert parse_int_env("INT_ENV_TEST", 7, min_value=1, max_value=10) == 7

    monkeypatch.setenv("INT_ENV_TEST", "100")
    assert parse_int_env("INT_ENV_TEST", 7, min_value=1, max_value=10) == 10

    monkeypatch.setenv("INT_ENV_TEST", "-5")
    assert parse_int_env("INT_ENV_TEST", 7, min_value=1, max_value=10) == 1


def test_format_bytes():
    assert format_bytes(3 * 1024 * 1024) == "3.0 MiB"


def test_load_config_reads_env_and_clamps(monkeypatch, tmp_path):
    monkeypatch.setenv("LOG_LEVEL", "warning")
    monkeypatch.setenv("FILE_LOG_LEVEL", "error")
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("LEXICON_ASSETS_DIR", str(tmp_path / "lexicon"))
    monkeypatch.setenv("LEXICON_DUMP_PATH", str(tmp_path / "lefff.mlex"))
    monkeypatch.setenv("KNOWN_WORDS_PATH", str(tmp_path / "known.json"))
    monkeypatch.setenv("ANALYZE_WORKERS", "100")  # above max -> clamped
    monkeypatch.setenv("ANALYZE_PARALLEL_MIN_TOKENS", "0")  # below min -> clamped
    monkeypatch.setenv("LEXICON_PRELOAD", "off")

    config = load_config()

    assert config.log_level == "WARNING"
    assert config.file_log_level == "ERROR"
    assert os.path.isdir(config.log_dir)
    assert config.log_file.startswith(str(tmp_path / "logs"))
    assert config.lexicon_assets_dir == str(tmp_path / "lexicon")
    assert config.lexicon_dump_path == str(tmp_path / "lefff.mlex")
    assert config.known_words_path == str(tmp_path / "known.json")
    assert config.analyze_workers == 32
    assert config.analyze_parallel_min_tokens == 1
    assert config.lexicon_preload is False


def test_load_config_defaults(monkeypatch, tmp_path):
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    for name in (
        "LEXICON_ASSETS_DIR",
        "KNOWN_WORDS_PATH",
        "ANALYZE_WORKERS",
        "ANALYZE_PARALLEL_MIN_TOKENS",
        "LEXICON_PRELOAD",
    ):
        monkeypatch.delenv(name, raising=False)

    config = load_config()

    assert os.path.isabs(config.lexicon_assets_dir)
    assert config.lexicon_assets_dir.endswith(os.path.join("data", "lexicon"))
    assert config.known_words_path == ""
    assert config.analyze_workers == 1
    assert config.analyze_parallel_min_tokens == DEFAULT_PARALLEL_MIN_TOKENS
    assert config.lexicon_preload is True
