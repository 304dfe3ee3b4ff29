"""Command-line entrypoint: analyze French text against the built lexicon."""
from __future__ import annotations

import argparse
import dataclasses
import json
import sys

from .application.bootstrap import initialize_services
from .config import load_config
from .logging_config import setup_logging
from .storage.lexicon_store import LexiconError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Tokenize French text and resolve every word against the lexicon.",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--text", default=None, help="Text to analyze.")
    source.add_argument("--file", default=None, help="UTF-8 text file to analyze.")
    parser.add_argument(
        "--assets-dir",
        default=None,
        help="Directory holding the lexicon JSON tables (overrides LEXICON_ASSETS_DIR).",
    )
    parser.add_argument(
        "--known-words",
        default=None,
        help="JSON file of stored word records (overrides KNOWN_WORDS_PATH).",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker threads for token resolution (overrides ANALYZE_WORKERS).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full analysis result as JSON.",
    )
    return parser


def _read_input(args: argparse.Namespace) -> str:
    if args.text is not None:
        return args.text
    if args.file is not None:
        with open(args.file, "r", encoding="utf-8") as handle:
            return handle.read()
    return sys.stdin.read()


def _format_summary(result) -> list[str]:
    lines = []
    for token in result.tokens:
        if not token.is_word:
            continue
        if not token.found:
            lines.append(f"{token.text}\t-")
            continue
        lemmas = ", ".join(
            f"{group.lemma_display} ({'/'.join(group.pos)})" for group in token.lemmas
        )
        flags = "".join(
            flag for flag, enabled in (("*", token.ambiguous), ("+", token.known)) if enabled
        )
        lines.append(f"{token.text}\t{lemmas}{flags}")
    stats = result.stats
    lines.append(
        f"ANALYZE_OK words={stats.total_words} found={stats.found_words} "
        f"ambiguous={stats.ambiguous_words} lemmas={stats.unique_lemmas} known={stats.known}"
    )
    return lines


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    config = load_config()
    overrides: dict[str, object] = {"lexicon_preload": True}
    if args.assets_dir:
        overrides["lexicon_assets_dir"] = args.assets_dir
    if args.known_words:
        overrides["known_words_path"] = args.known_words
    if args.workers is not None:
        overrides["analyze_workers"] = max(1, min(32, args.workers))
    config = dataclasses.replace(config, **overrides)
    logger = setup_logging(config)

    try:
        text = _read_input(args)
        services = initialize_services(config=config, logger=logger)
        try:
            result = services.analysis_service.analyze(text)
        finally:
            services.analysis_service.close()
    except (LexiconError, OSError, ValueError) as exc:
        print(f"ANALYZE_FAILED: {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        for line in _format_summary(result):
            print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
