from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from dictee_morph.storage.lexicon_builder import build_lexicon_from_file, write_lexicon


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build the JSON lookup tables from a LEFFF dump (form<TAB>pos<TAB>lemma<TAB>traits).",
    )
    parser.add_argument("input", help="Path to the .mlex dump.")
    parser.add_argument(
        "--output-dir",
        default=str(PROJECT_ROOT / "data" / "lexicon"),
        help="Directory receiving formToAnalyses.json, lemmaToForms.json and lemmaPosToForms.json.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log skipped malformed lines.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print JSON summary at the end.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s",
    )

    try:
        build = build_lexicon_from_file(args.input)
        written = write_lexicon(build, args.output_dir)
    except (OSError, ValueError) as exc:
        print(f"LEXICON_BUILD_FAILED: {exc}", file=sys.stderr)
        return 1

    stats = build.stats
    print(
        f"LEXICON_BUILD_OK processed={stats.processed} malformed={stats.malformed} "
        f"forms={len(build.form_to_analyses)} lemmas={len(build.lemma_to_forms)}"
    )
    if stats.ambiguous_traits:
        print(f"LEXICON_REVIEW ambiguous_traits={stats.ambiguous_traits}")
    if args.json:
        summary = {"status": "ok", "stats": stats.to_dict(), "files": written}
        print(json.dumps(summary, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
