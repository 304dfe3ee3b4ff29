from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import sys


PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


from dictee_morph.application.analysis_service import AnalysisService
from dictee_morph.storage.lexicon_builder import build_lexicon, serialize_table
from dictee_morph.storage.lexicon_store import LexiconStore


CLOSED_CLASS_LINES: tuple[str, ...] = (
    "le\tdet\tle\tms",
    "la\tdet\tle\tfs",
    "les\tdet\tle\tp",
    "le\tcla\tle\t3ms",
    "la\tcla\tle\t3fs",
    "de\tprep\tde\t",
    "que\tcsu\tque\t",
    "que\tprel\tque\t",
    "je\tcln\tje\t1s",
    "il\tcln\til\t3ms",
    "et\tcoo\tet\t",
    "ne\tadv\tne\t",
    "se\tclr\tse\t3",
)

VERB_ENDINGS: tuple[tuple[str, str], ...] = (
    ("er", "W"),
    ("e", "P13s"),
    ("es", "P2s"),
    ("ons", "P1p"),
    ("ez", "P2p"),
    ("ent", "P3p"),
    ("ait", "I3s"),
    ("era", "F3s"),
    ("é", "Kms"),
    ("ant", "G"),
)


@dataclass(frozen=True)
class LexiconWorkloadConfig:
    lemmas: int = 2000
    text_words: int = 5000


def _stem(index: int) -> str:
    letters = "bcdfglmnprstv"
    vowels = "aeiou"
    out = []
    value = index
    for _ in range(3):
        out.append(letters[value % len(letters)])
        value //= len(letters)
        out.append(vowels[value % len(vowels)])
        value //= len(vowels)
    return "".join(out)


def build_dump_lines(config: LexiconWorkloadConfig) -> list[str]:
    lines = ["# synthetic LEFFF-style dump", *CLOSED_CLASS_LINES]
    for index in range(max(1, int(config.lemmas))):
        stem = _stem(index)
        if index % 3 == 0:
            lemma = f"{stem}er"
            lines.extend(f"{stem}{ending}\tv\t{lemma}\t{traits}" for ending, traits in VERB_ENDINGS)
        else:
            lines.append(f"{stem}\tnc\t{stem}\tms")
            lines.append(f"{stem}s\tnc\t{stem}\tmp")
            if index % 5 == 0:
                lines.append(f"{stem}\tadj\t{stem}\tms")
    return lines


def build_text(config: LexiconWorkloadConfig) -> str:
    words: list[str] = []
    for index in range(max(1, int(config.text_words))):
        if index % 11 == 0:
            words.append("l'")
            words.append(_stem(index % max(1, config.lemmas)))
        elif index % 7 == 0:
            words.append(f"inconnu{index}")
        else:
            words.append(_stem(index % max(1, config.lemmas)))
        words.append(", " if index % 13 == 0 else " ")
    return "".join(words)


class MemoryAssetReader:
    def __init__(self, assets: dict[str, str]) -> None:
        self.assets = dict(assets)

    def read_text(self, name: str) -> str:
        try:
            return self.assets[name]
        except KeyError as exc:
            raise FileNotFoundError(name) from exc


def build_asset_reader(config: LexiconWorkloadConfig) -> MemoryAssetReader:
    build = build_lexicon(build_dump_lines(config))
    return MemoryAssetReader(
        {name: serialize_table(table) for name, table in build.payloads().items()}
    )


def build_service(
    config: LexiconWorkloadConfig,
    *,
    max_workers: int = 1,
    parallel_min_tokens: int = 256,
) -> AnalysisService:
    store = LexiconStore(build_asset_reader(config))
    store.load()
    return AnalysisService(
        store,
        max_workers=max_workers,
        parallel_min_tokens=parallel_min_tokens,
    )
