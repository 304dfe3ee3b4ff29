"""Shared fixtures: a small LEFFF-style dump and stores built from it."""

from __future__ import annotations

import pytest

from dictee_morph.storage.lexicon_builder import build_lexicon, serialize_table, write_lexicon
from dictee_morph.storage.lexicon_store import LexiconStore

SAMPLE_DUMP_LINES = [
    "# form\tpos\tlemma\ttraits",
    "chat\tnc\tchat\tms",
    "chats\tnc\tchat\tmp",
    "manger\tv\tmanger\tW",
    "mange\tv\tmanger\tP13s",
    "mange\tv\tmanger\tY2s",
    "manges\tv\tmanger\tP2s",
    "mangeant\tv\tmanger\tG",
    "mangé\tv\tmanger\tKms",
    "le\tdet\tle\tms",
    "la\tdet\tle\tfs",
    "le\tcla\tle\t3ms",
    "la\tcla\tle\t3fs",
    "la\tnc\tla\tms",
    "ami\tnc\tami\tms",
    "ami\tadj\tami\tms",
    "amis\tnc\tami\tmp",
    "eau\tnc\teau\tfs",
    "que\tcsu\tque\t",
    "que\tprel\tque\t",
    "il\tcln\tcln\t3ms",
    "je\tcln\tcln\t1s",
    "élève\tnc\télève\tms",
    "Paris\tnp\tParis\t",
    "",
]


class MemoryAssetReader:
    def __init__(self, assets: dict[str, str]) -> None:
        self.assets = dict(assets)
        self.calls: list[str] = []

    def read_text(self, name: str) -> str:
        self.calls.append(name)
        try:
            return self.assets[name]
        except KeyError as exc:
            raise FileNotFoundError(name) from exc


@pytest.fixture
def sample_lines():
    return list(SAMPLE_DUMP_LINES)


@pytest.fixture
def sample_build(sample_lines):
    return build_lexicon(sample_lines)


@pytest.fixture
def sample_assets(sample_build):
    return {name: serialize_table(table) for name, table in sample_build.payloads().items()}


@pytest.fixture
def make_reader(sample_assets):
    def _make(overrides: dict[str, str] | None = None) -> MemoryAssetReader:
        assets = dict(sample_assets)
        assets.update(overrides or {})
        return MemoryAssetReader(assets)

    return _make


@pytest.fixture
def store(make_reader):
    lexicon = LexiconStore(make_reader())
    lexicon.load()
    return lexicon


@pytest.fixture
def lexicon_dir(tmp_path, sample_build):
    output_dir = tmp_path / "lexicon"
    write_lexicon(sample_build, str(output_dir))
    return output_dir
