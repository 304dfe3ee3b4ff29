"""Filesystem access to the serialized lexicon assets."""
from __future__ import annotations

import os

FORM_TO_ANALYSES_ASSET = "formToAnalyses.json"
LEMMA_TO_FORMS_ASSET = "lemmaToForms.json"
LEMMA_POS_TO_FORMS_ASSET = "lemmaPosToForms.json"

LEXICON_ASSET_NAMES = (
    FORM_TO_ANALYSES_ASSET,
    LEMMA_TO_FORMS_ASSET,
    LEMMA_POS_TO_FORMS_ASSET,
)


class FileAssetReader:
    """Read named assets as UTF-8 text from a base directory."""

    def __init__(self, base_dir: str) -> None:
        self.base_dir = str(base_dir or "").strip()

    def read_text(self, name: str) -> str:
        if not self.base_dir:
            raise FileNotFoundError("Lexicon assets directory is not configured.")
        path = os.path.join(self.base_dir, name)
        with open(path, "r", encoding="utf-8") as handle:
            return handle.read()
