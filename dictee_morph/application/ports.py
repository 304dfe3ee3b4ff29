"""Application-level ports for lexicon asset access."""

from __future__ import annotations

from typing import Protocol


class AssetReader(Protocol):
    """Port abstraction for fetching a named lexicon asset as text."""

    def read_text(self, name: str) -> str: ...
