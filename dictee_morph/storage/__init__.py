"""Storage layer for lexicon assets: offline build and runtime tables."""

from .assets import LEXICON_ASSET_NAMES, FileAssetReader
from .lexicon_builder import (
    BuildStats,
    LexiconBuild,
    build_lexicon,
    build_lexicon_from_file,
    write_lexicon,
)
from .lexicon_store import LexiconError, LexiconStore, LoadFailedError, NotLoadedError

__all__ = [
    "BuildStats",
    "FileAssetReader",
    "LEXICON_ASSET_NAMES",
    "LexiconBuild",
    "LexiconError",
    "LexiconStore",
    "LoadFailedError",
    "NotLoadedError",
    "build_lexicon",
    "build_lexicon_from_file",
    "write_lexicon",
]
