"""Application layer orchestration."""

from .analysis_service import AnalysisService, group_lemmas
from .bootstrap import AppServices, initialize_services, load_known_words
from .ports import AssetReader
from .word_index import WordIndex

__all__ = [
    "AnalysisService",
    "AppServices",
    "AssetReader",
    "WordIndex",
    "group_lemmas",
    "initialize_services",
    "load_known_words",
]
