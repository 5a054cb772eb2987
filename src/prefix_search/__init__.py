"""In-memory prefix search engine for autocomplete-style lookups."""

from prefix_search.config import Settings
from prefix_search.engine import PrefixSearchEngine, SynchronizedSearchEngine
from prefix_search.search.analyzers import DEFAULT_STOPWORDS, Normalizer, normalize
from prefix_search.search.models import Expansion, MatchMode, WordEntry, WordStats


__version__ = "1.0.0"

__all__ = [
    "DEFAULT_STOPWORDS",
    "Expansion",
    "MatchMode",
    "Normalizer",
    "PrefixSearchEngine",
    "Settings",
    "SynchronizedSearchEngine",
    "WordEntry",
    "WordStats",
    "normalize",
]
