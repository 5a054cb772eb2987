"""Per-text word indexing.

Builds the ``word -> WordStats`` mapping for a single text without touching
the collection. Documents and queries go through the same path.
"""

from __future__ import annotations

from prefix_search.search.analyzers import WordAnalyzer
from prefix_search.search.models import WordStats


class Indexer:
    """Turns raw text into normalized word stats."""

    def __init__(self, analyzer: WordAnalyzer | None = None) -> None:
        self.analyzer = analyzer or WordAnalyzer()

    def index(self, text: str | None) -> dict[str, WordStats]:
        """Return normalized words of ``text`` in first-seen order.

        ``weight`` is the word length at first occurrence and ``count`` the
        number of occurrences within this text. Empty or ``None`` input
        yields an empty mapping.
        """
        words: dict[str, WordStats] = {}
        for token in self.analyzer(text):
            stats = words.get(token.text)
            if stats is None:
                words[token.text] = WordStats(weight=len(token.text))
            else:
                stats.count += 1
        return words
