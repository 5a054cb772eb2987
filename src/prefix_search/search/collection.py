"""Inverted index of normalized words plus the original-text key store."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
import logging

from prefix_search.search.models import WordEntry, WordStats


logger = logging.getLogger(__name__)


def remove_last(items: list[str], item: str) -> bool:
    """Remove the last occurrence of ``item`` from ``items`` in place.

    Returns ``False`` when the item is absent.
    """
    for idx in range(len(items) - 1, -1, -1):
        if items[idx] == item:
            del items[idx]
            return True
    return False


class Collection:
    """Word -> WordEntry mapping with an explicit size counter.

    Iteration follows insertion order of words. The key store maps a
    document key to the raw text it was added with and is only consulted
    for relevance scoring.
    """

    def __init__(self) -> None:
        self._words: dict[str, WordEntry] = {}
        self._texts: dict[str, str] = {}
        self.size = 0

    def __len__(self) -> int:
        return self.size

    def __contains__(self, word: object) -> bool:
        return word in self._words

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def get(self, word: str) -> WordEntry | None:
        return self._words.get(word)

    def words(self) -> list[str]:
        return list(self._words)

    def merge(self, index: Mapping[str, WordStats], key: str | None = None) -> None:
        """Fold a per-text index into the collection.

        An existing word gains one count per merge, whatever its occurrence
        count in the text. A new word also starts at one, so merging and then
        unmerging the same index leaves the collection unchanged.
        """
        for word, stats in index.items():
            entry = self._words.get(word)
            if entry is not None:
                entry.count += 1
                if key:
                    entry.keys.append(key)
                continue
            self._words[word] = WordEntry(weight=stats.weight, count=1, keys=[key] if key else [])
            self.size += 1

    def unmerge(self, index: Mapping[str, WordStats], key: str | None = None) -> None:
        """Reverse of :meth:`merge`. Unknown words are ignored."""
        if self.size == 0:
            return
        for word in index:
            entry = self._words.get(word)
            if entry is None:
                continue
            entry.count -= 1
            if key and not remove_last(entry.keys, key):
                logger.debug("Key %r was not attached to word %r", key, word)
            if entry.count <= 0:
                del self._words[word]
                self.size -= 1

    def clear(self, *, include_texts: bool = False) -> None:
        self._words = {}
        self.size = 0
        if include_texts:
            self._texts = {}

    def store_text(self, key: str, text: str) -> None:
        self._texts[key] = text

    def forget_text(self, key: str) -> None:
        self._texts.pop(key, None)

    def original_text(self, key: str) -> str | None:
        return self._texts.get(key)

    def stored_keys(self) -> list[str]:
        return list(self._texts)
