"""Matching and relevance ranking.

The relevance score is a plain substring-frequency heuristic: every
query word is counted in the original document text, and a query equal to
the whole document squares the total. It only orders ANY-mode results.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

from prefix_search.search.collection import Collection
from prefix_search.search.models import Expansion


def collect_satisfied_tokens(expansion: Mapping[str, Expansion], collection: Collection) -> dict[str, list[str]]:
    """Map each document key to the distinct query tokens it satisfies.

    Keys appear in the order they are first reached while walking the
    expansion; tokens are recorded once per key.
    """
    satisfied: dict[str, list[str]] = {}
    for word, entry in expansion.items():
        found = collection.get(word)
        if found is None:
            continue
        for key in found.keys:
            tokens = satisfied.setdefault(key, [])
            if entry.orig not in tokens:
                tokens.append(entry.orig)
    return satisfied


def select_all(satisfied: Mapping[str, list[str]], query_word_count: int) -> list[str]:
    """Keys satisfying every distinct query word."""

    return [key for key, tokens in satisfied.items() if len(tokens) == query_word_count]


def count_occurrences(text: str, word: str) -> int:
    """Count non-overlapping occurrences of ``word`` in ``text``."""

    if not word:
        return 0
    return text.count(word)


def relevance_score(original: str | None, query: str) -> int:
    """Score ``original`` against the raw ``query`` text.

    Returns 0 when there is no original text to score.
    """
    if not original:
        return 0

    nb_found = 0
    for raw in query.split(" "):
        word = raw.strip()
        if not word:
            continue
        nb_found += count_occurrences(original, word)

    if query == original:
        nb_found = nb_found**2
    return nb_found


def rank_by_relevance(keys: list[str], score: Callable[[str], int]) -> list[tuple[str, int]]:
    """Sort keys by descending score; ties keep their incoming order."""

    scored = [(key, score(key)) for key in keys]
    return sorted(scored, key=lambda item: item[1], reverse=True)
