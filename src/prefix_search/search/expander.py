"""Trailing wildcard expansion of query tokens against the collection.

For a query such as ``"inst"`` the expansion holds the seed ``inst`` plus
every collection word starting with it, e.g. ``install`` and ``instant``.
"""

from __future__ import annotations

from collections.abc import Mapping

from prefix_search.search.collection import Collection
from prefix_search.search.indexer import Indexer
from prefix_search.search.models import Expansion


def expand_against(query: str | None, collection: Collection, indexer: Indexer) -> dict[str, Expansion]:
    """Return ``word -> Expansion`` for every collection word a query token prefixes.

    Seeds come first in query order, followed by collection words in
    collection order. When several query tokens prefix the same word, the
    last one in query order wins.
    """
    partials = indexer.index(query)
    expansion: dict[str, Expansion] = {
        partial: Expansion(orig=partial, weight=stats.weight, count=stats.count)
        for partial, stats in partials.items()
    }
    if not partials:
        return expansion

    for word in collection:
        for partial in partials:
            if word.startswith(partial):
                expansion[word] = Expansion(orig=partial, weight=len(partial))
    return expansion


def count_query_words(expansion: Mapping[str, Expansion]) -> int:
    """Number of distinct query words, i.e. entries that are their own seed."""

    return sum(1 for word, entry in expansion.items() if word == entry.orig)
