"""Prefix search engine - the public facade.

Indexes short texts under document keys and answers trailing wildcard
queries, so ``match("inst")`` finds documents containing "instant" or
"install". Everything lives in memory and every operation runs to
completion before returning.

Usage::

    engine = PrefixSearchEngine()
    engine.add("Instant search in Google is awesome!", "quote")
    engine.add("It will work fine after you install that patch.", "instruction")
    engine.match("inst")  # ['quote', 'instruction']
    engine.remove("Instant search in Google is awesome!", "quote")
"""

from __future__ import annotations

from collections.abc import Sequence
import logging
import threading

from opentelemetry.trace import SpanKind

from prefix_search.config import Settings
from prefix_search.observability import (
    INDEX_OPERATIONS,
    INDEXED_WORDS,
    MATCH_LATENCY,
    MATCH_RESULTS,
    bind_index,
    create_span,
    track_latency,
)
from prefix_search.search.analyzers import DEFAULT_MIN_WORD_LENGTH, WordAnalyzer
from prefix_search.search.collection import Collection
from prefix_search.search.expander import count_query_words, expand_against
from prefix_search.search.indexer import Indexer
from prefix_search.search.models import Expansion, MatchMode, WordEntry, resolve_match_mode
from prefix_search.search.ranking import (
    collect_satisfied_tokens,
    rank_by_relevance,
    relevance_score,
    select_all,
)


logger = logging.getLogger(__name__)


class PrefixSearchEngine:
    """In-memory inverted index with prefix matching.

    Not thread-safe; wrap it in :class:`SynchronizedSearchEngine` when it is
    shared between threads.
    """

    def __init__(
        self,
        *,
        stopwords: Sequence[str] | None = None,
        min_word_length: int = DEFAULT_MIN_WORD_LENGTH,
        default_mode: MatchMode = "all",
        clear_resets_key_store: bool = False,
        name: str = "default",
    ) -> None:
        self.name = name
        self.default_mode = resolve_match_mode(default_mode)
        self.clear_resets_key_store = clear_resets_key_store
        self._analyzer = WordAnalyzer(stopwords=stopwords, min_length=min_word_length)
        self._indexer = Indexer(self._analyzer)
        self._collection = Collection()

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> PrefixSearchEngine:
        """Build an engine from settings, reading the environment when none are given."""
        settings = settings or Settings()
        return cls(
            stopwords=settings.get_stop_words(),
            min_word_length=settings.min_word_length,
            default_mode=settings.default_match_mode,
            clear_resets_key_store=settings.clear_resets_key_store,
            name=settings.index_name,
        )

    @property
    def size(self) -> int:
        """Number of normalized words currently indexed."""
        return self._collection.size

    @property
    def stopwords(self) -> frozenset[str]:
        return self._analyzer.normalizer.stopwords

    @property
    def min_word_length(self) -> int:
        return self._analyzer.min_length

    def __len__(self) -> int:
        return self._collection.size

    def __contains__(self, word: object) -> bool:
        return word in self._collection

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, size={self.size})"

    def normalize(self, word: str) -> str:
        """Normalize a single token; empty string means it is not indexed."""
        return self._analyzer.normalizer(word)

    def add(self, text: str | None, key: str | None = None) -> PrefixSearchEngine:
        """Index ``text`` and attach ``key`` to each of its words."""
        bind_index(self.name)
        with create_span("index.add", kind=SpanKind.INTERNAL, attributes={"index.name": self.name}) as span:
            if key:
                self._collection.store_text(key, text or "")
            words = self._indexer.index(text)
            self._collection.merge(words, key)
            span.set_attribute("index.words", len(words))
            span.set_attribute("index.size", self.size)

        logger.debug("Added %d words under key %r (size=%d)", len(words), key, self.size)
        self._record_operation("add")
        return self

    def remove(self, text: str | None, key: str | None = None) -> PrefixSearchEngine:
        """Remove what a previous ``add(text, key)`` indexed.

        ``text`` and ``key`` must be the pair passed to :meth:`add`; words that
        are not indexed are ignored. The text stored for ``key`` is forgotten
        even when the collection is already empty.
        """
        bind_index(self.name)
        with create_span("index.remove", kind=SpanKind.INTERNAL, attributes={"index.name": self.name}) as span:
            words = self._indexer.index(text)
            self._collection.unmerge(words, key)
            if key:
                self._collection.forget_text(key)
            span.set_attribute("index.words", len(words))
            span.set_attribute("index.size", self.size)

        logger.debug("Removed %d words under key %r (size=%d)", len(words), key, self.size)
        self._record_operation("remove")
        return self

    def clear(self) -> PrefixSearchEngine:
        """Empty the collection.

        Stored original texts survive unless ``clear_resets_key_store`` is set.
        """
        self._collection.clear(include_texts=self.clear_resets_key_store)
        logger.debug("Cleared index %r (texts reset: %s)", self.name, self.clear_resets_key_store)
        self._record_operation("clear")
        return self

    def get_words(self) -> list[str]:
        """All indexed normalized words in insertion order."""
        return self._collection.words()

    def get_entry(self, word: str) -> WordEntry | None:
        return self._collection.get(word)

    def original_text(self, key: str) -> str | None:
        """Raw text last added under ``key``."""
        return self._collection.original_text(key)

    def expand(self, query: str | None) -> dict[str, Expansion]:
        """Prefix expansion of ``query`` against the indexed words."""
        return expand_against(query, self._collection, self._indexer)

    def relevance(self, key: str, query: str) -> int:
        """Substring-frequency score of ``query`` against the text stored for ``key``."""
        return relevance_score(self._collection.original_text(key), query)

    def match(self, text: str | None, mode: str | None = None) -> list[str]:
        """Return the keys matching ``text``.

        In ``all`` mode a key must satisfy every query word, in the order
        keys were first reached. In ``any`` mode one satisfied word is
        enough and keys are sorted by :meth:`relevance`, ties kept in that
        same order.
        """
        resolved = resolve_match_mode(mode, self.default_mode)
        bind_index(self.name)
        with (
            create_span(
                "search.match",
                kind=SpanKind.INTERNAL,
                attributes={"search.query": (text or "")[:100], "search.mode": resolved, "index.name": self.name},
            ) as span,
            track_latency(MATCH_LATENCY, index=self.name, mode=resolved),
        ):
            expansion = self.expand(text)
            query_words = count_query_words(expansion)
            span.set_attribute("search.query_words", query_words)

            satisfied = collect_satisfied_tokens(expansion, self._collection)
            if resolved == "all":
                result = select_all(satisfied, query_words)
            else:
                query = text or ""
                ranked = rank_by_relevance(list(satisfied), lambda key: self.relevance(key, query))
                result = [key for key, _score in ranked]

            span.set_attribute("search.result_count", len(result))

        MATCH_RESULTS.labels(index=self.name, mode=resolved).observe(len(result))
        logger.debug(
            "Matched %r in %s mode: %d query words, %d candidates, %d results",
            text,
            resolved,
            query_words,
            len(satisfied),
            len(result),
        )
        return result

    def _record_operation(self, operation: str) -> None:
        INDEX_OPERATIONS.labels(index=self.name, operation=operation).inc()
        INDEXED_WORDS.labels(index=self.name).set(self.size)


class SynchronizedSearchEngine:
    """Serializes every call to a wrapped engine behind one lock."""

    def __init__(self, engine: PrefixSearchEngine | None = None) -> None:
        self._engine = engine or PrefixSearchEngine()
        self._lock = threading.RLock()

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> SynchronizedSearchEngine:
        return cls(PrefixSearchEngine.from_settings(settings))

    @property
    def engine(self) -> PrefixSearchEngine:
        return self._engine

    @property
    def name(self) -> str:
        return self._engine.name

    @property
    def default_mode(self) -> MatchMode:
        return self._engine.default_mode

    @property
    def stopwords(self) -> frozenset[str]:
        return self._engine.stopwords

    @property
    def min_word_length(self) -> int:
        return self._engine.min_word_length

    @property
    def size(self) -> int:
        with self._lock:
            return self._engine.size

    def __len__(self) -> int:
        return self.size

    def __contains__(self, word: object) -> bool:
        with self._lock:
            return word in self._engine

    def __repr__(self) -> str:
        with self._lock:
            return f"{type(self).__name__}({self._engine!r})"

    def normalize(self, word: str) -> str:
        return self._engine.normalize(word)

    def add(self, text: str | None, key: str | None = None) -> SynchronizedSearchEngine:
        with self._lock:
            self._engine.add(text, key)
        return self

    def remove(self, text: str | None, key: str | None = None) -> SynchronizedSearchEngine:
        with self._lock:
            self._engine.remove(text, key)
        return self

    def clear(self) -> SynchronizedSearchEngine:
        with self._lock:
            self._engine.clear()
        return self

    def get_words(self) -> list[str]:
        with self._lock:
            return self._engine.get_words()

    def get_entry(self, word: str) -> WordEntry | None:
        with self._lock:
            return self._engine.get_entry(word)

    def original_text(self, key: str) -> str | None:
        with self._lock:
            return self._engine.original_text(key)

    def expand(self, query: str | None) -> dict[str, Expansion]:
        with self._lock:
            return self._engine.expand(query)

    def match(self, text: str | None, mode: str | None = None) -> list[str]:
        with self._lock:
            return self._engine.match(text, mode)

    def relevance(self, key: str, query: str) -> int:
        with self._lock:
            return self._engine.relevance(key, query)
