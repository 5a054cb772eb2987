"""Unit tests for the lock-serialized engine wrapper."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from prefix_search.config import Settings
from prefix_search.engine import PrefixSearchEngine, SynchronizedSearchEngine


@pytest.mark.unit
class TestSynchronizedSearchEngine:
    def test_delegates_to_wrapped_engine(self):
        inner = PrefixSearchEngine(name="test", default_mode="any")
        engine = SynchronizedSearchEngine(inner)

        assert engine.add("Instant search", "quote") is engine
        assert engine.engine is inner
        assert engine.name == "test"
        assert engine.default_mode == "any"
        assert engine.stopwords == inner.stopwords
        assert engine.min_word_length == 2
        assert engine.size == 2
        assert len(engine) == 2
        assert "instant" in engine
        assert engine.normalize("Instant!") == "instant"
        assert engine.get_words() == ["instant", "search"]
        assert engine.get_entry("instant").keys == ["quote"]
        assert engine.get_entry("missing") is None
        assert engine.original_text("quote") == "Instant search"
        assert list(engine.expand("inst")) == ["inst", "instant"]
        assert engine.match("inst") == ["quote"]
        assert engine.relevance("quote", "search") == 1
        assert repr(engine) == "SynchronizedSearchEngine(PrefixSearchEngine(name='test', size=2))"
        assert engine.remove("Instant search", "quote") is engine
        assert engine.size == 0
        assert engine.original_text("quote") is None
        assert engine.clear() is engine

    def test_creates_default_engine(self):
        engine = SynchronizedSearchEngine()
        assert isinstance(engine.engine, PrefixSearchEngine)

    def test_from_settings(self):
        engine = SynchronizedSearchEngine.from_settings(
            Settings(stop_words="red", min_word_length=3, default_match_mode="any", index_name="synced")
        )

        assert isinstance(engine.engine, PrefixSearchEngine)
        assert engine.name == "synced"
        assert engine.default_mode == "any"
        assert engine.stopwords == frozenset({"red"})
        assert engine.min_word_length == 3

    def test_concurrent_adds_keep_size_consistent(self):
        engine = SynchronizedSearchEngine(PrefixSearchEngine(name="test"))
        texts = [(f"word{i} shared", f"doc{i}") for i in range(200)]

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda pair: engine.add(*pair), texts))

        assert engine.size == 201
        assert len(engine.match("shared")) == 200
        assert engine.get_entry("shared").count == 200

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda pair: engine.remove(*pair), texts))

        assert engine.size == 0
