"""Unit tests for the collection mutators."""

import pytest

from prefix_search.search.collection import Collection, remove_last
from prefix_search.search.indexer import Indexer
from prefix_search.search.models import WordEntry


@pytest.fixture
def collection() -> Collection:
    return Collection()


@pytest.fixture
def indexer() -> Indexer:
    return Indexer()


@pytest.mark.unit
def test_remove_last_drops_only_last_occurrence():
    items = ["a", "b", "a", "c"]
    assert remove_last(items, "a") is True
    assert items == ["a", "b", "c"]
    assert remove_last(items, "z") is False
    assert items == ["a", "b", "c"]


@pytest.mark.unit
class TestMerge:
    def test_new_words_are_inserted_with_key(self, collection, indexer):
        collection.merge(indexer.index("red car"), "doc")

        assert collection.size == 2
        assert collection.get("red") == WordEntry(weight=3, count=1, keys=["doc"])
        assert collection.words() == ["red", "car"]

    def test_existing_word_counts_once_per_merge(self, collection, indexer):
        collection.merge(indexer.index("red car"), "one")
        collection.merge(indexer.index("red red red"), "two")

        entry = collection.get("red")
        assert entry.count == 2
        assert entry.keys == ["one", "two"]
        assert collection.size == 2

    def test_repeated_word_in_new_text_counts_once(self, collection, indexer):
        collection.merge(indexer.index("red red"), "doc")
        assert collection.get("red").count == 1

    def test_merge_without_key_keeps_keys_empty(self, collection, indexer):
        collection.merge(indexer.index("red"))
        collection.merge(indexer.index("red"))
        assert collection.get("red") == WordEntry(weight=3, count=2, keys=[])

    def test_weight_is_kept_from_first_insertion(self, collection, indexer):
        collection.merge(indexer.index("red"), "doc")
        collection.get("red").weight = 99
        collection.merge(indexer.index("red"), "doc2")
        assert collection.get("red").weight == 99


@pytest.mark.unit
class TestUnmerge:
    def test_noop_on_empty_collection(self, collection, indexer):
        collection.unmerge(indexer.index("red car"), "doc")
        assert collection.size == 0
        assert collection.words() == []

    def test_decrements_and_drops_entries(self, collection, indexer):
        collection.merge(indexer.index("red car"), "one")
        collection.merge(indexer.index("red bus"), "two")

        collection.unmerge(indexer.index("red bus"), "two")

        assert collection.get("red") == WordEntry(weight=3, count=1, keys=["one"])
        assert "bus" not in collection
        assert collection.size == 2

    def test_unknown_words_are_ignored(self, collection, indexer):
        collection.merge(indexer.index("red"), "doc")
        collection.unmerge(indexer.index("blue green"), "doc")
        assert collection.words() == ["red"]
        assert collection.get("red").keys == ["doc"]

    def test_unknown_key_only_decrements(self, collection, indexer):
        collection.merge(indexer.index("red"), "one")
        collection.merge(indexer.index("red"), "two")

        collection.unmerge(indexer.index("red"), "ghost")

        assert collection.get("red") == WordEntry(weight=3, count=1, keys=["one", "two"])

    def test_double_remove_is_tolerated(self, collection, indexer):
        collection.merge(indexer.index("red car"), "doc")
        collection.merge(indexer.index("bus"), "other")
        collection.unmerge(indexer.index("red car"), "doc")
        collection.unmerge(indexer.index("red car"), "doc")
        assert collection.words() == ["bus"]
        assert collection.size == 1


@pytest.mark.unit
class TestKeyStore:
    def test_store_and_forget_text(self, collection):
        collection.store_text("doc", "Red car")
        assert collection.original_text("doc") == "Red car"
        collection.forget_text("doc")
        collection.forget_text("doc")
        assert collection.original_text("doc") is None

    def test_clear_keeps_texts_by_default(self, collection, indexer):
        collection.store_text("doc", "red")
        collection.merge(indexer.index("red"), "doc")

        collection.clear()

        assert collection.size == 0
        assert len(collection) == 0
        assert collection.stored_keys() == ["doc"]

    def test_clear_can_drop_texts(self, collection):
        collection.store_text("doc", "red")
        collection.clear(include_texts=True)
        assert collection.stored_keys() == []
