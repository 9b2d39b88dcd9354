"""
Tests for the translation key collection.
"""

from tkx.collection import TranslationCollection


class TestTranslationCollection:

    def test_empty(self):
        collection = TranslationCollection()
        assert collection.is_empty()
        assert collection.count() == 0
        assert collection.keys() == []

    def test_add_returns_new_collection(self):
        empty = TranslationCollection()
        collection = empty.add("dfa.title")
        assert collection.has("dfa.title")
        assert collection.get("dfa.title") == ""
        assert empty.is_empty()

    def test_add_existing_key_overwrites_value(self):
        collection = TranslationCollection().add("a", "first").add("a", "second")
        assert collection.count() == 1
        assert collection.get("a") == "second"

    def test_add_keys_deduplicates(self):
        collection = TranslationCollection().add_keys(["a", "b", "a"]).add_keys(["a"])
        assert collection.keys() == ["a", "b"]

    def test_add_accepts_empty_string(self):
        collection = TranslationCollection().add("")
        assert "" in collection
        assert len(collection) == 1

    def test_insertion_order_preserved(self):
        collection = TranslationCollection().add_keys(["z", "a", "m"])
        assert list(collection) == ["z", "a", "m"]
        assert collection.sort().keys() == ["a", "m", "z"]

    def test_union_prefers_right_values(self):
        left = TranslationCollection({"a": "1", "b": "2"})
        right = TranslationCollection({"b": "3", "c": "4"})
        merged = left.union(right)
        assert merged.values == {"a": "1", "b": "3", "c": "4"}

    def test_intersect(self):
        left = TranslationCollection({"a": "1", "b": "2"})
        right = TranslationCollection({"b": "3", "c": "4"})
        assert left.intersect(right).values == {"b": "3"}

    def test_remove_filter_map(self):
        collection = TranslationCollection({"a": "", "b": "x"})
        assert collection.remove("a").keys() == ["b"]
        assert collection.filter(lambda k, v: bool(v)).keys() == ["b"]
        assert collection.map(lambda k, v: k.upper()).values == {"a": "A", "b": "B"}

    def test_get_missing(self):
        assert TranslationCollection().get("nope") is None
