"""
Tests for the document store
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.context.store import DocumentStore, DEFAULT_SESSION


class TestDocumentStore:
    """Tests for DocumentStore"""

    def setup_method(self):
        self.store = DocumentStore()

    def test_empty_store(self):
        assert self.store.get() is None
        assert self.store.get("abc") is None
        assert not self.store.has_document()
        assert len(self.store) == 0

    def test_set_and_get(self):
        self.store.set(DEFAULT_SESSION, "Course syllabus: week 1")

        assert self.store.get() == "Course syllabus: week 1"
        assert self.store.has_document(DEFAULT_SESSION)

    def test_upload_replaces_previous(self):
        """A new upload silently discards the previous document"""
        self.store.set("abc", "first")
        self.store.set("abc", "second")

        assert self.store.get("abc") == "second"
        assert len(self.store) == 1

    def test_sessions_are_isolated(self):
        self.store.set("alice", "alice notes")
        self.store.set("bob", "bob notes")

        assert self.store.get("alice") == "alice notes"
        assert self.store.get("bob") == "bob notes"

        self.store.clear("alice")

        assert self.store.get("alice") is None
        assert self.store.get("bob") == "bob notes"

    def test_clear(self):
        self.store.set(DEFAULT_SESSION, "text")

        assert self.store.clear() is True
        assert self.store.get() is None

        # Clearing an empty slot still succeeds
        assert self.store.clear() is False

    def test_least_recently_used_session_is_evicted(self):
        store = DocumentStore(max_sessions=2)

        store.set("a", "doc a")
        store.set("b", "doc b")
        store.set("c", "doc c")

        assert store.get("a") is None
        assert store.get("b") == "doc b"
        assert store.get("c") == "doc c"
        assert len(store) == 2

    def test_reading_refreshes_session(self):
        store = DocumentStore(max_sessions=2)

        store.set("a", "doc a")
        store.set("b", "doc b")
        store.get("a")
        store.set("c", "doc c")

        assert store.get("a") == "doc a"
        assert store.get("b") is None

    def test_many_sessions_stay_bounded(self):
        store = DocumentStore(max_sessions=50)

        for i in range(10000):
            store.set(f"session-{i}", "text")

        assert len(store) == 50
        assert store.has_document("session-9999")
        assert not store.has_document("session-0")

    def test_replacing_does_not_evict(self):
        store = DocumentStore(max_sessions=2)

        store.set("a", "first")
        store.set("b", "doc b")
        store.set("a", "second")

        assert store.get("a") == "second"
        assert store.get("b") == "doc b"

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            DocumentStore(max_sessions=0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
