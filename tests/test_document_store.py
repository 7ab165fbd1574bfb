"""Tests for spec_reader.document_store."""

import fitz
import pytest

from spec_reader.document_store import DocumentStore
from spec_reader.exceptions import DocumentNotLoadedError


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    s = DocumentStore(ttl_seconds=60, clock=clock)
    yield s
    s.close_all()


def _doc():
    doc = fitz.open()
    doc.new_page()
    return doc


class TestDocumentStore:
    def test_put_and_get(self, store):
        doc = _doc()
        store.put("s1", "a.pdf", doc)

        entry = store.get("s1")

        assert entry.document is doc
        assert entry.filename == "a.pdf"
        assert "s1" in store
        assert len(store) == 1

    def test_unknown_session(self, store):
        with pytest.raises(DocumentNotLoadedError):
            store.get("missing")

    def test_sessions_are_isolated(self, store):
        first, second = _doc(), _doc()
        store.put("s1", "a.pdf", first)
        store.put("s2", "b.pdf", second)

        assert store.get("s1").document is first
        assert store.get("s2").document is second

    def test_new_upload_replaces_and_closes_previous(self, store):
        old, new = _doc(), _doc()
        store.put("s1", "old.pdf", old)
        store.put("s1", "new.pdf", new)

        assert old.is_closed
        assert not new.is_closed
        assert store.get("s1").filename == "new.pdf"
        assert len(store) == 1

    def test_discard_closes(self, store):
        doc = _doc()
        store.put("s1", "a.pdf", doc)

        assert store.discard("s1") is True
        assert doc.is_closed
        assert store.discard("s1") is False
        with pytest.raises(DocumentNotLoadedError):
            store.get("s1")

    def test_idle_sessions_expire(self, store, clock):
        doc = _doc()
        store.put("s1", "a.pdf", doc)

        clock.now += 61

        with pytest.raises(DocumentNotLoadedError):
            store.get("s1")
        assert doc.is_closed

    def test_access_refreshes_ttl(self, store, clock):
        store.put("s1", "a.pdf", _doc())

        clock.now += 50
        store.get("s1")
        clock.now += 50

        assert store.get("s1").filename == "a.pdf"

    def test_purge_expired_counts(self, store, clock):
        store.put("s1", "a.pdf", _doc())
        store.put("s2", "b.pdf", _doc())
        clock.now += 30
        store.get("s2")
        clock.now += 40

        assert store.purge_expired() == 1
        assert "s2" in store

    def test_ttl_disabled(self, clock):
        store = DocumentStore(ttl_seconds=0, clock=clock)
        store.put("s1", "a.pdf", _doc())
        clock.now += 10_000

        assert store.purge_expired() == 0
        assert "s1" in store
        store.close_all()

    def test_close_all(self, store):
        docs = [_doc(), _doc()]
        store.put("s1", "a.pdf", docs[0])
        store.put("s2", "b.pdf", docs[1])

        store.close_all()

        assert len(store) == 0
        assert all(d.is_closed for d in docs)
