"""
Session-scoped store for opened PDFs.

The uploaded document stays open so section text can be re-extracted on
demand without parsing the file again. Entries are keyed by session id and
passed explicitly through the call chain; a new upload for a session
replaces (and closes) its previous document, and idle sessions expire.

A fitz.Document must not be used from two threads at once, so each entry
carries its own lock; callers hold it while reading pages.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

import fitz  # PyMuPDF

from .exceptions import DocumentNotLoadedError
from .models import DocumentScan

logger = logging.getLogger(__name__)


@dataclass
class StoredDocument:
    session_id: str
    filename: str
    document: fitz.Document
    scan: Optional[DocumentScan]
    created_at: float
    last_access: float
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def close(self) -> None:
        with self.lock:
            if not self.document.is_closed:
                self.document.close()


class DocumentStore:
    def __init__(
        self,
        ttl_seconds: float = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, StoredDocument] = {}
        self._lock = threading.Lock()

    def put(
        self,
        session_id: str,
        filename: str,
        document: fitz.Document,
        scan: Optional[DocumentScan] = None,
    ) -> StoredDocument:
        now = self._clock()
        entry = StoredDocument(
            session_id=session_id,
            filename=filename,
            document=document,
            scan=scan,
            created_at=now,
            last_access=now,
        )
        with self._lock:
            previous = self._entries.pop(session_id, None)
            self._entries[session_id] = entry
        if previous is not None:
            logger.info(f"Replacing document for session {session_id}")
            previous.close()
        self.purge_expired()
        return entry

    def get(self, session_id: str) -> StoredDocument:
        self.purge_expired()
        with self._lock:
            entry = self._entries.get(session_id)
            if entry is None:
                raise DocumentNotLoadedError(session_id)
            entry.last_access = self._clock()
            return entry

    def discard(self, session_id: str) -> bool:
        with self._lock:
            entry = self._entries.pop(session_id, None)
        if entry is None:
            return False
        entry.close()
        logger.info(f"Closed session {session_id}")
        return True

    def purge_expired(self) -> int:
        if self.ttl_seconds <= 0:
            return 0
        cutoff = self._clock() - self.ttl_seconds
        with self._lock:
            expired = [sid for sid, e in self._entries.items() if e.last_access < cutoff]
            entries = [self._entries.pop(sid) for sid in expired]
        for entry in entries:
            entry.close()
        if entries:
            logger.info(f"Expired {len(entries)} idle session(s)")
        return len(entries)

    def close_all(self) -> None:
        with self._lock:
            entries = list(self._entries.values())
            self._entries.clear()
        for entry in entries:
            entry.close()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._entries
