"""
Document Store

Holds the extracted text of the most recently uploaded document,
one slot per session. Nothing is persisted across restarts.
"""

from collections import OrderedDict
from typing import Optional
import logging
import threading

logger = logging.getLogger(__name__)

DEFAULT_SESSION = "default"


class DocumentStore:
    """
    In-process store for uploaded document text.

    Each session holds at most one document; a new upload replaces
    the previous one (last writer wins). At most `max_sessions`
    sessions are kept; the least recently used one is evicted first.

    Usage:
        store = DocumentStore(max_sessions=100)
        store.set("abc", "Course syllabus: ...")
        text = store.get("abc")
    """

    def __init__(self, max_sessions: int = 100):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")

        self.max_sessions = max_sessions
        self._documents: "OrderedDict[str, str]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, session_id: str = DEFAULT_SESSION) -> Optional[str]:
        """Get the document text for a session, or None"""
        with self._lock:
            text = self._documents.get(session_id)
            if text is not None:
                self._documents.move_to_end(session_id)
            return text

    def set(self, session_id: str, text: str):
        """Replace the session's document text"""
        evicted = []

        with self._lock:
            replaced = session_id in self._documents
            self._documents[session_id] = text
            self._documents.move_to_end(session_id)

            while len(self._documents) > self.max_sessions:
                oldest, _ = self._documents.popitem(last=False)
                evicted.append(oldest)

        if replaced:
            logger.info(f"Replaced document for session {session_id} ({len(text)} chars)")
        else:
            logger.info(f"Stored document for session {session_id} ({len(text)} chars)")

        for oldest in evicted:
            logger.info(f"Evicted document for session {oldest}")

    def clear(self, session_id: str = DEFAULT_SESSION) -> bool:
        """
        Clear the session's document.

        Returns:
            True if a document was removed
        """
        with self._lock:
            removed = self._documents.pop(session_id, None) is not None

        if removed:
            logger.info(f"Cleared document for session {session_id}")
        return removed

    def has_document(self, session_id: str = DEFAULT_SESSION) -> bool:
        return session_id in self._documents

    def __len__(self) -> int:
        return len(self._documents)
