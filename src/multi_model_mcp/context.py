"""Session-scoped conversation context.

One ConversationContext lives for the whole process and is handed to the
tool handlers explicitly. It is never persisted.
"""

import logging
from typing import Any, Dict, List

from .locks import ReadWriteLock

logger = logging.getLogger(__name__)


class ConversationContext:
    """Files, notes and metadata accumulated by tool calls.

    Every mutation holds the write lock for its whole duration, so readers
    see either the state before or after a call, never a partial update.
    """

    def __init__(self):
        self._files: Dict[str, str] = {}
        self._notes: List[str] = []
        self._metadata: Dict[str, str] = {}
        self._lock = ReadWriteLock()

    def add_file(self, path: str, content: str) -> None:
        """Upsert by path; the last write wins."""
        with self._lock.write_locked():
            self._files[path] = content
        logger.debug("Context file added: %s (%d chars)", path, len(content))

    def add_note(self, note: str) -> None:
        with self._lock.write_locked():
            self._notes.append(note)

    def set_metadata(self, key: str, value: str) -> None:
        with self._lock.write_locked():
            self._metadata[key] = value

    def clear(self) -> None:
        with self._lock.write_locked():
            self._files.clear()
            self._notes.clear()
            self._metadata.clear()
        logger.debug("Context cleared")

    def snapshot(self) -> Dict[str, Any]:
        """Return copies of all three collections."""
        with self._lock.read_locked():
            return {
                "files": dict(self._files),
                "notes": list(self._notes),
                "metadata": dict(self._metadata),
            }

    def is_empty(self) -> bool:
        with self._lock.read_locked():
            return not (self._files or self._notes or self._metadata)
