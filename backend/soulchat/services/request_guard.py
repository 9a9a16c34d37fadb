"""In-process suppression of duplicate chat requests.

A key is held from admission until its request finishes, whatever the outcome.
The guard relies on the single event loop: ``admit`` runs synchronously before
the caller's first ``await``, so no lock is needed. It does not coordinate
across processes or replicas.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

logger = logging.getLogger(__name__)


class DuplicateRequestError(Exception):
    pass


def request_key(conversation_id: int, message: str) -> str:
    return f"{conversation_id}-{message}"


class DuplicateRequestGuard:
    def __init__(self):
        self._in_flight: set[str] = set()

    def admit(self, key: str) -> bool:
        if key in self._in_flight:
            return False
        self._in_flight.add(key)
        return True

    def release(self, key: str) -> None:
        if key in self._in_flight:
            self._in_flight.discard(key)
            logger.debug("Released in-flight key %r", key)

    @contextmanager
    def hold(self, key: str) -> Iterator[str]:
        """Admit ``key`` for the duration of the block, releasing on every exit."""
        if not self.admit(key):
            raise DuplicateRequestError("Message is already being processed")
        try:
            yield key
        finally:
            self.release(key)

    def __contains__(self, key: str) -> bool:
        return key in self._in_flight

    def __len__(self) -> int:
        return len(self._in_flight)
