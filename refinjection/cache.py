"""
Singleton Cache

Thread-safe memoization store for singleton outcomes. Both successful
values and constructor errors are recorded; entries live until they are
evicted explicitly or the container goes away.
"""

import threading
from dataclasses import dataclass
from types import TracebackType
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class CacheRecord:
    """Outcome of a singleton constructor: a value or the error it raised.

    ``traceback`` is the error's traceback as first raised. Every re-raise
    starts from it, so repeated lookups do not extend it.
    """
    value: Any = None
    error: Optional[BaseException] = None
    traceback: Optional[TracebackType] = None

    def unwrap(self) -> Any:
        """Return the value, or re-raise the recorded error object."""
        if self.error is not None:
            raise self.error.with_traceback(self.traceback)
        return self.value


class SingletonCache:
    """Name -> CacheRecord store, safe for concurrent use.

    Writes are last-write-wins. There is no size bound and no expiry.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._records: Dict[str, CacheRecord] = {}

    def get(self, name: str) -> Optional[CacheRecord]:
        with self._lock:
            return self._records.get(name)

    def put(self, name: str, record: CacheRecord) -> None:
        with self._lock:
            self._records[name] = record

    def evict(self, name: str) -> bool:
        """Drop the record for ``name``. Returns whether one existed."""
        with self._lock:
            return self._records.pop(name, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
