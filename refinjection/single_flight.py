"""
SingleFlight

Collapses concurrent calls for the same key into one computation. The
first caller for a key runs the function; callers arriving while it runs
wait on the same Future and receive the identical result, or the
identical exception object.

Example::

    group = SingleFlight()
    value, shared = group.do("db", lambda: Database())
"""

import threading
from concurrent.futures import Future
from typing import Any, Callable, Dict, Tuple


class SingleFlight:
    """Per-key deduplication of in-flight calls."""

    def __init__(self):
        self._lock = threading.Lock()
        self._calls: Dict[str, Future] = {}

    def do(self, key: str, fn: Callable[[], Any]) -> Tuple[Any, bool]:
        """Run ``fn`` once for all concurrent callers of ``key``.

        Args:
            key: Deduplication key
            fn: Zero-argument callable to run

        Returns:
            ``(value, shared)`` where ``shared`` is True when the value came
            from another caller's execution

        Raises:
            Whatever ``fn`` raised, for the leader and every waiter alike
        """
        with self._lock:
            future = self._calls.get(key)
            leader = future is None
            if leader:
                future = Future()
                self._calls[key] = future

        if not leader:
            return future.result(), True

        try:
            value = fn()
        except BaseException as e:
            future.set_exception(e)
            raise
        else:
            future.set_result(value)
            return value, False
        finally:
            with self._lock:
                del self._calls[key]
