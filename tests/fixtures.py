"""
Test Fixtures

Common test classes used across test modules
"""

import threading
import time


class Conn:
    """Test connection built from a host and a port"""

    def __init__(self, host: str, port: int):
        self.host = host
        self.port = port

    def addr(self) -> str:
        return f"{self.host}:{self.port}"

    def query(self, query: str) -> str:
        return f"{self.host}:{self.port}:{query}"


class Handler:
    """Test object populated through injection"""

    def __init__(self):
        self.conn = None


class Counter:
    """Thread-safe call counter for constructors"""

    def __init__(self):
        self._lock = threading.Lock()
        self.count = 0

    def increment(self) -> int:
        with self._lock:
            self.count += 1
            return self.count


class ConstructorError(Exception):
    """Error raised by test constructors"""

    def __init__(self, name: str):
        super().__init__(f"{name} failed")
        self.name = name


def slow_value(value, delay: float):
    """Constructor returning ``value`` after ``delay`` seconds."""

    def constructor():
        time.sleep(delay)
        return value

    return constructor


def slow_failure(name: str, delay: float):
    """Constructor raising ConstructorError(name) after ``delay`` seconds."""

    def constructor():
        time.sleep(delay)
        raise ConstructorError(name)

    return constructor
