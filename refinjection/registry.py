"""
Service Registry

Thread-safe name -> Service store. Services are validated before they
reach the registry, so everything stored here is ready to resolve.
"""

import logging
import threading
from typing import Dict, List, Optional

from .service import Service

logger = logging.getLogger(__name__)


class ServiceRegistry:
    """Concurrent registry of services keyed by name.

    Registering an existing name replaces the previous Service wholesale
    (last write wins, no merge).
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._services: Dict[str, Service] = {}

    def register(self, service: Service) -> None:
        with self._lock:
            replaced = service.name in self._services
            self._services[service.name] = service
        if replaced:
            logger.debug("Replaced service %r (%s)", service.name, service.lifecycle.value)
        else:
            logger.debug("Registered service %r (%s)", service.name, service.lifecycle.value)

    def lookup(self, name: str) -> Optional[Service]:
        with self._lock:
            return self._services.get(name)

    def names(self) -> List[str]:
        """Sorted snapshot of the registered names."""
        with self._lock:
            return sorted(self._services)

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._services

    def __len__(self) -> int:
        with self._lock:
            return len(self._services)
