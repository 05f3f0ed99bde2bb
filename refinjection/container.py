"""
RefInjectionContainer

This module provides the resolution engine, the heart of RefInjection.
Given a service name (or an ad-hoc constructor) it is responsible for:

- Looking up the Service in the registry
- Resolving its references recursively, sequentially or in parallel groups
- Invoking the constructor with the resolved arguments
- Memoizing singleton outcomes, including failures
- Collapsing concurrent first requests for a singleton into one call

The engine is typically not used directly. Use RefInjectionCore, which
owns the registry, the cache and one engine.

Note:
    There is no cycle detection. A cyclic reference graph recurses
    without bound or deadlocks inside the single-flight section.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, List, Optional

from .cache import CacheRecord, SingletonCache
from .definition import Definition
from .exceptions import DefinitionNotFoundError, InvalidConstructorError
from .reference import ParallelReference, References
from .registry import ServiceRegistry
from .service import Service, create_service
from .single_flight import SingleFlight

logger = logging.getLogger(__name__)

# Name given to the throwaway services built by call()
CALL_SERVICE_NAME = "<call>"


class RefInjectionContainer:
    """Resolution engine over a registry and a singleton cache.

    Attributes:
        _registry: Registered services, looked up on every resolution
        _cache: Singleton outcomes keyed by name
        _flight: Single-flight group for uncached singletons
        _max_workers: Optional cap on threads per parallel group
    """

    def __init__(
        self,
        registry: ServiceRegistry,
        cache: SingletonCache,
        max_workers: Optional[int] = None,
    ):
        if max_workers is not None and max_workers < 1:
            raise ValueError("max_workers must be greater than 0")
        self._registry = registry
        self._cache = cache
        self._flight = SingleFlight()
        self._max_workers = max_workers

    def get(self, name: str) -> Any:
        """Resolve a service by name.

        Plain values are returned as registered. Factories are invoked on
        every call. Singletons are served from the cache; on a miss exactly
        one caller runs the constructor while concurrent callers wait for
        its outcome.

        Args:
            name: The registered service name

        Returns:
            The resolved value

        Raises:
            DefinitionNotFoundError: When the name (or any reference below
                it) is not registered
            Exception: Any error raised by a constructor in the graph. A
                singleton's constructor error is cached and re-raised on
                every later call.

        Example::

            db = container.get("db")
        """
        service = self._registry.lookup(name)
        if service is None:
            registered = ", ".join(self._registry.names()) or "None"
            raise DefinitionNotFoundError(
                f"'{name}' is not registered.\n"
                f"Registered names: {registered}\n"
                f"Hint: app.set(Definition(name={name!r}, ...))"
            )

        if not service.is_callable:
            return service.target

        if not service.is_singleton:
            return self._evaluate(service)

        record = self._cache.get(name)
        if record is not None:
            logger.debug("Cache hit for singleton %r", name)
            return record.unwrap()

        value, shared = self._flight.do(name, lambda: self._populate(service))
        if shared:
            logger.debug("Shared in-flight resolution of singleton %r", name)
        return value

    def call(self, constructor: Callable, references=()) -> Any:
        """Resolve references for an unnamed constructor and invoke it once.

        The constructor is validated exactly like a registered one and the
        result is never cached.

        Args:
            constructor: Callable taking one argument per reference slot
            references: Reference items (names and parallel groups)

        Returns:
            Whatever the constructor returned

        Example::

            handler = container.call(make_handler, ["db", "logger"])
        """
        if not callable(constructor):
            raise InvalidConstructorError(
                f"Constructor passed to call() should be callable, got {type(constructor).__name__}"
            )
        service = create_service(Definition(
            name=CALL_SERVICE_NAME,
            constructor=constructor,
            references=references,
        ))
        return self._evaluate(service)

    def eager_initialize(self, name: str) -> None:
        """Resolve ``name`` right away, surfacing any error to the caller.

        Used for definitions registered with ``created_at_start=True``.
        """
        logger.debug("Eagerly resolving %r", name)
        self.get(name)

    def resolve_references(self, references: References) -> List[Any]:
        """Resolve a reference list into constructor arguments.

        Items are walked in declared order. A name is resolved in the
        calling thread and the first failure aborts. A parallel group fans
        out one task per member, waits for all of them, then reports the
        first failure in member order, not completion order.

        Args:
            references: The reference list to resolve

        Returns:
            One value per argument slot, in slot order
        """
        args: List[Any] = [None] * len(references)
        for slot, item in references.slots():
            if isinstance(item, ParallelReference):
                args[slot:slot + len(item)] = self._resolve_parallel(item)
            else:
                args[slot] = self.get(item)
        return args

    def _resolve_parallel(self, group: ParallelReference) -> List[Any]:
        if not len(group):
            return []

        workers = len(group)
        if self._max_workers is not None:
            workers = min(workers, self._max_workers)

        logger.debug("Resolving %r with %d worker(s)", group, workers)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="refinjection") as executor:
            futures = [executor.submit(self.get, name) for name in group]
        # Leaving the block joins every task; scan in declared order
        for future in futures:
            error = future.exception()
            if error is not None:
                raise error
        return [future.result() for future in futures]

    def _evaluate(self, service: Service) -> Any:
        args = self.resolve_references(service.references)
        return service.invoke(args)

    def _populate(self, service: Service) -> Any:
        record = self._cache.get(service.name)
        if record is not None:
            return record.unwrap()

        # Dependency failures propagate without poisoning this singleton,
        # since its constructor never ran
        args = self.resolve_references(service.references)

        logger.debug("Constructing singleton %r", service.name)
        try:
            value = service.invoke(args)
        except Exception as e:
            self._cache.put(service.name, CacheRecord(error=e, traceback=e.__traceback__))
            logger.debug("Singleton %r failed and was cached: %r", service.name, e)
            raise
        self._cache.put(service.name, CacheRecord(value=value))
        return value

    def __getitem__(self, name: str) -> Callable[[], Any]:
        """Support subscript syntax: container["name"]().

        Example::

            # These are equivalent:
            db = container["db"]()
            db = container.get("db")
        """

        def getter() -> Any:
            return self.get(name)

        return getter
