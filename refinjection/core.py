"""
RefInjectionCore

This module provides the application-facing container. Each
RefInjectionCore instance owns its own registry, singleton cache and
resolution engine; there is no global instance, so any number of cores
can live side by side with disjoint state.

Use Cases:
    - Application wiring (one core created at startup)
    - Library development (a private core per library)
    - Test isolation (fresh core per test)

Example::

    app = RefInjectionCore(definitions=[
        Definition(name="host", value="localhost"),
        Definition(name="port", value=8000),
        Definition(name="conn", constructor=Conn, references=["host", "port"],
                   singleton=True),
    ])
    conn = app.get("conn")

    # Use as context manager for automatic cleanup
    with RefInjectionCore(definitions=defs) as app:
        conn = app.get("conn")
    # close() is called automatically
"""

import logging
from typing import Any, Callable, Iterable, List, Mapping, Optional, TypeVar

from .cache import SingletonCache
from .container import RefInjectionContainer
from .definition import Definition
from .exceptions import ContainerClosedError
from .inject_descriptor import InjectDescriptor
from .registry import ServiceRegistry
from .service import create_service

logger = logging.getLogger(__name__)

T = TypeVar('T')


class RefInjectionCore:
    """Isolated RefInjection container instance.

    Attributes:
        _registry: Registered services
        _cache: Singleton outcomes
        _container: Resolution engine over the registry and cache
        _closed: Flag indicating if the container has been closed

    Example::

        app = RefInjectionCore()
        app.set(Definition(name="config", constructor=load_config, singleton=True))
        config = app.get("config")
    """

    def __init__(
        self,
        definitions: Optional[Iterable[Definition]] = None,
        max_workers: Optional[int] = None,
    ):
        """Initialize an isolated container instance.

        Args:
            definitions: Definitions to register initially (optional)
            max_workers: Cap on threads used per parallel reference group.
                Defaults to one thread per group member.
        """
        self._registry = ServiceRegistry()
        self._cache = SingletonCache()
        self._container = RefInjectionContainer(self._registry, self._cache, max_workers=max_workers)
        self._closed: bool = False

        if definitions:
            self.set_all(definitions)

    def _ensure_not_closed(self) -> None:
        """Ensure the container is not closed.

        Raises:
            ContainerClosedError: When the container has been closed
        """
        if self._closed:
            raise ContainerClosedError("This container is already closed")

    def set(self, definition: Definition) -> None:
        """Register a definition, replacing any service with the same name.

        When ``created_at_start`` is set, the service is resolved right
        away and any resolution error is raised from here. The service
        stays registered in that case.

        Note:
            Re-registering a singleton that was already resolved does not
            drop its cached outcome. Call ``clear_cache(name)`` to
            resolve the new definition.

        Args:
            definition: The definition to register

        Raises:
            ContainerClosedError: When the container has been closed
            EmptyNameError: When the name is blank
            InvalidConstructorError: When the constructor is not callable
            ArityMismatchError: When the references do not fit the constructor
            ReturnTypeMismatchError: When the constructor cannot return a value
        """
        self._ensure_not_closed()
        service = create_service(definition)
        self._registry.register(service)
        if definition.created_at_start:
            self._container.eager_initialize(service.name)

    def set_all(self, definitions: Iterable[Definition]) -> None:
        """Register definitions in order, stopping at the first failure.

        Definitions registered before the failing one stay registered.
        """
        for definition in definitions:
            self.set(definition)

    def get(self, name: str) -> Any:
        """Resolve a service by name.

        Raises:
            ContainerClosedError: When the container has been closed
            DefinitionNotFoundError: When the name is not registered

        Example::

            conn = app.get("conn")
        """
        self._ensure_not_closed()
        return self._container.get(name)

    def call(self, constructor: Callable[..., T], references=()) -> T:
        """Resolve references and invoke an unnamed constructor once.

        Example::

            handler = app.call(
                lambda db, log: Handler(db, log),
                [parallel("db", "logger")],
            )
        """
        self._ensure_not_closed()
        return self._container.call(constructor, references)

    def inject(self, obj: T, fields: Mapping[str, str]) -> T:
        """Set attributes of ``obj`` from resolved services.

        Args:
            obj: The object to populate
            fields: Mapping of attribute name -> service name, resolved in
                mapping order. The first failure stops the injection.

        Returns:
            ``obj`` itself

        Example::

            handler = app.inject(Handler(), {"conn": "conn", "log": "logger"})
        """
        self._ensure_not_closed()
        for attr, name in fields.items():
            setattr(obj, attr, self._container.get(name))
        return obj

    def inject_descriptor(self, name: str) -> InjectDescriptor:
        """Create a lazy class attribute resolving ``name`` from this core.

        Example::

            class Handler:
                conn = app.inject_descriptor("conn")
        """
        self._ensure_not_closed()
        return InjectDescriptor(name, lambda: self)

    def has(self, name: str) -> bool:
        """Check whether a service is registered under ``name``."""
        self._ensure_not_closed()
        return name in self._registry

    def names(self) -> List[str]:
        """Sorted list of registered service names."""
        self._ensure_not_closed()
        return self._registry.names()

    def clear_cache(self, name: Optional[str] = None) -> None:
        """Drop cached singleton outcomes.

        Args:
            name: Only drop this name's record. Drops every record when
                omitted.
        """
        self._ensure_not_closed()
        if name is None:
            self._cache.clear()
            logger.debug("Cleared all singleton records")
        elif self._cache.evict(name):
            logger.debug("Cleared singleton record for %r", name)

    def close(self) -> None:
        """Close the container and release cached singletons.

        This method is idempotent - calling it multiple times has no effect.
        """
        if not self._closed:
            self._closed = True
            self._cache.clear()

    @property
    def is_closed(self) -> bool:
        """Check whether the container has been closed."""
        return self._closed

    def __enter__(self) -> 'RefInjectionCore':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        """Exit context manager and close the container.

        Returns:
            False (exceptions are not suppressed)
        """
        self.close()
        return False

    def __getitem__(self, name: str) -> Callable[[], Any]:
        """Support subscript syntax: app["name"]()."""

        def getter() -> Any:
            return self.get(name)

        return getter
