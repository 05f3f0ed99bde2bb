"""
InjectDescriptor

This module provides a descriptor for lazy injection of named services as
class attributes. The service is resolved on first access and cached on
the instance:

    class Handler:
        conn = app.inject_descriptor("conn")

        def handle(self, query):
            return self.conn.query(query)  # Resolved here
"""

from typing import Any, Callable, Optional, Type, TYPE_CHECKING

if TYPE_CHECKING:
    from .core import RefInjectionCore


class InjectDescriptor:
    """
    Descriptor for lazy injection of a named service.

    When accessed on a class, returns the descriptor itself. When accessed
    on an instance, resolves the service through ``get`` and stores it in
    the instance ``__dict__``, so later accesses skip the container.

    Attributes:
        name: The service name to resolve
        get_app: A callable that returns the container to resolve from
    """

    def __init__(self, name: str, get_app: Callable[[], 'RefInjectionCore']):
        self.name = name
        self.get_app = get_app
        self._attr_name: Optional[str] = None

    def __set_name__(self, owner: Type, name: str) -> None:
        self._attr_name = name

    def __get__(self, obj: Optional[object], objtype: Optional[Type] = None) -> Any:
        if obj is None:
            return self

        if self._attr_name is not None and self._attr_name in obj.__dict__:
            return obj.__dict__[self._attr_name]

        value = self.get_app().get(self.name)

        if self._attr_name is not None:
            obj.__dict__[self._attr_name] = value

        return value

    def __set__(self, obj: object, value: Any) -> None:
        """
        Injected services are read-only.

        Raises:
            AttributeError: Always raised
        """
        raise AttributeError(
            f"Cannot set inject descriptor for '{self.name}'. "
            "Injected services are read-only."
        )

    def __repr__(self) -> str:
        return f"InjectDescriptor[{self.name!r}]"
