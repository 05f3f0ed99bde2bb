"""
Service

This module turns a Definition into its validated, immutable runtime form.
All constructor inspection happens here, once, at registration time; the
resolution engine only reads the resulting descriptor.

Validation rules:

- The name must be a non-blank string
- A constructor must be callable with an inspectable signature
- The effective reference length must fit its positional parameters
- It must return its value synchronously (no coroutine or generator
  functions) and must not be annotated as returning nothing or an error
"""

import inspect
from dataclasses import dataclass
from typing import Any, List, Optional

from .definition import Definition
from .exceptions import (
    ArityMismatchError,
    EmptyNameError,
    InvalidConstructorError,
    ReturnTypeMismatchError,
)
from .lifecycle import RefInjectionLifeCycle
from .reference import References


@dataclass(frozen=True)
class ConstructorSignature:
    """Fixed parameter descriptor of a constructor.

    Attributes:
        positional: Number of parameters that can be filled positionally
        required: Positional parameters without a default value
        var_positional: Whether the constructor accepts ``*args``
    """
    positional: int
    required: int
    var_positional: bool = False

    def accepts(self, count: int) -> bool:
        """Check whether ``count`` positional arguments fit this signature."""
        if count < self.required:
            return False
        return self.var_positional or count <= self.positional

    def describe(self) -> str:
        if self.var_positional:
            return f"at least {self.required}"
        if self.required == self.positional:
            return str(self.positional)
        return f"{self.required} to {self.positional}"

    @classmethod
    def from_callable(cls, constructor: Any) -> 'ConstructorSignature':
        """Build the descriptor from a callable.

        Raises:
            InvalidConstructorError: When the signature cannot be read
            ArityMismatchError: When keyword-only parameters are required
            ReturnTypeMismatchError: When the constructor is not synchronous
                or is annotated to return an exception
        """
        if (inspect.iscoroutinefunction(constructor)
                or inspect.isgeneratorfunction(constructor)
                or inspect.isasyncgenfunction(constructor)):
            raise ReturnTypeMismatchError(
                f"Constructor {_callable_name(constructor)} must return its value directly, "
                f"but it is a coroutine or generator function."
            )

        try:
            signature = inspect.signature(constructor)
        except (TypeError, ValueError) as e:
            raise InvalidConstructorError(
                f"Cannot inspect the signature of {_callable_name(constructor)}: {e}"
            ) from e

        positional = 0
        required = 0
        var_positional = False
        for param in signature.parameters.values():
            if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
                positional += 1
                if param.default is param.empty:
                    required += 1
            elif param.kind == param.VAR_POSITIONAL:
                var_positional = True
            elif param.kind == param.KEYWORD_ONLY and param.default is param.empty:
                raise ArityMismatchError(
                    f"Constructor {_callable_name(constructor)} has a required keyword-only "
                    f"parameter '{param.name}', which references cannot fill."
                )

        returns = signature.return_annotation
        if returns is None or returns is type(None) or returns == 'None':
            raise ArityMismatchError(
                f"Constructor {_callable_name(constructor)} is annotated to return None; "
                f"it must produce a value."
            )
        if isinstance(returns, type) and issubclass(returns, BaseException):
            raise ReturnTypeMismatchError(
                f"Constructor {_callable_name(constructor)} is annotated to return "
                f"{returns.__name__}. Raise errors instead of returning them."
            )

        return cls(positional=positional, required=required, var_positional=var_positional)


@dataclass(frozen=True)
class Service:
    """Validated runtime unit produced from a Definition.

    Services are never mutated after creation; re-registering a name
    replaces the whole Service.
    """
    name: str
    lifecycle: RefInjectionLifeCycle
    target: Any
    references: References
    signature: Optional[ConstructorSignature] = None

    @property
    def is_callable(self) -> bool:
        return self.lifecycle is not RefInjectionLifeCycle.VALUE

    @property
    def is_singleton(self) -> bool:
        return self.lifecycle is RefInjectionLifeCycle.SINGLETON

    def invoke(self, args: List[Any]) -> Any:
        return self.target(*args)


def create_service(definition: Definition) -> Service:
    """Validate a Definition and build its Service.

    Args:
        definition: The definition to validate

    Returns:
        The immutable Service

    Raises:
        EmptyNameError: When the name is blank
        InvalidConstructorError: When the constructor is not callable
        ArityMismatchError: When the references do not fit the constructor
        ReturnTypeMismatchError: When the constructor cannot return a value
        InvalidReferenceError: When a reference item has an unknown type
    """
    name = definition.name
    if not isinstance(name, str) or not name.strip():
        raise EmptyNameError(f"Definition name must be a non-empty string, got {name!r}")

    constructor = definition.constructor
    if constructor is None:
        return Service(
            name=name,
            lifecycle=RefInjectionLifeCycle.VALUE,
            target=definition.value,
            references=References(),
        )

    if not callable(constructor):
        raise InvalidConstructorError(
            f"Constructor for '{name}' should be callable, got {type(constructor).__name__}"
        )

    references = References.of(definition.references)
    signature = ConstructorSignature.from_callable(constructor)
    if not signature.accepts(len(references)):
        raise ArityMismatchError(
            f"Constructor's argument is incompatible for '{name}': "
            f"{len(references)} reference(s) declared, "
            f"but {_callable_name(constructor)} takes {signature.describe()}"
        )

    lifecycle = (
        RefInjectionLifeCycle.SINGLETON if definition.singleton
        else RefInjectionLifeCycle.FACTORY
    )
    return Service(
        name=name,
        lifecycle=lifecycle,
        target=constructor,
        references=references,
        signature=signature,
    )


def _callable_name(obj: Any) -> str:
    return getattr(obj, '__qualname__', None) or getattr(obj, '__name__', None) or repr(obj)
