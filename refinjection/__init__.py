# Public API
from .cache import CacheRecord, SingletonCache
from .container import RefInjectionContainer
from .core import RefInjectionCore
from .definition import Definition
from .exceptions import (
    ArityMismatchError,
    ContainerClosedError,
    DefinitionNotFoundError,
    EmptyNameError,
    InvalidConstructorError,
    InvalidReferenceError,
    RefInjectionError,
    ReturnTypeMismatchError,
)
from .inject_descriptor import InjectDescriptor
from .lifecycle import RefInjectionLifeCycle
from .reference import ParallelReference, References, parallel
from .registry import ServiceRegistry
from .service import ConstructorSignature, Service, create_service

__all__ = [
    "RefInjectionCore",
    "RefInjectionContainer",
    "Definition",
    "RefInjectionLifeCycle",
    # References
    "References",
    "ParallelReference",
    "parallel",
    # Internals exposed for composition
    "Service",
    "ConstructorSignature",
    "create_service",
    "ServiceRegistry",
    "SingletonCache",
    "CacheRecord",
    # Inject
    "InjectDescriptor",
    # Exceptions
    "RefInjectionError",
    "EmptyNameError",
    "InvalidConstructorError",
    "ArityMismatchError",
    "ReturnTypeMismatchError",
    "DefinitionNotFoundError",
    "InvalidReferenceError",
    "ContainerClosedError",
]

__version__ = '0.1.0'
