"""
Definition

Data class representing a service registration
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Union

from .reference import ReferenceItem, References


@dataclass
class Definition:
    """Service definition: a plain value, or a constructor with references"""
    name: str
    value: Any = None
    constructor: Optional[Callable] = None
    references: Union[References, Iterable[ReferenceItem], None] = ()
    singleton: bool = False
    created_at_start: bool = False  # Resolve immediately on registration
