"""
Reference Model

Describes how a constructor declares its dependencies: an ordered list of
items, each either a single service name or a parallel group of names that
may be resolved concurrently.

Example::

    references = References(["config", parallel("db", "cache"), "logger"])
    len(references)  # 4 - one argument slot per name
"""

from typing import Iterable, Iterator, List, Tuple, Union

from .exceptions import InvalidReferenceError


class ParallelReference:
    """Group of dependency names resolved concurrently.

    The group only marks its members as independent of each other. No
    ordering or fairness is implied for their resolution, but the
    resolved values always fill argument slots in member order.
    """

    __slots__ = ("_names",)

    def __init__(self, names: Iterable[str]):
        names = tuple(names)
        for name in names:
            if not isinstance(name, str):
                raise InvalidReferenceError(
                    f"Parallel reference members must be names, got {type(name).__name__}: {name!r}"
                )
        self._names = names

    @property
    def names(self) -> Tuple[str, ...]:
        return self._names

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ParallelReference):
            return NotImplemented
        return self._names == other._names

    def __hash__(self) -> int:
        return hash(self._names)

    def __repr__(self) -> str:
        return f"parallel({', '.join(repr(n) for n in self._names)})"


def parallel(*names: str) -> ParallelReference:
    """Build a parallel group from the given names.

    Example::

        references=[parallel("host", "port"), "options"]
    """
    return ParallelReference(names)


ReferenceItem = Union[str, ParallelReference]


class References:
    """Ordered, immutable reference list of a constructor.

    ``len()`` is the effective length: the number of argument slots the
    references fill, with every parallel group member counted once.
    Iteration yields the declared items unchanged.
    """

    __slots__ = ("_items", "_length")

    def __init__(self, items: Iterable[ReferenceItem] = ()):
        if isinstance(items, (str, ParallelReference)):
            items = (items,)
        checked = []
        length = 0
        for item in items:
            if isinstance(item, str):
                length += 1
            elif isinstance(item, ParallelReference):
                length += len(item)
            else:
                raise InvalidReferenceError(
                    f"Unknown reference type {type(item).__name__}: {item!r}. "
                    f"Use a service name or parallel(...)."
                )
            checked.append(item)
        self._items: Tuple[ReferenceItem, ...] = tuple(checked)
        self._length = length

    @classmethod
    def of(cls, references) -> 'References':
        """Normalize user input (None, a name, a list, References)."""
        if isinstance(references, References):
            return references
        if references is None:
            return cls()
        return cls(references)

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[ReferenceItem]:
        return iter(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __eq__(self, other) -> bool:
        if isinstance(other, References):
            return self._items == other._items
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"References({list(self._items)!r})"

    def slots(self) -> Iterator[Tuple[int, ReferenceItem]]:
        """Yield ``(slot, item)`` with the first argument slot of each item.

        A name occupies one slot, a parallel group a contiguous run of
        ``len(group)`` slots starting at ``slot``.
        """
        slot = 0
        for item in self._items:
            yield slot, item
            slot += 1 if isinstance(item, str) else len(item)

    def names(self) -> List[str]:
        """Every dependency name in argument slot order."""
        result: List[str] = []
        for item in self._items:
            if isinstance(item, str):
                result.append(item)
            else:
                result.extend(item.names)
        return result
