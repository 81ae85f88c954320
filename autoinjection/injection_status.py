"""
InjectionStatus

This module provides the per-instance bookkeeping used while an object
is constructed and wired. The InjectionStatus tracks:

- Type Names already satisfied by the factory (constructor injection)
- Type Names already satisfied by setter injectors

A second piece of state, the construction chain, lives in a ContextVar
so that it follows the calling thread and is never shared between
concurrent resolutions.
"""

from contextvars import ContextVar
from typing import Iterator, Set, Tuple


class InjectionStatus:
    """Record of the dependencies satisfied for ONE instance.

    A fresh record is created for every top-level ``create()`` call and is
    handed by reference to the factory and to every injector that wires
    the resulting object. Injectors consult it to avoid injecting a
    dependency a second time.

    Example (internal usage)::

        status = InjectionStatus()
        status.add('app.db.DatabaseInterface')   # satisfied by __init__

        'app.db.DatabaseInterface' in status     # True -> setter skipped
    """

    def __init__(self):
        self._satisfied: Set[str] = set()

    def add(self, type_name: str) -> None:
        self._satisfied.add(type_name)

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._satisfied

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._satisfied))

    def __len__(self) -> int:
        return len(self._satisfied)

    def __repr__(self) -> str:
        return f'InjectionStatus({sorted(self._satisfied)!r})'


# Type Names currently under construction on this call chain (cycle detection)
_construction_chain: ContextVar[Tuple[str, ...]] = ContextVar(
    '_AUTO_INJECTION_CONSTRUCTION_CHAIN',
    default=()
)
