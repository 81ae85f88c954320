"""
CallbackFactory

Wrapper for factory callbacks supplied by the user
"""

from typing import Any, Callable, Sequence, TYPE_CHECKING

from .factory import Factory

if TYPE_CHECKING:
    from .container import DependencyContainer
    from .injection_status import InjectionStatus


class CallbackFactory(Factory):
    """Factory delegating to a user callback.

    The callback receives the container followed by the arguments
    supplied to ``create()``::

        di.factory(Database, lambda di, dsn='sqlite://': Database(dsn))
        db = di.create(Database, 'postgresql://localhost/app')

    What the callback injects is not tracked, so setter injection still
    runs for every setter of the created object.
    """

    def __init__(self, type_name: str, callback: Callable[..., Any]):
        self._responsible_for = type_name
        self._callback = callback

    def responsible_for(self) -> str:
        return self._responsible_for

    def create(
        self,
        container: 'DependencyContainer',
        injection_status: 'InjectionStatus',
        args: Sequence[Any] = ()
    ) -> Any:
        return self._callback(container, *args)

    def __repr__(self) -> str:
        return f'CallbackFactory({self._responsible_for!r}, {self._callback!r})'
