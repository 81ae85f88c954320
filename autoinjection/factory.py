"""
Factory

Base class for the strategies that produce instances for the container
"""

from abc import ABC, abstractmethod
from typing import Any, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from .container import DependencyContainer
    from .injection_status import InjectionStatus


class Factory(ABC):
    """
    Objects implementing this class create instances of one Type Name.

    If a factory injects dependencies while creating the object, it
    records their Type Names in ``injection_status`` so the container's
    injectors do not inject them a second time.

    Example:
        ```python
        class ClockFactory(Factory):
            def responsible_for(self) -> str:
                return 'app.time.Clock'

            def create(self, container, injection_status, args=()):
                return Clock(*args)
        ```
    """

    @abstractmethod
    def responsible_for(self) -> str:
        """
        Return the Type Name this factory creates

        Returns:
            The fully qualified type name
        """
        return NotImplemented

    @abstractmethod
    def create(
        self,
        container: 'DependencyContainer',
        injection_status: 'InjectionStatus',
        args: Sequence[Any] = ()
    ) -> Any:
        """
        Create a new instance of the type this factory is responsible for

        Args:
            container: The container requesting the instance
            injection_status: Dependencies satisfied so far for this instance
            args: Positional arguments supplied by the caller of create()

        Returns:
            The new instance
        """
        return NotImplemented
