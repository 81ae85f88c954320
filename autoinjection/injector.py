"""
Injector

Base class for post-construction wiring strategies
"""

from abc import ABC, abstractmethod
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .container import DependencyContainer
    from .injection_status import InjectionStatus


class Injector(ABC):
    """
    Injectors wire dependencies after an object instance has been created.

    ``injection_status`` holds the Type Names already injected into the
    object (by its factory or by earlier injectors). An injector skips
    those and records what it injects itself.
    """

    @abstractmethod
    def responsible_for(self) -> str:
        """
        Return the Type Name this injector handles

        Returns:
            The fully qualified type name
        """
        return NotImplemented

    @abstractmethod
    def __call__(
        self,
        container: 'DependencyContainer',
        obj: Any,
        injection_status: 'InjectionStatus'
    ) -> None:
        """
        Inject the dependencies into ``obj``

        Args:
            container: The container providing the dependencies
            obj: The freshly created object
            injection_status: Dependencies already injected, updated in place
        """
        return NotImplemented
