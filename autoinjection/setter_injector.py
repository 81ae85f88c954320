"""
SetterInjector

Setter injection by naming convention: every public method named ``set*``
that takes exactly one class-annotated argument receives an instance of
that class from the container after the object has been constructed.
"""

import logging
import threading
from typing import Any, Optional, Tuple, TYPE_CHECKING

from .definition import SetterDescriptor
from .exceptions import UnresolvableDependencyError
from .injector import Injector
from .reflector import TypeReflector

if TYPE_CHECKING:
    from .container import DependencyContainer
    from .injection_status import InjectionStatus


class SetterInjector(Injector):
    """Injector calling convention setters with container-managed instances.

    Dependencies come from ``container.get()``, so setters share the one
    instance the container keeps per Type Name. Types already satisfied by
    the constructor are skipped.

    Example::

        class Report:
            def __init__(self, title: str):
                self.title = title

            def set_clock(self, clock: ClockInterface) -> None:
                self.clock = clock

        report = di.create(Report, 'Q3')   # report.clock is di.get(ClockInterface)
    """

    def __init__(
        self,
        type_name: str,
        reflector: Optional[TypeReflector] = None,
        logger: Optional[logging.Logger] = None
    ):
        self._responsible_for = type_name
        self._reflector = reflector or TypeReflector()
        self._logger = logger or logging.getLogger(__name__)
        self._setters: Optional[Tuple[SetterDescriptor, ...]] = None
        self._lock = threading.Lock()

    def responsible_for(self) -> str:
        return self._responsible_for

    @property
    def setters(self) -> Tuple[SetterDescriptor, ...]:
        """Setter methods, reflected on first access."""
        if self._setters is None:
            with self._lock:
                if self._setters is None:
                    self._setters = self._reflector.get_setters(self._responsible_for)
        return self._setters

    def __call__(
        self,
        container: 'DependencyContainer',
        obj: Any,
        injection_status: 'InjectionStatus'
    ) -> None:
        for setter in self.setters:
            if setter.required_type in injection_status:
                self._logger.debug(
                    'Skipping %s.%s(), "%s" is already injected.',
                    self._responsible_for, setter.name, setter.required_type
                )
                continue

            self._logger.debug(
                'Injecting "%s" via %s.%s()',
                setter.required_type, self._responsible_for, setter.name
            )
            attempt = container.attempt_get(setter.required_type)
            if not attempt.ok:
                raise UnresolvableDependencyError(
                    f'Can not resolve dependency "{setter.required_type}" for setter '
                    f'{self._responsible_for}.{setter.name}()'
                ) from attempt.error

            getattr(obj, setter.name)(attempt.instance)
            injection_status.add(setter.required_type)

    def __repr__(self) -> str:
        return f'SetterInjector({self._responsible_for!r})'
