"""
ConstructorInjectionFactory

This module provides the factory that builds objects by calling their
constructor with a mix of caller-supplied and container-resolved arguments.

Resolution rules, for every constructor parameter in order:

- Typed parameter (annotated with a class):
    1. the next supplied argument, if it is an instance of that class
    2. an instance created by the container
    3. the declared default, if the parameter has one
    4. otherwise UnresolvableDependencyError
- Untyped parameter:
    1. the next supplied argument, whatever it is
    2. the declared default, if the parameter has one
    3. otherwise MissingArgumentError

Supplied arguments are consumed strictly left to right, so they must follow
the constructor's parameter order.
"""

import logging
import threading
from typing import Any, Dict, List, Optional, Sequence, Tuple, TYPE_CHECKING

from .definition import ParameterDescriptor
from .exceptions import MissingArgumentError, UnresolvableDependencyError
from .factory import Factory
from .reflector import TypeReflector

if TYPE_CHECKING:
    from .container import DependencyContainer
    from .injection_status import InjectionStatus


class ConstructorInjectionFactory(Factory):
    """Factory performing constructor injection for one class.

    The constructor is reflected once, on first use, and the resulting
    parameter descriptors are reused for every instance.

    Attributes:
        _responsible_for: Type Name of the class to construct
        _parameters: Reflected constructor parameters (None until first use)

    Example::

        class Service:
            def __init__(self, db: DatabaseInterface, name: str):
                ...

        factory = ConstructorInjectionFactory('app.Service')
        service = factory.create(di, InjectionStatus(), ['billing'])
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
        self._parameters: Optional[Tuple[ParameterDescriptor, ...]] = None
        self._lock = threading.Lock()

    def responsible_for(self) -> str:
        return self._responsible_for

    @property
    def parameters(self) -> Tuple[ParameterDescriptor, ...]:
        """Constructor parameters, reflected on first access."""
        if self._parameters is None:
            with self._lock:
                if self._parameters is None:
                    self._parameters = self._reflector.get_constructor_parameters(self._responsible_for)
        return self._parameters

    def create(
        self,
        container: 'DependencyContainer',
        injection_status: 'InjectionStatus',
        args: Sequence[Any] = ()
    ) -> Any:
        """Resolve every constructor parameter and instantiate the class.

        Raises:
            UnresolvableDependencyError: When a required typed parameter
                cannot be satisfied
            MissingArgumentError: When a required untyped parameter has
                no supplied argument left
        """
        supplied: List[Any] = list(args)
        positional: List[Any] = []
        keywords: Dict[str, Any] = {}

        for position, parameter in enumerate(self.parameters, start=1):
            value = self._resolve_parameter(container, injection_status, supplied, position, parameter)
            if parameter.keyword_only:
                keywords[parameter.name] = value
            else:
                positional.append(value)

        if supplied:
            self._logger.debug(
                'Ignoring %d supplied argument(s) left over for "%s".',
                len(supplied), self._responsible_for
            )

        self._logger.debug(
            'Creating new instance of class "%s" using %d parameters.',
            self._responsible_for, len(positional) + len(keywords)
        )
        return self._reflector.instantiate(self._responsible_for, positional, keywords)

    def _resolve_parameter(
        self,
        container: 'DependencyContainer',
        injection_status: 'InjectionStatus',
        supplied: List[Any],
        position: int,
        parameter: ParameterDescriptor
    ) -> Any:
        required_type = parameter.required_type

        if required_type is not None:
            if supplied and self._reflector.is_assignable(supplied[0], required_type):
                self._logger.debug('Using a supplied argument for parameter #%d "%s"', position, parameter.name)
                injection_status.add(required_type)
                return supplied.pop(0)

            self._logger.debug(
                'Fetching dependency "%s" for parameter #%d "%s"',
                required_type, position, parameter.name
            )
            attempt = container.attempt_create(required_type)
            if attempt.ok:
                injection_status.add(required_type)
                return attempt.instance

            if parameter.optional:
                self._logger.debug('Using default for optional parameter #%d "%s"', position, parameter.name)
                return parameter.default

            raise UnresolvableDependencyError(
                f'Can not resolve dependency "{required_type}" for parameter '
                f'#{position} \'{parameter.name}\' of {self._responsible_for}'
            ) from attempt.error

        if supplied:
            self._logger.debug('Using a supplied argument for parameter #%d "%s"', position, parameter.name)
            return supplied.pop(0)

        if parameter.optional:
            self._logger.debug('Using default for optional parameter #%d "%s"', position, parameter.name)
            return parameter.default

        raise MissingArgumentError(
            f'No value supplied for parameter #{position} \'{parameter.name}\' of {self._responsible_for}'
        )

    def __repr__(self) -> str:
        return f'ConstructorInjectionFactory({self._responsible_for!r})'
