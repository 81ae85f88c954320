"""
DependencyContainer

This module provides the resolution engine of AutoInjection. It is the
heart of the package, responsible for:

- Storing factory overrides, implementation bindings and singleton flags
- Choosing how a requested Type Name gets constructed
- Running setter injection on every freshly constructed object
- Caching singleton and ``get()`` instances
- A small key/value configuration store

Resolution order for ``create(type_name)``, first match wins:

1. a factory callback registered for exactly this Type Name
2. an implementation bound with ``uses()`` (resolved recursively)
3. a concrete class (constructor injection)
4. an interface: its convention-named default implementation
   (resolved recursively)
5. otherwise UnknownDependencyError
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from .callback_factory import CallbackFactory
from .constructor_injection_factory import ConstructorInjectionFactory
from .definition import UNRESOLVED, Attempt
from .exceptions import (
    CircularDependencyError,
    LockedSingletonMutationError,
    NoDefaultImplementationError,
    UnknownConfigKeyError,
    UnknownDependencyError,
)
from .factory import Factory
from .implementation_finder import DefaultImplementationFinder
from .injection_status import InjectionStatus, _construction_chain
from .injector import Injector
from .reflector import TypeRef, TypeReflector
from .setter_injector import SetterInjector

_MISSING = object()


class DependencyContainer:
    """Runtime DI container with constructor and setter injection.

    Objects are built from their constructor signatures: class-annotated
    parameters are created by the container (or taken from the supplied
    arguments when the types match), everything else comes from the
    supplied arguments. After construction, convention setters
    (``set_xyz(self, dep: Xyz)``) receive shared instances.

    Every method accepting a Type Name also accepts the class itself.

    Attributes:
        _factory_callbacks: User factory callbacks per Type Name
        _implementations: Implementation bindings registered with uses()
        _factories: Resolved factory per Type Name
        _default_implementations: Convention lookups already performed
        _singletons: Singleton flag per Type Name
        _instances: Cached singleton and get() instances
        _injectors: Injectors run after construction, per Type Name
        _config: Configuration values

    Example::

        di = DependencyContainer()
        di.uses(CacheInterface, RedisCache)
        di.singleton(Database, lambda di: Database(di.config('dsn')))
        di.config('dsn', 'sqlite://')

        service = di.create(ReportService, 'monthly')
        db = di.get(Database)
    """

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        reflector: Optional[TypeReflector] = None,
        implementation_finder: Optional[DefaultImplementationFinder] = None
    ):
        """Initialize an empty container.

        Args:
            logger: Receives debug traces of every resolution decision
                (defaults to the ``autoinjection.container`` logger, which
                is silent unless the application configures logging)
            reflector: Type descriptor used to inspect classes
            implementation_finder: Convention lookup for interfaces
        """
        self._logger = logger or logging.getLogger(__name__)
        self._reflector = reflector or TypeReflector()
        self._implementation_finder = implementation_finder or DefaultImplementationFinder(
            self._reflector, self._logger
        )

        self._factory_callbacks: Dict[str, Callable[..., Any]] = {}
        self._implementations: Dict[str, str] = {}
        self._factories: Dict[str, Factory] = {}
        self._default_implementations: Dict[str, Optional[str]] = {}
        self._singletons: Dict[str, bool] = {}
        self._instances: Dict[str, Any] = {}
        self._injectors: Dict[str, List[Injector]] = {}
        self._config: Dict[str, Any] = {}

        # Reentrant: resolution recurses into create() for every dependency
        self._lock = threading.RLock()

    @property
    def reflector(self) -> TypeReflector:
        """The type descriptor; use ``reflector.register(cls)`` for local classes."""
        return self._reflector

    def create(self, type_ref: TypeRef, *args: Any) -> Any:
        """Create a new object of the class or interface ``type_ref``.

        Additional arguments are passed to the constructor. Typed
        constructor parameters are taken from these arguments when the
        next one matches the annotated type, otherwise the container
        creates the dependency. Untyped parameters consume the arguments
        in order.

        Singletons are created once; later calls return the same object.

        Args:
            type_ref: The class or fully qualified interface/class name
            *args: Constructor arguments, in constructor order

        Returns:
            The new (or cached singleton) instance

        Raises:
            UnknownDependencyError: When the name is no class or interface
            NoDefaultImplementationError: When an interface has no
                default implementation
            UnresolvableDependencyError: When a typed parameter cannot be
                satisfied
            MissingArgumentError: When an untyped parameter has no value
            CircularDependencyError: When the type depends on itself

        Example::

            mailer = di.create(Mailer, 'noreply@example.com')
        """
        type_name = self._reflector.name_of(type_ref)
        with self._lock:
            instance, _ = self._create(type_name, args, InjectionStatus())
            return instance

    def attempt_create(self, type_ref: TypeRef, *args: Any) -> Attempt:
        """Like create(), but report failure as a result instead of raising.

        Returns:
            ``Attempt(instance)`` on success, ``Attempt(UNRESOLVED, error)``
            when anything in the resolution chain failed
        """
        try:
            return Attempt(self.create(type_ref, *args))
        except Exception as e:
            self._logger.debug('Could not create "%s": %s', type_ref, e)
            return Attempt(UNRESOLVED, e)

    def try_create(self, type_ref: TypeRef, *args: Any) -> Any:
        """Like create(), but return ``UNRESOLVED`` instead of raising.

        Example::

            cache = di.try_create(CacheInterface)
            if cache is UNRESOLVED:
                cache = None
        """
        return self.attempt_create(type_ref, *args).instance

    def get(self, type_ref: TypeRef) -> Any:
        """Return the shared instance of ``type_ref``.

        The first call creates the instance (without arguments); every
        later call for the same Type Name returns that very instance,
        whether or not the name is marked singleton.

        Raises:
            The errors of create()
        """
        type_name = self._reflector.name_of(type_ref)

        instance = self._instances.get(type_name, _MISSING)
        if instance is not _MISSING:
            return instance

        with self._lock:
            if type_name not in self._instances:
                instance, _ = self._create(type_name, (), InjectionStatus())
                self._instances[type_name] = instance
            return self._instances[type_name]

    def attempt_get(self, type_ref: TypeRef) -> Attempt:
        """Like get(), but report failure as a result instead of raising."""
        try:
            return Attempt(self.get(type_ref))
        except Exception as e:
            self._logger.debug('Could not get "%s": %s', type_ref, e)
            return Attempt(UNRESOLVED, e)

    def try_get(self, type_ref: TypeRef) -> Any:
        """Like get(), but return ``UNRESOLVED`` instead of raising."""
        return self.attempt_get(type_ref).instance

    def singleton(
        self,
        type_ref: TypeRef,
        factory: Union[bool, Callable[..., Any]] = True
    ) -> 'DependencyContainer':
        """Mark (or unmark) a Type Name as singleton.

        Args:
            type_ref: The class or Type Name
            factory: ``True`` to mark, ``False`` to unmark, or a factory
                callback to register and mark in one call

        Returns:
            The container, for chaining

        Raises:
            LockedSingletonMutationError: When a factory is given for a
                singleton that is already instantiated

        Example::

            di.singleton(Database, lambda di: Database(di.config('dsn')))
        """
        type_name = self._reflector.name_of(type_ref)
        with self._lock:
            if factory is False:
                self._logger.debug('Removing singleton flag of "%s".', type_name)
                self._singletons[type_name] = False
                return self

            if callable(factory):
                self.factory(type_name, factory)
            elif factory is not True:
                raise TypeError(f'Expected True, False or a callable, got {factory!r}')

            self._logger.debug('Marking "%s" as singleton.', type_name)
            self._singletons[type_name] = True
        return self

    def is_singleton(self, type_ref: TypeRef) -> bool:
        return self._singletons.get(self._reflector.name_of(type_ref), False)

    def factory(self, type_ref: TypeRef, callback: Callable[..., Any]) -> 'DependencyContainer':
        """Register a factory callback for a Type Name.

        The callback receives the container followed by the arguments
        given to ``create()``.

        Returns:
            The container, for chaining

        Raises:
            LockedSingletonMutationError: When the Type Name is a singleton
                that is already instantiated

        Example::

            di.factory(Clock, lambda di, tz='UTC': Clock(tz))
        """
        if not callable(callback):
            raise TypeError(f'Factory for {type_ref!r} must be callable, got {callback!r}')

        type_name = self._reflector.name_of(type_ref)
        with self._lock:
            if self._singletons.get(type_name) and type_name in self._instances:
                raise LockedSingletonMutationError(
                    f'Can not change the factory of singleton "{type_name}", '
                    f'it is already instantiated.'
                )

            self._logger.debug('Registering factory for "%s".', type_name)
            self._factory_callbacks[type_name] = callback
            self._factories.pop(type_name, None)
        return self

    def uses(self, type_ref: TypeRef, implementation: TypeRef) -> 'DependencyContainer':
        """Resolve ``type_ref`` through ``implementation`` from now on.

        Bindings take precedence over the default implementation
        convention.

        Returns:
            The container, for chaining

        Example::

            di.uses(CacheInterface, RedisCache)
        """
        type_name = self._reflector.name_of(type_ref)
        implementation_name = self._reflector.name_of(implementation)
        with self._lock:
            self._logger.debug('Binding "%s" to "%s".', type_name, implementation_name)
            self._implementations[type_name] = implementation_name
        return self

    def config(self, key: str, value: Any = _MISSING) -> Any:
        """Read or write a configuration value.

        ``config(key)`` reads, ``config(key, value)`` writes and returns
        the container. A key can be written again; the latest value wins.

        Raises:
            UnknownConfigKeyError: When reading a key never written
        """
        if value is _MISSING:
            try:
                return self._config[key]
            except KeyError:
                raise UnknownConfigKeyError(f'Config key "{key}" is not set.') from None

        with self._lock:
            self._config[key] = value
        return self

    def has_config(self, key: str) -> bool:
        return key in self._config

    def _create(
        self,
        type_name: str,
        args: Sequence[Any],
        injection_status: InjectionStatus
    ) -> Tuple[Any, bool]:
        """Create (or reuse) an instance; returns ``(instance, created)``."""
        is_singleton = self._singletons.get(type_name, False)
        if is_singleton and type_name in self._instances:
            self._logger.debug('Reusing singleton instance of "%s".', type_name)
            return self._instances[type_name], False

        chain = _construction_chain.get()
        if type_name in chain:
            cycle = ' -> '.join(chain + (type_name,))
            raise CircularDependencyError(f'Circular dependency detected: {cycle}')

        token = _construction_chain.set(chain + (type_name,))
        try:
            instance = self._build(type_name, args, injection_status)
        finally:
            _construction_chain.reset(token)

        if is_singleton:
            self._instances[type_name] = instance
        return instance, True

    def _build(self, type_name: str, args: Sequence[Any], injection_status: InjectionStatus) -> Any:
        if type_name in self._factory_callbacks:
            self._logger.debug('Required dependency "%s" has a registered factory.', type_name)
            factory = self._factories.get(type_name)
            if factory is None:
                factory = self._factories[type_name] = CallbackFactory(
                    type_name, self._factory_callbacks[type_name]
                )
            return self._produce(factory, type_name, args, injection_status)

        if type_name in self._implementations:
            implementation = self._implementations[type_name]
            self._logger.debug('Required dependency "%s" is bound to "%s".', type_name, implementation)
            return self._delegate(type_name, implementation, args, injection_status)

        if self._reflector.class_exists(type_name):
            self._logger.debug('Required dependency "%s" is a class, try to create it.', type_name)
            factory = self._factories.get(type_name)
            if factory is None:
                factory = self._factories[type_name] = ConstructorInjectionFactory(
                    type_name, self._reflector, self._logger
                )
            return self._produce(factory, type_name, args, injection_status)

        if self._reflector.interface_exists(type_name):
            implementation = self._find_default_implementation(type_name)
            if implementation is None:
                raise NoDefaultImplementationError(
                    f'Required dependency "{type_name}" has no default class.'
                )
            self._logger.debug(
                'Required dependency "%s" is fulfilled by default class "%s".',
                type_name, implementation
            )
            return self._delegate(type_name, implementation, args, injection_status)

        raise UnknownDependencyError(
            f'Required dependency "{type_name}" is no class or interface to satisfy.'
        )

    def _produce(
        self,
        factory: Factory,
        type_name: str,
        args: Sequence[Any],
        injection_status: InjectionStatus
    ) -> Any:
        instance = factory.create(self, injection_status, args)
        self._inject(type_name, instance, injection_status)
        return instance

    def _delegate(
        self,
        type_name: str,
        implementation: str,
        args: Sequence[Any],
        injection_status: InjectionStatus
    ) -> Any:
        """Resolve ``type_name`` through another Type Name, sharing the injection status."""
        instance, created = self._create(implementation, args, injection_status)
        if created:
            self._inject(type_name, instance, injection_status)
        return instance

    def _find_default_implementation(self, interface_name: str) -> Optional[str]:
        if interface_name not in self._default_implementations:
            self._default_implementations[interface_name] = (
                self._implementation_finder.find_implementation(interface_name)
            )
        return self._default_implementations[interface_name]

    def _inject(self, type_name: str, instance: Any, injection_status: InjectionStatus) -> None:
        for injector in self._injectors_for(type_name):
            injector(self, instance, injection_status)

    def _injectors_for(self, type_name: str) -> List[Injector]:
        injectors = self._injectors.get(type_name)
        if injectors is None:
            # Names only known to a factory callback have nothing to reflect
            if self._reflector.lookup(type_name) is None:
                injectors = []
            else:
                injectors = [SetterInjector(type_name, self._reflector, self._logger)]
            self._injectors[type_name] = injectors
        return injectors
