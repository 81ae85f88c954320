"""
TypeReflector

This module provides the reflective substrate of the container. It maps
Type Names (dotted, fully-qualified names such as ``app.db.Database``) to
classes and answers the questions the resolution engine asks:

- Does a name denote a class, an interface, or nothing at all?
- Which parameters does a constructor take, and which of them are typed?
- Which convention setters (``set*``) does a class expose?
- Is a value assignable to a type?

Classes are found in a descriptor table first. The table is filled whenever
a class object passes through the reflector (including classes found in
annotations) and can be filled explicitly with ``register()``. Names missing
from the table are imported on demand.
"""

import importlib
import inspect
import logging
import threading
import types
import typing
from abc import ABC
from typing import Any, Callable, Dict, Optional, Sequence, Tuple, Type, Union

from .definition import ParameterDescriptor, SetterDescriptor
from .exceptions import ReflectionError, UnknownDependencyError

logger = logging.getLogger(__name__)

TypeRef = Union[str, Type]

# Prefix of methods considered for setter injection
SETTER_PREFIX = 'set'


def qualified_name(cls: Type) -> str:
    """Return the Type Name of a class: ``module.QualName``."""
    return f'{cls.__module__}.{cls.__qualname__}'


class TypeReflector:
    """Reflective type descriptor for the container.

    Attributes:
        _types: Descriptor table mapping Type Names to classes

    Example::

        reflector = TypeReflector()
        reflector.interface_exists('app.cache.CacheInterface')  # True
        reflector.get_constructor_parameters('app.service.Service')
    """

    def __init__(self):
        self._types: Dict[str, Type] = {}
        self._lock = threading.Lock()

    def register(self, cls: Type) -> str:
        """Record a class in the descriptor table.

        Needed for classes that cannot be imported by name, e.g. classes
        defined inside a function. The latest registration for a name wins.

        Args:
            cls: The class to record

        Returns:
            The Type Name of the class
        """
        if not inspect.isclass(cls):
            raise TypeError(f'Expected a class, got {cls!r}')

        name = qualified_name(cls)
        with self._lock:
            self._types[name] = cls
        return name

    def name_of(self, type_ref: TypeRef) -> str:
        """Normalize a class or Type Name to a Type Name."""
        if isinstance(type_ref, str):
            return type_ref
        if inspect.isclass(type_ref):
            return self.register(type_ref)
        raise TypeError(f'Expected a class or a type name, got {type_ref!r}')

    def lookup(self, name: str) -> Optional[Type]:
        """Find the class for a Type Name, or None."""
        cls = self._types.get(name)
        if cls is not None:
            return cls

        cls = self._import(name)
        if cls is not None:
            with self._lock:
                self._types.setdefault(name, cls)
        return cls

    def class_exists(self, name: str) -> bool:
        cls = self.lookup(name)
        return cls is not None and not _is_interface(cls)

    def interface_exists(self, name: str) -> bool:
        cls = self.lookup(name)
        return cls is not None and _is_interface(cls)

    def is_subclass(self, name: str, parent_name: str) -> bool:
        """Check whether the class ``name`` implements/derives from ``parent_name``."""
        cls = self.lookup(name)
        parent = self.lookup(parent_name)
        if cls is None or parent is None:
            return False

        if parent in cls.__mro__:
            return True
        try:
            return issubclass(cls, parent)
        except TypeError:
            # Protocols that are not runtime checkable only conform nominally
            return False

    def is_assignable(self, value: Any, name: str) -> bool:
        """Check whether ``value`` can be passed where ``name`` is required."""
        target = self.lookup(name)
        if target is None:
            return False

        try:
            return isinstance(value, target)
        except TypeError:
            return target in type(value).__mro__

    def get_constructor_parameters(self, name: str) -> Tuple[ParameterDescriptor, ...]:
        """Describe the constructor parameters of a class.

        ``self``, ``*args`` and ``**kwargs`` are left out. A class without
        its own constructor anywhere in its hierarchy has no parameters.

        Raises:
            UnknownDependencyError: When the name does not denote a class
            ReflectionError: When the signature cannot be analysed
        """
        cls = self._require(name)
        init = cls.__init__
        if init is object.__init__:
            return ()

        signature = self._signature(cls, init)
        hints = _resolve_type_hints(init)

        parameters = []
        for param in list(signature.parameters.values())[1:]:
            if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                continue

            optional = param.default is not inspect.Parameter.empty
            required_type = self._dependency_type(cls, param, hints)
            parameters.append(ParameterDescriptor(
                name=param.name,
                optional=optional,
                required_type=required_type,
                default=param.default if optional else None,
                keyword_only=param.kind is inspect.Parameter.KEYWORD_ONLY,
            ))

        return tuple(parameters)

    def get_setters(self, name: str) -> Tuple[SetterDescriptor, ...]:
        """Describe the convention setters of a class.

        A setter is a public method named ``set*`` taking exactly one
        argument besides ``self`` whose annotation is a class. Methods are
        listed in declaration order, starting with the class itself and
        walking the MRO; an override hides the method it overrides.
        """
        cls = self._require(name)

        seen = set()
        setters = []
        for klass in cls.__mro__:
            if klass is object:
                continue

            for method_name, member in vars(klass).items():
                if method_name in seen:
                    continue
                seen.add(method_name)

                if not method_name.startswith(SETTER_PREFIX) or not inspect.isfunction(member):
                    continue

                params = list(self._signature(cls, member).parameters.values())[1:]
                if len(params) != 1:
                    continue
                if params[0].kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                    continue

                required_type = self._dependency_type(cls, params[0], _resolve_type_hints(member))
                if required_type is None:
                    continue

                setters.append(SetterDescriptor(name=method_name, required_type=required_type))

        return tuple(setters)

    def instantiate(
        self,
        name: str,
        args: Sequence[Any] = (),
        kwargs: Optional[Dict[str, Any]] = None
    ) -> Any:
        """Create an instance of the class ``name``."""
        cls = self._require(name)
        return cls(*args, **(kwargs or {}))

    def _require(self, name: str) -> Type:
        cls = self.lookup(name)
        if cls is None:
            raise UnknownDependencyError(f'"{name}" is no class or interface to satisfy.')
        return cls

    def _import(self, name: str) -> Optional[Type]:
        """Import the longest importable module prefix of ``name`` and walk the rest."""
        parts = name.split('.')
        if len(parts) < 2 or not all(parts):
            return None

        for split in range(len(parts) - 1, 0, -1):
            module_name = '.'.join(parts[:split])
            try:
                target = importlib.import_module(module_name)
            except ImportError:
                continue

            for attribute in parts[split:]:
                target = getattr(target, attribute, None)
                if target is None:
                    return None
            return target if inspect.isclass(target) else None

        return None

    @staticmethod
    def _signature(cls: Type, function: Callable) -> inspect.Signature:
        try:
            return inspect.signature(function)
        except ValueError as e:
            raise ReflectionError(
                f'Cannot inspect {cls.__name__}.{function.__name__}: {e}. '
                f'This may occur with built-in types or C extension classes.'
            ) from e
        except TypeError as e:
            raise ReflectionError(
                f'Cannot get signature for {cls.__name__}.{function.__name__}: {e}.'
            ) from e

    def _dependency_type(
        self,
        cls: Type,
        param: inspect.Parameter,
        hints: Dict[str, Any]
    ) -> Optional[str]:
        """Return the Type Name a parameter requires, or None if it is untyped."""
        annotation = hints.get(param.name, param.annotation)
        if annotation is inspect.Parameter.empty:
            return None

        if isinstance(annotation, str):
            annotation = self._resolve_string_annotation(cls, param.name, annotation)

        dependency = _unwrap_dependency(annotation)
        if dependency is None:
            return None
        return self.register(dependency)

    def _resolve_string_annotation(self, cls: Type, param_name: str, annotation: str) -> Any:
        """Resolve a forward reference that typing.get_type_hints() could not.

        The string is evaluated against the classes in the descriptor table
        (by short name), the defining module and the class namespace.
        """
        namespace: Dict[str, Any] = {'Optional': Optional, 'Union': Union}
        with self._lock:
            namespace.update({known.__name__: known for known in self._types.values()})

        module = inspect.getmodule(cls)
        if module is not None:
            namespace.update(vars(module))
        namespace.update(vars(cls))

        try:
            return eval(annotation, namespace)
        except NameError as e:
            raise ReflectionError(
                f"Cannot resolve forward reference '{annotation}' for parameter "
                f"'{param_name}' in {cls.__name__}. "
                f"Hint: Ensure '{annotation}' is defined and importable, or register "
                f"it with reflector.register() before resolving {cls.__name__}."
            ) from e
        except SyntaxError as e:
            raise ReflectionError(
                f"Invalid forward reference '{annotation}' for parameter "
                f"'{param_name}' in {cls.__name__}: {e}."
            ) from e


def _resolve_type_hints(function: Callable) -> Dict[str, Any]:
    """typing.get_type_hints() that gives up quietly on unresolvable names."""
    try:
        return typing.get_type_hints(function, include_extras=True)
    except NameError as e:
        # Local classes; resolved one by one later
        logger.debug('Deferring type hints of %s: %s', getattr(function, '__qualname__', function), e)
        return {}
    except TypeError:
        return {}


def _unwrap_dependency(annotation: Any) -> Optional[Type]:
    """Reduce an annotation to the class it asks for.

    ``Annotated[X, ...]``, ``Optional[X]`` and ``X | None`` become ``X``.
    Builtin types, ``Any``, other unions and generic aliases are not
    dependencies.
    """
    origin = typing.get_origin(annotation)
    if origin is typing.Annotated:
        return _unwrap_dependency(typing.get_args(annotation)[0])

    if origin is Union or origin is types.UnionType:
        members = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(members) != 1:
            return None
        return _unwrap_dependency(members[0])

    # Any is a class since Python 3.11
    if annotation is typing.Any:
        return None
    if not inspect.isclass(annotation) or origin is not None:
        return None
    if annotation.__module__ == 'builtins':
        return None
    return annotation


def _is_protocol(cls: Type) -> bool:
    return bool(cls.__dict__.get('_is_protocol', False))


def _is_interface(cls: Type) -> bool:
    """Protocols, abstract classes and direct ABC subclasses are interfaces."""
    return _is_protocol(cls) or inspect.isabstract(cls) or ABC in cls.__bases__
