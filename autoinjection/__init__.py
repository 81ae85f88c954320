# Public API
import logging
from importlib.metadata import PackageNotFoundError, version

from .callback_factory import CallbackFactory
from .constructor_injection_factory import ConstructorInjectionFactory
from .container import DependencyContainer
from .definition import UNRESOLVED, Attempt, ParameterDescriptor, SetterDescriptor
from .exceptions import (
    AutoInjectionError,
    CircularDependencyError,
    LockedSingletonMutationError,
    MissingArgumentError,
    NoDefaultImplementationError,
    ReflectionError,
    UnknownConfigKeyError,
    UnknownDependencyError,
    UnresolvableDependencyError,
)
from .factory import Factory
from .implementation_finder import DefaultImplementationFinder
from .injection_status import InjectionStatus
from .injector import Injector
from .reflector import TypeReflector
from .setter_injector import SetterInjector

__all__ = [
    "DependencyContainer",
    "DefaultImplementationFinder",
    "TypeReflector",
    "InjectionStatus",
    "UNRESOLVED",
    "Attempt",
    "ParameterDescriptor",
    "SetterDescriptor",
    # Factories and injectors
    "Factory",
    "CallbackFactory",
    "ConstructorInjectionFactory",
    "Injector",
    "SetterInjector",
    # Exceptions
    "AutoInjectionError",
    "UnresolvableDependencyError",
    "MissingArgumentError",
    "UnknownDependencyError",
    "NoDefaultImplementationError",
    "LockedSingletonMutationError",
    "UnknownConfigKeyError",
    "CircularDependencyError",
    "ReflectionError",
]

# Resolution traces are debug records; silent unless the application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

try:
    __version__ = version("autoinjection")
except PackageNotFoundError:
    # Fallback for development
    __version__ = '0.0.0'
