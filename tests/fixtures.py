"""
Test Fixtures

Common test classes used across test modules.

Interfaces follow the naming convention of the default implementation
finder: ``XyzInterface`` is implemented by ``DefaultXyz``,
``DefaultXyzImpl`` or ``NullXyz``.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Protocol


class Dummy1Interface(ABC):
    """Implemented by DefaultDummy1"""
    pass


class DefaultDummy1(Dummy1Interface):
    pass


class Dummy2Interface(ABC):
    """Implemented by DefaultDummy2Impl"""
    pass


class DefaultDummy2Impl(Dummy2Interface):
    pass


class Dummy3Interface(ABC):
    """Implemented by NullDummy3"""
    pass


class NullDummy3(Dummy3Interface):
    pass


class Dummy4Interface(ABC):
    """No implementation: DefaultDummy4 does not implement it"""
    pass


class DefaultDummy4:
    pass


class Dummy5Interface(ABC):
    """DefaultDummy5 exists but does not conform, DefaultDummy5Impl does"""
    pass


class DefaultDummy5:
    pass


class DefaultDummy5Impl(Dummy5Interface):
    pass


class ClockInterface(Protocol):
    """Protocol-style interface"""

    def now(self) -> float:
        ...


class DefaultClock(ClockInterface):

    def now(self) -> float:
        return 0.0


class LoggerInterface(ABC):
    """Abstract interface with a no-op default (NullLogger)"""

    @abstractmethod
    def log(self, message: str) -> None:
        pass


class NullLogger(LoggerInterface):

    def __init__(self):
        self.messages: List[str] = []

    def log(self, message: str) -> None:
        self.messages.append(message)


class ConstructorInjectionClass:
    """Three typed constructor parameters"""

    def __init__(self, dummy1: Dummy1Interface, dummy2: Dummy2Interface, dummy3: Dummy3Interface):
        self.dummy1 = dummy1
        self.dummy2 = dummy2
        self.dummy3 = dummy3


class ConstructorInjectionClassWithAdditionalParams:
    """Typed parameters surrounded by untyped ones"""

    def __init__(
        self,
        config1,
        dummy1: Dummy1Interface,
        dummy2: Dummy2Interface,
        dummy3: Dummy3Interface,
        config2
    ):
        self.config1 = config1
        self.dummy1 = dummy1
        self.dummy2 = dummy2
        self.dummy3 = dummy3
        self.config2 = config2


class ConstructorInjectionClassWithOptionalParameters:
    """Optional typed and untyped parameters"""

    def __init__(self, dummy1: Dummy1Interface, dummy4: Optional[Dummy4Interface] = None, config1=None):
        self.dummy1 = dummy1
        self.dummy4 = dummy4
        self.config1 = config1


class SetterInjectionClass:
    """Constructor and setter injection combined"""

    def __init__(self, dummy1: Dummy1Interface):
        self.dummy1 = dummy1
        self.dummy1_via_setter = None
        self.logger = None
        self.name = None

    def set_logger(self, logger: LoggerInterface) -> None:
        self.logger = logger

    def set_dummy1(self, dummy1: Dummy1Interface) -> None:
        # Satisfied by the constructor, never called by the container
        self.dummy1_via_setter = dummy1

    def set_name(self, name: str) -> None:
        # Builtin annotation, not a dependency
        self.name = name

    def set_pair(self, dummy2: Dummy2Interface, dummy3: Dummy3Interface) -> None:
        # Two parameters, not a setter
        raise AssertionError('set_pair() must not be injected')


class ReporterInterface(ABC):
    """Interface declaring a setter"""

    @abstractmethod
    def set_logger(self, logger: LoggerInterface) -> None:
        pass


class DefaultReporter(ReporterInterface):

    def __init__(self):
        self.logger_calls = 0
        self.logger = None

    def set_logger(self, logger: LoggerInterface) -> None:
        self.logger_calls += 1
        self.logger = logger


class UnannotatedReporterInterface(ABC):
    """Interface declaring a setter that its implementation leaves unannotated"""

    @abstractmethod
    def set_logger(self, logger: LoggerInterface) -> None:
        pass


class DefaultUnannotatedReporter(UnannotatedReporterInterface):

    def __init__(self):
        self.logger = None

    def set_logger(self, logger) -> None:
        self.logger = logger


class SetterInjectionClassWithMissingDependency:
    """Setter asking for an interface without default implementation"""

    def __init__(self):
        self.dummy4 = None

    def set_dummy4(self, dummy4: Dummy4Interface) -> None:
        self.dummy4 = dummy4
