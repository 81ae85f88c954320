"""
Definition

Data classes describing what the reflector learned about a type
"""

from dataclasses import dataclass
from typing import Any, NamedTuple, Optional


@dataclass(frozen=True)
class ParameterDescriptor:
    """Constructor parameter"""
    name: str
    optional: bool
    required_type: Optional[str] = None  # Type Name, None for untyped parameters
    default: Any = None  # Value used when an optional parameter stays unresolved
    keyword_only: bool = False


@dataclass(frozen=True)
class SetterDescriptor:
    """Convention setter: set*(dependency)"""
    name: str
    required_type: str


class _Unresolved:
    """Marker returned by try_create()/try_get() when resolution failed."""

    _instance: Optional['_Unresolved'] = None

    def __new__(cls) -> '_Unresolved':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return 'UNRESOLVED'


UNRESOLVED = _Unresolved()


class Attempt(NamedTuple):
    """Outcome of a non-throwing resolution: the instance, or UNRESOLVED and the error"""
    instance: Any
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None
