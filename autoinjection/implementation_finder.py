"""
DefaultImplementationFinder

Finds the default implementation of an interface by naming convention.

By convention, the interface should be named like::

    package.module.XyzAbcInterface

The following class names are tested, in this order::

    package.module.DefaultXyzAbc
    package.module.DefaultXyzAbcImpl
    package.module.NullXyzAbc        (e.g. a no-op logger or cache)
"""

import logging
from typing import Optional, Tuple

from .reflector import TypeRef, TypeReflector


INTERFACE_SUFFIX = 'Interface'

NAMESPACE_SEPARATOR = '.'

# Prefix and suffix pairs to build class names from
CANDIDATE_AFFIXES: Tuple[Tuple[str, str], ...] = (
    ('Default', ''),
    ('Default', 'Impl'),
    ('Null', ''),
)


class DefaultImplementationFinder:
    """Convention-based lookup of interface implementations.

    The finder is a pure lookup: it does not cache its answers. The
    container remembers what it found.

    Example::

        finder = DefaultImplementationFinder()
        finder.find_implementation('app.cache.CacheInterface')
        # 'app.cache.DefaultCache'
    """

    def __init__(self, reflector: Optional[TypeReflector] = None, logger: Optional[logging.Logger] = None):
        self._reflector = reflector or TypeReflector()
        self._logger = logger or logging.getLogger(__name__)

    def find_implementation(self, interface: TypeRef) -> Optional[str]:
        """Find the default class for an interface.

        Args:
            interface: Interface class or its fully qualified name

        Returns:
            The Type Name of the first candidate class that exists and
            implements the interface, or None
        """
        interface_name = self._reflector.name_of(interface)

        if not interface_name.endswith(INTERFACE_SUFFIX):
            self._logger.debug('Interface name violates convention, "%s" postfix missing.', INTERFACE_SUFFIX)
            return None

        if interface_name.startswith(NAMESPACE_SEPARATOR):
            self._logger.debug('Removing leading separator from interface name for normalization.')
            interface_name = interface_name[1:]

        namespace, separator, short_name = interface_name.rpartition(NAMESPACE_SEPARATOR)
        namespace += separator
        if namespace:
            self._logger.debug('Interface is "%s" in namespace "%s"', short_name, namespace)
        else:
            self._logger.debug('Interface is "%s" without namespace', short_name)

        basename = short_name[:-len(INTERFACE_SUFFIX)]
        self._logger.debug('Using basename "%s"', basename)

        for prefix, suffix in CANDIDATE_AFFIXES:
            class_name = f'{namespace}{prefix}{basename}{suffix}'
            self._logger.debug('Checking class "%s"', class_name)

            if not self._reflector.class_exists(class_name):
                self._logger.debug('Class does not exist.')
                continue

            if not self._reflector.is_subclass(class_name, interface_name):
                self._logger.debug('Class does not implement the interface.')
                continue

            self._logger.debug('Found class.')
            return class_name

        self._logger.debug('No class found.')
        return None
