"""
Test Configuration and Utilities

Common base classes and helper functions for AutoInjection tests
"""

import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from autoinjection import DependencyContainer

# Module name of tests/fixtures.py as seen by the reflector
FIXTURES = 'fixtures.'


class AutoInjectionTestCase(unittest.TestCase):
    """
    Base test case class for AutoInjection tests.

    Provides a fresh container per test so that registrations,
    singletons and cached instances never leak between tests.
    """

    def setUp(self):
        """Create a new container before each test"""
        self.di = DependencyContainer()


def fixture_name(class_name: str) -> str:
    """
    Return the Type Name of a class in tests/fixtures.py.

    Example:
        >>> fixture_name('Dummy1Interface')
        'fixtures.Dummy1Interface'
    """
    return FIXTURES + class_name
