"""
Setter Injection Tests

Tests for convention setters (set_xyz(self, dep: Xyz)) called after
construction.
"""

import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from autoinjection import UNRESOLVED, NoDefaultImplementationError, UnresolvableDependencyError
from conftest import AutoInjectionTestCase, fixture_name

from fixtures import (
    DefaultDummy1,
    DefaultDummy4,
    DefaultReporter,
    DefaultUnannotatedReporter,
    Dummy4Interface,
    LoggerInterface,
    NullLogger,
    ReporterInterface,
    SetterInjectionClass,
    SetterInjectionClassWithMissingDependency,
    UnannotatedReporterInterface,
)


class TestSetterInjection(AutoInjectionTestCase):
    """Test setter discovery and invocation."""

    def test_setter_receives_shared_instance(self):
        """Setters get the instance returned by get()."""
        instance = self.di.create(SetterInjectionClass)

        self.assertIsInstance(instance.logger, NullLogger)
        self.assertIs(instance.logger, self.di.get(LoggerInterface))

    def test_setter_shared_between_instances(self):
        """Two objects receive the same setter dependency."""
        first = self.di.create(SetterInjectionClass)
        second = self.di.create(SetterInjectionClass)

        self.assertIsNot(first, second)
        self.assertIs(first.logger, second.logger)

    def test_constructor_dependency_not_injected_again(self):
        """A type satisfied by the constructor skips its setter."""
        instance = self.di.create(SetterInjectionClass)

        self.assertIsInstance(instance.dummy1, DefaultDummy1)
        self.assertIsNone(instance.dummy1_via_setter)

    def test_supplied_dependency_not_injected_again(self):
        """A type supplied as an argument skips its setter as well."""
        dummy1 = DefaultDummy1()
        instance = self.di.create(SetterInjectionClass, dummy1)

        self.assertIs(instance.dummy1, dummy1)
        self.assertIsNone(instance.dummy1_via_setter)

    def test_non_setters_ignored(self):
        """Builtin annotations and multi-argument methods are not setters."""
        instance = self.di.create(SetterInjectionClass)

        self.assertIsNone(instance.name)

    def test_setter_called_once_per_type(self):
        """Implementation and interface setters for one type run once."""
        reporter = self.di.create(ReporterInterface)

        self.assertIsInstance(reporter, DefaultReporter)
        self.assertEqual(reporter.logger_calls, 1)
        self.assertIs(reporter.logger, self.di.get(LoggerInterface))

    def test_setter_with_factory(self):
        """Objects returned by a factory callback are wired too."""
        self.di.factory(DefaultReporter, lambda di: DefaultReporter())

        reporter = self.di.create(DefaultReporter)
        self.assertEqual(reporter.logger_calls, 1)

    def test_interface_setter_used_for_unannotated_override(self):
        """The setter declared on the requested interface is honoured."""
        reporter = self.di.create(UnannotatedReporterInterface)

        self.assertIsInstance(reporter, DefaultUnannotatedReporter)
        self.assertIs(reporter.logger, self.di.get(LoggerInterface))

    def test_unannotated_setter_ignored_on_class(self):
        """Requested directly, an unannotated override is not a setter."""
        reporter = self.di.create(DefaultUnannotatedReporter)

        self.assertIsNone(reporter.logger)

    def test_setter_uses_binding(self):
        """Setter dependencies follow uses() bindings."""
        class RecordingLogger(LoggerInterface):
            def log(self, message: str) -> None:
                pass

        self.di.uses(LoggerInterface, RecordingLogger)

        instance = self.di.create(SetterInjectionClass)
        self.assertIsInstance(instance.logger, RecordingLogger)

    def test_singleton_not_rewired(self):
        """A cached singleton is returned without calling setters again."""
        self.di.singleton(DefaultReporter)

        reporter = self.di.create(DefaultReporter)
        self.assertIs(reporter, self.di.create(ReporterInterface))
        self.assertEqual(reporter.logger_calls, 1)


class TestSetterInjectionFailure(AutoInjectionTestCase):
    """Test setters whose dependency cannot be resolved."""

    def test_create_raises(self):
        """The setter and its type are named, the cause is chained."""
        with self.assertRaises(UnresolvableDependencyError) as cm:
            self.di.create(SetterInjectionClassWithMissingDependency)

        message = str(cm.exception)
        self.assertIn('"fixtures.Dummy4Interface"', message)
        self.assertIn('SetterInjectionClassWithMissingDependency.set_dummy4()', message)
        self.assertIsInstance(cm.exception.__cause__, NoDefaultImplementationError)

    def test_try_create_and_try_get_unresolved(self):
        self.assertIs(self.di.try_create(SetterInjectionClassWithMissingDependency), UNRESOLVED)
        self.assertIs(self.di.try_get(SetterInjectionClassWithMissingDependency), UNRESOLVED)

    def test_failed_singleton_is_not_cached(self):
        """A singleton whose setter failed is built again later."""
        self.di.singleton(SetterInjectionClassWithMissingDependency)

        with self.assertRaises(UnresolvableDependencyError):
            self.di.create(SetterInjectionClassWithMissingDependency)

        self.di.uses(Dummy4Interface, DefaultDummy4)
        instance = self.di.create(SetterInjectionClassWithMissingDependency)

        self.assertIsInstance(instance.dummy4, DefaultDummy4)
        self.assertIs(instance, self.di.get(fixture_name('SetterInjectionClassWithMissingDependency')))

    def test_failed_get_is_not_cached(self):
        """get() does not keep an object whose setter failed."""
        self.assertIs(self.di.try_get(SetterInjectionClassWithMissingDependency), UNRESOLVED)

        self.di.uses(Dummy4Interface, DefaultDummy4)
        instance = self.di.get(SetterInjectionClassWithMissingDependency)

        self.assertIsInstance(instance.dummy4, DefaultDummy4)
        self.assertIs(instance, self.di.get(SetterInjectionClassWithMissingDependency))


if __name__ == '__main__':
    unittest.main()
