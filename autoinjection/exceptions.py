"""
AutoInjection Exceptions

Custom exception hierarchy for the AutoInjection container
"""


class AutoInjectionError(Exception):
    """
    Base exception for all AutoInjection errors.

    All AutoInjection-specific exceptions inherit from this class.
    You can catch this to handle any resolution error generically.

    Example:
        >>> try:
        ...     service = di.create(MyService)
        ... except AutoInjectionError as e:
        ...     print(f"DI error: {e}")
    """

    pass


class UnresolvableDependencyError(AutoInjectionError):
    """
    Raised when a required, typed constructor or setter parameter cannot
    be satisfied.

    The container looked at the next supplied argument, then tried to
    create an instance of the annotated type, and the parameter has
    no default to fall back to.

    Common causes:
        - The annotated type is an interface without a default implementation
        - Supplied arguments are not in constructor order
        - A convention setter asks for a type the container cannot build
        - A nested dependency failed to construct

    Solution:
        Bind an implementation or pass the instance yourself::

            di.uses(CacheInterface, RedisCache)
            # or
            service = di.create(Service, my_cache)

    Note:
        The failure of the nested resolution is attached as ``__cause__``.
    """

    pass


class MissingArgumentError(AutoInjectionError):
    """
    Raised when an untyped, required parameter has no supplied value left.

    Parameters without a class annotation can only be filled from
    the positional arguments given to ``create()``.

    Solution:
        Supply the value in constructor order::

            class Mailer:
                def __init__(self, transport: TransportInterface, sender: str):
                    ...

            mailer = di.create(Mailer, "noreply@example.com")
    """

    pass


class UnknownDependencyError(AutoInjectionError):
    """
    Raised when a Type Name is neither a class nor an interface.

    Common causes:
        - Typo in the dotted name
        - The module containing the class is not importable
        - A class defined inside a function was requested by name
          without registering it

    Solution:
        Pass the class object, or register it first::

            di.reflector.register(LocalService)
            di.create("tests.test_x.LocalService")
    """

    pass


class NoDefaultImplementationError(AutoInjectionError):
    """
    Raised when an interface has no convention-matching implementation.

    For ``pkg.mod.CacheInterface`` the container looks for
    ``pkg.mod.DefaultCache``, ``pkg.mod.DefaultCacheImpl`` and
    ``pkg.mod.NullCache`` (in that order), each of which must
    implement the interface.

    Solution:
        Add one of those classes, or bind an implementation::

            di.uses(CacheInterface, RedisCache)
    """

    pass


class LockedSingletonMutationError(AutoInjectionError):
    """
    Raised when the factory of an instantiated singleton is changed.

    Once a singleton exists, every consumer may already hold it, so
    replacing its factory would silently split the object graph.

    Solution:
        Register factories before the first ``get()``/``create()``::

            di.singleton(Database, lambda di: Database("sqlite://"))
            db = di.get(Database)
    """

    pass


class UnknownConfigKeyError(AutoInjectionError):
    """
    Raised when ``config(key)`` is read before it was written.

    Solution:
        Write the value first::

            di.config("dsn", "sqlite://")
            dsn = di.config("dsn")
    """

    pass


class CircularDependencyError(AutoInjectionError):
    """
    Raised when a type is requested while it is still being constructed.

    Example of circular dependency::

        class ServiceA:
            def __init__(self, b: ServiceB): ...

        class ServiceB:
            def __init__(self, a: ServiceA): ...  # Circular!

    Solution:
        1. Refactor to remove the cycle
        2. Move one side to a setter (``set_service_a``) and resolve it
           with ``get()`` after both objects exist
    """

    pass


class ReflectionError(AutoInjectionError):
    """
    Raised when a constructor or setter signature cannot be analysed.

    Common causes:
        - Built-in types or C extensions without an inspectable signature
        - A string (forward reference) annotation naming an unknown type

    Solution:
        Make sure referenced types are importable from the module that
        declares the annotation, or register a factory for the type.
    """

    pass
