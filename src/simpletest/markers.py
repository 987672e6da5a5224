"""Decorators that mark test containers, test methods and lifecycle hooks.

Example::

    @simple_test_class
    class Tests:
        @simple_before_each
        def reset(self):
            self.items = []

        @simple_test_method
        def appends(self):
            self.items.append(1)
            assert_equal(1, len(self.items))
"""

from typing import Callable, Optional, TypeVar, Union, overload

from simpletest.core.models import UnitKind
from simpletest.core.registry import MARKER_ATTR, UnitRegistry, get_default_registry
from simpletest.errors import RegistrationError

F = TypeVar("F", bound=Callable)
C = TypeVar("C", bound=type)


@overload
def simple_test_class(cls: C) -> C: ...


@overload
def simple_test_class(*, registry: Optional[UnitRegistry] = None) -> Callable[[C], C]: ...


def simple_test_class(
    cls: Optional[C] = None, *, registry: Optional[UnitRegistry] = None
) -> Union[C, Callable[[C], C]]:
    """Mark a class as a test container and register it.

    Usable bare (``@simple_test_class``) or with an explicit registry
    (``@simple_test_class(registry=my_registry)``).
    """

    def decorate(klass: C) -> C:
        if not isinstance(klass, type):
            raise RegistrationError(
                f"simple_test_class can only decorate classes, got {klass!r}"
            )
        target = registry if registry is not None else get_default_registry()
        target.register(klass)
        # Keep pytest from collecting containers named Test*
        klass.__test__ = False
        return klass

    if cls is None:
        return decorate
    return decorate(cls)


def _marker(kind: UnitKind) -> Callable[[F], F]:
    def mark(func: F) -> F:
        if not callable(func):
            raise RegistrationError(
                f"{kind.value} marker can only decorate functions, got {func!r}"
            )
        existing = getattr(func, MARKER_ATTR, None)
        if existing is not None and existing != kind:
            raise RegistrationError(
                f"'{func.__name__}' is already marked as {existing.value}, "
                f"cannot also mark it as {kind.value}"
            )
        setattr(func, MARKER_ATTR, kind)
        return func

    mark.__name__ = f"simple_{kind.value}"
    mark.__doc__ = f"Mark a method as a {kind.value.replace('_', ' ')}."
    return mark


simple_test_method = _marker(UnitKind.TEST_METHOD)
simple_before_all = _marker(UnitKind.BEFORE_ALL)
simple_after_all = _marker(UnitKind.AFTER_ALL)
simple_before_each = _marker(UnitKind.BEFORE_EACH)
simple_after_each = _marker(UnitKind.AFTER_EACH)
