"""Registry of test containers.

Containers self-register when their class is decorated (see
``simpletest.markers``), so discovery is a lookup in this registry rather
than a scan over every loaded type.
"""

import logging
from typing import Iterator, Optional

from simpletest.core.models import TestClassDescriptor, TestUnit, UnitKind
from simpletest.errors import RegistrationError, UnknownClassError, UnknownMethodError

logger = logging.getLogger(__name__)

# Attribute set on functions by the method markers
MARKER_ATTR = "__simpletest_kind__"


class UnitRegistry:
    """Holds the descriptors of every registered test container."""

    def __init__(self):
        """Initialize an empty registry."""
        self._descriptors: dict[str, TestClassDescriptor] = {}

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, name: str) -> bool:
        return name in self._descriptors

    def __iter__(self) -> Iterator[TestClassDescriptor]:
        return iter(list(self._descriptors.values()))

    def register(self, cls: type) -> TestClassDescriptor:
        """Build a descriptor for a container class and register it.

        Re-registering the same class (for example when its module is
        imported again) replaces the previous entry. A different class with
        the same name is rejected.

        Raises:
            RegistrationError: If the class declares more than one hook of a
                kind or clashes by name with another registered container
        """
        descriptor = build_descriptor(cls)

        existing = self._descriptors.get(descriptor.name)
        if existing is not None and existing.qualified_name != descriptor.qualified_name:
            raise RegistrationError(
                f"Test class name '{descriptor.name}' is already registered "
                f"by {existing.qualified_name}"
            )

        self._descriptors[descriptor.name] = descriptor
        logger.debug(
            "Registered test class %s with %d methods",
            descriptor.qualified_name,
            len(descriptor.methods),
        )
        return descriptor

    def unregister(self, name: str) -> None:
        """Remove a container from the registry if present."""
        self._descriptors.pop(name, None)

    def clear(self) -> None:
        """Remove every registered container."""
        self._descriptors.clear()

    def discover_all(self) -> list[TestClassDescriptor]:
        """Get every registered container, in registration order."""
        return list(self._descriptors.values())

    def find_class(self, name: str) -> TestClassDescriptor:
        """Look up a container by class name.

        Raises:
            UnknownClassError: If no container with that name is registered
        """
        try:
            return self._descriptors[name]
        except KeyError:
            raise UnknownClassError(name) from None

    def find_method(self, descriptor: TestClassDescriptor, name: str) -> TestUnit:
        """Look up a test method of a container by name.

        Hooks are not test methods and are never returned here.

        Raises:
            UnknownMethodError: If the container has no test method with that name
        """
        for unit in descriptor.methods:
            if unit.method_name == name:
                return unit
        raise UnknownMethodError(descriptor.name, name)


def build_descriptor(cls: type) -> TestClassDescriptor:
    """Collect the marked methods of a class into a descriptor."""
    # Walk the MRO base-first so that overrides replace inherited members
    members: dict[str, object] = {}
    for klass in reversed(cls.__mro__):
        members.update(vars(klass))

    methods: list[TestUnit] = []
    hooks: dict[UnitKind, TestUnit] = {}

    for attr_name, member in members.items():
        kind = getattr(member, MARKER_ATTR, None)
        if kind is None or not callable(member):
            continue

        unit = TestUnit(
            class_name=cls.__name__,
            method_name=attr_name,
            kind=kind,
            func=member,
        )

        if kind == UnitKind.TEST_METHOD:
            methods.append(unit)
            continue

        if kind in hooks:
            raise RegistrationError(
                f"Test class '{cls.__name__}' declares more than one "
                f"{kind.value} hook: '{hooks[kind].method_name}' and '{attr_name}'"
            )
        hooks[kind] = unit

    return TestClassDescriptor(
        name=cls.__name__,
        cls=cls,
        methods=tuple(methods),
        before_all=hooks.get(UnitKind.BEFORE_ALL),
        after_all=hooks.get(UnitKind.AFTER_ALL),
        before_each=hooks.get(UnitKind.BEFORE_EACH),
        after_each=hooks.get(UnitKind.AFTER_EACH),
    )


_default_registry: Optional[UnitRegistry] = None


def get_default_registry() -> UnitRegistry:
    """Get the process-wide registry used by the markers."""
    global _default_registry
    if _default_registry is None:
        _default_registry = UnitRegistry()
    return _default_registry
