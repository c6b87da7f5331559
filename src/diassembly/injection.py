"""Declarative injection metadata and the instantiation procedure.

Classes declare what they need with ``inject_property``, ``inject_method`` and
``inject_constructor``, and declare how they are registered with
``injectable``. The declarations are collected into an ``InjectionMetadata``
object stored on the class itself while the class is being defined. Property
and setter records are merged along the MRO when they are read, so a class
mixing several injecting bases receives the records of all of them.

Examples:
    .. code-block:: python

        @injectable("UserService")
        @inject_constructor("HttpClient", 0)
        class UserService(Injectable):
            repository = inject_property("UserRepository")

            def __init__(self, client: HttpClient) -> None:
                self.client = client

            @inject_method("Clock")
            def set_clock(self, clock: Clock) -> None:
                self.clock = clock

"""

from __future__ import annotations

import functools
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, ClassVar, Generic, TypeVar, cast

from diassembly.exceptions import DIAssemblyUnsupportedTargetError
from diassembly.registrations import (
    Qualifier,
    RegistrationEntry,
    RegistrationType,
    ResolverProtocol,
)

T = TypeVar("T")
C = TypeVar("C", bound=type[Any])
F = TypeVar("F", bound=Callable[..., Any])

_METADATA_ATTR = "__diassembly_injections__"
_VIEW_COMPONENT_ATTR = "__view_component__"


@dataclass(frozen=True, slots=True)
class PropertyInjection:
    """Inject a dependency by assigning it to an attribute."""

    qualifier: Qualifier
    attribute: str


@dataclass(frozen=True, slots=True)
class MethodInjection:
    """Inject a dependency by calling a single-argument setter."""

    qualifier: Qualifier
    setter: str


@dataclass(frozen=True, slots=True)
class ConstructorInjection:
    """Inject a dependency as a positional constructor argument."""

    qualifier: Qualifier
    index: int


@dataclass(slots=True)
class InjectionMetadata:
    """Injection records and registration descriptors declared on one class."""

    properties: list[PropertyInjection] = field(default_factory=list)
    """Property records declared in this exact class body."""
    methods: list[MethodInjection] = field(default_factory=list)
    """Setter records declared in this exact class body."""
    constructor: list[ConstructorInjection] = field(default_factory=list)
    """Constructor records of this exact class."""
    registrations: dict[Qualifier, RegistrationEntry] = field(default_factory=dict)
    """Registration descriptors of this exact class, consumed by assemblies."""


class ViewComponent:
    """Mixin marking a class as a view component.

    View components are instantiated by the view-binding layer, so the
    injection declarations of this module refuse them.
    """

    __view_component__: ClassVar[bool] = True


# region Metadata
def _declared_metadata(cls: type[Any]) -> InjectionMetadata | None:
    return cast("InjectionMetadata | None", cls.__dict__.get(_METADATA_ATTR))


def _own_metadata(cls: type[Any]) -> InjectionMetadata:
    """Return metadata declared on ``cls`` itself, creating it empty on first use."""
    metadata = _declared_metadata(cls)
    if metadata is None:
        metadata = InjectionMetadata()
        setattr(cls, _METADATA_ATTR, metadata)
    return metadata


def _merge_along_mro(
    cls: type[Any],
    records_of: Callable[[InjectionMetadata], list[T]],
) -> tuple[T, ...]:
    """Merge records of every class in the MRO, most basic class first."""
    merged: list[T] = []
    for klass in reversed(cls.__mro__):
        metadata = _declared_metadata(klass)
        if metadata is None:
            continue
        merged.extend(record for record in records_of(metadata) if record not in merged)
    return tuple(merged)


def get_property_injections(cls: type[Any]) -> tuple[PropertyInjection, ...]:
    """Return property records of ``cls`` in ancestor-then-own order."""
    return _merge_along_mro(cls, lambda metadata: metadata.properties)


def get_method_injections(cls: type[Any]) -> tuple[MethodInjection, ...]:
    """Return method records of ``cls`` in ancestor-then-own order."""
    return _merge_along_mro(cls, lambda metadata: metadata.methods)


def get_constructor_injections(cls: type[Any]) -> tuple[ConstructorInjection, ...]:
    """Return constructor records declared on ``cls`` itself, sorted by index."""
    metadata = _declared_metadata(cls)
    if metadata is None:
        return ()
    return tuple(sorted(metadata.constructor, key=lambda injection: injection.index))


def get_registrations(cls: type[Any]) -> dict[Qualifier, RegistrationEntry]:
    """Return registration descriptors declared on ``cls`` itself."""
    metadata = _declared_metadata(cls)
    if metadata is None:
        return {}
    return dict(metadata.registrations)


def has_registrations(obj: object) -> bool:
    """Return whether ``obj`` is a class carrying its own registration descriptors."""
    return isinstance(obj, type) and bool(get_registrations(obj))


def _ensure_supported_target(cls: type[Any], primitive: str) -> None:
    if getattr(cls, _VIEW_COMPONENT_ATTR, False):
        msg = (
            f"'@{primitive}' must not be used for view components! "
            f"Usage on '{cls.__qualname__}' is invalid."
        )
        raise DIAssemblyUnsupportedTargetError(msg)


# endregion Metadata


# region Declarations
class _PropertyInjectionDescriptor:
    """Class-body placeholder for an injected attribute."""

    def __init__(self, qualifier: Qualifier) -> None:
        self.qualifier = qualifier
        self.attribute = ""

    def __set_name__(self, owner: type[Any], name: str) -> None:
        _ensure_supported_target(owner, "inject_property")
        self.attribute = name
        _own_metadata(owner).properties.append(PropertyInjection(self.qualifier, name))

    def __get__(self, instance: object | None, owner: type[Any] | None = None) -> Any:
        if instance is None:
            return self
        msg = (
            f"'{type(instance).__qualname__}.{self.attribute}' is not injected yet "
            f"(qualifier '{self.qualifier}')"
        )
        raise AttributeError(msg)

    def __repr__(self) -> str:
        return f"inject_property({self.qualifier!r})"


class _MethodInjectionDescriptor(Generic[F]):
    """Class-body wrapper recording a setter and restoring the plain function."""

    def __init__(self, qualifier: Qualifier, setter: F) -> None:
        self.qualifier = qualifier
        self.setter = setter
        functools.update_wrapper(self, setter)

    def __set_name__(self, owner: type[Any], name: str) -> None:
        _ensure_supported_target(owner, "inject_method")
        _own_metadata(owner).methods.append(MethodInjection(self.qualifier, name))
        setattr(owner, name, self.setter)


def inject_property(qualifier: Qualifier) -> Any:
    """Declare an attribute that receives the dependency registered as ``qualifier``.

    Use it as a class attribute. The dependency is assigned after
    ``post_constructor`` and before ``awake_after_injection``. Reading the
    attribute before injection raises ``AttributeError``.

    Args:
        qualifier: Qualifier of the dependency to inject.

    Raises:
        DIAssemblyUnsupportedTargetError: If the owning class is a view
            component.

    Examples:
        .. code-block:: python

            class ReportService(Injectable):
                clock = inject_property("Clock")

    """
    return _PropertyInjectionDescriptor(qualifier)


def inject_method(qualifier: Qualifier) -> Callable[[F], F]:
    """Declare a single-argument setter receiving the dependency registered as ``qualifier``.

    Setters are called after property injection, ancestors' setters first.

    Args:
        qualifier: Qualifier of the dependency to inject.

    Raises:
        DIAssemblyUnsupportedTargetError: If the owning class is a view
            component.

    """

    def decorator(setter: F) -> F:
        return cast("F", _MethodInjectionDescriptor(qualifier, setter))

    return decorator


def inject_constructor(qualifier: Qualifier, index: int) -> Callable[[C], C]:
    """Declare that positional constructor argument ``index`` is ``qualifier``.

    Constructor records are not inherited: a subclass declares its own.
    Positions without a record are passed ``None``.

    Args:
        qualifier: Qualifier of the dependency to inject.
        index: Zero-based positional parameter index, ``self`` excluded.

    Raises:
        DIAssemblyUnsupportedTargetError: If the decorated class is a view
            component.
        ValueError: If ``index`` is negative.

    """
    if index < 0:
        msg = f"Constructor injection index must be non-negative, got {index}"
        raise ValueError(msg)

    def decorator(cls: C) -> C:
        _ensure_supported_target(cls, "inject_constructor")
        _own_metadata(cls).constructor.append(ConstructorInjection(qualifier, index))
        return cls

    return decorator


def injectable(
    qualifier: Qualifier,
    registration_type: RegistrationType = RegistrationType.CONTAINER,
) -> Callable[[C], C]:
    """Attach a registration descriptor to the decorated class.

    The descriptor is not registered anywhere by the decorator; a
    ``ClassLoaderAssembly`` or ``ModuleLoaderAssembly`` picks it up and
    registers it. A class may be decorated several times with different
    qualifiers. Instances are built with ``instantiate``.

    Args:
        qualifier: Qualifier to register the class by.
        registration_type: Registration type, ``CONTAINER`` by default.

    Raises:
        DIAssemblyUnsupportedTargetError: If the decorated class is a view
            component.

    """

    def decorator(cls: C) -> C:
        _ensure_supported_target(cls, "injectable")
        entry = RegistrationEntry(registration_type, functools.partial(instantiate, cls))
        _own_metadata(cls).registrations[qualifier] = entry
        return cls

    return decorator


# endregion Declarations


def _constructor_arguments(
    cls: type[Any],
    resolver: ResolverProtocol,
    requester_name: str,
) -> list[Any]:
    injections = get_constructor_injections(cls)
    if not injections:
        return []

    arguments: list[Any] = [None] * (injections[-1].index + 1)
    for injection in injections:
        arguments[injection.index] = resolver.resolve(injection.qualifier, requester_name)
    return arguments


def instantiate(cls: type[T], resolver: ResolverProtocol) -> T:
    """Build and wire an instance of ``cls`` from ``resolver``.

    The order is fixed: constructor arguments are resolved by ascending index,
    the class is called, ``post_constructor`` runs, properties are assigned,
    setters are called, and ``awake_after_injection`` runs last. Property and
    setter injections declared on ancestors are applied before the class's own.

    Args:
        cls: Class to instantiate.
        resolver: Resolver providing the dependencies.

    Returns:
        The constructed and injected instance.

    """
    requester_name = cls.__qualname__
    instance = cls(*_constructor_arguments(cls, resolver, requester_name))
    target = cast("Any", instance)

    target.post_constructor()

    for property_injection in get_property_injections(cls):
        dependency = resolver.resolve(property_injection.qualifier, requester_name)
        setattr(instance, property_injection.attribute, dependency)

    for method_injection in get_method_injections(cls):
        dependency = resolver.resolve(method_injection.qualifier, requester_name)
        getattr(instance, method_injection.setter)(dependency)

    target.awake_after_injection()
    return instance
