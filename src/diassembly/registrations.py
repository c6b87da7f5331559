from __future__ import annotations

from collections.abc import Callable, Hashable
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Protocol, TypeAlias

Qualifier: TypeAlias = Hashable
"""A key identifying one registration within a container, usually a string."""

Factory: TypeAlias = Callable[["ResolverProtocol"], Any]
"""A callable building a dependency from a resolver."""


class RegistrationType(Enum):
    """Defines how long a resolved dependency is kept by the container."""

    TRANSIENT = auto()
    """A new instance is created every time the dependency is resolved."""

    CONTAINER = auto()
    """The instance created on first resolution is kept for the container's lifetime."""

    CONTAINER_EAGER = auto()
    """Same as ``CONTAINER``, but the instance is created by ``finish_registration``."""


class ResolverProtocol(Protocol):
    """Protocol for a read-only dependency resolver."""

    def resolve(self, qualifier: Qualifier, requester_name: str) -> Any:
        """Resolve the dependency registered under the given qualifier.

        Args:
            qualifier: Registration qualifier of the dependency.
            requester_name: Name of whoever asks for the dependency, used in
                error messages.

        """


@dataclass(frozen=True, slots=True)
class RegistrationEntry:
    """A lifecycle policy bound to a factory for one qualifier."""

    type: RegistrationType
    """Registration type of the dependency."""
    factory: Factory
    """Factory called with the resolving container to build the dependency."""


class Injectable:
    """Base class for container-managed objects.

    The container calls ``post_constructor`` right after the instance is
    constructed, before any property or method injection, and
    ``awake_after_injection`` once every injection has been applied. Subclasses
    override whichever hook they need; any object providing both methods is
    accepted by the container.
    """

    def post_constructor(self) -> None:
        """Run after construction, before property and method injection."""

    def awake_after_injection(self) -> None:
        """Run after all property and method injections are applied."""
