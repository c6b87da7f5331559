from __future__ import annotations

import logging
from typing import Any

from diassembly.exceptions import (
    DIAssemblyInvalidRegistrationTypeError,
    DIAssemblyNotRegisteredError,
    DIAssemblyRegistrationClosedError,
)
from diassembly.registrations import Qualifier, RegistrationEntry, RegistrationType

logger = logging.getLogger(__name__)

_CACHED_REGISTRATION_TYPES = frozenset(
    {RegistrationType.CONTAINER, RegistrationType.CONTAINER_EAGER},
)


class Container:
    """Register dependencies by qualifier and resolve them on demand.

    A container owns its registrations and the instances cached for
    ``CONTAINER`` and ``CONTAINER_EAGER`` entries. Independent containers share
    no state, which makes it cheap to create one per test or per subsystem.

    Registration is open until ``finish_registration`` runs. Finalization
    builds every eager dependency in registration order and seals the
    container; from then on it only resolves. ``clear`` resets the container
    to its initial empty, open state.

    Examples:
        .. code-block:: python

            container = Container("App")
            container.register(
                "Clock",
                RegistrationEntry(RegistrationType.CONTAINER, lambda _: SystemClock()),
            )
            await container.finish_registration()

            clock = container.resolve("Clock", "main")

    """

    def __init__(self, name: str) -> None:
        """Initialize an empty, open container.

        Args:
            name: Container name used in diagnostics and error messages.

        """
        self._name = name
        self._registrations: dict[Qualifier, RegistrationEntry] = {}
        self._instances: dict[Qualifier, Any] = {}
        self._eager_qualifiers: list[Qualifier] = []
        self._finished = False

    @property
    def name(self) -> str:
        """Container name used in diagnostics and error messages."""
        return self._name

    @property
    def finished(self) -> bool:
        """Whether ``finish_registration`` has run since creation or last ``clear``."""
        return self._finished

    # region Registration
    def register(self, qualifier: Qualifier, entry: RegistrationEntry) -> None:
        """Register a dependency under the given qualifier.

        Re-registering an existing qualifier replaces the previous entry and
        logs a warning; the last registration wins.

        Args:
            qualifier: Qualifier to register the dependency by.
            entry: Registration entry describing lifecycle and factory.

        Raises:
            DIAssemblyRegistrationClosedError: If ``finish_registration`` has
                already run.
            DIAssemblyInvalidRegistrationTypeError: If ``entry.type`` is not a
                ``RegistrationType`` member.

        """
        if self._finished:
            msg = (
                f"Trying to register new dependency in '{self._name}'. "
                "It is illegal after calling 'finish_registration()'"
            )
            raise DIAssemblyRegistrationClosedError(msg)

        if not isinstance(entry.type, RegistrationType):
            msg = f"Invalid registration type '{entry.type}' for qualifier '{qualifier}'"
            raise DIAssemblyInvalidRegistrationTypeError(msg)

        if qualifier in self._registrations:
            logger.warning(
                "Duplicate registration for qualifier '%s' in container '%s'. "
                "Container will use the last one.",
                qualifier,
                self._name,
            )

        self._registrations[qualifier] = entry
        logger.debug(
            "Registered '%s' as %s in container '%s'",
            qualifier,
            entry.type.name,
            self._name,
        )

        if (
            entry.type is RegistrationType.CONTAINER_EAGER
            and qualifier not in self._eager_qualifiers
        ):
            self._eager_qualifiers.append(qualifier)

    def is_registered(self, qualifier: Qualifier) -> bool:
        """Return whether a registration exists for the given qualifier."""
        return qualifier in self._registrations

    def clear(self) -> None:
        """Remove all registrations and cached instances and reopen registration."""
        self._registrations = {}
        self._instances = {}
        self._eager_qualifiers = []
        self._finished = False
        logger.debug("Cleared container '%s'", self._name)

    async def finish_registration(self) -> None:
        """Build eager dependencies and seal the container.

        Eager qualifiers are resolved in the order they were registered. The
        first failing factory aborts the batch and its error propagates; the
        container is sealed either way and instances built so far stay cached.
        Eager qualifiers left unbuilt are constructed on first ``resolve``.

        Raises:
            Exception: Whatever the first failing eager factory raised.

        """
        try:
            for qualifier in self._eager_qualifiers:
                self.resolve(qualifier, self._name)
        finally:
            self._finished = True
        logger.debug(
            "Finished registration in container '%s' (%d eager)",
            self._name,
            len(self._eager_qualifiers),
        )

    # endregion Registration

    # region Resolution
    def resolve(self, qualifier: Qualifier, requester_name: str) -> Any:
        """Resolve the dependency registered under the given qualifier.

        Args:
            qualifier: Registration qualifier of the dependency.
            requester_name: Name of the requester, reported in errors.

        Returns:
            The cached instance for ``CONTAINER``/``CONTAINER_EAGER`` entries
            once built, otherwise a freshly constructed one.

        Raises:
            DIAssemblyNotRegisteredError: If nothing is registered under
                ``qualifier``.

        """
        entry = self._registrations.get(qualifier)
        if entry is None:
            raise DIAssemblyNotRegisteredError(self._name, qualifier, requester_name)

        if entry.type not in _CACHED_REGISTRATION_TYPES:
            return entry.factory(self)

        if qualifier in self._instances:
            return self._instances[qualifier]
        return self._construct(qualifier, entry)

    def _construct(self, qualifier: Qualifier, entry: RegistrationEntry) -> Any:
        instance = entry.factory(self)
        self._instances[qualifier] = instance
        logger.debug("Constructed '%s' in container '%s'", qualifier, self._name)
        return instance

    # endregion Resolution

    def __contains__(self, qualifier: object) -> bool:
        return qualifier in self._registrations

    def __len__(self) -> int:
        return len(self._registrations)

    def __repr__(self) -> str:
        return f"Container(name={self._name!r}, registrations={len(self)}, finished={self._finished})"
