from __future__ import annotations

from collections.abc import Hashable


class DIAssemblyError(Exception):
    """Represent a base class for all diassembly-specific failures.

    Catch this type when you want to handle any diassembly error path without
    matching each concrete exception class individually.
    """


class DIAssemblyNotRegisteredError(DIAssemblyError):
    """Signal that a qualifier has no registration in the container.

    Raised by ``Container.resolve`` when nothing was registered under the
    requested qualifier, or when the container was cleared since.

    Typical fixes include registering the dependency in one of the assemblies
    passed to the ``Assembler``, checking the qualifier spelling, or making
    sure the class carrying ``@injectable`` is listed in a loader assembly.
    """

    def __init__(self, container_name: str, qualifier: Hashable, requester_name: str) -> None:
        self.container_name = container_name
        self.qualifier = qualifier
        self.requester_name = requester_name
        super().__init__(
            f"No registration in container '{container_name}' for qualifier "
            f"'{qualifier}' requested by '{requester_name}'",
        )


class DIAssemblyInvalidRegistrationTypeError(DIAssemblyError):
    """Signal a registration entry with an unrecognized lifecycle type.

    Raised by ``Container.register`` when ``entry.type`` is not a member of
    ``RegistrationType``.

    Typical fix is building the entry with ``RegistrationType.TRANSIENT``,
    ``RegistrationType.CONTAINER`` or ``RegistrationType.CONTAINER_EAGER``.
    """


class DIAssemblyRegistrationClosedError(DIAssemblyError):
    """Signal registration into a container that was already sealed.

    Raised by ``Container.register`` after ``finish_registration`` has run.

    Typical fixes include moving the registration into an assembly that runs
    before the ``Assembler`` finishes, or calling ``Container.clear`` to reuse
    the container from scratch.
    """


class DIAssemblyUnsupportedTargetError(DIAssemblyError):
    """Signal an injection declaration applied to a view component.

    Raised at class definition time by ``inject_property``, ``inject_method``,
    ``inject_constructor`` and ``injectable`` when the decorated class is a
    ``ViewComponent``. View components are wired by the view-binding layer,
    not by the container.
    """
