from __future__ import annotations

import asyncio
import importlib
import inspect
import logging
from collections.abc import Awaitable, Callable, Iterable, Sequence
from types import ModuleType
from typing import Any, NamedTuple, Protocol, TypeAlias

from diassembly.container import Container
from diassembly.injection import get_registrations, has_registrations
from diassembly.registrations import Qualifier, RegistrationEntry

logger = logging.getLogger(__name__)

ModuleLoader: TypeAlias = Callable[[], ModuleType | Awaitable[ModuleType]]
"""A zero-argument callable returning a module, or an awaitable of one."""

ModuleSource: TypeAlias = str | ModuleLoader
"""A dotted module name or a deferred module loader."""


class Assembly(Protocol):
    """Protocol for a source of registrations.

    Implement it to build your own assemblies. ``assemble`` registers
    dependencies into the given container and may return an awaitable when the
    work is asynchronous; the ``Assembler`` awaits it before sealing.
    """

    def assemble(self, container: Container) -> Awaitable[None] | None:
        """Register dependencies into ``container``.

        Args:
            container: Container to register dependencies in.

        """


class ManualRegistration(NamedTuple):
    """A qualifier paired with the entry to register under it."""

    qualifier: Qualifier
    entry: RegistrationEntry


def _register_class(cls: type[Any], container: Container) -> int:
    registrations = get_registrations(cls)
    for qualifier, entry in registrations.items():
        container.register(qualifier, entry)
    return len(registrations)


class ManualRegistrationAssembly:
    """Register an explicit list of entries synchronously."""

    def __init__(
        self,
        registrations: Iterable[ManualRegistration | tuple[Qualifier, RegistrationEntry]],
    ) -> None:
        self._registrations = [ManualRegistration(*registration) for registration in registrations]

    def assemble(self, container: Container) -> None:
        for registration in self._registrations:
            container.register(registration.qualifier, registration.entry)


class ClassLoaderAssembly:
    """Register the descriptors attached with ``@injectable`` to already imported classes.

    Classes without descriptors are skipped.
    """

    def __init__(self, classes: Iterable[type[Any]]) -> None:
        self._classes = list(classes)

    async def assemble(self, container: Container) -> None:
        for cls in self._classes:
            _register_class(cls, container)


class ModuleLoaderAssembly:
    """Load modules and register the ``@injectable`` classes they export.

    Each source is either a dotted module name, imported with
    ``importlib.import_module``, or a zero-argument loader returning a module or
    an awaitable of one. Loads are awaited together with ``asyncio.gather``, so
    awaitable loaders interleave on the event loop, while dotted names are
    imported synchronously and block it for the duration of the import. A
    module's classes are registered as soon as that module is loaded.
    ``assemble`` completes once every module has settled and raises the first
    load error, if any. A module that fails to load registers nothing, while
    modules that loaded keep their registrations.

    Exported members are the names in ``__all__`` when the module defines it,
    even an empty one. Otherwise they are the public attributes defined by the
    module itself, so classes it merely imports are not registered again.
    """

    def __init__(self, modules: Sequence[ModuleSource]) -> None:
        self._modules = list(modules)

    async def assemble(self, container: Container) -> None:
        results = await asyncio.gather(
            *(self._load_and_register(source, container) for source in self._modules),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result

    async def _load_and_register(self, source: ModuleSource, container: Container) -> None:
        module = await self._load(source)
        registered = 0
        for member in self._exported_members(module):
            registered += _register_class(member, container)
        logger.debug(
            "Registered %d dependencies from module '%s' in container '%s'",
            registered,
            module.__name__,
            container.name,
        )

    @staticmethod
    async def _load(source: ModuleSource) -> ModuleType:
        if isinstance(source, str):
            return importlib.import_module(source)

        loaded = source()
        if inspect.isawaitable(loaded):
            return await loaded
        return loaded

    @staticmethod
    def _exported_members(module: ModuleType) -> list[type[Any]]:
        exported: Iterable[str] | None = getattr(module, "__all__", None)
        if exported is None:
            exported = [
                name
                for name, value in vars(module).items()
                if not name.startswith("_")
                and getattr(value, "__module__", None) == module.__name__
            ]
        members: list[type[Any]] = []
        for name in exported:
            member = getattr(module, name, None)
            if has_registrations(member) and member not in members:
                members.append(member)
        return members
