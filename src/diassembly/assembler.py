from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Sequence
from typing import Any

from diassembly.assembly import Assembly
from diassembly.container import Container
from diassembly.container_context import container_context
from diassembly.registrations import ResolverProtocol

logger = logging.getLogger(__name__)


class Assembler:
    """Load a fixed list of assemblies into one container and seal it.

    Splitting registrations into assemblies keeps bootstrap code modular: each
    assembly covers one source (an explicit list, preloaded classes, a set of
    modules) and the assembler puts them together.

    Examples:
        .. code-block:: python

            assembler = Assembler(
                [
                    ManualRegistrationAssembly([("Config", config_entry)]),
                    ModuleLoaderAssembly(["app.services.users", "app.services.posts"]),
                ],
                Container("App"),
            )
            await assembler.assemble()

            users = assembler.resolver.resolve("UserService", "main")

    """

    def __init__(
        self,
        assemblies: Sequence[Assembly],
        container: Container | None = None,
    ) -> None:
        """Initialize the assembler.

        Args:
            assemblies: Assemblies to load, called in this order.
            container: Container to load assemblies into. Defaults to
                ``container_context.default``.

        """
        self._assemblies = list(assemblies)
        self._container = container if container is not None else container_context.default

    @property
    def resolver(self) -> ResolverProtocol:
        """Read-only view of the container, to hand out once ``assemble`` succeeded."""
        return self._container

    async def assemble(self) -> None:
        """Run every assembly, then finish registration in the container.

        Each assembly's ``assemble`` is called in list order; returned
        awaitables are awaited together, so registrations of one assembly are
        not guaranteed to be visible when the next one starts. Once all of
        them have settled, ``finish_registration`` builds eager dependencies
        and seals the container.

        Raises:
            Exception: The first assembly failure, in which case the container
                is left unsealed, or the first eager factory failure.

        """
        pending: list[Awaitable[Any]] = []
        try:
            for assembly in self._assemblies:
                result = assembly.assemble(self._container)
                if inspect.isawaitable(result):
                    pending.append(result)
        except BaseException:
            for awaitable in pending:
                if inspect.iscoroutine(awaitable):
                    awaitable.close()
            raise

        results = await asyncio.gather(*pending, return_exceptions=True)
        for result in results:
            if isinstance(result, BaseException):
                logger.debug(
                    "Assembly failed for container '%s'; registration stays open",
                    self._container.name,
                )
                raise result

        await self._container.finish_registration()
        logger.debug(
            "Assembled %d assemblies into container '%s'",
            len(self._assemblies),
            self._container.name,
        )
