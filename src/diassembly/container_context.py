from __future__ import annotations

import logging

from diassembly.container import Container

logger = logging.getLogger(__name__)

DEFAULT_CONTAINER_NAME = "DefaultContainer"


class ContainerContext:
    """Hold the default container and per-component containers of a process.

    The default container is created lazily on first access. Component
    containers are only created when the caller asks for isolation, which lets a
    test harness give every component its own container while the application
    shares the default one.

    ``reset`` drops every container held by the context; containers already
    handed out keep working but are no longer returned by the context.
    """

    def __init__(self) -> None:
        self._default: Container | None = None
        self._component_containers: dict[str, Container] = {}

    @property
    def default(self) -> Container:
        """Return the default container, creating it on first access."""
        if self._default is None:
            self._default = Container(DEFAULT_CONTAINER_NAME)
            logger.debug("Created default container '%s'", DEFAULT_CONTAINER_NAME)
        return self._default

    def set_default(self, container: Container) -> None:
        """Bind ``container`` as the default container.

        Args:
            container: Container returned by ``default`` from now on.

        """
        self._default = container

    def for_component(self, component_name: str, *, isolated: bool = False) -> Container:
        """Return the container a component should resolve from.

        Args:
            component_name: Name of the component, used to key and name
                isolated containers.
            isolated: When true, return a container dedicated to this
                component, created on first use and reused afterwards.
                Otherwise return the default container.

        Returns:
            The default container or the component's own container.

        """
        if not isolated:
            return self.default

        container = self._component_containers.get(component_name)
        if container is None:
            container = Container(f"{component_name}::Container")
            self._component_containers[component_name] = container
        return container

    def reset(self) -> None:
        """Forget the default container and all component containers."""
        self._default = None
        self._component_containers = {}


container_context = ContainerContext()
"""Process-wide default context, used only as a default by ``Assembler``."""
