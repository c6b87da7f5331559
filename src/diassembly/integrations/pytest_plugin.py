from __future__ import annotations

import re
from collections.abc import Iterator

import pytest

from diassembly.container import Container
from diassembly.container_context import ContainerContext

_NON_NAME_CHARACTERS = re.compile(r"[^A-Za-z0-9_.:-]+")


@pytest.fixture()
def diassembly_container(request: pytest.FixtureRequest) -> Iterator[Container]:
    """Provide an isolated container named after the requesting test.

    The container shares nothing with the default container and is cleared on
    teardown.

    Yields:
        A new, open ``Container``.

    """
    name = _NON_NAME_CHARACTERS.sub("_", request.node.name)
    container = Container(f"{name}::Container")
    yield container
    container.clear()


@pytest.fixture()
def diassembly_context() -> Iterator[ContainerContext]:
    """Provide a fresh ``ContainerContext``, reset on teardown.

    Pass it, or containers obtained from it, to the code under test instead of
    the process-wide ``container_context``.

    Yields:
        A new ``ContainerContext``.

    """
    context = ContainerContext()
    yield context
    context.reset()
