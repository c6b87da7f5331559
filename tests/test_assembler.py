from __future__ import annotations

import asyncio
from typing import Any

import pytest

from diassembly.assembler import Assembler
from diassembly.assembly import ClassLoaderAssembly, ManualRegistrationAssembly
from diassembly.container import Container
from diassembly.container_context import container_context
from diassembly.exceptions import DIAssemblyRegistrationClosedError
from diassembly.injection import inject_property, injectable
from diassembly.registrations import Injectable, RegistrationEntry, RegistrationType

TEST_CONTAINER_NAME = "Test Container"


class _TestDependency(Injectable):
    pass


class _SpyAssembly:
    def __init__(self, events: list[str], name: str) -> None:
        self.events = events
        self.name = name
        self.containers: list[Container] = []

    def assemble(self, container: Container) -> None:
        self.containers.append(container)
        self.events.append(f"assemble:{self.name}")


class _SlowAssembly:
    def __init__(self, events: list[str]) -> None:
        self.events = events

    async def assemble(self, container: Container) -> None:
        self.events.append("slow:start")
        await asyncio.sleep(0)
        container.register(
            "Slow",
            RegistrationEntry(RegistrationType.CONTAINER_EAGER, self._build),
        )
        self.events.append("slow:done")

    def _build(self, _: Any) -> str:
        self.events.append("slow:built")
        return "slow"


class _FailingAssembly:
    async def assemble(self, container: Container) -> None:
        container.register("Partial", RegistrationEntry(RegistrationType.TRANSIENT, lambda _: 1))
        msg = "assembly failed"
        raise RuntimeError(msg)


def test_provides_access_to_container_as_resolver(container: Container) -> None:
    assembler = Assembler([], container)

    assert assembler.resolver is container


def test_defaults_to_context_default_container() -> None:
    assembler = Assembler([])

    assert assembler.resolver is container_context.default


@pytest.mark.asyncio
async def test_loads_assemblies_in_order(container: Container) -> None:
    events: list[str] = []
    first = _SpyAssembly(events, "first")
    second = _SpyAssembly(events, "second")

    await Assembler([first, second], container).assemble()

    assert events == ["assemble:first", "assemble:second"]
    assert first.containers == [container]
    assert second.containers == [container]


@pytest.mark.asyncio
async def test_finishes_registration_after_assembling(container: Container) -> None:
    await Assembler([], container).assemble()

    with pytest.raises(DIAssemblyRegistrationClosedError, match=TEST_CONTAINER_NAME):
        container.register(
            "test",
            RegistrationEntry(RegistrationType.TRANSIENT, lambda _: _TestDependency()),
        )


@pytest.mark.asyncio
async def test_awaits_async_assemblies_before_eager_construction(container: Container) -> None:
    events: list[str] = []
    slow = _SlowAssembly(events)
    spy = _SpyAssembly(events, "spy")

    assembler = Assembler([slow, spy], container)
    await assembler.assemble()

    assert events == ["assemble:spy", "slow:start", "slow:done", "slow:built"]
    assert assembler.resolver.resolve("Slow", "test") == "slow"
    assert container.finished


@pytest.mark.asyncio
async def test_failing_assembly_propagates_and_leaves_container_open(
    container: Container,
) -> None:
    events: list[str] = []

    with pytest.raises(RuntimeError, match="assembly failed"):
        await Assembler([_FailingAssembly(), _SlowAssembly(events)], container).assemble()

    assert not container.finished
    assert container.is_registered("Partial")
    assert container.is_registered("Slow")
    assert "slow:built" not in events


@pytest.mark.asyncio
async def test_failing_sync_assembly_propagates(container: Container) -> None:
    await container.finish_registration()
    assembly = ManualRegistrationAssembly(
        [("Late", RegistrationEntry(RegistrationType.TRANSIENT, lambda _: 1))],
    )

    with pytest.raises(DIAssemblyRegistrationClosedError):
        await Assembler([ClassLoaderAssembly([]), assembly], container).assemble()


@pytest.mark.asyncio
async def test_assembles_decorated_classes_with_eager_singletons(container: Container) -> None:
    built: list[str] = []

    @injectable("Clock", RegistrationType.CONTAINER_EAGER)
    class _Clock(Injectable):
        def post_constructor(self) -> None:
            built.append("Clock")

    @injectable("Reports", RegistrationType.TRANSIENT)
    class _Reports(Injectable):
        clock = inject_property("Clock")

    assembler = Assembler(
        [
            ManualRegistrationAssembly(
                [("Config", RegistrationEntry(RegistrationType.CONTAINER, lambda _: {}))],
            ),
            ClassLoaderAssembly([_Clock, _Reports]),
        ],
        container,
    )
    await assembler.assemble()

    assert built == ["Clock"]
    first = assembler.resolver.resolve("Reports", "test")
    second = assembler.resolver.resolve("Reports", "test")
    assert first is not second
    assert first.clock is second.clock
    assert built == ["Clock"]
