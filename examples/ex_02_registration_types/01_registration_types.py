"""Registration types: ``TRANSIENT``, ``CONTAINER`` and ``CONTAINER_EAGER``.

See how object identity changes across repeated resolves, and when eager
dependencies are built.
"""

from __future__ import annotations

import asyncio

from diassembly import Container, RegistrationEntry, RegistrationType


class Service:
    pass


async def main() -> None:
    container = Container("Lifetimes")
    built: list[str] = []

    def build_eager(_: object) -> Service:
        built.append("eager")
        return Service()

    container.register("Transient", RegistrationEntry(RegistrationType.TRANSIENT, lambda _: Service()))
    container.register("Container", RegistrationEntry(RegistrationType.CONTAINER, lambda _: Service()))
    container.register("Eager", RegistrationEntry(RegistrationType.CONTAINER_EAGER, build_eager))

    transient_first = container.resolve("Transient", "main")
    transient_second = container.resolve("Transient", "main")
    print(f"transient_new={transient_first is not transient_second}")  # => transient_new=True

    container_first = container.resolve("Container", "main")
    container_second = container.resolve("Container", "main")
    print(f"container_same={container_first is container_second}")  # => container_same=True

    print(f"eager_before_finish={len(built)}")  # => eager_before_finish=0
    await container.finish_registration()
    print(f"eager_after_finish={len(built)}")  # => eager_after_finish=1

    container.resolve("Eager", "main")
    print(f"eager_builds={len(built)}")  # => eager_builds=1


if __name__ == "__main__":
    asyncio.run(main())
