"""Declarative injection: constructor arguments, properties and setters.

The lifecycle order is fixed: constructor arguments, ``post_constructor``,
properties, setters, ``awake_after_injection``. Property and setter
declarations of a base class apply before the subclass's own.
"""

from __future__ import annotations

import asyncio

from diassembly import (
    Assembler,
    ClassLoaderAssembly,
    Container,
    Injectable,
    inject_constructor,
    inject_method,
    inject_property,
    injectable,
)

events: list[str] = []


@injectable("Clock")
class Clock(Injectable):
    def now(self) -> str:
        return "12:00"


@injectable("Config")
class Config(Injectable):
    title = "Weekly report"


@injectable("Formatter")
class Formatter(Injectable):
    def format(self, text: str) -> str:
        return text.upper()


class BaseService(Injectable):
    clock = inject_property("Clock")


@injectable("ReportService")
@inject_constructor("Config", 0)
class ReportService(BaseService):
    formatter: Formatter

    def __init__(self, config: Config) -> None:
        self.config = config
        events.append("init")

    def post_constructor(self) -> None:
        events.append("post_constructor")

    @inject_method("Formatter")
    def set_formatter(self, formatter: Formatter) -> None:
        events.append("set_formatter")
        self.formatter = formatter

    def awake_after_injection(self) -> None:
        events.append("awake_after_injection")

    def render(self) -> str:
        return self.formatter.format(f"{self.config.title} at {self.clock.now()}")


async def main() -> None:
    assembler = Assembler(
        [ClassLoaderAssembly([Clock, Config, Formatter, ReportService])],
        Container("Reports"),
    )
    await assembler.assemble()

    service = assembler.resolver.resolve("ReportService", "main")
    print(service.render())  # => WEEKLY REPORT AT 12:00
    print(",".join(events))  # => init,post_constructor,set_formatter,awake_after_injection


if __name__ == "__main__":
    asyncio.run(main())
