"""Quickstart: register by qualifier, assemble, resolve.

Describe registrations in an assembly, let the ``Assembler`` load them into a
container and seal it, then hand out the resolver.
"""

from __future__ import annotations

import asyncio

from diassembly import (
    Assembler,
    Container,
    Injectable,
    ManualRegistrationAssembly,
    RegistrationEntry,
    RegistrationType,
    ResolverProtocol,
)


class Database(Injectable):
    def __init__(self) -> None:
        self.host = "localhost"


class UserRepository(Injectable):
    def __init__(self, database: Database) -> None:
        self.database = database


def build_repository(resolver: ResolverProtocol) -> UserRepository:
    return UserRepository(resolver.resolve("Database", "UserRepository"))


async def main() -> None:
    assembler = Assembler(
        [
            ManualRegistrationAssembly(
                [
                    ("Database", RegistrationEntry(RegistrationType.CONTAINER, lambda _: Database())),
                    ("UserRepository", RegistrationEntry(RegistrationType.TRANSIENT, build_repository)),
                ],
            ),
        ],
        Container("App"),
    )
    await assembler.assemble()

    repository = assembler.resolver.resolve("UserRepository", "main")
    print(f"db_host={repository.database.host}")  # => db_host=localhost

    other = assembler.resolver.resolve("UserRepository", "main")
    print(f"shared_db={repository.database is other.database}")  # => shared_db=True


if __name__ == "__main__":
    asyncio.run(main())
