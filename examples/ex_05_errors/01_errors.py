"""Errors raised by the container and the injection declarations."""

from __future__ import annotations

import asyncio

from diassembly import (
    Container,
    RegistrationEntry,
    RegistrationType,
    ViewComponent,
    injectable,
)
from diassembly.exceptions import (
    DIAssemblyInvalidRegistrationTypeError,
    DIAssemblyNotRegisteredError,
    DIAssemblyRegistrationClosedError,
    DIAssemblyUnsupportedTargetError,
)


class UserList(ViewComponent):
    pass


async def main() -> None:
    container = Container("Errors")

    try:
        container.resolve("Clock", "ReportService")
    except DIAssemblyNotRegisteredError as error:
        message = str(error)
    print(message)  # => No registration in container 'Errors' for qualifier 'Clock' requested by 'ReportService'

    try:
        container.register("Clock", RegistrationEntry("forever", lambda _: None))  # type: ignore[arg-type]
    except DIAssemblyInvalidRegistrationTypeError as error:
        invalid_type = type(error).__name__
    print(f"invalid_type={invalid_type}")  # => invalid_type=DIAssemblyInvalidRegistrationTypeError

    await container.finish_registration()
    try:
        container.register("Clock", RegistrationEntry(RegistrationType.TRANSIENT, lambda _: None))
    except DIAssemblyRegistrationClosedError as error:
        closed = type(error).__name__
    print(f"closed={closed}")  # => closed=DIAssemblyRegistrationClosedError

    try:
        injectable("UserList")(UserList)
    except DIAssemblyUnsupportedTargetError as error:
        unsupported = type(error).__name__
    print(f"unsupported={unsupported}")  # => unsupported=DIAssemblyUnsupportedTargetError


if __name__ == "__main__":
    asyncio.run(main())
