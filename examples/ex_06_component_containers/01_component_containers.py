"""Component containers: share the default container or isolate per component.

``ContainerContext.for_component`` returns the default container unless the
caller asks for isolation, as a test harness would.
"""

from __future__ import annotations

from diassembly import ContainerContext, RegistrationEntry, RegistrationType


def main() -> None:
    context = ContainerContext()

    shared = context.for_component("UserList")
    print(f"shared_is_default={shared is context.default}")  # => shared_is_default=True

    isolated = context.for_component("UserList", isolated=True)
    print(f"isolated_name={isolated.name}")  # => isolated_name=UserList::Container

    isolated.register("Users", RegistrationEntry(RegistrationType.CONTAINER, lambda _: ["ann"]))
    print(f"leaked={context.default.is_registered('Users')}")  # => leaked=False

    context.reset()
    print(f"after_reset={context.for_component('UserList', isolated=True) is isolated}")  # => after_reset=False


if __name__ == "__main__":
    main()
