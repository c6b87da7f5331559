from __future__ import annotations

from diassembly import Injectable, injectable

__all__ = ["DefaultUserService"]


@injectable("UserService")
class DefaultUserService(Injectable):
    def get_users(self) -> list[str]:
        return ["ann", "bob"]
