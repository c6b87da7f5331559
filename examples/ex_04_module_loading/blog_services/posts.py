from __future__ import annotations

from typing import Any

from diassembly import Injectable, RegistrationType, inject_property, injectable


@injectable("PostService", RegistrationType.TRANSIENT)
class DefaultPostService(Injectable):
    users: Any = inject_property("UserService")

    def get_recent_posts(self) -> list[str]:
        return [f"post by {user}" for user in self.users.get_users()]
