"""Module loading: register ``@injectable`` classes found in modules.

``ModuleLoaderAssembly`` imports every listed module, then registers each
exported class that carries registration descriptors. Loading happens on the
event loop, so it composes with other asynchronous assemblies.
"""

from __future__ import annotations

import asyncio

from diassembly import Assembler, Container, ModuleLoaderAssembly


async def main() -> None:
    container = Container("Blog")
    assembler = Assembler(
        [ModuleLoaderAssembly(["blog_services.users", "blog_services.posts"])],
        container,
    )
    await assembler.assemble()

    print(f"registrations={len(container)}")  # => registrations=2

    posts = assembler.resolver.resolve("PostService", "main")
    print(posts.get_recent_posts())  # => ['post by ann', 'post by bob']

    try:
        await ModuleLoaderAssembly(["blog_services.missing"]).assemble(Container("Other"))
    except ModuleNotFoundError as error:
        error_name = type(error).__name__
    print(f"missing_module={error_name}")  # => missing_module=ModuleNotFoundError


if __name__ == "__main__":
    asyncio.run(main())
