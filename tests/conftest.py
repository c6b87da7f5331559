"""Shared pytest fixtures for diassembly tests."""

from __future__ import annotations

import importlib
import itertools
import sys
import textwrap
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from diassembly.container import Container

_MODULE_COUNTER = itertools.count()


@pytest.fixture()
def container() -> Container:
    """Empty, open container."""
    return Container("Test Container")


@pytest.fixture()
def write_module(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> Iterator[Callable[[str], str]]:
    """Write importable modules under a temporary directory.

    Returns a callable taking module source and returning a unique dotted name.
    """
    monkeypatch.syspath_prepend(str(tmp_path))
    written: list[str] = []

    def write(source: str) -> str:
        name = f"diassembly_test_module_{next(_MODULE_COUNTER)}"
        (tmp_path / f"{name}.py").write_text(textwrap.dedent(source))
        written.append(name)
        importlib.invalidate_caches()
        return name

    yield write

    for name in written:
        sys.modules.pop(name, None)
