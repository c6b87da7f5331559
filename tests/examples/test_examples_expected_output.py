"""Run every topic example and compare stdout with its inline ``# =>`` comments."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]
EXAMPLES_ROOT = REPO_ROOT / "examples"
SRC_ROOT = REPO_ROOT / "src"
EXPECTATION_MARKER = "# =>"


def _topic_examples() -> list[Path]:
    return sorted(EXAMPLES_ROOT.glob("ex_*/01_*.py"))


def _expected_lines(path: Path) -> list[str]:
    return [
        line.split(EXPECTATION_MARKER, maxsplit=1)[1].strip()
        for line in path.read_text(encoding="utf-8").splitlines()
        if EXPECTATION_MARKER in line
    ]


def test_every_topic_has_a_main_example() -> None:
    topics = sorted(path for path in EXAMPLES_ROOT.glob("ex_*") if path.is_dir())

    assert topics
    assert [path.parent for path in _topic_examples()] == topics


@pytest.mark.parametrize(
    "path",
    _topic_examples(),
    ids=lambda path: str(path.relative_to(EXAMPLES_ROOT)),
)
def test_example_stdout_matches_inline_expectations(path: Path) -> None:
    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(
        value for value in (str(SRC_ROOT), env.get("PYTHONPATH")) if value
    )

    completed = subprocess.run(  # noqa: S603
        [sys.executable, str(path)],
        cwd=path.parent,
        env=env,
        capture_output=True,
        text=True,
        check=False,
    )

    assert completed.returncode == 0, completed.stderr
    assert completed.stderr == ""
    assert completed.stdout.splitlines() == _expected_lines(path)
