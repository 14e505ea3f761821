"""
pytest configuration and shared fixtures for mcpc tests.

Generation always runs against a temporary working directory, and the
outside world is faked: PATH lookups go through ``fake_path`` and
external commands through ``fake_run``, so no test needs git, uv or a
JavaScript package manager installed.

Fixtures
--------
work_dir : Path
    A temporary directory that is also the current working directory.

fake_path : set[str]
    Executables visible to ``shutil.which``. Remove names to simulate
    missing tools.

fake_run : MagicMock
    Replacement for ``subprocess.run`` that succeeds by default.

fail_commands : Callable
    Makes the named commands exit non-zero while the rest succeed.
"""

import subprocess
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest


ALL_EXECUTABLES = {"git", "python", "python3", "uv", "node", "pnpm", "yarn", "npm"}


@pytest.fixture
def work_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    Run the test inside a fresh temporary directory.

    Project paths are relative to the current directory, so every
    generated project lands under ``tmp_path``.
    """
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def fake_path() -> Iterator[set[str]]:
    """
    Patch ``shutil.which`` to resolve only the names in the yielded set.
    """
    available = set(ALL_EXECUTABLES)

    def which(name: str) -> str | None:
        return f"/usr/bin/{name}" if name in available else None

    with patch("mcpc.dependencies.shutil.which", side_effect=which):
        yield available


@pytest.fixture
def fake_run() -> Iterator[MagicMock]:
    """
    Patch ``subprocess.run`` so every external command succeeds.

    Set ``side_effect`` on the yielded mock to simulate failures.
    """
    with patch("mcpc.generators.base.subprocess.run") as mock_run:
        mock_run.return_value = subprocess.CompletedProcess(
            args=[], returncode=0, stdout="", stderr="",
        )
        yield mock_run


@pytest.fixture
def fail_commands(fake_run: MagicMock):
    """
    Make the named commands exit non-zero; all others succeed.

    Usage: ``fail_commands("uv")`` inside a test.
    """
    def apply(*names: str) -> MagicMock:
        fake_run.side_effect = make_side_effect(names)
        return fake_run

    return apply


def make_side_effect(names: tuple[str, ...]):
    """Build a ``subprocess.run`` replacement that fails the named commands."""
    def run(argv: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        if argv[0] in names:
            raise subprocess.CalledProcessError(
                1, argv, output="", stderr="network unreachable",
            )
        return subprocess.CompletedProcess(args=argv, returncode=0, stdout="", stderr="")

    return run


# =============================================================================
# pytest Configuration
# =============================================================================

def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers used in the test suite."""
    config.addinivalue_line(
        "markers", "posix: marks tests that rely on POSIX filesystem behaviour"
    )
