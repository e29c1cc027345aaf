"""Shared fakes for the NuGet plugin tests."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

import pytest

from nuget_core.plugin import NuGetPlugin
from nuget_core.runner import CommandResult

PUBLIC_IP = "93.184.216.34"


@dataclass(frozen=True)
class RecordedCall:
    command: str
    args: tuple[str, ...]
    timeout: float | None


class RecordingRunner:
    """Record every invocation and answer from a scripted list of results."""

    def __init__(self, results: Sequence[CommandResult] | None = None) -> None:
        self.results = list(results or ())
        self.calls: list[RecordedCall] = []

    def run(
        self,
        command: str,
        args: Sequence[str],
        *,
        timeout: float | None = None,
    ) -> CommandResult:
        self.calls.append(RecordedCall(command=command, args=tuple(args), timeout=timeout))
        index = len(self.calls) - 1
        if index < len(self.results):
            return self.results[index]
        return CommandResult(output=b"Your package was pushed.")


def public_resolver(host: str) -> list[str]:
    return [PUBLIC_IP]


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def make_plugin() -> Callable[..., NuGetPlugin]:
    def factory(
        runner: RecordingRunner | None = None,
        resolver: Callable[[str], Sequence[str]] = public_resolver,
    ) -> NuGetPlugin:
        return NuGetPlugin(runner or RecordingRunner(), resolver=resolver)

    return factory


@pytest.fixture
def package_dir(tmp_path: Path) -> Path:
    """Directory holding three packages plus an unrelated file."""

    root = tmp_path / "artifacts"
    root.mkdir()
    for name in ("package1.1.0.0.nupkg", "package2.1.0.0.nupkg", "package3.1.0.0.nupkg"):
        (root / name).write_bytes(b"test")
    (root / "README.md").write_text("not a package", encoding="utf-8")
    return root


@pytest.fixture
def make_runner() -> Callable[..., RecordingRunner]:
    return RecordingRunner
