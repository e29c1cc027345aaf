"""Replaceable seam for running the external dotnet CLI."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Protocol, Sequence

from .security import redact_command_for_log

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Combined stdout/stderr of one command plus its failure reason, if any."""

    output: bytes = b""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def text(self) -> str:
        return self.output.decode("utf-8", errors="replace").strip()


class CommandRunner(Protocol):
    def run(
        self,
        command: str,
        args: Sequence[str],
        *,
        timeout: float | None = None,
    ) -> CommandResult:
        """Run ``command`` with ``args`` and capture its combined output."""
        ...


class SubprocessRunner:
    """Run commands as real child processes."""

    def run(
        self,
        command: str,
        args: Sequence[str],
        *,
        timeout: float | None = None,
    ) -> CommandResult:
        argv = [command, *args]
        logger.debug("running cmd=%s", " ".join(redact_command_for_log(argv)))
        try:
            completed = subprocess.run(
                argv,
                check=False,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                timeout=timeout,
            )
        except FileNotFoundError:
            return CommandResult(
                error=f"{command} CLI not found. Install it and ensure it is available in PATH."
            )
        except subprocess.TimeoutExpired as exc:
            return CommandResult(
                output=_as_bytes(exc.output),
                error=f"command timed out after {exc.timeout:.1f}s",
            )
        except OSError as exc:
            return CommandResult(error=f"unable to start {command}: {exc}")

        output = completed.stdout or b""
        if completed.returncode != 0:
            return CommandResult(output=output, error=f"exit status {completed.returncode}")
        return CommandResult(output=output)


def _as_bytes(value: bytes | str | None) -> bytes:
    if value is None:
        return b""
    if isinstance(value, str):
        return value.encode("utf-8")
    return value
