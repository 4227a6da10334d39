"""External command execution.

The template resolver never calls ``subprocess`` directly; it talks to a
``CommandExecutor`` so tests can substitute canned outcomes.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from typing import Protocol, Sequence, runtime_checkable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandOutcome:
    """Captured result of one external command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and not self.timed_out

    @property
    def error_text(self) -> str:
        """Raw diagnostic text from the tool (stderr, falling back to stdout)."""
        return self.stderr.strip() or self.stdout.strip()


@runtime_checkable
class CommandExecutor(Protocol):
    def run(self, args: Sequence[str], timeout: float | None = None) -> CommandOutcome:
        ...


class SubprocessExecutor:
    """Run commands with ``subprocess.run`` and capture text output."""

    def run(self, args: Sequence[str], timeout: float | None = None) -> CommandOutcome:
        argv = list(args)
        # npm is npm.cmd on Windows; resolve through PATH first.
        resolved = shutil.which(argv[0])
        if resolved:
            argv[0] = resolved

        logger.debug("Running %s (timeout=%s)", " ".join(argv), timeout)
        try:
            result = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as exc:
            return CommandOutcome(
                returncode=-1,
                stdout=_decode(exc.stdout),
                stderr=f"Command timed out after {timeout} seconds: {' '.join(args)}",
                timed_out=True,
            )
        except OSError as exc:
            return CommandOutcome(returncode=127, stderr=str(exc))

        return CommandOutcome(
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )


def _decode(output: bytes | str | None) -> str:
    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output


__all__ = ["CommandExecutor", "CommandOutcome", "SubprocessExecutor"]
