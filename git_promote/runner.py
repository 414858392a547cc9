"""External process capability used by every git and provider CLI call."""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one external command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner(Protocol):
    """Protocol for anything that can execute external commands."""

    def run(self, command: Sequence[str], *, cwd: Path) -> CommandResult:
        """Run ``command`` in ``cwd`` to completion and capture its output.

        A non-zero exit is reported through ``CommandResult.returncode``,
        never raised.
        """
        ...

    def which(self, name: str) -> str | None:
        """Return the resolved path of an executable, or None if absent."""
        ...


class SubprocessRunner:
    """Runs commands with :func:`subprocess.run`, capturing text output."""

    def run(self, command: Sequence[str], *, cwd: Path) -> CommandResult:
        cmd = list(command)
        logger.debug("Running command: %s (cwd=%s)", " ".join(cmd), cwd)
        try:
            proc = subprocess.run(
                cmd,
                cwd=str(cwd),
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as exc:
            logger.debug("Executable not found: %s", cmd[0])
            return CommandResult(returncode=127, stderr=str(exc))
        logger.debug("Exit code %s: %s", proc.returncode, " ".join(cmd))
        return CommandResult(
            returncode=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )

    def which(self, name: str) -> str | None:
        return shutil.which(name)
