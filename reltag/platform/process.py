"""Blocking subprocess calls that report failures as values.

Every external command this tool runs is a short read-only query (git). The
child never gets a terminal prompt and always speaks the C locale, so a CI
job cannot hang on credentials and error text stays in English.
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from reltag.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run"]

NEVER_STARTED = -1

_QUIET_ENV = {
    "GIT_TERMINAL_PROMPT": "0",
    "LC_ALL": "C",
}


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A command that exited non-zero, timed out, or could not be started.

    `returncode` is NEVER_STARTED when the process did not run to completion.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def started(self) -> bool:
        return self.returncode != NEVER_STARTED

    @property
    def detail(self) -> str:
        """First non-empty line of stderr, else stdout, else ''."""
        for stream in (self.stderr, self.stdout):
            for line in stream.splitlines():
                if line.strip():
                    return line.strip()
        return ""

    def __str__(self) -> str:
        shown = " ".join(self.command[:3]) + (" ..." if len(self.command) > 3 else "")
        if not self.started:
            return f"{shown} did not run: {self.detail}"
        return f"{shown} failed (exit {self.returncode})"


def _child_env(extra: Mapping[str, str] | None) -> dict[str, str]:
    return {**os.environ, **_QUIET_ENV, **(extra or {})}


def run(
    cmd: Sequence[str],
    cwd: Path,
    env: Mapping[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Run `cmd` in `cwd` and return its stdout.

    Args:
        cmd: Program and arguments
        cwd: Working directory
        env: Variables layered over the inherited environment
        timeout: Seconds before the child is killed (None waits forever)
    """
    command = tuple(cmd)
    try:
        proc = subprocess.run(
            command,
            cwd=cwd,
            env=_child_env(env),
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return Err(ProcessError(command, NEVER_STARTED, "", f"timed out after {timeout}s"))
    except OSError as e:
        return Err(ProcessError(command, NEVER_STARTED, "", str(e)))

    if proc.returncode != 0:
        return Err(ProcessError(command, proc.returncode, proc.stdout, proc.stderr))
    return Ok(proc.stdout)
