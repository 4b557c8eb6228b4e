"""Exit codes for CLI commands.

CI only distinguishes success from failure, so every fatal condition maps to
the same non-zero status. Typer keeps exit 2 for its own usage errors.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes. Values are part of the CLI contract."""

    OK = 0
    FAILURE = 1

    def __str__(self) -> str:
        return self.name.lower()
