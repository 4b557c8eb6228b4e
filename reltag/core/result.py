"""Result type for explicit error handling.

Services return `Ok(value)` or `Err(error)` instead of raising, so the CLI
edge decides whether a failure is fatal, a warning, or a skip.

Usage:
    match scan_workspace(root):
        case Ok(packages):
            ...
        case Err(error):
            console.error(error.message)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NoReturn


@dataclass(frozen=True, slots=True)
class Ok[T]:
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err[E]:
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise ValueError(f"called unwrap on Err: {self.error}")


type Result[T, E] = Ok[T] | Err[E]
