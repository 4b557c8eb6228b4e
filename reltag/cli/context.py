from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import typer

from reltag.core.errors import ErrorCode
from reltag.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    repo_root: Path
    env: Mapping[str, str]
    console: ConsoleProtocol


def build_context(repo: Path | None = None) -> CLIContext:
    """Resolve the repository root and snapshot the environment once."""
    try:
        root = (repo or Path.cwd()).expanduser().resolve()
    except OSError as e:
        typer.echo(f"error: invalid --repo: {e}", err=True)
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    if not root.is_dir():
        typer.echo(f"error: --repo '{root}' is not a directory", err=True)
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    return CLIContext(repo_root=root, env=dict(os.environ), console=RichConsole())
