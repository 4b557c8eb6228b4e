from __future__ import annotations

from pathlib import Path

import typer

from reltag.cli.commands._helpers import exit_on_error
from reltag.cli.context import build_context
from reltag.core.config import load_release_config
from reltag.github.http import HttpClient, RealHttpClient
from reltag.output.console import Style
from reltag.services.publish import run_publish


def publish(
    repo: Path | None = typer.Option(None, "--repo", help="Repository root (default: cwd)"),
    repository: str | None = typer.Option(
        None,
        "--repository",
        help="Target GitHub repository owner/name (default: $GITHUB_REPOSITORY)",
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Resolve tags and notes but do not create releases"
    ),
) -> None:
    """Create GitHub releases for package@version tags at HEAD.

    Tags that do not name a workspace package are skipped. A release that
    already exists is a warning; a failed release is reported and the
    remaining tags are still processed.
    """
    ctx = build_context(repo)
    config = exit_on_error(
        load_release_config(ctx.env, repository=repository, require_token=not dry_run),
        ctx,
    )

    client: HttpClient | None = None if dry_run else RealHttpClient()
    report = exit_on_error(
        run_publish(
            repo_root=ctx.repo_root,
            config=config,
            client=client,
            console=ctx.console,
        ),
        ctx,
    )

    ctx.console.newline()
    ctx.console.print(f"Done: {report.summary()}", Style.BOLD)
