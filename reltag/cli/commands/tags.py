from __future__ import annotations

from pathlib import Path
from typing import cast

import typer

from reltag.cli.commands._helpers import exit_on_error, exit_with_code
from reltag.cli.context import build_context
from reltag.core.config import load_trigger_info
from reltag.core.errors import ErrorCode
from reltag.git.repository import SORT_KEYS, Repository, TagSort
from reltag.services.tags import (
    OUTPUT_FORMATS,
    TagOptions,
    UnknownFormatError,
    collect_tags,
    current_tags,
    format_report,
    render_current,
)


def tags(
    fmt: str = typer.Option(
        "json", "--format", help=f"Output format: {', '.join(OUTPUT_FORMATS)}"
    ),
    filter_pattern: str | None = typer.Option(
        None, "--filter", help="Filter tags by regex pattern"
    ),
    output: Path | None = typer.Option(
        None, "--output", help="Write output to file instead of stdout"
    ),
    include_commits: bool = typer.Option(
        False, "--include-commits", help="Include commit hash, date and subject for each tag"
    ),
    sort_by: str = typer.Option(
        "version", "--sort-by", help=f"Sort method: {', '.join(SORT_KEYS)}"
    ),
    limit: int | None = typer.Option(None, "--limit", help="Limit number of tags returned"),
    repo: Path | None = typer.Option(None, "--repo", help="Repository root (default: cwd)"),
) -> None:
    """List tags for the current build (all tags, tags at HEAD, trigger info)."""
    ctx = build_context(repo)

    if sort_by not in SORT_KEYS:
        ctx.console.error(f"Unknown sort method: {sort_by}")
        exit_with_code(int(ErrorCode.FAILURE))

    options = TagOptions(
        filter=filter_pattern,
        sort_by=cast(TagSort, sort_by),
        limit=limit,
        include_commits=include_commits,
    )
    report = exit_on_error(
        collect_tags(Repository(ctx.repo_root), load_trigger_info(ctx.env), options),
        ctx,
    )

    try:
        text = format_report(report, fmt)
    except UnknownFormatError as e:
        ctx.console.error(str(e))
        exit_with_code(int(ErrorCode.FAILURE))

    if output is None:
        typer.echo(text)
        return

    out_path = output.expanduser().resolve()
    try:
        out_path.write_text(text, encoding="utf-8")
    except OSError as e:
        ctx.console.error(f"failed to write {out_path}: {e}")
        exit_with_code(int(ErrorCode.FAILURE))
    ctx.console.success(f"Output written to: {out_path}")


def current(
    repo: Path | None = typer.Option(None, "--repo", help="Repository root (default: cwd)"),
) -> None:
    """Show tags pointing at HEAD as JSON plus shell variables."""
    ctx = build_context(repo)
    found = exit_on_error(
        current_tags(Repository(ctx.repo_root), load_trigger_info(ctx.env)),
        ctx,
    )
    typer.echo(render_current(found))
