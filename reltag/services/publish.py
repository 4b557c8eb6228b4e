"""Publish GitHub releases for `package@version` tags on the current commit.

Flow: tags at HEAD -> (per tag) parse -> match workspace package -> changelog
notes -> create release. Setup failures (git, root/package manifests) end
the run; anything that goes wrong for one tag is reported and the loop moves
on to the next tag.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from reltag.core.config import ReleaseConfig
from reltag.core.result import Err, Ok, Result
from reltag.git.repository import GitError, Repository
from reltag.github.http import HttpClient
from reltag.github.releases import ReleaseRequest, create_release
from reltag.output.console import ConsoleProtocol, Style
from reltag.release.changelog import release_notes_for
from reltag.release.matcher import find_package
from reltag.release.tags import PackageTag, is_prerelease, parse_package_tag
from reltag.workspace.manifest import ManifestError, WorkspacePackage
from reltag.workspace.scanner import scan_workspace

__all__ = [
    "PublishReport",
    "TagOutcome",
    "TagStatus",
    "publish_tag_releases",
    "run_publish",
]

TagStatus = Literal["published", "planned", "exists", "skipped", "failed"]

type SetupError = GitError | ManifestError


@dataclass(frozen=True, slots=True)
class TagOutcome:
    tag: str
    status: TagStatus
    detail: str


def _empty_outcomes() -> list[TagOutcome]:
    return []


@dataclass
class PublishReport:
    outcomes: list[TagOutcome] = field(default_factory=_empty_outcomes)

    def add(self, tag: str, status: TagStatus, detail: str) -> None:
        self.outcomes.append(TagOutcome(tag=tag, status=status, detail=detail))

    def with_status(self, status: TagStatus) -> list[TagOutcome]:
        return [o for o in self.outcomes if o.status == status]

    @property
    def published(self) -> list[TagOutcome]:
        return self.with_status("published")

    @property
    def skipped(self) -> list[TagOutcome]:
        return self.with_status("skipped")

    @property
    def failed(self) -> list[TagOutcome]:
        return self.with_status("failed")

    def summary(self) -> str:
        counts = {
            status: len(self.with_status(status))
            for status in ("published", "planned", "exists", "skipped", "failed")
        }
        return ", ".join(f"{n} {status}" for status, n in counts.items() if n) or "nothing to do"


def display_name(tag: PackageTag) -> str:
    return f"{tag.name} {tag.version}"


def _publish_one(
    *,
    parsed: PackageTag,
    package: WorkspacePackage,
    config: ReleaseConfig,
    client: HttpClient | None,
    console: ConsoleProtocol,
    report: PublishReport,
) -> None:
    notes = release_notes_for(package, parsed.version)
    if isinstance(notes, Err):
        console.error(f"Failed to create release for {parsed.tag}: {notes.error.message}")
        report.add(parsed.tag, "failed", notes.error.message)
        return

    if notes.value.from_changelog:
        preview = notes.value.body[:100]
        console.print(f"Extracted changelog: {preview}...", Style.DIM)
    elif notes.value.source is None:
        console.print("No CHANGELOG.md found, using default release notes", Style.DIM)
    else:
        console.print(f"No changelog section for {parsed.version}, using default notes", Style.DIM)

    request = ReleaseRequest(
        tag=parsed.tag,
        name=display_name(parsed),
        body=notes.value.body,
        prerelease=is_prerelease(parsed.version),
    )

    if client is None:
        kind = "prerelease" if request.prerelease else "release"
        console.info(f"dry run: would create {kind} '{request.name}' for {parsed.tag}")
        report.add(parsed.tag, "planned", request.name)
        return

    match create_release(client, config, request):
        case Ok(url):
            console.success(f"Created release for {parsed.tag}: {url}")
            report.add(parsed.tag, "published", url)
        case Err(e) if e.already_exists:
            console.warning(f"Release for {parsed.tag} already exists")
            report.add(parsed.tag, "exists", e.message)
        case Err(e):
            console.error(f"Failed to create release for {parsed.tag}: {e.message}")
            report.add(parsed.tag, "failed", e.message)


def publish_tag_releases(
    *,
    tags: list[str],
    packages: list[WorkspacePackage],
    config: ReleaseConfig,
    client: HttpClient | None,
    console: ConsoleProtocol,
) -> PublishReport:
    """Create one release per tag that names a workspace package.

    Args:
        tags: Tags in listing order
        packages: Workspace packages in discovery order
        config: Target repository and credentials
        client: API client; None runs the flow without creating anything
        console: Diagnostics sink

    Returns:
        Per-tag outcomes. Never raises for a single tag's failure.
    """
    report = PublishReport()

    for tag in tags:
        console.header(f"Processing tag: {tag}")

        parsed = parse_package_tag(tag)
        if parsed is None:
            console.print(f"Skipping tag {tag} - doesn't match package@version format", Style.DIM)
            report.add(tag, "skipped", "not a package@version tag")
            continue

        console.print(f"Parsed: package={parsed.name}, version={parsed.version}", Style.DIM)

        package = find_package(parsed.name, parsed.version, packages)
        if package is None:
            console.print(
                f"No matching package found for {parsed.name}@{parsed.version}", Style.DIM
            )
            report.add(tag, "skipped", "no matching workspace package")
            continue

        console.print(f"Found matching package: {package.manifest_path}", Style.DIM)
        _publish_one(
            parsed=parsed,
            package=package,
            config=config,
            client=client,
            console=console,
            report=report,
        )

    return report


def run_publish(
    *,
    repo_root: Path,
    config: ReleaseConfig,
    client: HttpClient | None,
    console: ConsoleProtocol,
) -> Result[PublishReport, SetupError]:
    """Collect tags at HEAD, scan the workspace, and publish.

    Returns Err only for setup failures; per-tag problems live in the report.
    """
    repo = Repository(repo_root)
    head = repo.head_commit()
    if isinstance(head, Err):
        return head

    tags = repo.tags_pointing_at(head.value)
    if isinstance(tags, Err):
        return tags

    if not tags.value:
        console.print("No tags found for current commit")
        return Ok(PublishReport())

    console.print(f"Found tags: {', '.join(tags.value)}")

    packages = scan_workspace(repo_root)
    if isinstance(packages, Err):
        return packages

    console.print(
        f"Found packages: {', '.join(p.name for p in packages.value) or '(none)'}",
        Style.DIM,
    )

    return Ok(
        publish_tag_releases(
            tags=tags.value,
            packages=packages.value,
            config=config,
            client=client,
            console=console,
        )
    )
