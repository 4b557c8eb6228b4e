"""Release notes from a package's CHANGELOG.md.

Changelogs are sectioned by level-2 headings carrying the version, either
bare (`## 1.2.0`) or bracketed (`## [1.2.0] - 2024-01-01`). The notes for a
version are the lines between its heading and the next level-2 heading.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from reltag.core.result import Err, Ok, Result
from reltag.workspace.manifest import WorkspacePackage

__all__ = [
    "ChangelogError",
    "ReleaseNotes",
    "extract_version_notes",
    "fallback_notes",
    "release_notes_for",
]

_HEADING_RE = re.compile(r"^##\s+")


@dataclass(frozen=True, slots=True)
class ChangelogError:
    path: Path
    message: str


@dataclass(frozen=True, slots=True)
class ReleaseNotes:
    """Notes body plus where it came from.

    Attributes:
        body: Markdown text used as the release body
        source: Changelog path, or None when no CHANGELOG.md exists
        from_changelog: False when `body` is a generated fallback
    """

    body: str
    source: Path | None
    from_changelog: bool


def fallback_notes(version: str, package_name: str | None = None) -> str:
    if package_name:
        return f"Release {version} of {package_name}"
    return f"Release {version}"


def _version_heading_re(version: str) -> re.Pattern[str]:
    # Versions such as 1.0.0+build or 1.0.0-rc.1 contain regex metacharacters.
    # Exact match: 1.0.0 must not open "## 1.0.0+build", but may be followed by
    # a link or punctuation ("## [1.0.0](https://...)", "## 1.0.0:").
    return re.compile(rf"^##\s+\[?{re.escape(version)}\]?(?![0-9A-Za-z.+-])")


def _section_lines(text: str, version: str) -> list[str]:
    heading = _version_heading_re(version)
    collecting = False
    out: list[str] = []

    for line in text.split("\n"):
        if not collecting:
            if heading.match(line):
                collecting = True
            continue
        if _HEADING_RE.match(line):
            break
        out.append(line)

    return out


def _section_text(text: str, version: str) -> str:
    return "\n".join(_section_lines(text, version)).strip()


def extract_version_notes(text: str, version: str) -> str:
    """Return the trimmed section under `version`'s heading.

    Falls back to `Release <version>` when there is no such heading or the
    section is empty.
    """
    return _section_text(text, version) or fallback_notes(version)


def release_notes_for(
    package: WorkspacePackage,
    version: str,
) -> Result[ReleaseNotes, ChangelogError]:
    """Notes for `package` at `version` from `<package dir>/CHANGELOG.md`."""
    path = package.changelog_path
    if not path.is_file():
        return Ok(
            ReleaseNotes(
                body=fallback_notes(version, package.name),
                source=None,
                from_changelog=False,
            )
        )

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return Err(ChangelogError(path=path, message=f"failed to read {path}: {e}"))

    section = _section_text(text, version)
    return Ok(
        ReleaseNotes(
            body=section or fallback_notes(version),
            source=path,
            from_changelog=bool(section),
        )
    )
