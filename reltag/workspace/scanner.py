"""Resolve workspace glob patterns to package manifests.

Patterns follow npm/yarn conventions: each one names package directories
relative to the repository root (`packages/*`, `apps/**`). A leading `!`
excludes the directories it matches from the result, wherever it appears in
the list.
"""

from __future__ import annotations

from pathlib import Path

from reltag.core.result import Err, Ok, Result
from reltag.workspace.manifest import (
    MANIFEST_NAME,
    ManifestError,
    WorkspacePackage,
    load_root_manifest,
    read_package,
)

__all__ = ["find_package_manifests", "load_packages", "scan_workspace"]


def _normalize(pattern: str) -> str:
    p = pattern.strip().replace("\\", "/")
    while p.startswith("./"):
        p = p[2:]
    return p.rstrip("/")


def _glob_dirs(root: Path, pattern: str) -> list[Path]:
    if not pattern or pattern.startswith("/"):
        return []
    if pattern == ".":
        return [root]
    return sorted(p for p in root.glob(pattern) if p.is_dir())


def find_package_manifests(root: Path, patterns: list[str] | tuple[str, ...]) -> list[Path]:
    """Return `package.json` paths for every directory matched by `patterns`.

    Order follows the patterns; matches within one pattern are sorted.
    A path matched by several patterns is reported once. Exclusions apply to
    every match, including matches of patterns listed after them.
    """
    found: list[Path] = []
    seen: set[Path] = set()
    excluded: set[Path] = set()

    for raw in patterns:
        pattern = _normalize(raw)
        if pattern.startswith("!"):
            excluded.update(_glob_dirs(root, _normalize(pattern[1:])))
            continue

        for directory in _glob_dirs(root, pattern):
            manifest = directory / MANIFEST_NAME
            if manifest in seen or not manifest.is_file():
                continue
            seen.add(manifest)
            found.append(manifest)

    return [m for m in found if m.parent not in excluded]


def load_packages(manifests: list[Path]) -> Result[list[WorkspacePackage], ManifestError]:
    """Read every manifest; the first unreadable one is an error."""
    packages: list[WorkspacePackage] = []
    for path in manifests:
        result = read_package(path)
        if isinstance(result, Err):
            return result
        if result.value is not None:
            packages.append(result.value)
    return Ok(packages)


def scan_workspace(root: Path) -> Result[list[WorkspacePackage], ManifestError]:
    """Root manifest -> patterns -> manifests -> packages, in discovery order."""
    manifest = load_root_manifest(root)
    if isinstance(manifest, Err):
        return manifest

    paths = find_package_manifests(root, manifest.value.workspaces)
    return load_packages(paths)
