"""package.json reading for the root manifest and workspace packages."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from reltag.core.result import Err, Ok, Result
from reltag.core.structured import StrDict, as_str_dict, get_str_list, get_table

__all__ = [
    "MANIFEST_NAME",
    "ManifestError",
    "RootManifest",
    "WorkspacePackage",
    "load_root_manifest",
    "read_manifest",
    "read_package",
]

MANIFEST_NAME = "package.json"


@dataclass(frozen=True, slots=True)
class ManifestError:
    """A manifest could not be read or has the wrong shape."""

    path: Path
    message: str

    @property
    def hint(self) -> str:
        return str(self.path)


@dataclass(frozen=True, slots=True)
class RootManifest:
    path: Path
    workspaces: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class WorkspacePackage:
    """One workspace package, as declared by its manifest.

    Attributes:
        name: Manifest `name`
        version: Manifest `version`
        directory: Directory holding the manifest (and CHANGELOG.md)
    """

    name: str
    version: str
    directory: Path

    @property
    def manifest_path(self) -> Path:
        return self.directory / MANIFEST_NAME

    @property
    def changelog_path(self) -> Path:
        return self.directory / "CHANGELOG.md"


def read_manifest(path: Path) -> Result[StrDict, ManifestError]:
    """Parse a JSON manifest whose root must be an object."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(ManifestError(path, f"manifest not found: {path}"))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ManifestError(path, f"failed to read {path}: {e}"))

    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(ManifestError(path, f"invalid JSON in {path}: {e}"))

    data = as_str_dict(obj)
    if data is None:
        return Err(ManifestError(path, f"manifest root must be an object: {path}"))
    return Ok(data)


def _workspace_patterns(data: StrDict, path: Path) -> Result[tuple[str, ...], ManifestError]:
    if "workspaces" not in data:
        return Ok(())

    # npm: ["packages/*"]; yarn classic also allows {"packages": [...]}
    patterns = get_str_list(data, "workspaces")
    if patterns is None:
        table = get_table(data, "workspaces")
        if table is not None:
            patterns = get_str_list(table, "packages")
    if patterns is None:
        return Err(ManifestError(path, f"'workspaces' must be a list of glob patterns: {path}"))
    return Ok(tuple(patterns))


def load_root_manifest(root: Path) -> Result[RootManifest, ManifestError]:
    """Read `<root>/package.json` and its `workspaces` patterns.

    A missing or malformed root manifest is an error; a manifest without a
    `workspaces` field yields no patterns.
    """
    path = root / MANIFEST_NAME
    data = read_manifest(path)
    if isinstance(data, Err):
        return data

    patterns = _workspace_patterns(data.value, path)
    if isinstance(patterns, Err):
        return patterns
    return Ok(RootManifest(path=path, workspaces=patterns.value))


def read_package(manifest_path: Path) -> Result[WorkspacePackage | None, ManifestError]:
    """Read one workspace package manifest.

    Returns Ok(None) for manifests without a name or version (private
    helpers, unversioned apps); no tag can ever match those.
    """
    data = read_manifest(manifest_path)
    if isinstance(data, Err):
        return data

    # Compared verbatim against tag text, so no stripping here.
    name = data.value.get("name")
    version = data.value.get("version")
    if not isinstance(name, str) or not isinstance(version, str) or not name or not version:
        return Ok(None)
    return Ok(WorkspacePackage(name=name, version=version, directory=manifest_path.parent))
