"""Workspace discovery: root manifest patterns and package manifests."""

from reltag.workspace.manifest import (
    ManifestError,
    RootManifest,
    WorkspacePackage,
    load_root_manifest,
)
from reltag.workspace.scanner import find_package_manifests, load_packages, scan_workspace

__all__ = [
    "ManifestError",
    "RootManifest",
    "WorkspacePackage",
    "find_package_manifests",
    "load_packages",
    "load_root_manifest",
    "scan_workspace",
]
