from __future__ import annotations

from collections.abc import Iterable

from reltag.workspace.manifest import WorkspacePackage

__all__ = ["find_package"]


def find_package(
    name: str,
    version: str,
    packages: Iterable[WorkspacePackage],
) -> WorkspacePackage | None:
    """First package whose manifest name and version both equal the tag's.

    A plain scan: workspaces hold tens of packages, and when two directories
    declare the same name and version the one discovered first wins.
    """
    for package in packages:
        if package.name == name and package.version == version:
            return package
    return None
