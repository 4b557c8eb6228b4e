from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = ["PackageTag", "is_prerelease", "parse_package_tag"]


# Greedy name: everything up to the last "@" (so "@scope/pkg@1.0.0" works).
_PACKAGE_TAG_RE = re.compile(r"^(.+)@(.+)$")
_PRERELEASE_RE = re.compile(r"-(alpha|beta|rc|pre)", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class PackageTag:
    tag: str
    name: str
    version: str

    @property
    def prerelease(self) -> bool:
        return is_prerelease(self.version)


def parse_package_tag(tag: str) -> PackageTag | None:
    """Split `name@version`; None if the tag does not have that shape."""
    m = _PACKAGE_TAG_RE.match(tag)
    if m is None:
        return None
    return PackageTag(tag=tag, name=m.group(1), version=m.group(2))


def is_prerelease(version: str) -> bool:
    """True for versions carrying an alpha/beta/rc/pre qualifier (`1.0.0-rc.1`)."""
    return _PRERELEASE_RE.search(version) is not None
