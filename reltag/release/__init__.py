"""Tag-driven release domain: tag parsing, package matching, changelog notes."""

from reltag.release.changelog import ReleaseNotes, extract_version_notes, release_notes_for
from reltag.release.matcher import find_package
from reltag.release.tags import PackageTag, is_prerelease, parse_package_tag

__all__ = [
    "PackageTag",
    "ReleaseNotes",
    "extract_version_notes",
    "find_package",
    "is_prerelease",
    "parse_package_tag",
    "release_notes_for",
]
