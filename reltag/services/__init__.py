"""Service layer: tag enumeration and tag-driven publishing."""

from reltag.services.publish import PublishReport, TagOutcome, publish_tag_releases, run_publish
from reltag.services.tags import (
    CurrentTags,
    TagOptions,
    TagReport,
    collect_tags,
    current_tags,
    format_report,
)

__all__ = [
    "CurrentTags",
    "PublishReport",
    "TagOptions",
    "TagOutcome",
    "TagReport",
    "collect_tags",
    "current_tags",
    "format_report",
    "publish_tag_releases",
    "run_publish",
]
