"""Tags associated with the current build, in CI-friendly shapes.

Two views:
- `current_tags`: tags at HEAD plus trigger metadata
- `collect_tags`: adds the repository's full tag list, with filtering,
  sorting, a limit and optional per-tag commit details
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Literal, get_args

from reltag.core.config import TriggerInfo
from reltag.core.result import Err, Ok, Result
from reltag.git.repository import SORT_KEYS, GitError, Repository, TagCommit, TagSort

__all__ = [
    "OUTPUT_FORMATS",
    "CurrentTags",
    "TagOptions",
    "TagReport",
    "TagsError",
    "UnknownFormatError",
    "collect_tags",
    "current_tags",
    "format_report",
    "render_current",
]

OutputFormat = Literal["json", "env", "csv", "list"]
OUTPUT_FORMATS: tuple[str, ...] = get_args(OutputFormat)


class UnknownFormatError(ValueError):
    def __init__(self, fmt: str) -> None:
        super().__init__(f"Unknown format: {fmt}")
        self.format = fmt


@dataclass(frozen=True, slots=True)
class TagsError:
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class TagOptions:
    filter: str | None = None
    sort_by: TagSort = "version"
    limit: int | None = None
    include_commits: bool = False


@dataclass(frozen=True, slots=True)
class CurrentTags:
    current_tag: str | None
    tags_for_current_commit: list[str]
    current_commit: str
    triggered_by: str

    def to_dict(self) -> dict[str, object]:
        return {
            "currentTag": self.current_tag,
            "tagsForCurrentCommit": self.tags_for_current_commit,
            "currentCommit": self.current_commit,
            "triggeredBy": self.triggered_by,
        }


@dataclass(frozen=True, slots=True)
class TagReport:
    current_tag: str | None
    all_tags: list[str]
    tags_for_current_commit: list[str]
    current_commit: str
    triggered_by: str
    tags_with_commits: list[TagCommit] | None = None

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {
            "currentTag": self.current_tag,
            "allTags": self.all_tags,
            "tagsForCurrentCommit": self.tags_for_current_commit,
            "currentCommit": self.current_commit,
            "triggeredBy": self.triggered_by,
        }
        if self.tags_with_commits is not None:
            data["tagsWithCommits"] = [
                {"tag": c.tag, "commit": c.commit, "date": c.date, "message": c.message}
                for c in self.tags_with_commits
            ]
        return data


def current_tags(repo: Repository, trigger: TriggerInfo) -> Result[CurrentTags, GitError]:
    head = repo.head_commit()
    if isinstance(head, Err):
        return head

    tags = repo.tags_pointing_at(head.value)
    if isinstance(tags, Err):
        return tags

    return Ok(
        CurrentTags(
            current_tag=trigger.ref_name,
            tags_for_current_commit=tags.value,
            current_commit=head.value,
            triggered_by=trigger.event_name,
        )
    )


def _compile_filter(pattern: str | None) -> Result[re.Pattern[str] | None, TagsError]:
    if not pattern:
        return Ok(None)
    try:
        return Ok(re.compile(pattern))
    except re.error as e:
        return Err(TagsError(f"invalid --filter pattern: {e}", hint=pattern))


def collect_tags(
    repo: Repository,
    trigger: TriggerInfo,
    options: TagOptions,
) -> Result[TagReport, GitError | TagsError]:
    """Build the full tag report.

    The filter is a regular expression searched anywhere in the tag name; it
    applies before the limit. A limit of zero or less means no limit.
    """
    if options.sort_by not in SORT_KEYS:
        return Err(
            TagsError(
                f"unknown sort method: {options.sort_by}",
                hint=f"choose one of: {', '.join(SORT_KEYS)}",
            )
        )

    regex = _compile_filter(options.filter)
    if isinstance(regex, Err):
        return regex

    current = current_tags(repo, trigger)
    if isinstance(current, Err):
        return current

    listed = repo.list_tags(options.sort_by)
    if isinstance(listed, Err):
        return listed

    all_tags = listed.value
    if regex.value is not None:
        pattern = regex.value
        all_tags = [t for t in all_tags if pattern.search(t)]
    if options.limit is not None and options.limit > 0:
        all_tags = all_tags[: options.limit]

    with_commits: list[TagCommit] | None = None
    if options.include_commits:
        with_commits = []
        for tag in all_tags:
            info = repo.tag_commit(tag)
            if isinstance(info, Err):
                return info
            with_commits.append(info.value)

    return Ok(
        TagReport(
            current_tag=current.value.current_tag,
            all_tags=all_tags,
            tags_for_current_commit=current.value.tags_for_current_commit,
            current_commit=current.value.current_commit,
            triggered_by=current.value.triggered_by,
            tags_with_commits=with_commits,
        )
    )


def _csv_quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def format_report(report: TagReport, fmt: str) -> str:
    """Render a TagReport.

    Raises:
        UnknownFormatError: `fmt` is not one of OUTPUT_FORMATS
    """
    match fmt:
        case "json":
            return json.dumps(report.to_dict(), indent=2)
        case "env":
            return "\n".join(
                [
                    f"CURRENT_TAG={report.current_tag or ''}",
                    f"TAGS_FOR_COMMIT={','.join(report.tags_for_current_commit)}",
                    f"ALL_TAGS={','.join(report.all_tags)}",
                    f"CURRENT_COMMIT={report.current_commit}",
                    f"TRIGGERED_BY={report.triggered_by}",
                ]
            )
        case "csv":
            if report.tags_with_commits is None:
                return ",".join(report.all_tags)
            rows = ["tag,commit,date,message"]
            for c in report.tags_with_commits:
                rows.append(f"{c.tag},{c.commit},{_csv_quote(c.date)},{_csv_quote(c.message)}")
            return "\n".join(rows)
        case "list":
            return "\n".join(report.all_tags)
        case _:
            raise UnknownFormatError(fmt)


def render_current(current: CurrentTags) -> str:
    """JSON followed by shell-friendly assignments, for quick CI use."""
    return "\n".join(
        [
            json.dumps(current.to_dict(), indent=2),
            "",
            "# Environment variables you can use:",
            f"CURRENT_TAG={current.current_tag or ''}",
            f"TAGS_FOR_COMMIT={','.join(current.tags_for_current_commit)}",
        ]
    )
