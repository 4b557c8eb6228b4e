from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from reltag.core.config import ReleaseConfig
from reltag.core.result import Err, Ok, Result
from reltag.core.structured import get_str
from reltag.github.http import HttpClient, HttpError

__all__ = ["PublishError", "ReleaseRequest", "create_release", "releases_url"]


@dataclass(frozen=True, slots=True)
class ReleaseRequest:
    """A release to create, keyed by its tag."""

    tag: str
    name: str
    body: str
    prerelease: bool
    draft: bool = False

    def payload(self) -> dict[str, Any]:
        return {
            "tag_name": self.tag,
            "name": self.name,
            "body": self.body,
            "draft": self.draft,
            "prerelease": self.prerelease,
        }


@dataclass(frozen=True, slots=True)
class PublishError:
    kind: Literal["already_exists", "failed"]
    tag: str
    message: str
    status: int = 0

    @property
    def already_exists(self) -> bool:
        return self.kind == "already_exists"


def releases_url(config: ReleaseConfig) -> str:
    return f"{config.api_url}/repos/{config.repo.owner}/{config.repo.name}/releases"


def _is_already_exists(error: HttpError) -> bool:
    # GitHub answers 422 with errors[].code == "already_exists" for a taken tag.
    return error.status == 422 and (
        "already_exists" in error.codes or "already_exists" in error.message
    )


def create_release(
    client: HttpClient,
    config: ReleaseConfig,
    request: ReleaseRequest,
) -> Result[str, PublishError]:
    """Create a GitHub release and return its html_url.

    A release that already exists for the tag comes back as
    `PublishError(kind="already_exists")`; callers treat that as a warning.
    No retries.
    """
    result = client.post_json(releases_url(config), request.payload(), token=config.token)
    if isinstance(result, Err):
        error = result.error
        return Err(
            PublishError(
                kind="already_exists" if _is_already_exists(error) else "failed",
                tag=request.tag,
                message=error.message,
                status=error.status,
            )
        )

    url = get_str(result.value, "html_url")
    return Ok(url or f"https://github.com/{config.repo.slug}/releases/tag/{request.tag}")
