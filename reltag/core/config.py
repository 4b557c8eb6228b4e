"""Run configuration derived from the CI environment.

The process environment is read once at the CLI edge and handed to services
as a `ReleaseConfig`, so matching, extraction and publishing can be tested
with plain mappings.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from .result import Err, Ok, Result

__all__ = [
    "DEFAULT_API_URL",
    "ConfigError",
    "GitHubRepo",
    "ReleaseConfig",
    "TriggerInfo",
    "load_release_config",
    "load_trigger_info",
    "parse_repository",
]

DEFAULT_API_URL = "https://api.github.com"

TOKEN_ENV = "GITHUB_TOKEN"
REPOSITORY_ENV = "GITHUB_REPOSITORY"
REF_NAME_ENV = "GITHUB_REF_NAME"
EVENT_NAME_ENV = "GITHUB_EVENT_NAME"
API_URL_ENV = "GITHUB_API_URL"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when required configuration is missing or invalid."""

    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class GitHubRepo:
    owner: str
    name: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True, slots=True)
class TriggerInfo:
    """What triggered the CI run.

    Attributes:
        ref_name: Branch or tag name that triggered the run, None if unknown
        event_name: Triggering event (push, workflow_dispatch, ...)
    """

    ref_name: str | None = None
    event_name: str = "unknown"


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Everything the publisher needs from the outside world."""

    token: str
    repo: GitHubRepo
    api_url: str = DEFAULT_API_URL
    trigger: TriggerInfo = field(default_factory=TriggerInfo)


def _env_value(env: Mapping[str, str], key: str) -> str | None:
    value = env.get(key)
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_repository(slug: str) -> Result[GitHubRepo, ConfigError]:
    """Parse an `owner/name` slug."""
    owner, sep, name = slug.strip().partition("/")
    if not sep or not owner or not name or "/" in name:
        return Err(
            ConfigError(
                f"invalid repository: {slug!r}",
                hint="expected owner/name",
            )
        )
    return Ok(GitHubRepo(owner=owner, name=name))


def load_trigger_info(env: Mapping[str, str]) -> TriggerInfo:
    return TriggerInfo(
        ref_name=_env_value(env, REF_NAME_ENV),
        event_name=_env_value(env, EVENT_NAME_ENV) or "unknown",
    )


def load_release_config(
    env: Mapping[str, str],
    *,
    repository: str | None = None,
    require_token: bool = True,
) -> Result[ReleaseConfig, ConfigError]:
    """Build a ReleaseConfig from an environment mapping.

    Args:
        env: Environment variables (usually `os.environ`)
        repository: `owner/name` override; falls back to GITHUB_REPOSITORY
        require_token: False for dry runs that never call the API

    Returns:
        Ok(ReleaseConfig), or Err(ConfigError) when the token or repository
        is missing or malformed
    """
    token = _env_value(env, TOKEN_ENV)
    if token is None and require_token:
        return Err(
            ConfigError(
                f"{TOKEN_ENV} environment variable is required",
                hint="pass secrets.GITHUB_TOKEN to the step environment",
            )
        )

    slug = repository or _env_value(env, REPOSITORY_ENV)
    if slug is None:
        return Err(
            ConfigError(
                f"{REPOSITORY_ENV} environment variable is required",
                hint="or pass --repository owner/name",
            )
        )

    repo = parse_repository(slug)
    if isinstance(repo, Err):
        return repo

    api_url = (_env_value(env, API_URL_ENV) or DEFAULT_API_URL).rstrip("/")
    return Ok(
        ReleaseConfig(
            token=token or "",
            repo=repo.value,
            api_url=api_url,
            trigger=load_trigger_info(env),
        )
    )
