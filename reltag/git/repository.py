"""Read-only git queries used by tag collection.

All operations return Result types. Nothing here writes to the repository.

Usage:
    repo = Repository(Path("."))

    match repo.head_commit():
        case Ok(sha):
            tags = repo.tags_pointing_at(sha)
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from reltag.core.result import Err, Ok, Result
from reltag.core.timeouts import GIT_TIMEOUT_SECONDS
from reltag.platform.process import ProcessError
from reltag.platform.process import run as run_process

__all__ = [
    "SORT_KEYS",
    "GitError",
    "Repository",
    "TagCommit",
    "TagSort",
]

TagSort = Literal["version", "date", "alphabetical"]

# Newest first for version and date; plain refname order otherwise.
SORT_KEYS: dict[TagSort, str] = {
    "version": "-version:refname",
    "date": "-creatordate",
    "alphabetical": "refname",
}


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1

    @property
    def hint(self) -> str:
        return f"git {self.command}"


@dataclass(frozen=True, slots=True)
class TagCommit:
    """Commit details for one tag."""

    tag: str
    commit: str
    date: str
    message: str


def _lines(output: str) -> list[str]:
    return [ln.strip() for ln in output.splitlines() if ln.strip()]


class Repository:
    """A git working tree queried through the git binary.

    Attributes:
        path: Any directory inside the working tree
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def head_commit(self) -> Result[str, GitError]:
        """Full sha of HEAD."""
        result = self._git(["rev-parse", "HEAD"])
        if isinstance(result, Err):
            return result
        return Ok(result.value.strip())

    def tags_pointing_at(self, commit: str) -> Result[list[str], GitError]:
        """Tags that point exactly at `commit`, in git's listing order.

        Returns:
            Ok(tags), possibly empty
            Err(GitError) if git itself failed
        """
        result = self._git(["tag", "--points-at", commit])
        if isinstance(result, Err):
            return result
        return Ok(_lines(result.value))

    def list_tags(self, sort: TagSort = "version") -> Result[list[str], GitError]:
        """All tags, sorted by `sort` (see SORT_KEYS)."""
        key = SORT_KEYS.get(sort)
        if key is None:
            return Err(
                GitError(
                    command="tag",
                    message=f"unknown sort method: {sort}",
                )
            )
        result = self._git(["tag", f"--sort={key}"])
        if isinstance(result, Err):
            return result
        return Ok(_lines(result.value))

    def tag_commit(self, tag: str) -> Result[TagCommit, GitError]:
        """Commit sha, committer date and subject line for `tag`."""
        sha = self._git(["rev-list", "-n", "1", tag])
        if isinstance(sha, Err):
            return sha
        date = self._git(["log", "-1", "--format=%ci", tag])
        if isinstance(date, Err):
            return date
        subject = self._git(["log", "-1", "--format=%s", tag])
        if isinstance(subject, Err):
            return subject

        return Ok(
            TagCommit(
                tag=tag,
                commit=sha.value.strip(),
                date=date.value.strip(),
                message=subject.value.strip(),
            )
        )

    def _git(self, args: list[str]) -> Result[str, GitError]:
        result = self._run(args)
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command=" ".join(args[:2]),
                        message=e.detail or f"git {args[0]} failed",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                return Ok(stdout)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        return run_process(
            ["git", "-C", str(self.path), *args],
            cwd=self.path,
            timeout=GIT_TIMEOUT_SECONDS,
        )
