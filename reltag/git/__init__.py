"""Git operations module.

Usage:
    from reltag.git import Repository

    repo = Repository(Path("."))
    head = repo.head_commit()
    if head.is_ok():
        print(repo.tags_pointing_at(head.unwrap()))
"""

from reltag.git.repository import (
    SORT_KEYS,
    GitError,
    Repository,
    TagCommit,
    TagSort,
)

__all__ = [
    "SORT_KEYS",
    "GitError",
    "Repository",
    "TagCommit",
    "TagSort",
]
