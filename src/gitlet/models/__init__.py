"""Data models for gitlet."""

from .commit import (
    Commit,
    CommitBuilder,
    compare_commits,
    deserialize_commit,
    dump_commit,
    serialize_commit,
)

__all__ = [
    "Commit",
    "CommitBuilder",
    "compare_commits",
    "deserialize_commit",
    "dump_commit",
    "serialize_commit",
]
