"""Commit model for the gitlet object store."""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationError,
    field_serializer,
    field_validator,
)

from gitlet.core.digest import digest_of, snapshot_items
from gitlet.core.log import render_log
from gitlet.exceptions import CorruptCommitError

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class TrackedFiles(dict):
    """Read-only path to blob id mapping that still copies and pickles."""

    def _read_only(self, *args, **kwargs):
        raise TypeError("tracked files of a commit cannot be modified")

    __setitem__ = _read_only
    __delitem__ = _read_only
    __ior__ = _read_only
    clear = _read_only
    pop = _read_only
    popitem = _read_only
    setdefault = _read_only
    update = _read_only

    def __reduce__(self):
        return (TrackedFiles, (dict(self),))


class Commit(BaseModel):
    """An immutable snapshot in the commit history.

    Identity is the ``digest`` alone: equality, hashing and ordering never
    look at the other fields. Parents are referenced by digest, not by
    object, so history does not have to be resident in memory.
    """

    message: str
    timestamp: datetime
    parent: Optional[str] = None
    secondary_parent: Optional[str] = None
    tracked_files: Dict[str, str]
    digest: str

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @field_validator("tracked_files")
    @classmethod
    def _freeze_tracked_files(cls, v: Dict[str, str]) -> Mapping[str, str]:
        return TrackedFiles((path, v[path]) for path in sorted(v))

    @field_serializer("tracked_files")
    def _dump_tracked_files(self, v: Mapping[str, str]) -> Dict[str, str]:
        return dict(v)

    @classmethod
    def builder(cls, message: str) -> "CommitBuilder":
        """Start building a commit with the given message."""
        return CommitBuilder(message)

    @property
    def is_merge(self) -> bool:
        return self.parent is not None and self.secondary_parent is not None

    def log(self) -> str:
        """Render the log entry for this commit."""
        return render_log(self)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Commit):
            return self.digest == other.digest
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.digest)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Commit):
            return NotImplemented
        return self.digest < other.digest

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, Commit):
            return NotImplemented
        return self.digest <= other.digest

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, Commit):
            return NotImplemented
        return self.digest > other.digest

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, Commit):
            return NotImplemented
        return self.digest >= other.digest

    def __repr__(self) -> str:
        return dump_commit(self)


def _now() -> datetime:
    return datetime.now().astimezone()


class CommitBuilder:
    """Collects commit fields step by step and finalizes them into a Commit.

    A builder is mutable; give each in-flight construction its own.
    Every ``build()`` without an explicit timestamp reads the clock again,
    so two builds from one builder are two different commits.
    """

    def __init__(self, message: str, clock: Optional[Clock] = None):
        self._message = message
        self._timestamp: Optional[datetime] = None
        self._parent: Optional[str] = None
        self._secondary_parent: Optional[str] = None
        self._tracked_files: Optional[Mapping[str, str]] = None
        self._clock = clock or _now

    def timestamp(self, timestamp: datetime) -> "CommitBuilder":
        self._timestamp = timestamp
        return self

    def parent(self, parent: Optional[str]) -> "CommitBuilder":
        self._parent = parent
        return self

    def secondary_parent(self, secondary_parent: Optional[str]) -> "CommitBuilder":
        self._secondary_parent = secondary_parent
        return self

    def tracked_files(self, tracked_files: Mapping[str, str]) -> "CommitBuilder":
        self._tracked_files = tracked_files
        return self

    def build(self) -> Commit:
        """Finalize the collected fields into a new Commit.

        Returns:
            Commit whose digest covers every field set on this builder
        """
        timestamp = self._timestamp if self._timestamp is not None else self._clock()
        tracked_files = dict(self._tracked_files) if self._tracked_files is not None else {}

        digest = digest_of(
            snapshot_items(
                self._message,
                timestamp,
                self._parent,
                self._secondary_parent,
                tracked_files,
            )
        )
        logger.debug("Built commit %s (%d tracked files)", digest, len(tracked_files))

        return Commit(
            message=self._message,
            timestamp=timestamp,
            parent=self._parent,
            secondary_parent=self._secondary_parent,
            tracked_files=tracked_files,
            digest=digest,
        )


def content_digest(commit: Commit) -> str:
    """Recompute a commit's digest from its fields."""
    return digest_of(
        snapshot_items(
            commit.message,
            commit.timestamp,
            commit.parent,
            commit.secondary_parent,
            commit.tracked_files,
        )
    )


def serialize_commit(commit: Commit) -> bytes:
    return commit.model_dump_json().encode("utf-8")


def deserialize_commit(data: bytes) -> Commit:
    """Load a commit from its serialized form and check its digest.

    Raises:
        CorruptCommitError: If the payload is unreadable or no longer hashes
            to the stored digest
    """
    try:
        commit = Commit.model_validate_json(data)
    except ValidationError as e:
        raise CorruptCommitError("Stored commit payload is not a valid commit") from e
    actual = content_digest(commit)
    if actual != commit.digest:
        raise CorruptCommitError.digest_mismatch(commit.digest, actual)
    return commit


def compare_commits(a: Commit, b: Commit) -> int:
    """Three-way comparison of two commits by digest."""
    return (a.digest > b.digest) - (a.digest < b.digest)


def dump_commit(commit: Commit) -> str:
    """Single-line debug rendering of every field."""
    return (
        f"Commit(digest={commit.digest!r}, "
        f"timestamp={commit.timestamp.isoformat()!r}, "
        f"message={commit.message!r}, "
        f"parent={commit.parent!r}, "
        f"secondary_parent={commit.secondary_parent!r}, "
        f"tracked_files={dict(commit.tracked_files)!r})"
    )
