"""File-based commit store keyed by digest."""

import contextlib
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Iterator, List

from gitlet.exceptions import AmbiguousCommitIdError, CommitNotFoundError
from gitlet.models.commit import Commit, deserialize_commit, serialize_commit

logger = logging.getLogger(__name__)

MIN_PREFIX_LENGTH = 4
_DIGEST_RE = re.compile(r"^[0-9a-f]{40}$")
_PREFIX_RE = re.compile(r"^[0-9a-f]+$")


class CommitStore:
    """Stores each serialized commit in a file named by its digest.

    Writes are idempotent: a digest that is already present is left alone,
    and new files are written to a temporary sibling and renamed into
    place, so concurrent saves of the same commit need no locking.
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    def path_for(self, digest: str) -> Path:
        return self.root / digest

    def exists(self, digest: str) -> bool:
        """Check whether a commit with this full digest is stored."""
        return bool(_DIGEST_RE.match(digest)) and self.path_for(digest).is_file()

    def save(self, commit: Commit) -> Path:
        """Persist a commit and return the path it lives at."""
        path = self.path_for(commit.digest)
        if path.exists():
            logger.debug("Commit %s already stored", commit.digest)
            return path

        self.root.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.root, prefix=f".{commit.digest}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(serialize_commit(commit))
            os.replace(tmp_name, path)
        except BaseException:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(tmp_name)
            raise

        logger.info("Stored commit %s", commit.digest)
        return path

    def iter_digests(self) -> Iterator[str]:
        """Yield every stored digest in lexicographic order."""
        if not self.root.is_dir():
            return
        names = [entry.name for entry in self.root.iterdir() if entry.is_file()]
        for name in sorted(names):
            if _DIGEST_RE.match(name):
                yield name

    def resolve(self, commit_id: str) -> str:
        """Expand a full digest or unique prefix to a stored digest.

        Raises:
            CommitNotFoundError: If nothing matches, or the prefix is too short
            AmbiguousCommitIdError: If the prefix matches several commits
        """
        if self.exists(commit_id):
            return commit_id
        if len(commit_id) < MIN_PREFIX_LENGTH or not _PREFIX_RE.match(commit_id):
            raise CommitNotFoundError(commit_id)

        candidates: List[str] = [
            digest for digest in self.iter_digests() if digest.startswith(commit_id)
        ]
        if not candidates:
            raise CommitNotFoundError(commit_id)
        if len(candidates) > 1:
            raise AmbiguousCommitIdError(commit_id, candidates)
        return candidates[0]

    def load(self, commit_id: str) -> Commit:
        """Read a commit by full digest or unique prefix."""
        digest = self.resolve(commit_id)
        return deserialize_commit(self.path_for(digest).read_bytes())

    def iter_commits(self) -> Iterator[Commit]:
        """Yield every stored commit in digest order."""
        for digest in self.iter_digests():
            yield self.load(digest)
