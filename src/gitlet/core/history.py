"""Queries that walk the commit graph through a CommitStore."""

import logging
from collections import deque
from typing import Iterator, List, Optional

from gitlet.core.log import render_log
from gitlet.core.store import CommitStore
from gitlet.models.commit import Commit

logger = logging.getLogger(__name__)


def iter_history(
    store: CommitStore, start: str, limit: Optional[int] = None
) -> Iterator[Commit]:
    """Walk first parents from ``start`` back to the root commit.

    Args:
        store: Store the commits live in
        start: Digest or unique prefix of the newest commit
        limit: Stop after this many commits; None walks the whole chain

    Yields:
        Commits, newest first
    """
    commit_id: Optional[str] = start
    count = 0
    while commit_id is not None:
        if limit is not None and count >= limit:
            return
        commit = store.load(commit_id)
        yield commit
        count += 1
        commit_id = commit.parent


def iter_ancestors(store: CommitStore, start: str) -> Iterator[Commit]:
    """Yield ``start`` and every commit reachable from it, each once.

    Both parent and secondary parent edges are followed, breadth-first.
    """
    first = store.load(start)
    seen = {first.digest}
    queue = deque([first])
    while queue:
        commit = queue.popleft()
        yield commit
        for parent_id in (commit.parent, commit.secondary_parent):
            if parent_id is None or parent_id in seen:
                continue
            parent = store.load(parent_id)
            seen.add(parent_id)
            # Parents recorded as prefixes resolve to a digest we may have seen.
            if parent.digest in seen:
                continue
            seen.add(parent.digest)
            queue.append(parent)


def find_by_message(store: CommitStore, message: str) -> List[str]:
    """Return digests of every stored commit with exactly this message."""
    matches = [commit.digest for commit in store.iter_commits() if commit.message == message]
    logger.debug("Found %d commits with message %r", len(matches), message)
    return matches


def global_log(store: CommitStore) -> Iterator[str]:
    """Yield the log entry of every stored commit in digest order."""
    for commit in store.iter_commits():
        yield render_log(commit)
