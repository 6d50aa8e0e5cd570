"""Canonical hashing rule for commit snapshots.

A commit's identity is the SHA-1 of an ordered list of text items built
from its fields. Everything here is pure: no I/O, no clock access.
"""

import hashlib
from datetime import datetime, timezone
from typing import Iterable, Mapping, Optional, Union

DIGEST_LENGTH = 40

WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTHS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


def digest_of(items: Iterable[Union[str, bytes]]) -> str:
    """Hash each item as a discrete chunk and return the hex SHA-1 digest.

    Args:
        items: Ordered content items; text is encoded as UTF-8

    Returns:
        40-character lowercase hex digest
    """
    hasher = hashlib.sha1()  # noqa: S324
    for item in items:
        if isinstance(item, str):
            item = item.encode("utf-8")
        elif not isinstance(item, bytes):
            raise TypeError(f"Cannot hash item of type {type(item).__name__}")
        hasher.update(item)
    return hasher.hexdigest()


def canonical_timestamp(timestamp: datetime) -> str:
    """Render an instant the way it is fed to the hash.

    The instant is converted to UTC so the same moment always hashes the
    same regardless of the offset it was recorded in. Naive datetimes are
    taken to be UTC. Day and month names do not depend on the locale.
    """
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    utc = timestamp.astimezone(timezone.utc)
    return (
        f"{WEEKDAYS[utc.weekday()]} {MONTHS[utc.month - 1]} {utc.day:02d} "
        f"{utc:%H:%M:%S} UTC {utc.year:04d}"
    )


def tracked_file_item(path: str, blob_id: str) -> str:
    return f"{path}={blob_id}"


def snapshot_items(
    message: str,
    timestamp: datetime,
    parent: Optional[str],
    secondary_parent: Optional[str],
    tracked_files: Mapping[str, str],
) -> list:
    """Build the ordered list of items a commit digest is computed over."""
    items = [
        message,
        canonical_timestamp(timestamp),
        parent if parent is not None else "",
        secondary_parent if secondary_parent is not None else "",
    ]
    for path in sorted(tracked_files):
        items.append(tracked_file_item(path, tracked_files[path]))
    return items
