"""Tests for the commit digest rule."""

import hashlib
from datetime import datetime, timedelta, timezone

import pytest

from gitlet.core.digest import (
    DIGEST_LENGTH,
    canonical_timestamp,
    digest_of,
    snapshot_items,
)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def test_digest_is_sha1_of_concatenated_items():
    """Each item is fed to one hasher in order."""
    expected = hashlib.sha1(b"abc").hexdigest()

    assert digest_of(["a", "b", "c"]) == expected
    assert len(expected) == DIGEST_LENGTH


def test_digest_accepts_bytes_items():
    """Bytes and text items hash the same way."""
    assert digest_of([b"hello", "world"]) == digest_of(["hello", "world"])


def test_digest_rejects_other_types():
    """Only text and bytes can be hashed."""
    with pytest.raises(TypeError):
        digest_of(["ok", None])


def test_canonical_timestamp_epoch():
    """The epoch renders in the fixed UTC form."""
    assert canonical_timestamp(EPOCH) == "Thu Jan 01 00:00:00 UTC 1970"


def test_canonical_timestamp_converts_to_utc():
    """An offset timestamp renders as the same instant in UTC."""
    pacific = timezone(timedelta(hours=-8))
    ts = datetime(2024, 3, 5, 14, 30, 0, tzinfo=pacific)

    assert canonical_timestamp(ts) == "Tue Mar 05 22:30:00 UTC 2024"


def test_canonical_timestamp_naive_is_utc():
    """Naive datetimes are read as UTC."""
    assert canonical_timestamp(datetime(1970, 1, 1)) == canonical_timestamp(EPOCH)


def test_snapshot_items_order():
    """Fields come first, then tracked files sorted by path."""
    items = snapshot_items(
        "msg",
        EPOCH,
        None,
        "f" * 40,
        {"b.txt": "blob-b", "a.txt": "blob-a"},
    )

    assert items == [
        "msg",
        "Thu Jan 01 00:00:00 UTC 1970",
        "",
        "f" * 40,
        "a.txt=blob-a",
        "b.txt=blob-b",
    ]


def test_canonical_timestamp_pads_year():
    """Years before 1000 keep four digits."""
    ts = datetime(999, 6, 1, 12, 0, 0, tzinfo=timezone.utc)

    assert canonical_timestamp(ts).endswith(" 12:00:00 UTC 0999")
