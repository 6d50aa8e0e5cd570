"""Tests for the gitlet command line interface."""

import pytest
from click.testing import CliRunner
from pydantic import ValidationError

from gitlet.cli.main import main, parse_tracked_files
from gitlet.core.config import get_settings
from gitlet.core.store import CommitStore
from gitlet.exceptions import InvalidTrackedFileError

EPOCH_ISO = "1970-01-01T00:00:00+00:00"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def store_dir(tmp_path):
    return tmp_path / "commits"


def invoke(runner, store_dir, *args):
    return runner.invoke(main, ["--store", str(store_dir), *args])


def test_commit_prints_digest_and_stores(runner, store_dir):
    result = invoke(runner, store_dir, "commit", "initial commit", "--date", EPOCH_ISO)

    assert result.exit_code == 0, result.output
    digest = result.output.strip()
    assert len(digest) == 40
    assert CommitStore(store_dir).exists(digest)


def test_commit_with_files_and_parents(runner, store_dir):
    root = invoke(runner, store_dir, "commit", "root", "--date", EPOCH_ISO).output.strip()
    side = invoke(runner, store_dir, "commit", "side", "--parent", root).output.strip()

    result = invoke(
        runner,
        store_dir,
        "commit",
        "merge",
        "--parent",
        root,
        "--merge-parent",
        side,
        "--file",
        "a.txt=" + "1" * 40,
        "--file",
        "docs/b.md=" + "2" * 40,
    )

    assert result.exit_code == 0, result.output
    merged = CommitStore(store_dir).load(result.output.strip())
    assert merged.parent == root
    assert merged.secondary_parent == side
    assert dict(merged.tracked_files) == {"a.txt": "1" * 40, "docs/b.md": "2" * 40}


def test_commit_rejects_bad_file_spec(runner, store_dir):
    result = invoke(runner, store_dir, "commit", "msg", "--file", "no-separator")

    assert result.exit_code == 1
    assert "INVALID_TRACKED_FILE" in result.output


def test_commit_rejects_bad_date(runner, store_dir):
    result = invoke(runner, store_dir, "commit", "msg", "--date", "yesterday")

    assert result.exit_code == 2


def test_log_walks_first_parents(runner, store_dir):
    root = invoke(runner, store_dir, "commit", "initial commit", "--date", EPOCH_ISO).output.strip()
    child = invoke(runner, store_dir, "commit", "second", "--parent", root).output.strip()

    result = invoke(runner, store_dir, "log", child)

    assert result.exit_code == 0, result.output
    assert result.output.startswith(f"===\ncommit {child}\n")
    assert f"===\ncommit {root}\nDate: Thu Jan 01 00:00:00 1970 +0000\ninitial commit\n\n" in result.output


def test_log_limit(runner, store_dir):
    root = invoke(runner, store_dir, "commit", "initial commit", "--date", EPOCH_ISO).output.strip()
    child = invoke(runner, store_dir, "commit", "second", "--parent", root).output.strip()

    result = invoke(runner, store_dir, "log", child, "--limit", "1")

    assert result.output.count("===") == 1


def test_log_unknown_commit(runner, store_dir):
    result = invoke(runner, store_dir, "log", "0" * 40)

    assert result.exit_code == 1
    assert "COMMIT_NOT_FOUND" in result.output


def test_global_log(runner, store_dir):
    for message in ("one", "two", "three"):
        invoke(runner, store_dir, "commit", message, "--date", EPOCH_ISO)

    result = invoke(runner, store_dir, "global-log")

    assert result.exit_code == 0
    assert result.output.count("===\ncommit ") == 3


def test_global_log_reports_corrupt_store(runner, store_dir):
    digest = invoke(runner, store_dir, "commit", "one", "--date", EPOCH_ISO).output.strip()
    (store_dir / digest).write_bytes(b"not json")

    result = invoke(runner, store_dir, "global-log")

    assert result.exit_code == 1
    assert "CORRUPT_COMMIT" in result.output
    assert not isinstance(result.exception, ValidationError)



def test_find(runner, store_dir):
    digest = invoke(runner, store_dir, "commit", "needle", "--date", EPOCH_ISO).output.strip()
    invoke(runner, store_dir, "commit", "hay", "--date", EPOCH_ISO)

    result = invoke(runner, store_dir, "find", "needle")

    assert result.exit_code == 0
    assert result.output.split() == [digest]


def test_find_nothing(runner, store_dir):
    result = invoke(runner, store_dir, "find", "needle")

    assert result.exit_code == 1
    assert "Found no commit with that message." in result.output


def test_show_lists_tracked_files(runner, store_dir):
    digest = invoke(
        runner, store_dir, "commit", "files", "--date", EPOCH_ISO, "--file", "a.txt=blob1"
    ).output.strip()

    result = invoke(runner, store_dir, "show", digest[:8])

    assert result.exit_code == 0, result.output
    assert f"commit {digest}" in result.output
    assert "a.txt" in result.output
    assert "blob1" in result.output


def test_store_from_environment(runner, tmp_path, monkeypatch):
    env_dir = tmp_path / "from-env"
    monkeypatch.setenv("GITLET_DIR", str(env_dir))
    get_settings.cache_clear()
    try:
        result = runner.invoke(main, ["commit", "msg", "--date", EPOCH_ISO])
    finally:
        get_settings.cache_clear()

    assert result.exit_code == 0, result.output
    assert CommitStore(env_dir).exists(result.output.strip())


def test_parse_tracked_files():
    assert parse_tracked_files(("a=1", "dir/b=c=2")) == {"a": "1", "dir/b=c": "2"}
    with pytest.raises(InvalidTrackedFileError):
        parse_tracked_files(("=blob",))
