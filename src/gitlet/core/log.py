"""Human-readable log entries for commits."""

from typing import TYPE_CHECKING

from gitlet.core.digest import MONTHS, WEEKDAYS

if TYPE_CHECKING:
    from gitlet.models.commit import Commit

ABBREV_LENGTH = 7
SEPARATOR = "==="


def abbreviate(commit_id: str) -> str:
    # Digests are fixed-length; a short one means the caller broke the contract.
    if len(commit_id) < ABBREV_LENGTH:
        raise AssertionError(
            f"commit id {commit_id!r} is shorter than {ABBREV_LENGTH} characters"
        )
    return commit_id[:ABBREV_LENGTH]


def format_log_date(commit: "Commit") -> str:
    ts = commit.timestamp
    return (
        f"{WEEKDAYS[ts.weekday()]} {MONTHS[ts.month - 1]} {ts.day:02d} "
        f"{ts:%H:%M:%S} {ts.year:04d} {ts:%z}"
    )


def render_log(commit: "Commit") -> str:
    """Render the log entry for one commit.

    Args:
        commit: Commit to render

    Returns:
        Text block ending with a blank line, e.g.::

            ===
            commit <digest>
            Merge: aaaa111 bbbb222
            Date: Thu Jan 01 00:00:00 1970 +0000
            <message>

    """
    lines = [SEPARATOR, f"commit {commit.digest}"]
    if commit.parent is not None and commit.secondary_parent is not None:
        lines.append(
            f"Merge: {abbreviate(commit.parent)} {abbreviate(commit.secondary_parent)}"
        )
    lines.append(f"Date: {format_log_date(commit)}")
    lines.append(commit.message)
    return "\n".join(lines) + "\n\n"
