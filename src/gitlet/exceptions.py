from __future__ import annotations

from typing import Optional


class GitletError(Exception):
    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class CommitNotFoundError(GitletError, LookupError):
    def __init__(self, commit_id: str):
        super().__init__(
            code="COMMIT_NOT_FOUND", message=f"No commit with that id exists: {commit_id}"
        )
        self.commit_id = commit_id


class AmbiguousCommitIdError(GitletError, LookupError):
    def __init__(self, commit_id: str, candidates: list[str]):
        super().__init__(
            code="AMBIGUOUS_COMMIT_ID",
            message=f"Commit id {commit_id} matches {len(candidates)} commits",
        )
        self.commit_id = commit_id
        self.candidates = candidates


class CorruptCommitError(GitletError):
    def __init__(
        self,
        message: str,
        expected: Optional[str] = None,
        actual: Optional[str] = None,
    ):
        super().__init__(code="CORRUPT_COMMIT", message=message)
        self.expected = expected
        self.actual = actual

    @classmethod
    def digest_mismatch(cls, expected: str, actual: str) -> CorruptCommitError:
        return cls(
            f"Stored digest {expected} does not match content digest {actual}",
            expected=expected,
            actual=actual,
        )



class InvalidTrackedFileError(GitletError, ValueError):
    def __init__(self, spec: str):
        super().__init__(
            code="INVALID_TRACKED_FILE",
            message=f"Expected PATH=BLOB, got {spec!r}",
        )
        self.spec = spec
