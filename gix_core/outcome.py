"""Outcome values returned by repository operations, and the exceptions that
abort a command."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple


class GixError(Exception):
    pass


class ObjectNotFound(GixError, KeyError):
    def __init__(self, obj_hash):
        super().__init__(obj_hash)
        self.obj_hash = obj_hash

    def __str__(self):
        return f"object {self.obj_hash} not found"


class RepositoryNotFound(GixError):
    pass


class RepositoryLocked(GixError):
    pass


class IndexCorrupt(GixError):
    pass


class Status(str, Enum):
    OK = "ok"
    NOOP = "noop"
    ERR = "err"


class Reason(str, Enum):
    ALREADY_EXISTS = "already_exists"
    NOTHING_TO_COMMIT = "nothing_to_commit"
    NO_CHANGES = "no_changes"
    NOT_FOUND = "not_found"
    NOT_A_COMMIT = "not_a_commit"
    BRANCH_EXISTS = "branch_exists"
    BRANCH_NOT_FOUND = "branch_not_found"
    BRANCH_HAS_NO_COMMITS = "branch_has_no_commits"
    NO_COMMITS_YET = "no_commits_yet"
    INVALID_NAME = "invalid_name"
    PATH_OUTSIDE_REPO = "path_outside_repo"
    IGNORED = "ignored"


@dataclass(frozen=True)
class Outcome:
    """Result of one operation: ``ok`` with a value, ``noop`` with the reason
    nothing happened, or ``err`` with the reason it was refused.

    ``advisories`` carries informational messages (detached HEAD, skipped
    deletions) that do not change the status.
    """

    status: Status
    value: Any = None
    reason: Optional[Reason] = None
    message: str = ""
    advisories: Tuple[str, ...] = ()

    @classmethod
    def ok(cls, value=None, message="", advisories=()):
        return cls(Status.OK, value=value, message=message, advisories=tuple(advisories))

    @classmethod
    def noop(cls, reason, message=""):
        return cls(Status.NOOP, reason=reason, message=message)

    @classmethod
    def err(cls, reason, message=""):
        return cls(Status.ERR, reason=reason, message=message)

    @property
    def succeeded(self) -> bool:
        return self.status is Status.OK

    @property
    def is_noop(self) -> bool:
        return self.status is Status.NOOP

    @property
    def failed(self) -> bool:
        return self.status is Status.ERR
