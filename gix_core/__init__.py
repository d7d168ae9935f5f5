from .outcome import (
    GixError,
    IndexCorrupt,
    ObjectNotFound,
    Outcome,
    Reason,
    RepositoryLocked,
    RepositoryNotFound,
    Status,
)
from .objects import ObjectStore, hash_bytes
from .index import FileEntry, Index
from .commits import Commit, CommitGraph
from .refs import RefManager
from .config import RepoConfig
from .status import Label, StatusReport
from .diff import DiffPart, FileDiff, diff_lines
from .repository import Repository

__all__ = [
    "GixError",
    "IndexCorrupt",
    "ObjectNotFound",
    "Outcome",
    "Reason",
    "RepositoryLocked",
    "RepositoryNotFound",
    "Status",
    "ObjectStore",
    "hash_bytes",
    "FileEntry",
    "Index",
    "Commit",
    "CommitGraph",
    "RefManager",
    "RepoConfig",
    "Label",
    "StatusReport",
    "DiffPart",
    "FileDiff",
    "diff_lines",
    "Repository",
]
