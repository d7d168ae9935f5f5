"""
Three-way status: the HEAD commit's files, the index, and the files on disk.

Each path seen in any of the three gets at most one label; paths whose
three hashes agree get none.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from .objects import hash_bytes
from .worktree import iter_tracked_files, read_file


class Label(str, Enum):
    UNTRACKED = "untracked"
    MODIFIED_NOT_STAGED = "modified, not staged"
    STAGED_NEW = "staged: new file"
    STAGED_MODIFIED = "staged: modified"
    DELETED_STAGED = "deleted, staged"
    DELETED_NOT_STAGED = "deleted, not staged"


@dataclass
class StatusReport:
    branch: Optional[str] = None
    head: Optional[str] = None
    entries: Dict[Label, List[str]] = field(default_factory=dict)

    @property
    def is_clean(self) -> bool:
        return not any(self.entries.values())

    def label_of(self, path) -> Optional[Label]:
        for label, paths in self.entries.items():
            if path in paths:
                return label
        return None

    def to_dict(self):
        return {
            "branch": self.branch,
            "head": self.head,
            "clean": self.is_clean,
            "entries": {label.value: paths for label, paths in self.entries.items()},
        }


def classify(head: Dict[str, str], staged: Dict[str, str], working: Dict[str, str], path) -> Optional[Label]:
    h = head.get(path)
    s = staged.get(path)
    w = working.get(path)

    if w is not None and s is None and h is None:
        return Label.UNTRACKED
    if s is not None and w is not None and s != w:
        return Label.MODIFIED_NOT_STAGED
    if h is not None and s is None and w is not None and w != h:
        return Label.MODIFIED_NOT_STAGED
    if s is not None and h is None:
        return Label.STAGED_NEW
    if s is not None and h is not None and s != h:
        return Label.STAGED_MODIFIED
    if h is not None and w is None:
        if s is None:
            return Label.DELETED_NOT_STAGED
        return Label.DELETED_STAGED
    return None


def working_snapshot(root, excluded) -> Dict[str, str]:
    return {path: hash_bytes(read_file(root, path)) for path in iter_tracked_files(root, excluded)}


def compute_status(repo) -> StatusReport:
    head_hash = repo.refs.resolve_head()
    head = repo.graph.files_of(head_hash, role="HEAD")
    staged = repo.index.as_dict()
    working = working_snapshot(repo.root, repo.config.path_filter())

    report = StatusReport(branch=repo.refs.current_branch(), head=head_hash)
    for path in sorted(set(head) | set(staged) | set(working)):
        label = classify(head, staged, working, path)
        if label is not None:
            report.entries.setdefault(label, []).append(path)
    return report
