import difflib
from typing import List, NamedTuple

from .objects import is_object_hash
from .outcome import ObjectNotFound, Outcome, Reason

UNCHANGED = "unchanged"
ADDED = "added"
REMOVED = "removed"


class DiffPart(NamedTuple):
    kind: str
    text: str


class FileDiff(NamedTuple):
    path: str
    status: str
    parts: List[DiffPart]
    root: bool = False


def diff_lines(old: str, new: str) -> List[DiffPart]:
    """Ordered unchanged/added/removed line ranges turning ``old`` into ``new``."""
    old_lines = old.splitlines(keepends=True)
    new_lines = new.splitlines(keepends=True)
    parts = []
    matcher = difflib.SequenceMatcher(None, old_lines, new_lines, autojunk=False)
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            parts.append(DiffPart(UNCHANGED, "".join(old_lines[i1:i2])))
            continue
        if i2 > i1:
            parts.append(DiffPart(REMOVED, "".join(old_lines[i1:i2])))
        if j2 > j1:
            parts.append(DiffPart(ADDED, "".join(new_lines[j1:j2])))
    return parts


def _text(store, blob) -> str:
    return store.get(blob).decode("utf-8", errors="replace")


def commit_diff(repo, commit_hash) -> Outcome:
    """Per-file diff of a commit against its parent.

    A root commit (or one whose parent is gone) reports each file whole,
    marked ``root``.
    """
    commit_hash = (commit_hash or "").strip().lower()
    if not is_object_hash(commit_hash) or not repo.store.exists(commit_hash):
        return Outcome.err(Reason.NOT_FOUND, "Commit not found")
    commit = repo.graph.load(commit_hash)
    if commit is None:
        return Outcome.err(Reason.NOT_A_COMMIT, f"{commit_hash} is not a commit")

    parent = repo.graph.load(commit.parent) if commit.parent else None
    old_files = parent.files_dict() if parent else {}

    diffs = []
    try:
        for entry in commit.files:
            new_text = _text(repo.store, entry.hash)
            if parent is None:
                diffs.append(FileDiff(entry.path, ADDED, [DiffPart(ADDED, new_text)], root=True))
                continue
            old_hash = old_files.get(entry.path)
            old_text = _text(repo.store, old_hash) if old_hash else ""
            status = ADDED if old_hash is None else "modified"
            diffs.append(FileDiff(entry.path, status, diff_lines(old_text, new_text)))

        new_paths = {entry.path for entry in commit.files}
        for path, old_hash in old_files.items():
            if path not in new_paths:
                diffs.append(FileDiff(path, REMOVED, [DiffPart(REMOVED, _text(repo.store, old_hash))]))
    except ObjectNotFound as e:
        return Outcome.err(Reason.NOT_FOUND, str(e))

    return Outcome.ok((commit, diffs))
