"""
Commit records and the parent-linked history built from them.

A commit is a full snapshot of the staged tree: every tracked path with
its blob hash, plus the hash of the commit it was made on top of.
"""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Iterator, Optional, Tuple

from loguru import logger

from .index import FileEntry
from .objects import ObjectStore
from .outcome import ObjectNotFound, Outcome, Reason


def utc_timestamp(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class Commit:
    timestamp: str
    message: str
    files: Tuple[FileEntry, ...]
    parent: Optional[str] = None

    def to_dict(self) -> Dict:
        # Key order is part of the hashed bytes.
        return {
            "timestamp": self.timestamp,
            "message": self.message,
            "files": [{"path": f.path, "hash": f.hash} for f in self.files],
            "parent": self.parent,
        }

    def serialize(self) -> bytes:
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False).encode("utf-8", "surrogateescape")

    @classmethod
    def deserialize(cls, data: bytes) -> "Commit":
        """Parse a stored commit.

        Raises:
            ValueError: if the payload is not a commit record (e.g. a blob)
        """
        # Paths from non-UTF-8 file names round-trip as surrogate escapes.
        raw = json.loads(data.decode("utf-8", "surrogateescape"))
        if not isinstance(raw, dict) or not raw.keys() >= {"timestamp", "message", "files", "parent"}:
            raise ValueError("not a commit record")
        try:
            files = tuple(FileEntry(f["path"], f["hash"]) for f in raw["files"])
        except (TypeError, KeyError) as e:
            raise ValueError(f"malformed file list: {e}") from None
        return cls(
            timestamp=raw["timestamp"],
            message=raw["message"],
            files=files,
            parent=raw["parent"] or None,
        )

    def files_dict(self) -> Dict[str, str]:
        return {f.path: f.hash for f in self.files}


class CommitGraph:
    """Builds commits into the object store and walks them back by parent."""

    def __init__(self, store: ObjectStore, clock=None):
        self.store = store
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def load(self, commit_hash) -> Optional[Commit]:
        try:
            data = self.store.get(commit_hash)
        except ObjectNotFound:
            return None
        try:
            return Commit.deserialize(data)
        except ValueError:
            return None

    def files_of(self, commit_hash, role="parent") -> Dict[str, str]:
        """Files of ``commit_hash``; empty for no commit, or for a dangling
        one (logged)."""
        if not commit_hash:
            return {}
        commit = self.load(commit_hash)
        if commit is None:
            logger.warning(f"{role.capitalize()} commit {commit_hash} could not be resolved; treating it as empty")
            return {}
        return commit.files_dict()

    def create(self, message, snapshot, parent=None) -> Outcome:
        snapshot = tuple(FileEntry(*entry) for entry in snapshot)
        if not snapshot:
            return Outcome.noop(Reason.NOTHING_TO_COMMIT, "No changes to commit.")

        previous = self.files_of(parent)
        staged = {entry.path: entry.hash for entry in snapshot}
        if len(snapshot) == len(previous) and staged == previous:
            return Outcome.noop(Reason.NO_CHANGES, "No changes: working tree clean.")

        commit = Commit(
            timestamp=utc_timestamp(self.clock()),
            message=message,
            files=snapshot,
            parent=parent or None,
        )
        commit_hash = self.store.put(commit.serialize())
        logger.info(f"Committed {commit_hash[:7]}: {message}")
        return Outcome.ok(commit_hash, message=f"Committed: {commit_hash}")

    def walk(self, start) -> Iterator[Tuple[str, Commit]]:
        commit_hash = start
        seen = set()
        while commit_hash and commit_hash not in seen:
            seen.add(commit_hash)
            commit = self.load(commit_hash)
            if commit is None:
                logger.warning(f"History ends at unresolvable commit {commit_hash}")
                return
            yield commit_hash, commit
            commit_hash = commit.parent
