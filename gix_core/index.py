import json
from typing import NamedTuple, Tuple

from .objects import write_atomic
from .outcome import IndexCorrupt


class FileEntry(NamedTuple):
    path: str
    hash: str


class Index:
    """The staging area: path -> blob hash for the next commit.

    Persisted as a JSON list of ``{"path", "hash"}`` records in staging
    order. Restaging a path moves it to the end.
    """

    def __init__(self, path):
        self.path = path

    def _load(self):
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                raw = f.read()
        except FileNotFoundError:
            return []
        if not raw.strip():
            return []
        try:
            return [FileEntry(e["path"], e["hash"]) for e in json.loads(raw)]
        except (ValueError, TypeError, KeyError) as e:
            raise IndexCorrupt(f"index file {self.path} is unreadable: {e}") from None

    def _save(self, entries):
        # Non-UTF-8 file names stay as \udcXX escapes in the ASCII-only JSON.
        data = json.dumps([{"path": e.path, "hash": e.hash} for e in entries])
        write_atomic(self.path, data.encode('ascii'))

    def stage(self, path, obj_hash):
        entries = [e for e in self._load() if e.path != path]
        entries.append(FileEntry(path, obj_hash))
        self._save(entries)

    def unstage(self, path) -> bool:
        entries = self._load()
        kept = [e for e in entries if e.path != path]
        if len(kept) == len(entries):
            return False
        self._save(kept)
        return True

    def snapshot(self) -> Tuple[FileEntry, ...]:
        return tuple(self._load())

    def as_dict(self):
        return {e.path: e.hash for e in self._load()}

    def clear(self):
        self._save([])
