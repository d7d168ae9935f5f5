import os
import re
from typing import List, Optional

from loguru import logger

from .outcome import Outcome, Reason

SYMREF_PREFIX = "ref: refs/heads/"
BRANCH_NAME_RE = re.compile(r'^[A-Za-z0-9_-][A-Za-z0-9._-]*$')


def valid_branch_name(name) -> bool:
    return bool(name) and BRANCH_NAME_RE.match(name) is not None


class RefManager:
    """HEAD and the branch pointers under ``refs/heads``.

    HEAD is either ``ref: refs/heads/<name>`` or a raw commit hash
    (detached). A branch file holds a commit hash, or nothing when the
    branch has no commits yet.
    """

    def __init__(self, repo_dir, store=None):
        self.store = store
        self.head_file = os.path.join(repo_dir, "HEAD")
        self.heads_dir = os.path.join(repo_dir, "refs", "heads")

    def _branch_file(self, name):
        return os.path.join(self.heads_dir, name)

    @staticmethod
    def _read(path) -> Optional[str]:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return f.read().strip()
        except FileNotFoundError:
            return None

    @staticmethod
    def _write(path, value):
        with open(path, 'w', encoding='utf-8') as f:
            f.write(value)

    def init_default(self, name):
        os.makedirs(self.heads_dir, exist_ok=True)
        if self._read(self._branch_file(name)) is None:
            self._write(self._branch_file(name), "")
        if not self.read_head():
            self.set_head_symbolic(name)

    def read_head(self) -> str:
        return self._read(self.head_file) or ""

    def set_head_symbolic(self, name):
        self._write(self.head_file, SYMREF_PREFIX + name)

    def current_branch(self) -> Optional[str]:
        head = self.read_head()
        if head.startswith(SYMREF_PREFIX):
            return head[len(SYMREF_PREFIX):]
        return None

    def is_detached(self) -> bool:
        head = self.read_head()
        return bool(head) and not head.startswith(SYMREF_PREFIX)

    def branch_commit(self, name) -> Optional[str]:
        """Commit hash of ``name``: None if no such branch, "" if it has
        no commits yet."""
        if not valid_branch_name(name):
            return None
        return self._read(self._branch_file(name))

    def branch_exists(self, name) -> bool:
        return self.branch_commit(name) is not None

    def list_branches(self) -> List[str]:
        if not os.path.isdir(self.heads_dir):
            return []
        return sorted(
            entry for entry in os.listdir(self.heads_dir)
            if os.path.isfile(self._branch_file(entry))
        )

    def resolve_head(self) -> Optional[str]:
        head = self.read_head()
        if not head:
            return None
        if head.startswith(SYMREF_PREFIX):
            return self.branch_commit(head[len(SYMREF_PREFIX):]) or None
        return head

    def advance(self, commit_hash) -> List[str]:
        """Move the current branch (or a detached HEAD) to ``commit_hash``.

        Returns advisory messages for the caller to surface.
        """
        branch = self.current_branch()
        if branch is not None:
            self._write(self._branch_file(branch), commit_hash)
            logger.debug(f"Branch {branch} -> {commit_hash}")
            return []

        detached = self.is_detached()
        self._write(self.head_file, commit_hash)
        if detached:
            advisory = f"HEAD is detached; now at {commit_hash[:7]}"
            logger.warning(advisory)
            return [advisory]
        return []

    def create_branch(self, name) -> Outcome:
        if not valid_branch_name(name):
            return Outcome.err(Reason.INVALID_NAME, f"'{name}' is not a valid branch name.")
        head = self.resolve_head()
        if not head:
            return Outcome.err(Reason.NO_COMMITS_YET, "No commits yet; cannot create a branch.")
        if self.store is not None and not self.store.exists(head):
            return Outcome.err(Reason.NOT_FOUND, f"HEAD commit {head} is not in the object store.")
        if self.branch_exists(name):
            return Outcome.noop(Reason.BRANCH_EXISTS, f"Branch '{name}' already exists.")
        os.makedirs(self.heads_dir, exist_ok=True)
        self._write(self._branch_file(name), head)
        logger.info(f"Created branch {name} at {head[:7]}")
        return Outcome.ok(head, message=f"Created branch '{name}' at {head[:7]}")

    def switch_to(self, name) -> Outcome:
        if not self.branch_exists(name):
            return Outcome.err(Reason.BRANCH_NOT_FOUND, f"Branch '{name}' not found.")
        self.set_head_symbolic(name)
        return Outcome.ok(name)
