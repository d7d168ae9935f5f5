"""
Repository handle: the explicit context every operation runs against.

``Repository.init`` prepares a control directory; ``Repository.open``
returns a ready handle for an existing one. Nothing is held at module level.
"""

import os
import fcntl
import json
from contextlib import contextmanager
from typing import List, Optional, Tuple

from loguru import logger

from .checkout import checkout as reconcile
from .commits import Commit, CommitGraph
from .config import RepoConfig
from .diff import commit_diff
from .index import Index
from .objects import ObjectStore
from .outcome import Outcome, Reason, RepositoryLocked, RepositoryNotFound
from .refs import RefManager
from .status import StatusReport, compute_status
from .worktree import iter_tracked_files, read_file


class Repository:

    def __init__(self, config: RepoConfig, clock=None):
        self.config = config
        self.root = config.root
        self.store = ObjectStore(config.objects_dir)
        self.index = Index(config.index_file)
        self.refs = RefManager(config.repo_dir, store=self.store)
        self.graph = CommitGraph(self.store, clock=clock)

    @classmethod
    def init(cls, root=".", config: Optional[RepoConfig] = None) -> Outcome:
        config = config or RepoConfig.from_env(root)
        repo = cls(config)
        if os.path.isdir(config.repo_dir):
            return Outcome.noop(Reason.ALREADY_EXISTS, "Repo already initialized.")

        os.makedirs(config.objects_dir, exist_ok=True)
        with open(config.index_file, 'w', encoding='utf-8') as f:
            json.dump([], f)
        repo.refs.init_default(config.default_branch)
        logger.info(f"Initialized repository in {config.repo_dir}")
        return Outcome.ok(repo, message="Repo initialized.")

    @classmethod
    def open(cls, root=".", config: Optional[RepoConfig] = None, clock=None) -> "Repository":
        config = config or RepoConfig.from_env(root)
        if not os.path.isdir(config.repo_dir):
            raise RepositoryNotFound(f"not a gix repository (no {config.control_dir} in {config.root})")
        return cls(config, clock=clock)

    @contextmanager
    def lock(self):
        """Exclusive lock on the control directory for one command."""
        fd = os.open(self.config.lock_file, os.O_CREAT | os.O_WRONLY)
        try:
            try:
                fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
            except BlockingIOError:
                raise RepositoryLocked("another gix command is running in this repository") from None
            try:
                yield self
            finally:
                fcntl.flock(fd, fcntl.LOCK_UN)
        finally:
            os.close(fd)

    def relative_path(self, path) -> Optional[str]:
        full = os.path.abspath(os.path.join(self.root, path))
        rel = os.path.relpath(full, self.root)
        if rel == os.curdir:
            return ""
        if rel == os.pardir or rel.startswith(os.pardir + os.sep):
            return None
        return rel.replace(os.sep, '/')

    def add(self, path) -> Outcome:
        """Store and stage a file, or every non-ignored file under a directory."""
        rel = self.relative_path(path)
        if rel is None:
            return Outcome.err(Reason.PATH_OUTSIDE_REPO, f"{path} is outside the repository.")
        full = os.path.join(self.root, rel)
        excluded = self.config.path_filter()

        if os.path.isdir(full):
            base = rel
            paths = [
                f"{base}/{p}" if base else p
                for p in iter_tracked_files(full, lambda p: excluded(f"{base}/{p}" if base else p))
            ]
        elif os.path.isfile(full):
            if rel and excluded(rel):
                return Outcome.noop(Reason.IGNORED, f"{rel} is ignored.")
            paths = [rel]
        else:
            return Outcome.err(Reason.NOT_FOUND, f"{path} does not exist.")

        staged = []
        for rel_path in paths:
            blob = self.store.put(read_file(self.root, rel_path))
            self.index.stage(rel_path, blob)
            staged.append(rel_path)
            logger.debug(f"Staged {rel_path} as {blob[:7]}")
        return Outcome.ok(staged, message=f"Added: {', '.join(staged)}" if staged else "Nothing to add.")

    def unstage(self, path) -> Outcome:
        rel = self.relative_path(path)
        if rel is None:
            return Outcome.err(Reason.PATH_OUTSIDE_REPO, f"{path} is outside the repository.")
        if not self.index.unstage(rel):
            return Outcome.noop(Reason.NOT_FOUND, f"{rel} is not staged.")
        return Outcome.ok(rel, message=f"Unstaged: {rel}")

    def commit(self, message) -> Outcome:
        parent = self.refs.resolve_head()
        outcome = self.graph.create(message, self.index.snapshot(), parent)
        if not outcome.succeeded:
            return outcome
        advisories = self.refs.advance(outcome.value)
        self.index.clear()
        return Outcome.ok(outcome.value, message=outcome.message, advisories=advisories)

    def log(self) -> List[Tuple[str, Commit]]:
        return list(self.graph.walk(self.refs.resolve_head()))

    def show(self, commit_hash) -> Outcome:
        return commit_diff(self, commit_hash)

    def create_branch(self, name) -> Outcome:
        return self.refs.create_branch(name)

    def branches(self) -> List[Tuple[str, bool]]:
        current = self.refs.current_branch()
        return [(name, name == current) for name in self.refs.list_branches()]

    def checkout(self, branch) -> Outcome:
        return reconcile(self, branch)

    def status(self) -> StatusReport:
        return compute_status(self)
