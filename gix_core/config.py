import os
from dataclasses import dataclass, field
from typing import Tuple

from .worktree import PathFilter, load_ignores

CONTROL_DIR = ".gix"
IGNORE_FILE = ".gixignore"
DEFAULT_BRANCH = "main"
DEFAULT_EXCLUDES = ("node_modules/",)


@dataclass
class RepoConfig:
    """Where a repository lives and which paths it never tracks."""

    root: str = "."
    control_dir: str = CONTROL_DIR
    ignore_file: str = IGNORE_FILE
    default_branch: str = DEFAULT_BRANCH
    excluded: Tuple[str, ...] = field(default_factory=lambda: DEFAULT_EXCLUDES)
    hidden: bool = True

    def __post_init__(self):
        self.root = os.path.abspath(self.root)

    @classmethod
    def from_env(cls, root=".") -> "RepoConfig":
        return cls(
            root=root,
            default_branch=os.environ.get("GIX_DEFAULT_BRANCH") or DEFAULT_BRANCH,
        )

    @property
    def repo_dir(self):
        return os.path.join(self.root, self.control_dir)

    @property
    def objects_dir(self):
        return os.path.join(self.repo_dir, "objects")

    @property
    def index_file(self):
        return os.path.join(self.repo_dir, "index")

    @property
    def lock_file(self):
        return os.path.join(self.repo_dir, "lock")

    def path_filter(self) -> PathFilter:
        patterns = list(self.excluded) + load_ignores(os.path.join(self.root, self.ignore_file))
        return PathFilter(self.control_dir, patterns, hidden=self.hidden)
