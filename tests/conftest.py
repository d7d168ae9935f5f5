import os
from datetime import datetime, timedelta, timezone

import pytest

from gix_core import Repository

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "django_core.settings")


class TickingClock:
    """Deterministic clock that advances one second per reading."""

    def __init__(self, start=None):
        self.now = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        self.now += timedelta(seconds=1)
        return self.now


def write(root, rel_path, content):
    path = os.path.join(str(root), rel_path)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    mode = 'wb' if isinstance(content, bytes) else 'w'
    with open(path, mode) as f:
        f.write(content)
    return path


def read(root, rel_path):
    with open(os.path.join(str(root), rel_path), 'r') as f:
        return f.read()


@pytest.fixture
def repo(tmp_path):
    Repository.init(str(tmp_path))
    return Repository.open(str(tmp_path), clock=TickingClock())


@pytest.fixture
def commit_files(repo):
    """Write, stage and commit ``{path: content}``; returns the commit hash."""

    def _commit(files, message="commit"):
        for rel_path, content in files.items():
            write(repo.root, rel_path, content)
            outcome = repo.add(rel_path)
            assert outcome.succeeded, outcome.message
        outcome = repo.commit(message)
        assert outcome.succeeded, outcome.message
        return outcome.value

    return _commit
