from django.conf import settings
from django.http import Http404

from gix_core import Commit, Repository, RepositoryNotFound


def open_repository() -> Repository:
    try:
        return Repository.open(settings.GIX_REPO)
    except RepositoryNotFound as e:
        raise Http404(str(e))


def commit_to_dict(commit_hash: str, commit: Commit) -> dict:
    return {
        "sha": commit_hash,
        "timestamp": commit.timestamp,
        "message": commit.message,
        "parent": commit.parent,
        "files": [{"path": f.path, "hash": f.hash} for f in commit.files],
    }


def load_commit(repo: Repository, commit_sha: str) -> Commit:
    commit = repo.graph.load(commit_sha)
    if commit is None:
        raise Http404(f"Commit '{commit_sha}' not found")
    return commit
