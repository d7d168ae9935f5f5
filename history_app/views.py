from django.http import Http404, HttpRequest, JsonResponse

from gix_core import ObjectNotFound, Reason

from .helpers import commit_to_dict, load_commit, open_repository


def repo_overview(request: HttpRequest) -> JsonResponse:
    repo = open_repository()
    head_sha = repo.refs.resolve_head()
    head = repo.graph.load(head_sha) if head_sha else None
    return JsonResponse({
        "root": repo.root,
        "branch": repo.refs.current_branch(),
        "head_sha": head_sha,
        "head": commit_to_dict(head_sha, head) if head else None,
        "branches": [{"name": name, "current": current} for name, current in repo.branches()],
    })


def commit_list(request: HttpRequest) -> JsonResponse:
    repo = open_repository()
    branch = request.GET.get("branch")
    if branch:
        sha = repo.refs.branch_commit(branch)
        if sha is None:
            raise Http404(f"Branch '{branch}' not found")
    else:
        sha = repo.refs.resolve_head()

    commits = [commit_to_dict(commit_sha, commit) for commit_sha, commit in repo.graph.walk(sha)]
    return JsonResponse({"branch": branch or repo.refs.current_branch(), "commits": commits})


def commit_detail(request: HttpRequest, commit_sha: str) -> JsonResponse:
    repo = open_repository()
    outcome = repo.show(commit_sha)
    if outcome.failed:
        if outcome.reason in (Reason.NOT_FOUND, Reason.NOT_A_COMMIT):
            raise Http404(outcome.message)
        return JsonResponse({"error": outcome.message}, status=400)

    commit, diffs = outcome.value
    data = commit_to_dict(commit_sha, commit)
    data["diff"] = [
        {
            "path": file_diff.path,
            "status": file_diff.status,
            "root": file_diff.root,
            "parts": [{"kind": part.kind, "text": part.text} for part in file_diff.parts],
        }
        for file_diff in diffs
    ]
    return JsonResponse(data)


def tree_view(request: HttpRequest, commit_sha: str) -> JsonResponse:
    repo = open_repository()
    commit = load_commit(repo, commit_sha)
    prefix = request.GET.get("path", "").strip("/")
    entries = [
        {"path": f.path, "hash": f.hash}
        for f in sorted(commit.files)
        if not prefix or f.path == prefix or f.path.startswith(prefix + "/")
    ]
    return JsonResponse({"commit_sha": commit_sha, "path": prefix, "entries": entries})


def blob_view(request: HttpRequest, commit_sha: str, path: str) -> JsonResponse:
    repo = open_repository()
    commit = load_commit(repo, commit_sha)
    blob_sha = commit.files_dict().get(path.strip("/"))
    if blob_sha is None:
        raise Http404("File not found")
    try:
        body = repo.store.get(blob_sha)
    except ObjectNotFound:
        raise Http404(f"Blob '{blob_sha}' not found")

    return JsonResponse({
        "commit_sha": commit_sha,
        "path": path.strip("/"),
        "sha": blob_sha,
        "content": body.decode(errors="replace"),
    })


def status_view(request: HttpRequest) -> JsonResponse:
    repo = open_repository()
    return JsonResponse(repo.status().to_dict())
