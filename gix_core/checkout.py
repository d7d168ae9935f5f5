from loguru import logger

from .outcome import Outcome, Reason
from .worktree import delete_file, write_file


def checkout(repo, branch) -> Outcome:
    """Make the working tree match the head commit of ``branch``.

    Paths the current HEAD tracks but the target does not are deleted
    first; then every target file is written, changed or not. HEAD ends up
    on ``branch`` and the index is cleared.
    """
    target = repo.refs.branch_commit(branch)
    if target is None:
        return Outcome.err(Reason.BRANCH_NOT_FOUND, f"Branch '{branch}' not found.")
    if not target:
        return Outcome.err(Reason.BRANCH_HAS_NO_COMMITS, f"Branch '{branch}' has no commits yet.")

    commit = repo.graph.load(target)
    if commit is None:
        return Outcome.err(Reason.NOT_FOUND, f"Commit {target} of branch '{branch}' is missing.")

    new_files = commit.files_dict()
    current_files = repo.graph.files_of(repo.refs.resolve_head(), role="HEAD")

    # Fetch everything before touching the tree.
    contents = {path: repo.store.get(blob) for path, blob in new_files.items()}

    advisories = []
    for path in current_files:
        if path in new_files:
            continue
        try:
            delete_file(repo.root, path)
        except OSError as e:
            message = f"Could not delete {path}: {e}"
            logger.error(message)
            advisories.append(message)

    for path, data in contents.items():
        write_file(repo.root, path, data)

    repo.refs.set_head_symbolic(branch)
    repo.index.clear()
    logger.info(f"Checked out branch {branch} at {target[:7]}")
    return Outcome.ok(target, message=f"Switched to branch '{branch}'", advisories=advisories)
