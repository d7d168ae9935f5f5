"""
Tests for working tree reconciliation on checkout.
"""

import os

from gix_core import Reason

from conftest import read, write


def exists(repo, rel_path):
    return os.path.exists(os.path.join(repo.root, rel_path))


class TestCheckout:
    """Tests for checkout(branch)."""

    def test_round_trip_restores_content(self, repo, commit_files) -> None:
        commit_files({"f.txt": "original content\n"})
        write(repo.root, "f.txt", "scribbled over")

        outcome = repo.checkout("main")

        assert outcome.succeeded
        assert read(repo.root, "f.txt") == "original content\n"

    def test_round_trip_binary_bytes(self, repo, commit_files) -> None:
        payload = bytes(range(256))
        commit_files({"blob.bin": payload})
        os.remove(os.path.join(repo.root, "blob.bin"))

        repo.checkout("main")

        with open(os.path.join(repo.root, "blob.bin"), "rb") as f:
            assert f.read() == payload

    def test_deletes_paths_missing_from_target(self, repo, commit_files) -> None:
        commit_files({"a": "A"})
        repo.create_branch("y")
        commit_files({"a": "A", "b": "B"})
        repo.create_branch("x")

        outcome = repo.checkout("y")

        assert outcome.succeeded
        assert not exists(repo, "b")
        assert read(repo.root, "a") == "A"
        assert repo.refs.current_branch() == "y"

    def test_file_becomes_directory_and_back(self, repo, commit_files) -> None:
        commit_files({"a/b.txt": "nested"})
        repo.create_branch("flat")
        repo.checkout("flat")
        os.remove(os.path.join(repo.root, "a", "b.txt"))
        os.rmdir(os.path.join(repo.root, "a"))
        commit_files({"a": "plain file"})

        assert repo.checkout("main").succeeded
        assert read(repo.root, "a/b.txt") == "nested"

        assert repo.checkout("flat").succeeded
        assert read(repo.root, "a") == "plain file"

    def test_clears_index_and_points_head(self, repo, commit_files) -> None:
        commit_files({"a.txt": "a"})
        repo.create_branch("dev")
        write(repo.root, "b.txt", "b")
        repo.add("b.txt")

        repo.checkout("dev")

        assert repo.index.snapshot() == ()
        assert repo.refs.read_head() == "ref: refs/heads/dev"

    def test_leaves_untracked_files(self, repo, commit_files) -> None:
        commit_files({"a.txt": "a"})
        write(repo.root, "notes.txt", "mine")
        repo.checkout("main")
        assert read(repo.root, "notes.txt") == "mine"

    def test_unknown_branch(self, repo) -> None:
        outcome = repo.checkout("nope")
        assert outcome.failed
        assert outcome.reason is Reason.BRANCH_NOT_FOUND

    def test_branch_without_commits(self, repo) -> None:
        outcome = repo.checkout("main")
        assert outcome.reason is Reason.BRANCH_HAS_NO_COMMITS

    def test_missing_head_commit_is_tolerated(self, repo, commit_files) -> None:
        commit_files({"a.txt": "a"})
        repo.create_branch("dev")
        with open(os.path.join(repo.config.repo_dir, "HEAD"), "w") as f:
            f.write("c" * 40)

        outcome = repo.checkout("dev")

        assert outcome.succeeded
        assert read(repo.root, "a.txt") == "a"

    def test_already_deleted_file_is_not_an_error(self, repo, commit_files) -> None:
        commit_files({"a": "A"})
        repo.create_branch("y")
        commit_files({"a": "A", "b": "B"})
        os.remove(os.path.join(repo.root, "b"))

        outcome = repo.checkout("y")

        assert outcome.succeeded
        assert outcome.advisories == ()

    def test_undeletable_path_becomes_advisory(self, repo, commit_files) -> None:
        commit_files({"a": "A"})
        repo.create_branch("y")
        commit_files({"a": "A", "b": "B"})
        os.remove(os.path.join(repo.root, "b"))
        write(repo.root, "b/keep", "not tracked")

        outcome = repo.checkout("y")

        assert outcome.succeeded
        assert len(outcome.advisories) == 1
        assert "Could not delete b" in outcome.advisories[0]
        assert read(repo.root, "a") == "A"
        assert read(repo.root, "b/keep") == "not tracked"
        assert repo.refs.current_branch() == "y"

    def test_branch_commit_missing_from_store(self, repo, commit_files) -> None:
        commit_files({"a.txt": "a"})
        with open(os.path.join(repo.config.repo_dir, "refs", "heads", "ghost"), "w") as f:
            f.write("d" * 40)

        outcome = repo.checkout("ghost")

        assert outcome.failed
        assert outcome.reason is Reason.NOT_FOUND
        assert repo.refs.current_branch() == "main"
        assert read(repo.root, "a.txt") == "a"
