"""
End-to-end tests for the py-gix command line.
"""

import os
import sys

import pytest

import py_gix

from conftest import write


def gix(root, *argv):
    return py_gix.main(["-C", str(root), *argv])


@pytest.fixture
def root(tmp_path):
    assert gix(tmp_path, "init") == 0
    return tmp_path


class TestCommands:
    """Tests for individual commands and their exit codes."""

    def test_init_twice(self, tmp_path, capsys) -> None:
        assert gix(tmp_path, "init") == 0
        assert gix(tmp_path, "init") == 0
        assert "already initialized" in capsys.readouterr().out

    def test_command_outside_repository(self, tmp_path, capsys) -> None:
        assert gix(tmp_path, "status") == 1
        assert "not a gix repository" in capsys.readouterr().out

    def test_add_commit_log(self, root, capsys) -> None:
        write(root, "a.txt", "one\n")
        assert gix(root, "add", "a.txt") == 0
        assert gix(root, "commit", "first") == 0
        write(root, "a.txt", "two\n")
        assert gix(root, "add", "a.txt") == 0
        assert gix(root, "commit", "-m", "second") == 0
        capsys.readouterr()

        assert gix(root, "log") == 0
        out = capsys.readouterr().out

        assert out.count("Commit : ") == 2
        assert out.index("Message: second") < out.index("Message: first")

    def test_no_op_commits_exit_zero(self, root, capsys) -> None:
        assert gix(root, "commit", "empty") == 0
        assert "No changes to commit." in capsys.readouterr().out

    def test_show(self, root, capsys) -> None:
        write(root, "a.txt", "one\n")
        gix(root, "add", "a.txt")
        gix(root, "commit", "first")
        write(root, "a.txt", "one\ntwo\n")
        gix(root, "add", "a.txt")
        gix(root, "commit", "second")
        head = (root / ".gix" / "refs" / "heads" / "main").read_text()
        capsys.readouterr()

        assert gix(root, "show", head) == 0
        out = capsys.readouterr().out

        assert "File: a.txt" in out
        assert "++two" in out

    def test_show_unknown(self, root, capsys) -> None:
        assert gix(root, "show", "0" * 40) == 1
        assert "Commit not found" in capsys.readouterr().out

    def test_branch_and_checkout(self, root, capsys) -> None:
        write(root, "a.txt", "a")
        gix(root, "add", "a.txt")
        gix(root, "commit", "first")

        assert gix(root, "branch", "dev") == 0
        assert gix(root, "checkout", "dev") == 0
        capsys.readouterr()
        assert gix(root, "branch") == 0
        out = capsys.readouterr().out

        assert "* dev" in out
        assert "  main" in out

    def test_checkout_unknown_branch(self, root) -> None:
        assert gix(root, "checkout", "nope") == 1

    def test_status(self, root, capsys) -> None:
        write(root, "c.txt", "c")
        assert gix(root, "status") == 0
        out = capsys.readouterr().out
        assert "On branch main" in out
        assert "untracked:" in out
        assert "c.txt" in out

    def test_status_clean(self, root, capsys) -> None:
        assert gix(root, "status") == 0
        assert "working tree clean" in capsys.readouterr().out

    def test_commit_requires_message(self, root) -> None:
        with pytest.raises(SystemExit):
            gix(root, "commit")

    @pytest.mark.skipif(sys.platform != "linux", reason="needs byte file names")
    def test_non_utf8_file_name(self, root, capsys) -> None:
        name = os.fsdecode(b"caf\xe9.txt")
        write(root, name, "x")

        assert gix(root, "status") == 0
        assert gix(root, "add", name) == 0
        assert gix(root, "commit", "latin-1 name") == 0
        out = capsys.readouterr().out

        assert "caf�.txt" in out
        assert "Committed: " in out

    def test_corrupt_index(self, root, capsys) -> None:
        (root / ".gix" / "index").write_text('[{"path": ')

        assert gix(root, "status") == 1
        assert "error: index file" in capsys.readouterr().out
