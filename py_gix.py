import os
import sys
import argparse

from loguru import logger
from rich.console import Console
from rich.text import Text

from gix_core import GixError, Label, Outcome, Repository, RepoConfig
from gix_core.diff import ADDED, REMOVED
from gix_core.log import configure_logging

console = Console(markup=False, highlight=False, soft_wrap=True)


def printable(text):
    # File names that are not valid UTF-8 carry surrogate escapes.
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def report(outcome: Outcome) -> int:
    for advisory in outcome.advisories:
        console.print(printable(advisory), style="yellow")
    if outcome.failed:
        console.print(printable(outcome.message), style="red")
        return 1
    if outcome.message:
        console.print(printable(outcome.message), style="dim" if outcome.is_noop else None)
    return 0


def init(root):
    return report(Repository.init(root))


def add(repo, paths):
    code = 0
    for path in paths:
        code = max(code, report(repo.add(path)))
    return code


def unstage(repo, path):
    return report(repo.unstage(path))


def commit(repo, message):
    return report(repo.commit(message))


def log(repo):
    commits = repo.log()
    if not commits:
        console.print("No commits yet.")
        return 0

    console.print("\nCommit History:\n")
    for commit_hash, entry in commits:
        console.print("=" * 50)
        console.print(f"Commit : {commit_hash}")
        console.print(f"Date   : {entry.timestamp}")
        console.print(f"Message: {printable(entry.message)}")
        console.print("=" * 50 + "\n")
    return 0


def _prefixed(text, prefix):
    lines = text.splitlines(keepends=True)
    return "".join(prefix + line for line in lines)


def show(repo, commit_hash):
    outcome = repo.show(commit_hash)
    if not outcome.succeeded:
        return report(outcome)

    _, diffs = outcome.value
    for file_diff in diffs:
        suffix = " (deleted)" if file_diff.status == REMOVED else ""
        console.print(f"\nFile: {printable(file_diff.path)}{suffix}", style="blue")
        if file_diff.root:
            console.print(Text(file_diff.parts[0].text, style="green"), end="")
            console.print("\n(First commit, nothing to diff)", style="bright_black")
            continue
        for part in file_diff.parts:
            if part.kind == ADDED:
                console.print(Text(_prefixed(part.text, "++"), style="green"), end="")
            elif part.kind == REMOVED:
                console.print(Text(_prefixed(part.text, "--"), style="red"), end="")
            else:
                console.print(Text(part.text, style="bright_black"), end="")
    return 0


def branch(repo, name=None):
    if name:
        return report(repo.create_branch(name))
    for branch_name, current in repo.branches():
        marker = "*" if current else " "
        console.print(f"{marker} {branch_name}", style="green" if current else None)
    return 0


def checkout(repo, name):
    return report(repo.checkout(name))


def status(repo):
    result = repo.status()
    if result.branch:
        console.print(f"On branch {result.branch}")
    elif result.head:
        console.print(f"HEAD detached at {result.head[:7]}")

    if result.is_clean:
        console.print("nothing to commit, working tree clean")
        return 0

    styles = {
        Label.UNTRACKED: "red",
        Label.MODIFIED_NOT_STAGED: "red",
        Label.DELETED_NOT_STAGED: "red",
    }
    for label in Label:
        paths = result.entries.get(label)
        if not paths:
            continue
        console.print(f"\n{label.value}:")
        for path in paths:
            console.print(f"    {printable(path)}", style=styles.get(label, "green"))
    return 0


def serve(root, addrport):
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "django_core.settings")
    os.environ["GIX_REPO"] = root
    from django.core.management import execute_from_command_line

    execute_from_command_line(["py-gix", "runserver", addrport, "--noreload"])
    return 0


def build_parser():
    parser = argparse.ArgumentParser(prog="py-gix", description="A mini git-like snapshot tool")
    parser.add_argument('-C', dest='root', default='.', help='Working tree root (default: current directory)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log progress to stderr')
    sub = parser.add_subparsers(dest='command', required=True)

    sub.add_parser('init', help='Initialize a new repository')
    p = sub.add_parser('add', help='Stage files or directories')
    p.add_argument('paths', nargs='+')
    p = sub.add_parser('unstage', help='Remove a path from the index')
    p.add_argument('path')
    p = sub.add_parser('commit', help='Commit the staged snapshot')
    p.add_argument('message', nargs='?')
    p.add_argument('-m', '--message', dest='message_opt')
    sub.add_parser('log', help='Show commit history')
    p = sub.add_parser('show', help='Show the diff of a commit')
    p.add_argument('hash')
    p = sub.add_parser('branch', help='Create a branch, or list branches')
    p.add_argument('name', nargs='?')
    p = sub.add_parser('checkout', help='Switch the working tree to a branch')
    p.add_argument('branch')
    sub.add_parser('status', help='Show working tree status')
    p = sub.add_parser('serve', help='Browse history over HTTP')
    p.add_argument('addrport', nargs='?', default='127.0.0.1:8000')
    return parser


def run(args):
    root = os.path.abspath(args.root)
    if args.command == 'init':
        return init(root)
    if args.command == 'serve':
        Repository.open(root)
        return serve(root, args.addrport)

    repo = Repository.open(root, config=RepoConfig.from_env(root))
    with repo.lock():
        if args.command == 'add':
            return add(repo, args.paths)
        elif args.command == 'unstage':
            return unstage(repo, args.path)
        elif args.command == 'commit':
            return commit(repo, args.message)
        elif args.command == 'log':
            return log(repo)
        elif args.command == 'show':
            return show(repo, args.hash)
        elif args.command == 'branch':
            return branch(repo, args.name)
        elif args.command == 'checkout':
            return checkout(repo, args.branch)
        elif args.command == 'status':
            return status(repo)
    return 1


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == 'commit':
        args.message = args.message_opt or args.message
        if not args.message:
            parser.error("the commit command requires a message")

    configure_logging("INFO" if args.verbose else None)
    try:
        return run(args)
    except GixError as e:
        console.print(f"error: {printable(str(e))}", style="red")
        return 1
    except OSError as e:
        logger.exception("I/O failure")
        console.print(f"error: {printable(str(e))}", style="red")
        return 1


if __name__ == '__main__':
    sys.exit(main())
