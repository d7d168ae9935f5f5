import os
import fnmatch

from loguru import logger


def load_ignores(path):
    try:
        with open(path, 'r', encoding='utf-8') as f:
            patterns = []
            for line in f:
                line = line.strip()
                if not line or line.startswith('#'):
                    continue
                patterns.append(line)
            return patterns
    except FileNotFoundError:
        return []


def is_ignored(path, ignores):
    norm = path.replace(os.sep, '/')
    for pattern in ignores:
        if pattern.endswith('/'):
            base = pattern.rstrip('/')
            if norm == base or norm.startswith(base + '/'):
                return True
            continue
        if fnmatch.fnmatch(norm, pattern):
            return True

    return False


class PathFilter:
    """Exclusion predicate for the working tree walk.

    Excludes the control directory, hidden entries (any path component
    starting with a dot) when ``hidden`` is set, and the given patterns.
    """

    def __init__(self, control_dir, patterns=(), hidden=True):
        self.control_dir = control_dir
        self.patterns = list(patterns)
        self.hidden = hidden

    def __call__(self, rel_path):
        norm = rel_path.replace(os.sep, '/')
        parts = norm.split('/')
        if parts[0] == self.control_dir:
            return True
        if self.hidden and any(part.startswith('.') for part in parts):
            return True
        return is_ignored(norm, self.patterns)


def iter_tracked_files(root='.', excluded=None):
    """Yield ``/``-separated paths of files under ``root``, sorted, skipping
    anything ``excluded(rel_path)`` accepts. Excluded directories are not
    descended into."""
    if excluded is None:
        excluded = lambda rel_path: False

    root = os.path.abspath(root)
    for dirpath, dirnames, filenames in os.walk(root):
        rel_dir = os.path.relpath(dirpath, root)
        if rel_dir == '.':
            rel_dir = ''
        rel_dir = rel_dir.replace(os.sep, '/')
        dirnames[:] = sorted(
            d for d in dirnames
            if not excluded(f"{rel_dir}/{d}" if rel_dir else d)
        )
        for filename in sorted(filenames):
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if excluded(rel_path):
                continue
            yield rel_path


def read_file(root, rel_path) -> bytes:
    with open(os.path.join(root, rel_path), 'rb') as f:
        return f.read()


def write_file(root, rel_path, data: bytes):
    path = os.path.join(root, rel_path)
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, 'wb') as f:
        f.write(data)


def delete_file(root, rel_path) -> bool:
    """Remove ``rel_path`` and any directories it leaves empty.

    Returns False when the file was already absent.
    """
    path = os.path.join(root, rel_path)
    try:
        os.remove(path)
    except FileNotFoundError:
        logger.debug(f"{rel_path} already absent")
        return False

    root = os.path.abspath(root)
    parent = os.path.dirname(os.path.abspath(path))
    while parent != root and parent.startswith(root + os.sep):
        try:
            os.rmdir(parent)
        except OSError:
            break
        parent = os.path.dirname(parent)
    return True
