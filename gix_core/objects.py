import os
import re
import hashlib
import tempfile

from loguru import logger

from .outcome import ObjectNotFound

HASH_RE = re.compile(r'^[0-9a-f]{40}$')


def hash_bytes(data: bytes) -> str:
    return hashlib.sha1(data).hexdigest()


def write_atomic(path, payload: bytes):
    """Write via a temp file in the same directory and rename over ``path``."""
    fd, tmp_path = tempfile.mkstemp(dir=os.path.dirname(path) or ".", prefix=".tmp-")
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(payload)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


def is_object_hash(value) -> bool:
    return bool(value) and HASH_RE.match(value) is not None


class ObjectStore:
    """Content-addressed storage: one file per object under ``objects/``,
    named by the SHA-1 of its raw bytes.

    Blobs and serialized commits share this namespace and carry no type
    header, so identical bytes always land on the same key.
    """

    def __init__(self, objects_dir):
        self.objects_dir = objects_dir

    def path_for(self, obj_hash):
        return os.path.join(self.objects_dir, obj_hash)

    def exists(self, obj_hash) -> bool:
        return is_object_hash(obj_hash) and os.path.isfile(self.path_for(obj_hash))

    def put(self, payload: bytes) -> str:
        sha1 = hash_bytes(payload)
        path = self.path_for(sha1)
        if os.path.exists(path):
            return sha1

        os.makedirs(self.objects_dir, exist_ok=True)
        write_atomic(path, payload)
        logger.debug(f"Stored object {sha1} ({len(payload)} bytes)")
        return sha1

    def get(self, obj_hash) -> bytes:
        if not is_object_hash(obj_hash):
            raise ObjectNotFound(obj_hash)
        try:
            with open(self.path_for(obj_hash), 'rb') as f:
                return f.read()
        except FileNotFoundError:
            raise ObjectNotFound(obj_hash) from None
