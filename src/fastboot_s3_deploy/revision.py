"""
Revision key generation.

Stands in for a pipeline's revision-data step when the CLI is run
without ``--revision``: the key is a content hash of the build output,
so an unchanged build always produces the same archive name.
"""

import hashlib
from pathlib import Path

DEFAULT_KEY_LENGTH = 32


def generate_revision_key(dist_dir: Path, length: int = DEFAULT_KEY_LENGTH, chunk_size: int = 8192) -> str:
    """
    Compute a SHA256-based revision key for a directory.

    Relative paths and file contents are hashed in sorted path order.

    Args:
        dist_dir: Build output directory
        length: Number of hex characters to keep
        chunk_size: Read size for file contents

    Returns:
        Hex revision key

    Raises:
        FileNotFoundError: dist_dir does not exist
    """
    if not dist_dir.is_dir():
        raise FileNotFoundError(f"Build directory not found: {dist_dir}")

    sha256 = hashlib.sha256()
    for path in sorted(p for p in dist_dir.rglob("*") if p.is_file()):
        sha256.update(path.relative_to(dist_dir).as_posix().encode("utf-8"))
        sha256.update(b"\0")
        with open(path, "rb") as f:
            while chunk := f.read(chunk_size):
                sha256.update(chunk)
    return sha256.hexdigest()[:length]
