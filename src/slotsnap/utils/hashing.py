"""Content hashes for written reports."""

import hashlib
from pathlib import Path

__all__ = ["SHA256_PREFIX", "sha256_of_file"]

SHA256_PREFIX = "sha256:"


def sha256_of_file(path: Path) -> str:
    """Return the SHA-256 of a file as ``"sha256:<hex>"``.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    """
    with path.open("rb") as f:
        digest = hashlib.file_digest(f, "sha256")
    return SHA256_PREFIX + digest.hexdigest()
