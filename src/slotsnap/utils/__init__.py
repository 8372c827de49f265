"""Common utility functions for slotsnap."""

from slotsnap.utils.hashing import SHA256_PREFIX, sha256_of_file
from slotsnap.utils.timestamps import get_iso_timestamp

__all__ = [
    "SHA256_PREFIX",
    "get_iso_timestamp",
    "sha256_of_file",
]
