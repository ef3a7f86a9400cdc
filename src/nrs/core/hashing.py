"""
Deterministic hashing for register entries.

A register entry is identified by the hash of its payload together with the
entries it supersedes, so the same write on the same history always yields
the same entry hash.

Examples:
    >>> compute_hash("a", "b") != compute_hash("b", "a")
    True
    >>> len(compute_entry_hash(b"{}", set()))
    64
"""

import hashlib
from typing import Any, Iterable


def compute_hash(*values: Any, length: int = 64) -> str:
    """
    Compute deterministic hash from values.

    Joins the string form of every value with '|' and takes the SHA-256 hex
    digest, truncated to ``length`` characters.
    """
    content = "|".join(str(v) for v in values)
    return hashlib.sha256(content.encode()).hexdigest()[:length]


def compute_entry_hash(entry: bytes, parents: Iterable[str]) -> str:
    """Hash of a register entry: sorted parent hashes, then the payload."""
    digest = hashlib.sha256()
    for parent in sorted(parents):
        digest.update(parent.encode())
        digest.update(b"|")
    digest.update(entry)
    return digest.hexdigest()


__all__ = ["compute_hash", "compute_entry_hash"]
