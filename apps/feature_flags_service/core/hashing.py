"""Stable (flag key, user id) hashing and bucketing."""

import hashlib

BUCKET_COUNT = 100
SEPARATOR = ":"


def stable_hash(key: str, user_id: str) -> int:
    """Return a 64-bit unsigned hash of ``key`` and ``user_id``.

    SHA-256 over ``"<key>:<user_id>"``; the first eight digest bytes are read
    big-endian. Identical across processes and interpreter runs.
    """
    digest = hashlib.sha256(f"{key}{SEPARATOR}{user_id}".encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big")


def compute_bucket(key: str, user_id: str) -> int:
    """Get bucket (0-99) shared by rollout and variant decisions."""
    return stable_hash(key, user_id) % BUCKET_COUNT
