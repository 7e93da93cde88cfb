"""Seed handling and the deterministic 32-bit draw stream.

A Seed is always 32 raw bytes. The stream is a thin wrapper around
``random.Random`` seeded with the seed's big-endian integer value, so the same
seed and the same call order reproduce the same draws on every run.
"""
from __future__ import annotations

import hashlib
import os
import random
from typing import Union

SEED_LENGTH = 32

DEBUG_SEED = bytes(
    [1, 2, 3, 4, 5, 6, 7, 8,
     1, 1, 1, 1, 1, 1, 1, 1,
     2, 2, 2, 2, 2, 2, 2, 2,
     1, 2, 3, 4, 5, 6, 7, 8]
)


def create_seed(debug: bool = False) -> bytes:
    """Return the fixed debug seed or 32 fresh random bytes."""
    if debug:
        return DEBUG_SEED
    return os.urandom(SEED_LENGTH)


def coerce_seed(value: Union[bytes, bytearray, int, str, None]) -> bytes:
    """Convert a user supplied seed into 32 raw bytes.

    Accepts raw bytes of the right length, a 64 character hex string, a
    non-negative int, or any other string (hashed with SHA-256). ``None`` or an
    empty string yields a fresh random seed. Raises ValueError otherwise.
    """
    if value is None:
        return create_seed(False)
    if isinstance(value, (bytes, bytearray)):
        if len(value) != SEED_LENGTH:
            raise ValueError(f"seed must be {SEED_LENGTH} bytes, got {len(value)}")
        return bytes(value)
    if isinstance(value, bool):
        raise ValueError("seed must not be a boolean")
    if isinstance(value, int):
        if value < 0:
            raise ValueError("seed must be non-negative")
        return (value % (1 << (8 * SEED_LENGTH))).to_bytes(SEED_LENGTH, "big")
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return create_seed(False)
        if len(s) == 2 * SEED_LENGTH:
            try:
                return bytes.fromhex(s)
            except ValueError:
                pass
        if s.isdigit():
            return coerce_seed(int(s))
        return hashlib.sha256(s.encode("utf-8")).digest()
    raise ValueError(f"unsupported seed type {type(value).__name__}")


def seed_to_hex(seed: bytes) -> str:
    return seed.hex()


class RandomStream:
    """Stateful stream of unsigned 32-bit draws derived from a Seed."""

    def __init__(self, seed: bytes):
        if len(seed) != SEED_LENGTH:
            raise ValueError(f"seed must be {SEED_LENGTH} bytes, got {len(seed)}")
        self.seed = bytes(seed)
        self._rng = random.Random(int.from_bytes(self.seed, "big"))
        self.draws = 0

    def draw(self) -> int:
        self.draws += 1
        return self._rng.getrandbits(32)

    def __repr__(self) -> str:
        return f"RandomStream(seed={self.seed.hex()[:12]}..., draws={self.draws})"


__all__ = [
    "DEBUG_SEED",
    "SEED_LENGTH",
    "RandomStream",
    "create_seed",
    "coerce_seed",
    "seed_to_hex",
]
