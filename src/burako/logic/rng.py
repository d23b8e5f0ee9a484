"""
Random number generation for deck shuffling.

1. Generate a seed (32 bytes / 256 bits) via the secrets module, or accept a
   caller-provided hex seed for reproducible games
2. Feed the seed into a stdlib random.Random stream owned by one engine
3. Apply a Fisher-Yates shuffle driven by randbelow-style bounded draws

A seeded stream replays the exact same decks and recycles.
"""

from __future__ import annotations

import random
import secrets
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import MutableSequence

SEED_BYTES = 32

T = TypeVar("T")


def validate_seed_hex(seed_hex: str) -> None:
    """Validate that a seed string is the correct hex format.

    Enforces exact length (64 hex chars = 32 bytes) and valid hex characters.
    Raises TypeError for non-string input, ValueError for invalid format.
    """
    if not isinstance(seed_hex, str):
        raise TypeError(f"Seed must be a string, got {type(seed_hex).__name__}")
    expected_length = SEED_BYTES * 2
    if len(seed_hex) != expected_length:
        raise ValueError(f"Seed must be exactly {expected_length} hex characters, got {len(seed_hex)}")
    try:
        bytes.fromhex(seed_hex)
    except ValueError:
        raise ValueError("Seed contains invalid hex characters") from None


def generate_seed() -> str:
    """Generate a random seed as a hex string (64 chars / 256 bits)."""
    return secrets.token_bytes(SEED_BYTES).hex()


def create_rng(seed_hex: str | None = None) -> random.Random:
    """
    Create the shuffle RNG for one engine.

    A None seed draws a fresh one, so unseeded engines still get a
    well-mixed stream without touching the global random state.
    """
    if seed_hex is None:
        seed_hex = generate_seed()
    validate_seed_hex(seed_hex)
    return random.Random(int(seed_hex, 16))  # noqa: S311


def shuffle_in_place(items: MutableSequence[T], rng: random.Random) -> None:
    """
    Perform an in-place Fisher-Yates (Knuth) shuffle.

    For i from n-1 down to 1: swap items[i] with items[j], j uniform in [0, i].
    randrange uses rejection sampling internally, so the permutation is unbiased.
    """
    for i in range(len(items) - 1, 0, -1):
        j = rng.randrange(i + 1)
        items[i], items[j] = items[j], items[i]
