#!/usr/bin/env python3
"""
Checkpoints Module - Hard-coded trusted block hashes
===================================================

A checkpoint pins the hash of the block at a given height. Validators use
checkpoints only as a fast-trust hint; the hashes are audited externally and
are never re-derived here.
"""

import string
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .exceptions import ConfigurationError

HASH_HEX_LENGTH = 64


@dataclass(frozen=True)
class Checkpoint:
    height: int
    hash: str


def validate_checkpoints(checkpoints: Iterable[Checkpoint]) -> None:
    """Raise ConfigurationError unless heights strictly increase and hashes are well formed"""
    previous: Optional[Checkpoint] = None
    for checkpoint in checkpoints:
        if checkpoint.height < 0:
            raise ConfigurationError(f"Checkpoint height {checkpoint.height} is negative")
        if len(checkpoint.hash) != HASH_HEX_LENGTH or not all(
                c in string.hexdigits for c in checkpoint.hash):
            raise ConfigurationError(
                f"Checkpoint at height {checkpoint.height} has a malformed hash"
            )
        if previous is not None and checkpoint.height <= previous.height:
            raise ConfigurationError(
                f"Checkpoint heights must strictly increase: "
                f"{previous.height} is followed by {checkpoint.height}"
            )
        previous = checkpoint


def checkpoint_at(checkpoints: Tuple[Checkpoint, ...], height: int) -> Optional[str]:
    # Tables are short, a linear scan is enough
    for checkpoint in checkpoints:
        if checkpoint.height == height:
            return checkpoint.hash
        if checkpoint.height > height:
            break
    return None
