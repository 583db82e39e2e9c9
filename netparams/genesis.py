#!/usr/bin/env python3
"""
Genesis Module - Genesis block identity and header layout
========================================================

Every network records the identity of its genesis block: the block hash
(in the usual reversed display order) plus the header fields other
parameters depend on. The full genesis block is built by the wire layer and
attached to a parameter set later; at that point its serialized header is
hashed with the externally supplied header hash function and compared with
the recorded hash.

Header layout (180 bytes, little-endian):
┌──────────────┬─────┐  ┌──────────────┬─────┐
│ version      │  4  │  │ bits         │  4  │
│ prev_block   │ 32  │  │ sbits        │  8  │
│ merkle_root  │ 32  │  │ height       │  4  │
│ stake_root   │ 32  │  │ size         │  4  │
│ vote_bits    │  2  │  │ timestamp    │  4  │
│ final_state  │  6  │  │ nonce        │  4  │
│ voters       │  2  │  │ extra_data   │ 32  │
│ fresh_stake  │  1  │  │ stake_version│  4  │
│ revocations  │  1  │  └──────────────┴─────┘
│ pool_size    │  4  │
└──────────────┴─────┘
"""

import struct
from dataclasses import dataclass
from typing import Callable, Tuple

from .exceptions import GenesisMismatchError

HEADER_FORMAT = "<i32s32s32sH6sHBBIIqIIII32sI"
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)

ZERO_HASH = bytes(32)

# Merkle root of the genesis coinbase shared by mainnet, simnet and regnet,
# stored in internal byte order (displayed as 66aa7491...df01c10d)
SHARED_GENESIS_MERKLE_ROOT = bytes.fromhex(
    "66aa7491b9adce110585ccab7e3fb5fe280de174530cca10eba2c6c3df01c10d")[::-1]

# Header hash function: serialized header -> 32 byte digest in internal byte order
HashFunc = Callable[[bytes], bytes]


@dataclass(frozen=True)
class GenesisInfo:
    """Recorded genesis identity of a network"""
    hash: str
    timestamp: int
    bits: int
    sbits: int = 0


@dataclass(frozen=True)
class BlockHeader:
    version: int
    prev_block: bytes = ZERO_HASH
    merkle_root: bytes = ZERO_HASH
    stake_root: bytes = ZERO_HASH
    vote_bits: int = 0
    final_state: bytes = bytes(6)
    voters: int = 0
    fresh_stake: int = 0
    revocations: int = 0
    pool_size: int = 0
    bits: int = 0
    sbits: int = 0
    height: int = 0
    size: int = 0
    timestamp: int = 0
    nonce: int = 0
    extra_data: bytes = bytes(32)
    stake_version: int = 0

    def serialize(self) -> bytes:
        return struct.pack(
            HEADER_FORMAT,
            self.version,
            self.prev_block,
            self.merkle_root,
            self.stake_root,
            self.vote_bits,
            self.final_state,
            self.voters,
            self.fresh_stake,
            self.revocations,
            self.pool_size,
            self.bits,
            self.sbits,
            self.height,
            self.size,
            self.timestamp,
            self.nonce,
            self.extra_data,
            self.stake_version,
        )

    @classmethod
    def deserialize(cls, data: bytes) -> "BlockHeader":
        if len(data) != HEADER_SIZE:
            raise ValueError(f"Block header must be {HEADER_SIZE} bytes, got {len(data)}")
        return cls(*struct.unpack(HEADER_FORMAT, data))


@dataclass(frozen=True)
class GenesisBlock:
    """Genesis header plus its transactions, serialized by the wire layer"""
    header: BlockHeader
    transactions: Tuple[bytes, ...] = ()
    stake_transactions: Tuple[bytes, ...] = ()


def header_hash_hex(header: BlockHeader, hash_func: HashFunc) -> str:
    """Hash a header and return it in display (byte-reversed) hex order"""
    return hash_func(header.serialize())[::-1].hex()


def verify_genesis_hash(block: GenesisBlock, expected_hash: str, hash_func: HashFunc) -> None:
    """
    Check that a genesis block hashes to the recorded genesis hash

    Raises:
    - GenesisMismatchError: the computed hash differs from expected_hash
    """
    actual = header_hash_hex(block.header, hash_func)
    if actual != expected_hash.lower():
        raise GenesisMismatchError(
            f"Genesis header hashes to {actual}, expected {expected_hash}"
        )


def verify_genesis_block(block: GenesisBlock, info: GenesisInfo, hash_func: HashFunc) -> None:
    """Check a genesis block against the full recorded genesis identity"""
    header = block.header
    if header.height != 0:
        raise GenesisMismatchError(f"Genesis header has height {header.height}")
    if header.prev_block != ZERO_HASH:
        raise GenesisMismatchError("Genesis header must not reference a previous block")
    if header.timestamp != info.timestamp:
        raise GenesisMismatchError(
            f"Genesis timestamp {header.timestamp} differs from recorded {info.timestamp}"
        )
    if header.bits != info.bits:
        raise GenesisMismatchError(
            f"Genesis bits {header.bits:#010x} differ from recorded {info.bits:#010x}"
        )
    if header.sbits != info.sbits:
        raise GenesisMismatchError(
            f"Genesis stake difficulty {header.sbits} differs from recorded {info.sbits}"
        )
    verify_genesis_hash(block, info.hash, hash_func)
