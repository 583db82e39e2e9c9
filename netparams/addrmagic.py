#!/usr/bin/env python3
"""
Address Magic Module - Address and key encoding prefixes
=======================================================

Every network prefixes its encoded addresses and keys with fixed "magic"
bytes so that an address for one network can never be mistaken for an
address on another. The prefixes are chosen so that the Base58 form of each
kind starts with a recognisable pair of characters, for example on mainnet:

- PubKeyAddrID      0x1386      Dk...
- PubKeyHashAddrID  0x073f      Ds...
- PKHEdwardsAddrID  0x071f      De...
- PKHSchnorrAddrID  0x0701      DS...
- ScriptHashAddrID  0x071a      Dc...
- PrivateKeyID      0x22de      Pm...
- HDPrivateKeyID    0x02fda4e8  dprv...
- HDPublicKeyID     0x02fda926  dpub...

This module only supplies the tables and the reverse lookup. Checksums,
hashing and key derivation belong to the address codec that consumes them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

import base58

from .exceptions import ConfigurationError

ADDRESS_ID_LENGTH = 2
HD_KEY_ID_LENGTH = 4


class AddressKind(Enum):
    PUBKEY = "pubkey"
    PUBKEY_HASH = "pubkeyhash"
    PKH_EDWARDS = "pkhedwards"
    PKH_SCHNORR = "pkhschnorr"
    SCRIPT_HASH = "scripthash"
    PRIVATE_KEY = "privatekey"
    HD_PRIVATE = "hdprivate"
    HD_PUBLIC = "hdpublic"

    @property
    def is_hd(self) -> bool:
        return self in (AddressKind.HD_PRIVATE, AddressKind.HD_PUBLIC)


_FIELD_FOR_KIND = {
    AddressKind.PUBKEY: "pubkey_addr_id",
    AddressKind.PUBKEY_HASH: "pubkey_hash_addr_id",
    AddressKind.PKH_EDWARDS: "pkh_edwards_addr_id",
    AddressKind.PKH_SCHNORR: "pkh_schnorr_addr_id",
    AddressKind.SCRIPT_HASH: "script_hash_addr_id",
    AddressKind.PRIVATE_KEY: "private_key_id",
    AddressKind.HD_PRIVATE: "hd_private_key_id",
    AddressKind.HD_PUBLIC: "hd_public_key_id",
}


@dataclass(frozen=True)
class AddressMagics:
    """
    Magic prefix table of one network

    Address and private key IDs are 2 bytes wide, hierarchical
    deterministic extended key IDs are 4 bytes wide. All IDs of a
    network must differ from each other.
    """
    pubkey_addr_id: bytes
    pubkey_hash_addr_id: bytes
    pkh_edwards_addr_id: bytes
    pkh_schnorr_addr_id: bytes
    script_hash_addr_id: bytes
    private_key_id: bytes
    hd_private_key_id: bytes
    hd_public_key_id: bytes

    def __post_init__(self):
        seen: Dict[bytes, AddressKind] = {}
        for kind, field_name in _FIELD_FOR_KIND.items():
            magic = getattr(self, field_name)
            width = HD_KEY_ID_LENGTH if kind.is_hd else ADDRESS_ID_LENGTH
            if len(magic) != width:
                raise ConfigurationError(
                    f"{field_name} must be {width} bytes, got {len(magic)}"
                )
            if magic in seen:
                raise ConfigurationError(
                    f"{field_name} reuses the magic of {seen[magic].value}"
                )
            seen[magic] = kind

    def magic_for(self, kind: AddressKind) -> bytes:
        return getattr(self, _FIELD_FOR_KIND[kind])

    def kind_for_magic(self, magic: bytes) -> Optional[AddressKind]:
        for kind, field_name in _FIELD_FOR_KIND.items():
            if getattr(self, field_name) == magic:
                return kind
        return None

    def as_dict(self) -> Dict[str, str]:
        """Kind name to hex magic, used for JSON output"""
        return {kind.value: self.magic_for(kind).hex() for kind in AddressKind}


def kind_for_encoded(magics: AddressMagics, encoded: str) -> Optional[AddressKind]:
    """
    Identify which kind of address or key an encoded string is

    Base58-decodes the string and matches its leading bytes against the
    network's 4-byte HD key IDs first, then the 2-byte address IDs.
    The checksum is not verified.

    Returns:
    - The matching AddressKind, or None for foreign or malformed input
    """
    try:
        raw = base58.b58decode(encoded)
    except ValueError:
        return None

    kind = magics.kind_for_magic(raw[:HD_KEY_ID_LENGTH])
    if kind is not None and kind.is_hd:
        return kind
    kind = magics.kind_for_magic(raw[:ADDRESS_ID_LENGTH])
    if kind is not None and not kind.is_hd:
        return kind
    return None
