"""
Bech32 account addresses.

Cosmos account addresses are ``bech32(prefix, ripemd160(sha256(pubkey)))``
over the 33-byte compressed secp256k1 public key.
"""

from __future__ import annotations

from typing import Optional

import bech32

from ..errors import AddressPrefixError
from ..utils import hash160


ADDRESS_LENGTH = 20
# Contract addresses (CosmWasm) are 32 bytes.
CONTRACT_ADDRESS_LENGTH = 32
MAX_PREFIX_LENGTH = 83


def validate_prefix(prefix: str) -> str:
    """
    Check a bech32 human-readable part: lowercase, printable ASCII
    (33-126) and 1-83 characters long.

    Raises:
        AddressPrefixError: If the prefix cannot start a valid address
    """
    if not prefix:
        raise AddressPrefixError("Address prefix must not be empty")
    if len(prefix) > MAX_PREFIX_LENGTH:
        raise AddressPrefixError(f"Address prefix longer than {MAX_PREFIX_LENGTH} characters")
    if any(not 33 <= ord(ch) <= 126 for ch in prefix):
        raise AddressPrefixError(f"Address prefix {prefix!r} contains invalid characters")
    if prefix != prefix.lower():
        raise AddressPrefixError(f"Address prefix {prefix!r} must be lowercase")
    return prefix


def encode_address(prefix: str, raw: bytes) -> str:
    """Encode raw address bytes with the given human-readable prefix."""
    words = bech32.convertbits(raw, 8, 5)
    if words is None:
        raise ValueError("Cannot convert address bytes to 5-bit words")
    return bech32.bech32_encode(prefix, words)


def pubkey_to_address(public_key: bytes, prefix: str) -> str:
    """
    Derive the account address for a compressed secp256k1 public key.

    Args:
        public_key: 33-byte compressed public key
        prefix: Bech32 human-readable part (e.g. "osmo")

    Returns:
        Bech32 address string
    """
    if len(public_key) != 33:
        raise ValueError(f"Expected 33-byte compressed public key, got {len(public_key)}")
    return encode_address(prefix, hash160(public_key))


def decode_address(address: str, prefix: Optional[str] = None) -> bytes:
    """
    Decode and validate a bech32 address.

    Args:
        address: Bech32 address string
        prefix: Required human-readable part, if any

    Returns:
        Raw address bytes (20 bytes for accounts, 32 for contracts)

    Raises:
        ValueError: If the checksum, prefix or length is invalid
    """
    hrp, words = bech32.bech32_decode(address)
    if hrp is None or words is None:
        raise ValueError(f"Invalid bech32 address: {address!r}")
    if prefix is not None and hrp != prefix:
        raise ValueError(f"Address {address!r} has prefix {hrp!r}, expected {prefix!r}")
    raw = bech32.convertbits(words, 5, 8, False)
    if raw is None or len(raw) not in (ADDRESS_LENGTH, CONTRACT_ADDRESS_LENGTH):
        raise ValueError(f"Invalid address length: {address!r}")
    return bytes(raw)


def is_valid_address(address: str, prefix: Optional[str] = None) -> bool:
    try:
        decode_address(address, prefix)
    except ValueError:
        return False
    return True
