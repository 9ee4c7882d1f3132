"""
Signing identities derived from a BIP39 secret recovery phrase.

Two derivation strategies:
- derive_for_chain: coin type and prefix come from a registry ChainDescriptor
  (``m/44'/{slip44}'/0'/0/0``).
- derive_for_prefix: generic Cosmos derivation (``m/44'/118'/0'/0/0``) for
  any bech32 prefix, no registry involved.

BIP39 seed generation and BIP32 derivation are done by eth-account's HD
wallet support; the resulting secp256k1 key is wrapped by eth-keys. The
phrase and the private key are never logged, repr'd or echoed in errors.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from eth_account import Account
from eth_keys import keys
from eth_keys.constants import SECPK1_N
from eth_utils import ValidationError

from ..errors import InvalidSecretPhraseError
from ..utils import sha256
from .address import pubkey_to_address, validate_prefix

if TYPE_CHECKING:
    from ..pneuma.registry import ChainDescriptor


logger = logging.getLogger(__name__)

Account.enable_unaudited_hdwallet_features()

COSMOS_COIN_TYPE = 118
VALID_WORD_COUNTS = (12, 15, 18, 21, 24)


def hd_path(coin_type: int = COSMOS_COIN_TYPE, account: int = 0, index: int = 0) -> str:
    """BIP44 path for a Cosmos-style account."""
    return f"m/44'/{coin_type}'/{account}'/0/{index}"


@dataclass(frozen=True)
class SigningIdentity:
    """
    A derived wallet: public address plus the capability to sign.

    Attributes:
        address: Bech32 account address
        prefix: Bech32 prefix the address was encoded with
        hd_path: BIP44 derivation path used
        public_key: 33-byte compressed secp256k1 public key
    """
    address: str
    prefix: str
    hd_path: str
    public_key: bytes = field(repr=False)
    _private_key: keys.PrivateKey = field(repr=False, compare=False)

    def sign(self, message: bytes) -> bytes:
        """
        Sign arbitrary bytes (e.g. a serialized SignDoc).

        Returns:
            64-byte compact signature ``r || s`` over sha256(message),
            with s normalized to the lower half of the curve order.
        """
        signature = self._private_key.sign_msg_hash(sha256(message))
        s = signature.s
        if s > SECPK1_N // 2:
            s = SECPK1_N - s
        return signature.r.to_bytes(32, "big") + s.to_bytes(32, "big")

    def verify(self, message: bytes, signature: bytes) -> bool:
        """Check a compact signature produced by :meth:`sign`."""
        if len(signature) != 64:
            return False
        r = int.from_bytes(signature[:32], "big")
        s = int.from_bytes(signature[32:], "big")
        try:
            sig = keys.Signature(vrs=(0, r, s))
        except (ValidationError, ValueError):
            return False
        public_key = keys.PublicKey.from_compressed_bytes(self.public_key)
        return public_key.verify_msg_hash(sha256(message), sig)


def _normalize_phrase(mnemonic: str) -> str:
    if not mnemonic or not mnemonic.strip():
        raise InvalidSecretPhraseError("Secret phrase is empty")
    words = mnemonic.split()
    if len(words) not in VALID_WORD_COUNTS:
        raise InvalidSecretPhraseError(
            f"Secret phrase has {len(words)} words, expected one of {VALID_WORD_COUNTS}"
        )
    return " ".join(words)


def derive_identity(mnemonic: str, prefix: str, path: str) -> SigningIdentity:
    """
    Derive a SigningIdentity for an explicit prefix and HD path.

    Raises:
        InvalidSecretPhraseError: If the phrase is empty, has the wrong word
            count, contains unknown words or fails the BIP39 checksum
    """
    validate_prefix(prefix)
    phrase = _normalize_phrase(mnemonic)
    try:
        account = Account.from_mnemonic(phrase, account_path=path)
    except (ValidationError, ValueError):
        # The upstream message quotes the phrase, so it is not chained.
        raise InvalidSecretPhraseError(
            "Secret phrase is not a valid BIP39 mnemonic (unknown word or bad checksum)"
        ) from None

    private_key = keys.PrivateKey(account.key)
    public_key = private_key.public_key.to_compressed_bytes()
    address = pubkey_to_address(public_key, prefix)
    logger.debug("Derived identity %s at %s", address, path)

    return SigningIdentity(
        address=address,
        prefix=prefix,
        hd_path=path,
        public_key=public_key,
        _private_key=private_key,
    )


def derive_for_chain(mnemonic: str, chain: "ChainDescriptor") -> SigningIdentity:
    """Derive using the chain's registered coin type and bech32 prefix."""
    return derive_identity(mnemonic, chain.bech32_prefix, chain.hd_path)


def derive_for_prefix(mnemonic: str, prefix: str) -> SigningIdentity:
    """Derive using the generic Cosmos HD path, independent of any registry entry."""
    return derive_identity(mnemonic, prefix, hd_path(COSMOS_COIN_TYPE))
