from __future__ import annotations

import base64
import hashlib

from Crypto.Hash import RIPEMD160


def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def ripemd160(data: bytes) -> bytes:
    # hashlib's ripemd160 depends on the OpenSSL build; pycryptodome always has it.
    return RIPEMD160.new(data=data).digest()


def hash160(data: bytes) -> bytes:
    return ripemd160(sha256(data))


def b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def b64decode(value: str | None) -> bytes:
    if not value:
        return b""
    return base64.b64decode(value, validate=True)
