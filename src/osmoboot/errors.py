"""
Error taxonomy for osmoboot.

Every failure along the resolve -> derive -> connect -> query pipeline is
raised as one of these and surfaced unchanged to the caller. The CLI maps
``exit_code`` to the process exit status.

Messages must never contain the secret phrase or key material.
"""

from __future__ import annotations


class OsmobootError(RuntimeError):
    exit_code: int = 1


class ChainNotFoundError(OsmobootError):
    exit_code = 2


class InvalidSecretPhraseError(OsmobootError):
    exit_code = 3


class NodeConnectionError(OsmobootError):
    exit_code = 4


class GasPriceError(OsmobootError):
    exit_code = 5


class QueryError(OsmobootError):
    exit_code = 6


class BroadcastError(OsmobootError):
    exit_code = 7


class AddressPrefixError(OsmobootError):
    exit_code = 8


__all__ = [
    "AddressPrefixError",
    "BroadcastError",
    "ChainNotFoundError",
    "GasPriceError",
    "InvalidSecretPhraseError",
    "NodeConnectionError",
    "OsmobootError",
    "QueryError",
]
