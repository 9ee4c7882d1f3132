"""
Runtime configuration.

Built once at the composition root and passed explicitly to each stage.
Values come from ``~/.osmoboot/.env`` (or a given env file) and the process
environment; the secret phrase is only ever read from ``MNEMONIC``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .errors import InvalidSecretPhraseError
from .pneuma.rpc import DEFAULT_TIMEOUT


OSMOBOOT_DIR = Path.home() / ".osmoboot"
OSMOBOOT_ENV = OSMOBOOT_DIR / ".env"

DEFAULT_CHAIN_NAME = "osmosis"
DEFAULT_CHAIN_PREFIX = "osmo"
DEFAULT_GAS_PRICE = "0.025uosmo"
DEFAULT_RPC_ENDPOINT = "https://rpc-test.osmosis.zone"


@dataclass(frozen=True)
class Config:
    chain_name: str = DEFAULT_CHAIN_NAME
    chain_prefix: str = DEFAULT_CHAIN_PREFIX
    # None lets chain mode take the registry values; generic mode uses the
    # DEFAULT_* constants instead.
    default_gas_price: Optional[str] = None
    rpc_endpoint: Optional[str] = None
    mnemonic: Optional[str] = field(default=None, repr=False)
    timeout: float = DEFAULT_TIMEOUT

    def require_mnemonic(self) -> str:
        if not self.mnemonic:
            raise InvalidSecretPhraseError(
                f"MNEMONIC not set. Export it or add it to {OSMOBOOT_ENV}"
            )
        return self.mnemonic

    def endpoint_for(self, mode: str) -> Optional[str]:
        if self.rpc_endpoint:
            return self.rpc_endpoint
        return None if mode == "chain" else DEFAULT_RPC_ENDPOINT

    def gas_price_for(self, mode: str) -> Optional[str]:
        if self.default_gas_price:
            return self.default_gas_price
        return None if mode == "chain" else DEFAULT_GAS_PRICE


def load_config(env_path: Optional[Path] = None) -> Config:
    """
    Load configuration from a .env file and the environment.

    Args:
        env_path: Path to .env file (default: ~/.osmoboot/.env)

    Returns:
        Config with environment values applied over the defaults
    """
    env_path = env_path or OSMOBOOT_ENV
    if env_path.exists():
        load_dotenv(env_path, override=False)

    timeout_text = os.environ.get("OSMOBOOT_TIMEOUT")
    try:
        timeout = float(timeout_text) if timeout_text else DEFAULT_TIMEOUT
    except ValueError:
        raise ValueError(f"OSMOBOOT_TIMEOUT must be a number, got {timeout_text!r}") from None

    return Config(
        chain_name=os.environ.get("OSMOBOOT_CHAIN_NAME", DEFAULT_CHAIN_NAME),
        chain_prefix=os.environ.get("OSMOBOOT_CHAIN_PREFIX", DEFAULT_CHAIN_PREFIX),
        default_gas_price=os.environ.get("OSMOBOOT_GAS_PRICE") or None,
        rpc_endpoint=os.environ.get("OSMOBOOT_RPC_ENDPOINT") or None,
        mnemonic=os.environ.get("MNEMONIC") or None,
        timeout=timeout,
    )
