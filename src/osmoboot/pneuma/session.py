"""
Signing sessions - an identity, a priced gas policy and a live node connection.

Sessions are built by one of two strategies, picked explicitly by the caller:

- ChainRegistryStrategy: bound to a registry ChainDescriptor. Derives keys
  with the chain's coin type, defaults endpoint and gas price from the
  registry, and refuses nodes serving a different chain id.
- PrefixStrategy: only a bech32 prefix; generic Cosmos derivation, no
  registry lookup.

A session owns its HTTP connection and must be closed; use it as a context
manager so that happens on every exit path.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from ..errors import AddressPrefixError, BroadcastError, GasPriceError, NodeConnectionError
from ..sigil.address import validate_prefix
from ..sigil.wallet import SigningIdentity, derive_for_chain, derive_for_prefix
from .fees import Coin, GasPrice, parse_gas_price
from .registry import ChainDescriptor
from .rpc import DEFAULT_TIMEOUT, RpcError, TendermintRpc


logger = logging.getLogger(__name__)


class SigningSession:
    """
    An authenticated client session against one node.

    Attributes:
        endpoint: RPC endpoint URL
        identity: Signing identity used for this session
        gas_price: Gas policy, or None if the session was opened unpriced
        chain_id: Network id reported by the node during the handshake
        latest_height: Block height reported during the handshake
        chain: Registry descriptor, when opened in chain-aware mode
    """

    def __init__(
        self,
        rpc: TendermintRpc,
        identity: SigningIdentity,
        gas_price: Optional[GasPrice],
        chain_id: str,
        latest_height: int,
        chain: Optional[ChainDescriptor] = None,
    ) -> None:
        self.rpc = rpc
        self.identity = identity
        self.gas_price = gas_price
        self.chain_id = chain_id
        self.latest_height = latest_height
        self.chain = chain
        self.closed = False

    def __repr__(self) -> str:
        return (
            f"SigningSession(endpoint={self.endpoint!r}, chain_id={self.chain_id!r}, "
            f"address={self.address!r}, gas_price={str(self.gas_price) if self.gas_price else None!r})"
        )

    @property
    def endpoint(self) -> str:
        return self.rpc.endpoint

    @property
    def address(self) -> str:
        return self.identity.address

    @property
    def prefix(self) -> str:
        return self.identity.prefix

    def sign(self, message: bytes) -> bytes:
        return self.identity.sign(message)

    def fee(self, gas_limit: int) -> Coin:
        """
        Fee for a transaction using ``gas_limit`` units of gas.

        Raises:
            GasPriceError: If the session was opened without a gas price
        """
        if self.gas_price is None:
            raise GasPriceError("Session has no gas price configured")
        return self.gas_price.fee(gas_limit)

    def broadcast(self, tx_bytes: bytes) -> str:
        """
        Broadcast signed transaction bytes (sync mode).

        Returns:
            Transaction hash (uppercase hex)

        Raises:
            BroadcastError: If the node rejects the transaction in CheckTx
                or cannot be reached
        """
        try:
            result = self.rpc.broadcast_tx_sync(tx_bytes)
        except (httpx.HTTPError, RpcError) as exc:
            raise BroadcastError(f"Broadcast to {self.endpoint} failed: {exc}") from exc

        try:
            code = int(result.get("code") or 0)
        except (TypeError, ValueError):
            raise BroadcastError(f"Malformed broadcast reply from {self.endpoint}") from None
        if code != 0:
            raise BroadcastError(
                f"Transaction rejected (code {code}, codespace "
                f"{result.get('codespace', '')!r}): {result.get('log', '')}"
            )
        return result.get("hash", "")

    def close(self) -> None:
        if not self.closed:
            self.rpc.close()
            self.closed = True
            logger.debug("Closed session to %s", self.endpoint)

    def __enter__(self) -> "SigningSession":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def _handshake(rpc: TendermintRpc) -> tuple[str, int]:
    """Query node status; returns (network id, latest block height)."""
    status = rpc.status()
    try:
        network = status["node_info"]["network"]
        height = int(status["sync_info"]["latest_block_height"])
    except (KeyError, TypeError, ValueError) as exc:
        raise RpcError(f"Unexpected status response from {rpc.endpoint}") from exc
    return network, height


class SessionStrategy(ABC):
    """How to turn a secret phrase and an endpoint into a SigningSession."""

    name: str = ""

    @abstractmethod
    def derive_identity(self, mnemonic: str) -> SigningIdentity:
        ...

    @abstractmethod
    def connect(
        self,
        identity: SigningIdentity,
        endpoint: Optional[str] = None,
        gas_price: "GasPrice | str | None" = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> SigningSession:
        ...

    def open(
        self,
        mnemonic: str,
        endpoint: Optional[str] = None,
        gas_price: "GasPrice | str | None" = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> SigningSession:
        """Derive the identity, then connect."""
        identity = self.derive_identity(mnemonic)
        return self.connect(
            identity,
            endpoint=endpoint,
            gas_price=gas_price,
            timeout=timeout,
            transport=transport,
        )

    def _open_connection(
        self,
        identity: SigningIdentity,
        endpoint: str,
        gas_price: Optional[GasPrice],
        timeout: float,
        transport: Optional[httpx.BaseTransport],
        expected_chain_id: Optional[str] = None,
        chain: Optional[ChainDescriptor] = None,
    ) -> SigningSession:
        try:
            rpc = TendermintRpc(endpoint, timeout=timeout, transport=transport)
        except ValueError as exc:
            raise NodeConnectionError(str(exc)) from exc

        try:
            chain_id, height = _handshake(rpc)
            if expected_chain_id is not None and chain_id != expected_chain_id:
                raise NodeConnectionError(
                    f"Node at {endpoint} serves chain {chain_id!r}, expected {expected_chain_id!r}"
                )
        except (httpx.HTTPError, RpcError) as exc:
            rpc.close()
            raise NodeConnectionError(f"Cannot connect to {endpoint}: {exc}") from exc
        except NodeConnectionError:
            rpc.close()
            raise

        logger.debug("Connected to %s (%s) at height %d via %s", endpoint, chain_id, height, self.name)
        return SigningSession(
            rpc=rpc,
            identity=identity,
            gas_price=gas_price,
            chain_id=chain_id,
            latest_height=height,
            chain=chain,
        )


class ChainRegistryStrategy(SessionStrategy):
    """Chain-aware construction bound to a registry descriptor."""

    name = "chain"

    def __init__(self, chain: ChainDescriptor) -> None:
        self.chain = chain

    def derive_identity(self, mnemonic: str) -> SigningIdentity:
        return derive_for_chain(mnemonic, self.chain)

    def connect(
        self,
        identity: SigningIdentity,
        endpoint: Optional[str] = None,
        gas_price: "GasPrice | str | None" = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> SigningSession:
        if identity.prefix != self.chain.bech32_prefix:
            raise AddressPrefixError(
                f"Identity prefix {identity.prefix!r} does not match chain "
                f"{self.chain.name!r} ({self.chain.bech32_prefix!r})"
            )
        price = parse_gas_price(gas_price) or GasPrice.from_string(self.chain.default_gas_price)
        if endpoint is None:
            if not self.chain.rpc_endpoints:
                raise NodeConnectionError(f"Chain {self.chain.name!r} has no registered RPC endpoints")
            endpoint = self.chain.rpc_endpoints[0]

        return self._open_connection(
            identity,
            endpoint,
            price,
            timeout,
            transport,
            expected_chain_id=self.chain.chain_id,
            chain=self.chain,
        )


class PrefixStrategy(SessionStrategy):
    """Generic construction from a bech32 prefix alone."""

    name = "generic"

    def __init__(self, prefix: str) -> None:
        self.prefix = validate_prefix(prefix)

    def derive_identity(self, mnemonic: str) -> SigningIdentity:
        return derive_for_prefix(mnemonic, self.prefix)

    def connect(
        self,
        identity: SigningIdentity,
        endpoint: Optional[str] = None,
        gas_price: "GasPrice | str | None" = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> SigningSession:
        if identity.prefix != self.prefix:
            raise AddressPrefixError(
                f"Identity prefix {identity.prefix!r} does not match {self.prefix!r}"
            )
        if not endpoint:
            raise NodeConnectionError("An RPC endpoint is required in generic mode")
        price = parse_gas_price(gas_price)
        return self._open_connection(identity, endpoint, price, timeout, transport)
