"""
Chain registry - static network metadata for supported Cosmos chains.

The table mirrors the relevant subset of the public cosmos/chain-registry
entries. It is read-only; ``REGISTRY_VERSION`` changes whenever an entry does.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import ChainNotFoundError


REGISTRY_VERSION = "2024.06"


@dataclass(frozen=True)
class ChainDescriptor:
    """
    Network parameters for one chain.

    Attributes:
        name: Registry key (e.g. "osmosis")
        chain_id: Network id reported by the node (e.g. "osmosis-1")
        pretty_name: Human readable name
        bech32_prefix: Account address prefix (e.g. "osmo")
        slip44: BIP44 coin type used for key derivation
        fee_denom: Default fee / staking denomination
        average_gas_price: Registry's average gas price for fee_denom
        rpc_endpoints: Candidate Tendermint RPC endpoints, preferred first
    """
    name: str
    chain_id: str
    pretty_name: str
    bech32_prefix: str
    slip44: int
    fee_denom: str
    average_gas_price: str
    rpc_endpoints: tuple[str, ...]

    @property
    def hd_path(self) -> str:
        return f"m/44'/{self.slip44}'/0'/0/0"

    @property
    def default_gas_price(self) -> str:
        return f"{self.average_gas_price}{self.fee_denom}"


_CHAINS: tuple[ChainDescriptor, ...] = (
    ChainDescriptor(
        name="osmosis",
        chain_id="osmosis-1",
        pretty_name="Osmosis",
        bech32_prefix="osmo",
        slip44=118,
        fee_denom="uosmo",
        average_gas_price="0.025",
        rpc_endpoints=(
            "https://rpc.osmosis.zone",
            "https://osmosis-rpc.polkachu.com",
        ),
    ),
    ChainDescriptor(
        name="osmosistestnet",
        chain_id="osmo-test-5",
        pretty_name="Osmosis Testnet",
        bech32_prefix="osmo",
        slip44=118,
        fee_denom="uosmo",
        average_gas_price="0.025",
        rpc_endpoints=(
            "https://rpc-test.osmosis.zone",
            "https://rpc.osmotest5.osmosis.zone",
        ),
    ),
    ChainDescriptor(
        name="cosmoshub",
        chain_id="cosmoshub-4",
        pretty_name="Cosmos Hub",
        bech32_prefix="cosmos",
        slip44=118,
        fee_denom="uatom",
        average_gas_price="0.025",
        rpc_endpoints=(
            "https://cosmos-rpc.polkachu.com",
            "https://rpc-cosmoshub.blockapsis.com",
        ),
    ),
    ChainDescriptor(
        name="juno",
        chain_id="juno-1",
        pretty_name="Juno",
        bech32_prefix="juno",
        slip44=118,
        fee_denom="ujuno",
        average_gas_price="0.075",
        rpc_endpoints=("https://juno-rpc.polkachu.com",),
    ),
    ChainDescriptor(
        name="terra2",
        chain_id="phoenix-1",
        pretty_name="Terra",
        bech32_prefix="terra",
        slip44=330,
        fee_denom="uluna",
        average_gas_price="0.015",
        rpc_endpoints=("https://terra-rpc.polkachu.com",),
    ),
)

_BY_NAME = {chain.name: chain for chain in _CHAINS}


def resolve_chain(name: str) -> ChainDescriptor:
    """
    Look up a chain by registry name.

    Raises:
        ChainNotFoundError: If no entry matches
    """
    try:
        return _BY_NAME[name]
    except KeyError:
        raise ChainNotFoundError(
            f"Chain {name!r} not found in registry {REGISTRY_VERSION}"
        ) from None


def list_chains() -> list[ChainDescriptor]:
    return list(_CHAINS)
