"""Tests for the static chain registry."""

from __future__ import annotations

import pytest

from osmoboot.errors import ChainNotFoundError
from osmoboot.pneuma.registry import ChainDescriptor, list_chains, resolve_chain


class TestResolveChain:

    @pytest.mark.parametrize(
        "name,prefix,chain_id",
        [
            ("osmosis", "osmo", "osmosis-1"),
            ("osmosistestnet", "osmo", "osmo-test-5"),
            ("cosmoshub", "cosmos", "cosmoshub-4"),
            ("juno", "juno", "juno-1"),
            ("terra2", "terra", "phoenix-1"),
        ],
    )
    def test_known_chains(self, name: str, prefix: str, chain_id: str) -> None:
        chain = resolve_chain(name)
        assert chain.name == name
        assert chain.bech32_prefix == prefix
        assert chain.chain_id == chain_id

    def test_osmosis_defaults(self) -> None:
        chain = resolve_chain("osmosis")
        assert chain.fee_denom == "uosmo"
        assert chain.default_gas_price == "0.025uosmo"
        assert chain.hd_path == "m/44'/118'/0'/0/0"
        assert chain.rpc_endpoints

    def test_slip44_drives_hd_path(self) -> None:
        assert resolve_chain("terra2").hd_path == "m/44'/330'/0'/0/0"

    @pytest.mark.parametrize("name", ["", "Osmosis", "osmosis-1", "ethereum"])
    def test_unknown_chain(self, name: str) -> None:
        with pytest.raises(ChainNotFoundError, match="not found"):
            resolve_chain(name)

    def test_lookup_is_deterministic(self) -> None:
        assert resolve_chain("osmosis") is resolve_chain("osmosis")


class TestListChains:

    def test_names_are_unique(self) -> None:
        names = [chain.name for chain in list_chains()]
        assert len(names) == len(set(names))

    def test_descriptors_are_immutable(self) -> None:
        chain = list_chains()[0]
        assert isinstance(chain, ChainDescriptor)
        with pytest.raises(AttributeError):
            chain.bech32_prefix = "evil"  # type: ignore[misc]

    def test_returned_list_does_not_mutate_registry(self) -> None:
        chains = list_chains()
        chains.clear()
        assert list_chains()
