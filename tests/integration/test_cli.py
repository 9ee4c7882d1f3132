"""
CLI integration tests using Click's test runner.

Network access is replaced by the in-process FakeNode, so these run
offline.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Iterator
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from cosmpy.protos.cosmos.bank.v1beta1.query_pb2 import (
    QueryAllBalancesResponse,
    QueryBalanceResponse,
)
from cosmpy.protos.cosmos.base.v1beta1.coin_pb2 import Coin as ProtoCoin
from cosmpy.protos.cosmwasm.wasm.v1.query_pb2 import QuerySmartContractStateResponse

from conftest import TEST_ENDPOINT, TEST_MNEMONIC, FakeNode
from osmoboot.cli import cli
from osmoboot.pneuma.queries import ALL_BALANCES_PATH, BALANCE_PATH, SMART_CONTRACT_STATE_PATH
from osmoboot.sigil.address import encode_address
from osmoboot.sigil.wallet import derive_for_prefix


OWN_ADDRESS = derive_for_prefix(TEST_MNEMONIC, "osmo").address


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def env_file(tmp_path: Path) -> str:
    return str(tmp_path / "missing.env")


@pytest.fixture()
def wallet_env() -> Iterator[None]:
    env = {k: v for k, v in os.environ.items() if not k.startswith("OSMOBOOT_")}
    env["MNEMONIC"] = TEST_MNEMONIC
    env["OSMOBOOT_RPC_ENDPOINT"] = TEST_ENDPOINT
    with patch.dict(os.environ, env, clear=True):
        yield


@pytest.fixture()
def registry_env() -> Iterator[None]:
    env = {k: v for k, v in os.environ.items() if not k.startswith("OSMOBOOT_")}
    env["MNEMONIC"] = TEST_MNEMONIC
    with patch.dict(os.environ, env, clear=True):
        yield


@pytest.fixture()
def fake_node(node: FakeNode) -> Iterator[FakeNode]:
    with patch("osmoboot.pneuma.session.TendermintRpc", node.rpc_factory()):
        yield node


class TestVersionAndInfo:

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.3.0" in result.output

    def test_info_never_prints_mnemonic(self, runner: CliRunner, wallet_env: None, env_file: str) -> None:
        result = runner.invoke(cli, ["info", "--env-file", env_file])
        assert result.exit_code == 0
        assert "Mnemonic:" in result.output
        assert "set" in result.output
        assert "abandon" not in result.output

    def test_info_shows_registry_defaults(self, runner: CliRunner, registry_env: None, env_file: str) -> None:
        result = runner.invoke(cli, ["info", "--env-file", env_file])
        assert result.exit_code == 0
        assert "0.025uosmo (chain mode: registry)" in result.output
        assert "https://rpc-test.osmosis.zone (chain mode: registry)" in result.output

    def test_chains(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["chains"])
        assert result.exit_code == 0
        assert "osmosis" in result.output
        assert "osmo-test-5" in result.output


class TestWhoami:

    def test_generic(self, runner: CliRunner, wallet_env: None, env_file: str) -> None:
        result = runner.invoke(cli, ["whoami", "--env-file", env_file])
        assert result.exit_code == 0
        assert f"Address: {OWN_ADDRESS}" in result.output

    def test_chain_mode(self, runner: CliRunner, wallet_env: None, env_file: str) -> None:
        result = runner.invoke(cli, ["whoami", "--mode", "chain", "--chain", "terra2", "--env-file", env_file])
        assert result.exit_code == 0
        assert "Address: terra1" in result.output
        assert "m/44'/330'/0'/0/0" in result.output

    def test_without_mnemonic(self, runner: CliRunner, env_file: str) -> None:
        env = {k: v for k, v in os.environ.items() if k != "MNEMONIC"}
        with patch.dict(os.environ, env, clear=True):
            result = runner.invoke(cli, ["whoami", "--env-file", env_file])
        assert result.exit_code == 3
        assert "MNEMONIC not set" in result.output

    def test_unknown_chain(self, runner: CliRunner, wallet_env: None, env_file: str) -> None:
        result = runner.invoke(cli, ["whoami", "--mode", "chain", "--chain", "atlantis", "--env-file", env_file])
        assert result.exit_code == 2
        assert "atlantis" in result.output

    @pytest.mark.parametrize("prefix", ["", "OSMO", "os mo"])
    def test_invalid_prefix(self, runner: CliRunner, wallet_env: None, env_file: str, prefix: str) -> None:
        result = runner.invoke(cli, ["whoami", "--prefix", prefix, "--env-file", env_file])
        assert result.exit_code == 8
        assert "prefix" in result.output
        assert "Address:" not in result.output


class TestBalances:

    def test_own_balances(self, runner: CliRunner, wallet_env: None, env_file: str, fake_node: FakeNode) -> None:
        fake_node.abci[ALL_BALANCES_PATH] = lambda data: QueryAllBalancesResponse(
            balances=[ProtoCoin(denom="uosmo", amount="1500")]
        ).SerializeToString()

        result = runner.invoke(cli, ["balances", "--env-file", env_file])
        assert result.exit_code == 0, result.output
        assert OWN_ADDRESS in result.output
        assert "1500" in result.output
        assert "uosmo" in result.output

    def test_json_output(self, runner: CliRunner, wallet_env: None, env_file: str, fake_node: FakeNode) -> None:
        fake_node.abci[ALL_BALANCES_PATH] = lambda data: QueryAllBalancesResponse(
            balances=[ProtoCoin(denom="uosmo", amount="1500")]
        ).SerializeToString()

        result = runner.invoke(cli, ["balances", OWN_ADDRESS, "--json", "--env-file", env_file])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == [{"denom": "uosmo", "amount": "1500"}]

    def test_empty(self, runner: CliRunner, wallet_env: None, env_file: str, fake_node: FakeNode) -> None:
        fake_node.abci[ALL_BALANCES_PATH] = lambda data: b""
        result = runner.invoke(cli, ["balances", "--env-file", env_file])
        assert result.exit_code == 0
        assert "(no balances)" in result.output

    def test_malformed_address(self, runner: CliRunner, wallet_env: None, env_file: str, fake_node: FakeNode) -> None:
        result = runner.invoke(cli, ["balances", "osmo1garbage", "--env-file", env_file])
        assert result.exit_code == 6
        assert "Malformed address" in result.output

    def test_bad_gas_price(self, runner: CliRunner, wallet_env: None, env_file: str, fake_node: FakeNode) -> None:
        result = runner.invoke(cli, ["balances", "--gas-price", "free", "--env-file", env_file])
        assert result.exit_code == 5
        assert fake_node.requests == []

    def test_explicit_endpoint_on_wrong_chain(
        self, runner: CliRunner, wallet_env: None, env_file: str, fake_node: FakeNode
    ) -> None:
        result = runner.invoke(cli, ["balances", "--mode", "chain", "--env-file", env_file])
        assert result.exit_code == 4
        assert "expected 'osmosis-1'" in result.output

    def test_default_chain_mode(self, runner: CliRunner, registry_env: None, env_file: str) -> None:
        node = FakeNode(network="osmosis-1")
        node.abci[ALL_BALANCES_PATH] = lambda data: QueryAllBalancesResponse(
            balances=[ProtoCoin(denom="uosmo", amount="1500")]
        ).SerializeToString()
        factory = node.rpc_factory()
        endpoints: list[str] = []

        def recording_factory(endpoint: str, **kwargs: Any) -> Any:
            endpoints.append(endpoint)
            return factory(endpoint, **kwargs)

        with patch("osmoboot.pneuma.session.TendermintRpc", recording_factory):
            result = runner.invoke(cli, ["balances", "--mode", "chain", "--env-file", env_file])
        assert result.exit_code == 0, result.output
        assert endpoints == ["https://rpc.osmosis.zone"]
        assert "1500" in result.output

    def test_single_denom(self, runner: CliRunner, wallet_env: None, env_file: str, fake_node: FakeNode) -> None:
        fake_node.abci[BALANCE_PATH] = lambda data: QueryBalanceResponse(
            balance=ProtoCoin(denom="uion", amount="3")
        ).SerializeToString()
        result = runner.invoke(cli, ["balance", OWN_ADDRESS, "--denom", "uion", "--env-file", env_file])
        assert result.exit_code == 0, result.output
        assert "3uion" in result.output


class TestQueryContract:

    def test_query(self, runner: CliRunner, wallet_env: None, env_file: str, fake_node: FakeNode) -> None:
        contract = encode_address("osmo", bytes(32))
        fake_node.abci[SMART_CONTRACT_STATE_PATH] = lambda data: QuerySmartContractStateResponse(
            data=b'{"count":7}'
        ).SerializeToString()
        result = runner.invoke(cli, ["query-contract", contract, '{"get_count":{}}', "--env-file", env_file])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {"count": 7}

    def test_invalid_json(self, runner: CliRunner, wallet_env: None, env_file: str) -> None:
        contract = encode_address("osmo", bytes(32))
        result = runner.invoke(cli, ["query-contract", contract, "{nope", "--env-file", env_file])
        assert result.exit_code == 1
        assert "Invalid query JSON" in result.output
