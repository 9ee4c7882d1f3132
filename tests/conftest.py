"""Shared fixtures: a well-known test phrase and an in-process fake node."""

from __future__ import annotations

import base64
import json
from typing import Any, Callable, Optional

import httpx
import pytest

from osmoboot.pneuma.rpc import TendermintRpc


# BIP39 test vector; never holds funds.
TEST_MNEMONIC = (
    "abandon abandon abandon abandon abandon abandon "
    "abandon abandon abandon abandon abandon about"
)
TEST_ENDPOINT = "https://rpc.test.invalid"


class FakeNode:
    """
    Minimal Tendermint JSON-RPC node for httpx.MockTransport.

    ``abci`` maps an ABCI query path to a handler receiving the request
    bytes and returning either response bytes, an ``(code, log)`` tuple, or a
    dict sent verbatim as the ABCI response.
    """

    def __init__(self, network: str = "osmo-test-5", height: int = 1234) -> None:
        self.network = network
        self.height = height
        self.abci: dict[str, Callable[[bytes], Any]] = {}
        self.broadcast_result: dict[str, Any] = {"code": 0, "hash": "ABCDEF", "log": ""}
        self.requests: list[dict[str, Any]] = []
        self.fail_with: Optional[Exception] = None

    def handle(self, request: httpx.Request) -> httpx.Response:
        if self.fail_with is not None:
            raise self.fail_with
        payload = json.loads(request.content)
        self.requests.append(payload)
        method = payload["method"]
        params = payload.get("params", {})

        if method == "status":
            result: Any = {
                "node_info": {"network": self.network},
                "sync_info": {"latest_block_height": str(self.height)},
            }
        elif method == "abci_query":
            handler = self.abci.get(params["path"])
            if handler is None:
                response = {"code": 6, "log": f"unknown query path {params['path']}"}
            else:
                outcome = handler(bytes.fromhex(params["data"]))
                if isinstance(outcome, dict):
                    response = outcome
                elif isinstance(outcome, tuple):
                    response = {"code": outcome[0], "log": outcome[1], "codespace": "sdk"}
                else:
                    response = {"code": 0, "value": base64.b64encode(outcome).decode()}
            result = {"response": response}
        elif method == "broadcast_tx_sync":
            result = self.broadcast_result
        else:
            return httpx.Response(
                200,
                json={"jsonrpc": "2.0", "id": payload["id"],
                      "error": {"code": -32601, "message": "Method not found"}},
            )

        return httpx.Response(200, json={"jsonrpc": "2.0", "id": payload["id"], "result": result})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def rpc_factory(self) -> Callable[..., TendermintRpc]:
        """Drop-in for TendermintRpc that routes through this node."""
        transport = self.transport

        def factory(endpoint: str, timeout: float = 30.0, **_: Any) -> TendermintRpc:
            return TendermintRpc(endpoint, timeout=timeout, transport=transport)

        return factory


@pytest.fixture()
def node() -> FakeNode:
    return FakeNode()


@pytest.fixture()
def mnemonic() -> str:
    return TEST_MNEMONIC
