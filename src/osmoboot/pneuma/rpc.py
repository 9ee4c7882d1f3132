"""
Tendermint JSON-RPC client.

Thin wrapper over one persistent httpx.Client. Supports the node ``status``
handshake, ABCI queries (protobuf request/response bytes) and raw
transaction broadcast. Transport errors (httpx.HTTPError) propagate; callers
translate them into the osmoboot error taxonomy.
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Optional

import httpx

from ..utils import b64decode, b64encode


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class RpcError(RuntimeError):
    """The node answered, but with a JSON-RPC error or a failing ABCI code."""

    def __init__(self, message: str, code: Optional[int] = None, codespace: str = "") -> None:
        super().__init__(message)
        self.code = code
        self.codespace = codespace


class TendermintRpc:
    """
    JSON-RPC over HTTP(S) to a Tendermint / CometBFT node.

    Args:
        endpoint: Node URL, e.g. "https://rpc.osmosis.zone"
        timeout: Per-request timeout in seconds
        transport: Optional httpx transport (tests use httpx.MockTransport)
    """

    def __init__(
        self,
        endpoint: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        if not endpoint.startswith(("http://", "https://")):
            raise ValueError(f"RPC endpoint must be an http(s) URL: {endpoint!r}")
        self.endpoint = endpoint.rstrip("/") + "/"
        self._client = httpx.Client(timeout=timeout, transport=transport)
        self._ids = itertools.count(1)

    def call(self, method: str, params: Optional[dict[str, Any]] = None) -> Any:
        """
        Make a JSON-RPC call.

        Args:
            method: RPC method name (e.g., "abci_query")
            params: RPC parameters

        Returns:
            Result field from the RPC response

        Raises:
            httpx.HTTPError: On transport failure or a non-2xx status
            RpcError: If the node returns a JSON-RPC error
        """
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params or {},
        }
        response = self._client.post(self.endpoint, json=payload)
        response.raise_for_status()
        try:
            data = response.json()
        except ValueError as exc:
            raise RpcError(f"Malformed JSON-RPC response from {self.endpoint}") from exc

        if not isinstance(data, dict):
            raise RpcError(f"JSON-RPC response from {self.endpoint} is not an object")

        error = data.get("error")
        if error:
            if isinstance(error, dict):
                message = error.get("data") or error.get("message") or str(error)
                raise RpcError(f"RPC error: {message}", code=error.get("code"))
            raise RpcError(f"RPC error: {error}")

        if "result" not in data:
            raise RpcError(f"JSON-RPC response from {self.endpoint} has no result")
        return data["result"]

    def status(self) -> dict[str, Any]:
        return self.call("status")

    def abci_query(self, path: str, data: bytes, height: Optional[int] = None) -> bytes:
        """
        Run an ABCI query and return the raw response value.

        Raises:
            RpcError: If the query handler returns a non-zero code or the
                reply is malformed
        """
        params: dict[str, Any] = {"path": path, "data": data.hex(), "prove": False}
        if height is not None:
            params["height"] = str(height)

        logger.debug("abci_query %s", path)
        result = self.call("abci_query", params)
        response = result.get("response") if isinstance(result, dict) else None
        if not isinstance(response, dict):
            raise RpcError(f"Malformed abci_query reply for {path}")
        try:
            code = int(response.get("code") or 0)
        except (TypeError, ValueError):
            raise RpcError(f"Malformed abci_query code for {path}: {response.get('code')!r}") from None
        if code != 0:
            raise RpcError(
                response.get("log") or f"ABCI query {path} failed with code {code}",
                code=code,
                codespace=response.get("codespace", ""),
            )
        try:
            return b64decode(response.get("value"))
        except (TypeError, ValueError) as exc:
            raise RpcError(f"Malformed abci_query value for {path}") from exc

    def broadcast_tx_sync(self, tx_bytes: bytes) -> dict[str, Any]:
        """Submit signed transaction bytes and wait for CheckTx."""
        result = self.call("broadcast_tx_sync", {"tx": b64encode(tx_bytes)})
        if not isinstance(result, dict):
            raise RpcError("Malformed broadcast_tx_sync reply")
        return result

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "TendermintRpc":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
