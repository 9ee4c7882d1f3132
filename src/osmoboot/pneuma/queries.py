"""
Read operations against a SigningSession.

Each function is one logical query: it validates its inputs, issues the ABCI
request(s) and decodes the protobuf response. Any failure surfaces as
QueryError; nothing is retried or cached.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx
from cosmpy.protos.cosmos.bank.v1beta1.query_pb2 import (
    QueryAllBalancesRequest,
    QueryAllBalancesResponse,
    QueryBalanceRequest,
    QueryBalanceResponse,
)
from cosmpy.protos.cosmos.base.query.v1beta1.pagination_pb2 import PageRequest
from cosmpy.protos.cosmwasm.wasm.v1.query_pb2 import (
    QuerySmartContractStateRequest,
    QuerySmartContractStateResponse,
)
from google.protobuf.message import DecodeError

from ..errors import QueryError
from ..sigil.address import decode_address
from .fees import Coin
from .rpc import RpcError
from .session import SigningSession


logger = logging.getLogger(__name__)

ALL_BALANCES_PATH = "/cosmos.bank.v1beta1.Query/AllBalances"
BALANCE_PATH = "/cosmos.bank.v1beta1.Query/Balance"
SMART_CONTRACT_STATE_PATH = "/cosmwasm.wasm.v1.Query/SmartContractState"


def _check_address(session: SigningSession, address: str, what: str = "address") -> None:
    try:
        decode_address(address, session.prefix)
    except ValueError as exc:
        raise QueryError(f"Malformed {what}: {exc}") from exc


def _abci(session: SigningSession, path: str, request: Any) -> bytes:
    try:
        return session.rpc.abci_query(path, request.SerializeToString())
    except RpcError as exc:
        raise QueryError(f"Query {path} failed: {exc}") from exc
    except httpx.HTTPError as exc:
        raise QueryError(f"Query {path} to {session.endpoint} interrupted: {exc}") from exc


def _coin(proto_coin: Any) -> Coin:
    try:
        return Coin(denom=proto_coin.denom, amount=int(proto_coin.amount))
    except ValueError:
        raise QueryError(f"Node returned a non-integer amount for {proto_coin.denom!r}") from None


def get_all_balances(session: SigningSession, address: str) -> list[Coin]:
    """
    Get every balance held by ``address``.

    Follows pagination until the node reports no further page. An account
    the chain has never seen has no balances and yields an empty list.

    Raises:
        QueryError: If the address is malformed or the query fails
    """
    _check_address(session, address)

    balances: list[Coin] = []
    next_key = b""
    seen_keys: set[bytes] = set()
    while True:
        request = QueryAllBalancesRequest(address=address)
        if next_key:
            request.pagination.CopyFrom(PageRequest(key=next_key))
        raw = _abci(session, ALL_BALANCES_PATH, request)
        try:
            response = QueryAllBalancesResponse.FromString(raw)
        except DecodeError as exc:
            raise QueryError(f"Undecodable balances response for {address}") from exc

        balances.extend(_coin(c) for c in response.balances)
        next_key = response.pagination.next_key
        if not next_key:
            break
        if next_key in seen_keys:
            raise QueryError(f"Node repeated pagination key while listing balances of {address}")
        seen_keys.add(next_key)

    logger.debug("Fetched %d balances for %s", len(balances), address)
    return balances


def get_balance(session: SigningSession, address: str, denom: str) -> Coin:
    """
    Get the balance of a single denom; zero when the account holds none.

    Raises:
        QueryError: If the address is malformed or the query fails
    """
    _check_address(session, address)
    raw = _abci(session, BALANCE_PATH, QueryBalanceRequest(address=address, denom=denom))
    try:
        response = QueryBalanceResponse.FromString(raw)
    except DecodeError as exc:
        raise QueryError(f"Undecodable balance response for {address}") from exc

    if not response.HasField("balance"):
        return Coin(denom=denom, amount=0)
    return _coin(response.balance)


def query_contract_smart(session: SigningSession, contract: str, query: Any) -> Any:
    """
    Query a CosmWasm contract's state.

    Args:
        session: Open session
        contract: Bech32 contract address
        query: JSON-serializable query message, e.g. {"config": {}}

    Returns:
        Decoded JSON response from the contract

    Raises:
        QueryError: If the address is malformed, the contract rejects the
            query or the response is not JSON
    """
    _check_address(session, contract, "contract address")
    try:
        query_data = json.dumps(query, separators=(",", ":")).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise QueryError(f"Query message is not JSON-serializable: {exc}") from exc

    request = QuerySmartContractStateRequest(address=contract, query_data=query_data)
    raw = _abci(session, SMART_CONTRACT_STATE_PATH, request)
    try:
        response = QuerySmartContractStateResponse.FromString(raw)
        return json.loads(response.data)
    except (DecodeError, ValueError) as exc:
        raise QueryError(f"Contract {contract} returned an undecodable response") from exc
