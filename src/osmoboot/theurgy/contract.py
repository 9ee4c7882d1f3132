"""
Theurgy Contract - Query CosmWasm contract state.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import click

from ..bootstrap import run_query
from ..pneuma.queries import query_contract_smart
from ._common import build_config, exit_on_error, session_options


@click.command("query-contract")
@click.argument("contract")
@click.argument("query_json")
@session_options
@exit_on_error
def query_contract(
    contract: str,
    query_json: str,
    mode: str,
    chain_name: Optional[str],
    chain_prefix: Optional[str],
    rpc_endpoint: Optional[str],
    gas_price: Optional[str],
    timeout: Optional[float],
    env_file: Optional[Path],
) -> None:
    """
    Run a smart query against CONTRACT.

    QUERY_JSON is the query message, e.g. '{"config": {}}'.
    """
    try:
        query = json.loads(query_json)
    except json.JSONDecodeError as exc:
        click.secho(f"ERROR: Invalid query JSON: {exc}", fg="red", err=True)
        sys.exit(1)

    config = build_config(env_file, chain_name, chain_prefix, rpc_endpoint, gas_price, timeout)
    result = run_query(config, lambda session: query_contract_smart(session, contract, query), mode=mode)
    click.echo(json.dumps(result, indent=2))
