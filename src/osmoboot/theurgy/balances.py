"""
Theurgy Balances - Query bank balances for an address.

Runs the full bootstrap pipeline: resolve the chain (chain mode), derive the
wallet, open a priced session, issue one balance query and print it.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import click

from ..bootstrap import run_query
from ..pneuma.queries import get_all_balances, get_balance
from ._common import build_config, exit_on_error, session_options


@click.command()
@click.argument("address", required=False)
@click.option("--json", "as_json", is_flag=True, help="Print balances as JSON")
@session_options
@exit_on_error
def balances(
    address: Optional[str],
    as_json: bool,
    mode: str,
    chain_name: Optional[str],
    chain_prefix: Optional[str],
    rpc_endpoint: Optional[str],
    gas_price: Optional[str],
    timeout: Optional[float],
    env_file: Optional[Path],
) -> None:
    """
    Show all balances of ADDRESS.

    Defaults to the configured wallet's own address.
    """
    config = build_config(env_file, chain_name, chain_prefix, rpc_endpoint, gas_price, timeout)

    def operation(session):
        target = address or session.address
        return target, get_all_balances(session, target)

    target, coins = run_query(config, operation, mode=mode)

    if as_json:
        click.echo(json.dumps([coin.to_dict() for coin in coins], indent=2))
        return

    click.echo(f"  Address:  {target}")
    if not coins:
        click.echo("  (no balances)")
        return
    for coin in coins:
        click.echo(f"  {coin.amount:>24}  {coin.denom}")


@click.command()
@click.argument("address")
@click.option("--denom", required=True, help="Denomination, e.g. uosmo")
@session_options
@exit_on_error
def balance(
    address: str,
    denom: str,
    mode: str,
    chain_name: Optional[str],
    chain_prefix: Optional[str],
    rpc_endpoint: Optional[str],
    gas_price: Optional[str],
    timeout: Optional[float],
    env_file: Optional[Path],
) -> None:
    """Show the balance of a single denom held by ADDRESS."""
    config = build_config(env_file, chain_name, chain_prefix, rpc_endpoint, gas_price, timeout)
    coin = run_query(config, lambda session: get_balance(session, address, denom), mode=mode)
    click.echo(str(coin))
