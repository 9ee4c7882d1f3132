"""
osmoboot CLI

Command-line client bootstrap for Cosmos-SDK chains (Osmosis by default).

Identity = secp256k1 wallet derived from the MNEMONIC secret phrase.
Every networked command opens one signing session, issues one query and
closes the session again.

Commands:
  balances        - Show all balances of an address
  balance         - Show one denom's balance
  query-contract  - Smart-query a CosmWasm contract
  whoami          - Show the wallet address (no network)
  chains          - List the chain registry
  info            - Show configuration
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from .bootstrap import build_strategy
from .config import OSMOBOOT_ENV
from .pneuma.registry import REGISTRY_VERSION, list_chains
from .theurgy._common import build_config, exit_on_error, session_options


# ============ Constants ============

VERSION = "0.3.0"


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="osmoboot")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """osmoboot - Cosmos signing client bootstrap."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ============ Top-level Commands ============

from .theurgy.balances import balance, balances
from .theurgy.contract import query_contract

cli.add_command(balances)
cli.add_command(balance)
cli.add_command(query_contract)


# ============ Identity ============


@cli.command()
@session_options
@exit_on_error
def whoami(
    mode: str,
    chain_name: Optional[str],
    chain_prefix: Optional[str],
    rpc_endpoint: Optional[str],
    gas_price: Optional[str],
    timeout: Optional[float],
    env_file: Optional[Path],
) -> None:
    """Show the wallet address derived from MNEMONIC."""
    config = build_config(env_file, chain_name, chain_prefix, rpc_endpoint, gas_price, timeout)
    identity = build_strategy(config, mode).derive_identity(config.require_mnemonic())
    click.echo(f"Address: {identity.address}")
    click.echo(f"HD path: {identity.hd_path}")


# ============ Registry ============


@cli.command()
def chains() -> None:
    """List chains in the built-in registry."""
    click.echo(f"Registry {REGISTRY_VERSION}")
    for chain in list_chains():
        click.echo(
            click.style(f"  {chain.name:<16}", fg="bright_white", bold=True)
            + f"{chain.chain_id:<14}{chain.bech32_prefix:<8}"
            + click.style(f"slip44={chain.slip44}  gas={chain.default_gas_price}", dim=True)
        )


# ============ Info ============


@cli.command()
@click.option(
    "--env-file",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to .env file (default: ~/.osmoboot/.env)",
)
def info(env_file: Optional[Path]) -> None:
    """Show the effective configuration."""
    config = build_config(env_file)

    rows = [
        ("Env file", str(env_file or OSMOBOOT_ENV)),
        ("Chain", config.chain_name),
        ("Prefix", config.chain_prefix),
        ("Gas price", config.default_gas_price or f"{config.gas_price_for('generic')} (chain mode: registry)"),
        ("RPC endpoint", config.rpc_endpoint or f"{config.endpoint_for('generic')} (chain mode: registry)"),
        ("Timeout", f"{config.timeout:g}s"),
        ("Mnemonic", "set" if config.mnemonic else "not set"),
    ]
    for label, value in rows:
        click.echo(click.style(f"  {label + ':':<14}", dim=True) + value)


# ============ Entry Points ============


def main() -> None:
    """osmoboot CLI entry point."""
    if sys.platform == "win32":
        try:
            sys.stdout.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
            sys.stderr.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
        except (AttributeError, OSError):
            pass
    cli()


if __name__ == "__main__":
    main()
