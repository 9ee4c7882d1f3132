"""Options and helpers shared by the session-opening commands."""

from __future__ import annotations

import dataclasses
import functools
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Optional

import click

from ..bootstrap import MODES
from ..config import Config, load_config
from ..errors import OsmobootError


def session_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the connection options every networked command accepts."""
    options = [
        click.option(
            "--mode",
            type=click.Choice(MODES),
            default="generic",
            show_default=True,
            help="Session strategy: registry-bound ('chain') or prefix-only ('generic')",
        ),
        click.option("--chain", "chain_name", default=None, help="Registry chain name"),
        click.option("--prefix", "chain_prefix", default=None, help="Bech32 address prefix"),
        click.option("--rpc-endpoint", default=None, help="Tendermint RPC endpoint URL"),
        click.option("--gas-price", default=None, help="Gas price, e.g. 0.025uosmo"),
        click.option("--timeout", default=None, type=float, help="Request timeout in seconds"),
        click.option(
            "--env-file",
            default=None,
            type=click.Path(dir_okay=False, path_type=Path),
            help="Path to .env file (default: ~/.osmoboot/.env)",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_config(
    env_file: Optional[Path] = None,
    chain_name: Optional[str] = None,
    chain_prefix: Optional[str] = None,
    rpc_endpoint: Optional[str] = None,
    gas_price: Optional[str] = None,
    timeout: Optional[float] = None,
) -> Config:
    """Load configuration and apply command-line overrides."""
    try:
        config = load_config(env_file)
    except ValueError as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(1)

    overrides = {
        "chain_name": chain_name,
        "chain_prefix": chain_prefix,
        "rpc_endpoint": rpc_endpoint,
        "default_gas_price": gas_price,
        "timeout": timeout,
    }
    return dataclasses.replace(config, **{k: v for k, v in overrides.items() if v is not None})


def exit_on_error(func: Callable[..., Any]) -> Callable[..., Any]:
    """Report OsmobootError as a red ERROR line and exit with its code."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except OsmobootError as exc:
            logging.getLogger(func.__module__).debug("Command failed", exc_info=True)
            click.secho(f"ERROR: {exc}", fg="red", err=True)
            sys.exit(exc.exit_code)

    return wrapper
