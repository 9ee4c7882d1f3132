"""
Composition root: resolve -> derive identity -> open session -> query.

Stages run strictly in order and never go back. The first failure aborts
the run and is re-raised unchanged; the session is closed on every path.
"""

from __future__ import annotations

import enum
import logging
from typing import Callable, Optional, TypeVar

import httpx

from .config import Config
from .pneuma.registry import resolve_chain
from .pneuma.session import (
    ChainRegistryStrategy,
    PrefixStrategy,
    SessionStrategy,
    SigningSession,
)


logger = logging.getLogger(__name__)

T = TypeVar("T")

MODES = ("chain", "generic")


class Stage(str, enum.Enum):
    UNRESOLVED = "unresolved"
    IDENTITY_READY = "identity-ready"
    SESSION_OPEN = "session-open"
    QUERY_ISSUED = "query-issued"
    COMPLETED = "completed"
    FAILED = "failed"


def build_strategy(config: Config, mode: str = "generic") -> SessionStrategy:
    """
    Pick the session construction strategy.

    ``chain`` resolves ``config.chain_name`` in the registry (and may raise
    ChainNotFoundError); ``generic`` uses ``config.chain_prefix`` only.
    """
    if mode == "chain":
        return ChainRegistryStrategy(resolve_chain(config.chain_name))
    if mode == "generic":
        return PrefixStrategy(config.chain_prefix)
    raise ValueError(f"Unknown session mode {mode!r}, expected one of {MODES}")


class Pipeline:
    """
    One run of the bootstrap pipeline.

    Attributes:
        stage: Current stage; ends as COMPLETED or FAILED
    """

    def __init__(
        self,
        config: Config,
        mode: str = "generic",
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.config = config
        self.mode = mode
        self.transport = transport
        self.stage = Stage.UNRESOLVED

    def _advance(self, stage: Stage) -> None:
        logger.debug("Pipeline %s -> %s", self.stage.value, stage.value)
        self.stage = stage

    def run(self, operation: Callable[[SigningSession], T]) -> T:
        """Open a session and run ``operation`` against it exactly once."""
        try:
            strategy = build_strategy(self.config, self.mode)
            identity = strategy.derive_identity(self.config.require_mnemonic())
            self._advance(Stage.IDENTITY_READY)

            with strategy.connect(
                identity,
                endpoint=self.config.endpoint_for(self.mode),
                gas_price=self.config.gas_price_for(self.mode),
                timeout=self.config.timeout,
                transport=self.transport,
            ) as session:
                self._advance(Stage.SESSION_OPEN)
                self._advance(Stage.QUERY_ISSUED)
                result = operation(session)
        except Exception:
            self._advance(Stage.FAILED)
            raise

        self._advance(Stage.COMPLETED)
        return result


def run_query(
    config: Config,
    operation: Callable[[SigningSession], T],
    mode: str = "generic",
    transport: Optional[httpx.BaseTransport] = None,
) -> T:
    return Pipeline(config, mode=mode, transport=transport).run(operation)
