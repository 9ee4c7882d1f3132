__all__ = [
    # Errors
    "OsmobootError",
    "ChainNotFoundError",
    "InvalidSecretPhraseError",
    "NodeConnectionError",
    "GasPriceError",
    "QueryError",
    "BroadcastError",
    # Configuration
    "Config",
    "load_config",
    # Registry
    "ChainDescriptor",
    "resolve_chain",
    "list_chains",
    # Identity
    "SigningIdentity",
    "derive_for_chain",
    "derive_for_prefix",
    # Sessions
    "GasPrice",
    "Coin",
    "SigningSession",
    "SessionStrategy",
    "ChainRegistryStrategy",
    "PrefixStrategy",
    # Queries
    "get_all_balances",
    "get_balance",
    "query_contract_smart",
    # Pipeline
    "Pipeline",
    "Stage",
    "run_query",
]

from .errors import (
    BroadcastError,
    ChainNotFoundError,
    GasPriceError,
    InvalidSecretPhraseError,
    NodeConnectionError,
    OsmobootError,
    QueryError,
)
from .config import Config, load_config
from .pneuma.registry import ChainDescriptor, list_chains, resolve_chain
from .sigil.wallet import SigningIdentity, derive_for_chain, derive_for_prefix
from .pneuma.fees import Coin, GasPrice
from .pneuma.session import ChainRegistryStrategy, PrefixStrategy, SessionStrategy, SigningSession
from .pneuma.queries import get_all_balances, get_balance, query_contract_smart
from .bootstrap import Pipeline, Stage, run_query
