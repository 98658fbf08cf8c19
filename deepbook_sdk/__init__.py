"""
DeepBook v3 SDK for Python.
Convenience exports for the most common client APIs.
"""

from .version import __version__  # noqa: F401

# Core config & errors
from .config import DeepBookConfig, Environment, NetworkConfig  # noqa: F401
from .errors import (  # noqa: F401
    AddressError,
    ConfigError,
    DecodeError,
    DeepBookError,
    NetworkError,
    ObjectNotFoundError,
    RpcError,
    SimulationError,
    UnknownKeyError,
)

# RPC
from .rpc.http import SuiRpcClient  # noqa: F401

# Tx builder
from .tx.builder import TransactionBuilder  # noqa: F401

# Records
from .types import (  # noqa: F401
    BalanceManager,
    CoinInfo,
    OrderType,
    PlaceLimitOrderParams,
    PlaceMarketOrderParams,
    PoolInfo,
    ProposalParams,
    CreatePoolAdminParams,
    SelfMatchingOptions,
)

# Contracts & facade
from .contracts import (  # noqa: F401
    BalanceManagerContract,
    DeepBookAdminContract,
    DeepBookContract,
    FlashLoanContract,
    GovernanceContract,
    ObjectResolver,
)
from .client import DeepBookClient  # noqa: F401

__all__ = [
    "__version__",
    # Core
    "DeepBookConfig", "Environment", "NetworkConfig",
    "DeepBookError", "ConfigError", "UnknownKeyError", "AddressError",
    "NetworkError", "RpcError", "ObjectNotFoundError", "SimulationError", "DecodeError",
    # RPC
    "SuiRpcClient",
    # Tx
    "TransactionBuilder",
    # Records
    "BalanceManager", "CoinInfo", "PoolInfo",
    "OrderType", "SelfMatchingOptions",
    "PlaceLimitOrderParams", "PlaceMarketOrderParams", "ProposalParams", "CreatePoolAdminParams",
    # Contracts
    "BalanceManagerContract", "DeepBookContract", "DeepBookAdminContract",
    "FlashLoanContract", "GovernanceContract", "ObjectResolver",
    "DeepBookClient",
]
