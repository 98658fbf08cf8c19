"""
Contract wrappers. Each one appends Move calls for one area of DeepBook to a
caller-owned `TransactionBuilder`.
"""

from .balance_manager import BalanceManagerContract, PreparedProof
from .deepbook import DeepBookContract
from .deepbook_admin import DeepBookAdminContract
from .flashloan import FlashLoanContract
from .governance import GovernanceContract
from .objects import ObjectFetcher, ObjectResolver, clock_object, object_arg_from_data

__all__ = [
    "BalanceManagerContract",
    "PreparedProof",
    "DeepBookContract",
    "DeepBookAdminContract",
    "FlashLoanContract",
    "GovernanceContract",
    "ObjectFetcher",
    "ObjectResolver",
    "clock_object",
    "object_arg_from_data",
]
