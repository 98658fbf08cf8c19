"""
deepbook_sdk.rpc
----------------

Fullnode access.

This package exposes:
- SuiRpcClient:  async HTTP JSON-RPC client (see .http)
- return_values: helper to pull BCS return values out of a dev-inspect result
- returns:       decoders for those values (see .returns)

Import style:

    from deepbook_sdk.rpc import SuiRpcClient
    rpc = SuiRpcClient(url="https://fullnode.testnet.sui.io:443")
"""

from __future__ import annotations

from .http import SuiRpcClient, return_values  # noqa: F401

__all__ = ["SuiRpcClient", "return_values"]
