"""
Version helpers for the DeepBook Python SDK.
"""

from __future__ import annotations

# Bump this when publishing
__version__ = "0.1.0"


def user_agent() -> str:
    """Default HTTP User-Agent, e.g. 'deepbook-sdk-py/0.1.0'."""
    return f"deepbook-sdk-py/{__version__}"


__all__ = ["__version__", "user_agent"]
