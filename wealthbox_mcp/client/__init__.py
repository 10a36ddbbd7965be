"""
HTTP Bridge

Wraps the Wealthbox REST API behind a single execute() call.
"""

from .bridge import (
    WealthboxClient,
    BridgeError,
    APIError,
    TransportError,
    DecodeError,
)

__all__ = [
    "WealthboxClient",
    "BridgeError",
    "APIError",
    "TransportError",
    "DecodeError",
]
