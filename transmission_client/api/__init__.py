"""
Transmission RPC Layer.

This package handles all communication with the daemon: the request and
response envelopes, the session id handshake, and the client itself.
"""

from .client import TransmissionClient
from .protocol import Request, Response, decode, encode
from .session import SessionTokenManager

__all__ = [
    "Request",
    "Response",
    "SessionTokenManager",
    "TransmissionClient",
    "decode",
    "encode",
]
