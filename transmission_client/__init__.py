"""
Async client library for the Transmission daemon RPC protocol.
"""

__version__ = "1.0.0"

from .api.client import TransmissionClient  # noqa: E402
from .exceptions import (  # noqa: E402
    AddTorrentError,
    ConfigurationError,
    DuplicateTorrentError,
    InvalidArgumentError,
    MalformedResponseError,
    OperationFailedError,
    TransmissionError,
)
from .models.config import ClientConfig  # noqa: E402
from .models.session import SessionSettings  # noqa: E402
from .models.torrent import (  # noqa: E402
    RecentlyActiveTorrents,
    Torrent,
    TorrentLight,
    TorrentStatus,
)

__all__ = [
    "AddTorrentError",
    "ClientConfig",
    "ConfigurationError",
    "DuplicateTorrentError",
    "InvalidArgumentError",
    "MalformedResponseError",
    "OperationFailedError",
    "RecentlyActiveTorrents",
    "SessionSettings",
    "Torrent",
    "TorrentLight",
    "TorrentStatus",
    "TransmissionClient",
    "TransmissionError",
    "__version__",
]
