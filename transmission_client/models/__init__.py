"""
Data Models Layer.

This package contains the client configuration model and the read-only views
over torrent and session data returned by the daemon.
"""

from .config import ClientConfig
from .session import SessionSettings
from .torrent import RecentlyActiveTorrents, Torrent, TorrentLight, TorrentStatus

__all__ = [
    "ClientConfig",
    "RecentlyActiveTorrents",
    "SessionSettings",
    "Torrent",
    "TorrentLight",
    "TorrentStatus",
]
