"""
Defines custom exceptions for the library to allow for more specific error handling.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from transmission_client.api.protocol import Response
    from transmission_client.models.torrent import TorrentLight


class TransmissionError(Exception):
    """Base exception for all library-specific errors."""


class ConfigurationError(TransmissionError):
    """Raised for issues related to configuration loading or validation."""


class InvalidArgumentError(TransmissionError, ValueError):
    """Raised when a call is refused before anything is sent to the daemon."""


class MalformedResponseError(TransmissionError):
    """Raised when the daemon's reply cannot be decoded as an RPC envelope."""


class StaleSessionError(TransmissionError):
    """
    Signals that the daemon rejected a request with HTTP 409.

    Handled inside the client and never raised out of a public operation.
    """

    def __init__(self, offered_token: Optional[str]):
        super().__init__("Session id is stale.")
        self.offered_token = offered_token


class OperationFailedError(TransmissionError):
    """Raised when the daemon answers with a result other than 'success'."""

    def __init__(self, response: "Response"):
        super().__init__(response.result)
        self.response = response

    def __str__(self) -> str:
        return f"{type(self).__name__}({self.response})"


class AddTorrentError(OperationFailedError):
    """Raised when 'torrent-add' does not produce a new torrent."""

    def __init__(
        self, response: "Response", torrent: Optional["TorrentLight"] = None
    ):
        super().__init__(response)
        self.torrent = torrent

    def __str__(self) -> str:
        return f"{type(self).__name__}({self.response}, {self.torrent})"


class DuplicateTorrentError(AddTorrentError):
    """
    Raised when the daemon already tracks the torrent being added.

    The existing torrent is available as ``.torrent``.
    """

    def __init__(self, response: "Response", torrent: "TorrentLight"):
        super().__init__(response, torrent)
