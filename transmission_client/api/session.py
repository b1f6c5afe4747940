"""
Keeps the CSRF session id that the Transmission daemon requires on every request.
"""

import asyncio
import logging
from typing import MutableMapping, Optional

from transmission_client.exceptions import MalformedResponseError

from .protocol import SESSION_ID_HEADER

log = logging.getLogger(__name__)

STALE_SESSION_STATUS = 409


def mask_token(token: Optional[str]) -> str:
    if not token:
        return "<none>"
    return f"{token[:6]}..."


class SessionTokenManager:
    """
    Holds the session id shared by all requests of one client.

    The daemon answers 409 with a fresh id in its headers whenever the id a
    request carried is missing or outdated. The first caller to observe a
    rejection captures the new id; callers rejected for the same stale id
    afterwards reuse it instead of capturing again.
    """

    def __init__(self, token: Optional[str] = None):
        self._token = token
        self._refreshes = 0
        self._lock = asyncio.Lock()

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def refreshes(self) -> int:
        """Number of session ids captured from 409 rejections."""
        return self._refreshes

    async def prepare(self, headers: MutableMapping[str, str]) -> Optional[str]:
        """
        Attaches the current session id to outgoing request headers.

        Args:
            headers: The header mapping of the request about to be sent.

        Returns:
            The session id that was attached, or None if none is known yet.
        """
        async with self._lock:
            token = self._token
        if token is not None:
            headers[SESSION_ID_HEADER] = token
        else:
            headers.pop(SESSION_ID_HEADER, None)
        return token

    async def observe(
        self, status: int, sent_token: Optional[str], offered_token: Optional[str]
    ) -> bool:
        """
        Inspects a response status and recovers from a stale session id.

        Args:
            status: HTTP status of the response.
            sent_token: The session id the rejected request carried.
            offered_token: Value of the session id header in the response.

        Returns:
            True if the request must be sent again with the current session id.

        Raises:
            MalformedResponseError: If a 409 response carries no session id.
        """
        if status != STALE_SESSION_STATUS:
            return False

        async with self._lock:
            if self._token != sent_token:
                log.debug(
                    "Session id already refreshed to "
                    f"{mask_token(self._token)}, reusing it."
                )
                return True

            if not offered_token:
                raise MalformedResponseError(
                    f"Daemon answered {status} without a {SESSION_ID_HEADER} header."
                )

            if offered_token == self._token:
                log.debug("Daemon re-announced the current session id.")
            else:
                log.info(f"Session id refreshed: {mask_token(offered_token)}")
            self._token = offered_token
            self._refreshes += 1
            return True
