"""
Async client for the Transmission daemon RPC interface.
"""

import base64
import logging
import time
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, Union

import aiofiles
import aiohttp
from pydantic import ValidationError

from transmission_client import __version__
from transmission_client.exceptions import (
    AddTorrentError,
    ConfigurationError,
    DuplicateTorrentError,
    InvalidArgumentError,
    MalformedResponseError,
    OperationFailedError,
    StaleSessionError,
)
from transmission_client.models.config import DEFAULT_BASE_URL, ClientConfig
from transmission_client.models.fields import (
    DEFAULT_SESSION_FIELDS,
    DEFAULT_TORRENT_FIELDS,
    RECENTLY_ACTIVE,
)
from transmission_client.models.session import SessionSettings
from transmission_client.models.torrent import (
    RecentlyActiveTorrents,
    Torrent,
    TorrentLight,
)
from transmission_client.utils.rpc_logger import RpcLogger

from . import protocol
from .protocol import SESSION_ID_HEADER, Request, Response
from .session import SessionTokenManager

log = logging.getLogger(__name__)

TorrentId = Union[int, str]

DUPLICATE_RESULT = "Torrent duplicated"


class TransmissionClient:
    """
    Async client for a remote Transmission daemon.

    Features:
    - Transparent session id handshake (one resend per 409 rejection)
    - Safe for concurrent use from many coroutines
    - Typed read-only views over torrent and session data

    Documentation about the API:
    https://github.com/transmission/transmission/blob/main/docs/rpc-spec.md
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        proxy_url: Optional[str] = None,
        verbose: bool = False,
        timeout: Optional[float] = None,
        *,
        config: Optional[ClientConfig] = None,
    ):
        """
        Initializes the client. No connection is opened until the first call.

        Args:
            base_url: RPC endpoint of the daemon, default
                http://localhost:9091/transmission/rpc.
            proxy_url: Optional URL prefix; the encoded base_url is appended to it.
            verbose: Log full request and response bodies.
            timeout: Optional total timeout in seconds for each HTTP exchange.
            config: A prepared configuration, used instead of the other arguments.
        """
        if config is None:
            try:
                config = ClientConfig(
                    base_url=base_url or DEFAULT_BASE_URL,
                    proxy_url=proxy_url,
                    verbose=verbose,
                    timeout=timeout,
                )
            except ValidationError as e:
                raise ConfigurationError(f"Invalid client configuration:\n{e}") from e

        self.config = config
        self._session: Optional[aiohttp.ClientSession] = None
        self._session_tokens = SessionTokenManager()
        self._rpc_log = RpcLogger(log, verbose=config.verbose)

    @classmethod
    def from_config(cls, config: ClientConfig) -> "TransmissionClient":
        return cls(config=config)

    @property
    def session_tokens(self) -> SessionTokenManager:
        """Provides access to the session id state."""
        return self._session_tokens

    @property
    def endpoint(self) -> str:
        return self.config.endpoint

    async def __aenter__(self) -> "TransmissionClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _initialize_session(self) -> None:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(limit=10, ttl_dns_cache=300)
            self._session = aiohttp.ClientSession(
                connector=connector,
                headers={"User-Agent": f"transmission-client/{__version__}"},
                timeout=aiohttp.ClientTimeout(total=self.config.timeout),
            )

    async def close(self) -> None:
        """Gracefully closes the aiohttp session. Safe to call more than once."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def _send(
        self,
        session: aiohttp.ClientSession,
        method: str,
        payload: dict[str, Any],
        attempt: int,
    ) -> Any:
        """
        Posts one payload and returns the decoded JSON body.

        Raises:
            StaleSessionError: On a first 409, once the new session id is known.
            aiohttp.ClientResponseError: On any other HTTP error status, including
                a 409 answering a resend.
        """
        headers: dict[str, str] = {}
        sent_token = await self._session_tokens.prepare(headers)

        self._rpc_log.request_sent(method, payload, attempt)
        start_time = time.monotonic()

        async with session.post(self.endpoint, json=payload, headers=headers) as r:
            offered_token = r.headers.get(SESSION_ID_HEADER)
            if await self._session_tokens.observe(r.status, sent_token, offered_token):
                self._rpc_log.session_rejected(method, attempt)
                if attempt > 1:
                    r.raise_for_status()
                raise StaleSessionError(offered_token)

            r.raise_for_status()

            try:
                body = await r.json(content_type=None)
            except ValueError as e:
                raise MalformedResponseError(
                    f"Response to '{method}' is not valid JSON: {e}"
                ) from e

            duration_ms = (time.monotonic() - start_time) * 1000
            self._rpc_log.response_received(method, r.status, body, duration_ms)
            return body

    async def call(
        self,
        method: str,
        arguments: Optional[Mapping[str, Any]] = None,
        tag: Optional[str] = None,
    ) -> Response:
        """
        Sends an RPC method and returns the decoded response, successful or not.

        A 409 rejection is answered by resending the same payload once with the
        session id the daemon provided.

        Raises:
            InvalidArgumentError: If the method is not a known RPC method; nothing
                is sent.
        """
        request = Request(method, arguments=arguments, tag=tag)
        payload = request.to_payload()
        await self._initialize_session()
        # close() may drop the session while the call is in flight
        session = self._session

        try:
            try:
                body = await self._send(session, method, payload, attempt=1)
            except StaleSessionError:
                body = await self._send(session, method, payload, attempt=2)
            return protocol.decode(body)
        except Exception as e:
            self._rpc_log.request_failed(method, f"{type(e).__name__}: {e}")
            raise

    async def _call_checked(
        self, method: str, arguments: Optional[Mapping[str, Any]] = None
    ) -> Response:
        response = await self.call(method, arguments)
        if not response.is_success:
            raise OperationFailedError(response)
        return response

    @staticmethod
    def _require_ids(ids: Sequence[TorrentId]) -> list[TorrentId]:
        id_list = list(ids)
        if not id_list:
            raise InvalidArgumentError("At least one torrent id is required.")
        return id_list

    # Public API Methods
    async def get_torrents(
        self,
        fields: Sequence[str] = DEFAULT_TORRENT_FIELDS,
        ids: Optional[Sequence[TorrentId]] = None,
    ) -> list[Torrent]:
        """
        Gets the torrents of the daemon, restricted to the given fields.

        Args:
            fields: Torrent fields to retrieve.
            ids: Optional ids or hashes to restrict the listing to.
        """
        arguments: dict[str, Any] = {"fields": list(fields)}
        if ids is not None:
            arguments["ids"] = list(ids)
        response = await self._call_checked(protocol.METHOD_GET_TORRENT, arguments)
        return [Torrent(data) for data in response.argument("torrents", [])]

    async def get_recently_active(
        self, fields: Sequence[str] = DEFAULT_TORRENT_FIELDS
    ) -> RecentlyActiveTorrents:
        """Gets torrents updated since the last poll and the ids removed meanwhile."""
        response = await self._call_checked(
            protocol.METHOD_GET_TORRENT,
            {"fields": list(fields), "ids": RECENTLY_ACTIVE},
        )
        return RecentlyActiveTorrents(
            [Torrent(data) for data in response.argument("torrents", [])],
            list(response.argument("removed") or []),
        )

    async def add_torrent(
        self,
        filename: Optional[str] = None,
        metainfo: Optional[str] = None,
        download_dir: Optional[str] = None,
        cookies: Optional[str] = None,
        paused: Optional[bool] = None,
    ) -> TorrentLight:
        """
        Adds a torrent from a filename/URL or from base64-encoded .torrent content.

        Returns:
            The short description of the added torrent.

        Raises:
            DuplicateTorrentError: If the daemon already has this torrent.
            AddTorrentError: If the daemon refused the torrent for another reason.
        """
        arguments: dict[str, Any] = {}
        if filename is not None:
            arguments["filename"] = filename
        if metainfo is not None:
            arguments["metainfo"] = metainfo
        if download_dir is not None:
            arguments["download-dir"] = download_dir
        if cookies is not None:
            arguments["cookies"] = cookies
        if paused is not None:
            arguments["paused"] = paused

        response = await self.call(protocol.METHOD_ADD_TORRENT, arguments)
        duplicate = response.argument("torrent-duplicate")

        if response.is_success:
            if duplicate is not None:
                raise DuplicateTorrentError(
                    response.with_result(DUPLICATE_RESULT), TorrentLight(duplicate)
                )
            added = response.argument("torrent-added")
            if added is None:
                raise MalformedResponseError(
                    "Successful 'torrent-add' response lists no torrent."
                )
            return TorrentLight(added)

        if duplicate is not None:
            raise DuplicateTorrentError(response, TorrentLight(duplicate))
        raise AddTorrentError(response)

    async def add_torrent_file(
        self,
        path: Union[str, Path],
        download_dir: Optional[str] = None,
        cookies: Optional[str] = None,
        paused: Optional[bool] = None,
    ) -> TorrentLight:
        """Adds a torrent from a local .torrent file."""
        async with aiofiles.open(path, "rb") as f:
            content = await f.read()
        return await self.add_torrent(
            metainfo=base64.b64encode(content).decode("ascii"),
            download_dir=download_dir,
            cookies=cookies,
            paused=paused,
        )

    async def remove_torrents(
        self, ids: Sequence[TorrentId], delete_local_data: bool = False
    ) -> None:
        """
        Removes torrents by their ids.

        Args:
            ids: Torrents to remove.
            delete_local_data: Also delete the downloaded data.
        """
        await self._call_checked(
            protocol.METHOD_REMOVE_TORRENT,
            {"ids": self._require_ids(ids), "delete-local-data": delete_local_data},
        )

    async def move_torrents(
        self, ids: Sequence[TorrentId], location: str, move: bool = False
    ) -> None:
        """
        Sets a new location for torrents.

        Args:
            ids: Torrents to relocate.
            location: The new data directory.
            move: Move the data from the previous location; otherwise the daemon
                looks for the files in the new location.
        """
        await self._call_checked(
            protocol.METHOD_MOVE_TORRENT,
            {"ids": self._require_ids(ids), "location": location, "move": move},
        )

    async def rename_torrent(
        self, id: TorrentId, name: Optional[str] = None, path: Optional[str] = None
    ) -> None:
        """
        Renames a file or directory of a torrent.

        Args:
            id: The torrent to change.
            name: The new name.
            path: The current path of the renamed item inside the torrent.
        """
        arguments: dict[str, Any] = {"ids": id}
        if path is not None:
            arguments["path"] = path
        if name is not None:
            arguments["name"] = name
        await self._call_checked(protocol.METHOD_RENAME_TORRENT, arguments)

    async def set_torrents(
        self, ids: Sequence[TorrentId], fields: Mapping[str, Any]
    ) -> None:
        """Changes per-torrent settings such as 'bandwidthPriority' or 'labels'."""
        arguments = dict(fields)
        arguments["ids"] = list(ids)
        await self._call_checked(protocol.METHOD_SET_TORRENT, arguments)

    async def start_torrents(self, ids: Sequence[TorrentId]) -> None:
        await self._call_checked(protocol.METHOD_START_TORRENT, {"ids": list(ids)})

    async def start_torrents_now(self, ids: Sequence[TorrentId]) -> None:
        """Starts torrents immediately, bypassing the download queue."""
        await self._call_checked(
            protocol.METHOD_START_NOW_TORRENT, {"ids": list(ids)}
        )

    async def stop_torrents(self, ids: Sequence[TorrentId]) -> None:
        await self._call_checked(protocol.METHOD_STOP_TORRENT, {"ids": list(ids)})

    async def verify_torrents(self, ids: Sequence[TorrentId]) -> None:
        await self._call_checked(protocol.METHOD_VERIFY_TORRENT, {"ids": list(ids)})

    async def reannounce_torrents(self, ids: Sequence[TorrentId]) -> None:
        """Asks the trackers for more peers."""
        await self._call_checked(
            protocol.METHOD_REANNOUNCE_TORRENT, {"ids": list(ids)}
        )

    async def get_session(
        self, fields: Sequence[str] = DEFAULT_SESSION_FIELDS
    ) -> SessionSettings:
        """Gets daemon-wide settings, restricted to the given fields."""
        response = await self._call_checked(
            protocol.METHOD_GET_SESSION, {"fields": list(fields)}
        )
        return SessionSettings(response.arguments)

    async def set_session(self, fields: Mapping[str, Any]) -> None:
        """Changes daemon-wide settings."""
        await self._call_checked(protocol.METHOD_SET_SESSION, dict(fields))
