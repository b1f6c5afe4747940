"""
Read-only views over the torrent entries returned by the daemon.
"""

from enum import IntEnum
from types import MappingProxyType
from typing import Any, Mapping, NamedTuple, Optional

from transmission_client.utils.formatting import (
    fraction_to_percent,
    pretty_rate,
    pretty_size,
)


class TorrentStatus(IntEnum):
    """Numeric torrent states reported in the 'status' field."""

    STOPPED = 0
    CHECK_WAITING = 1
    CHECKING = 2
    DOWNLOAD_WAITING = 3
    DOWNLOADING = 4
    SEED_WAITING = 5
    SEEDING = 6


STATUS_DESCRIPTIONS = {
    TorrentStatus.STOPPED: "Stopped",
    TorrentStatus.CHECK_WAITING: "Check waiting",
    TorrentStatus.CHECKING: "Checking",
    TorrentStatus.DOWNLOAD_WAITING: "Download waiting",
    TorrentStatus.DOWNLOADING: "Downloading",
    TorrentStatus.SEED_WAITING: "Seed waiting",
    TorrentStatus.SEEDING: "Seeding",
}

ERROR_DESCRIPTION = "Error"
UNKNOWN_DESCRIPTION = "Unknown"


def describe_status(status: Optional[int], error: Optional[int] = 0) -> str:
    """Maps a status code, overridden by any nonzero error code, to a label."""
    if error:
        return ERROR_DESCRIPTION
    try:
        return STATUS_DESCRIPTIONS[TorrentStatus(status)]
    except (ValueError, TypeError):
        return UNKNOWN_DESCRIPTION


class TorrentLight:
    """The short torrent description returned by 'torrent-add'."""

    __slots__ = ("_rawdata",)

    def __init__(self, rawdata: Optional[Mapping[str, Any]]):
        self._rawdata = MappingProxyType(dict(rawdata or {}))

    @property
    def rawdata(self) -> Mapping[str, Any]:
        return self._rawdata

    @property
    def id(self) -> Optional[int]:
        return self._rawdata.get("id")

    @property
    def name(self) -> Optional[str]:
        return self._rawdata.get("name")

    @property
    def hash(self) -> Optional[str]:
        return self._rawdata.get("hashString")

    def __repr__(self) -> str:
        return f"TorrentLight(id={self.id!r}, name={self.name!r}, hash={self.hash!r})"


class Torrent:
    """
    A torrent entry from 'torrent-get'.

    Accessors return None when the field was not part of the requested field
    list. Any requested field can also be read with ``torrent["fieldName"]``.
    """

    __slots__ = ("_rawdata",)

    def __init__(self, rawdata: Mapping[str, Any]):
        self._rawdata = MappingProxyType(dict(rawdata))

    def __getitem__(self, name: str) -> Any:
        return self._rawdata[name]

    def get(self, name: str, default: Any = None) -> Any:
        return self._rawdata.get(name, default)

    @property
    def rawdata(self) -> Mapping[str, Any]:
        return self._rawdata

    @property
    def id(self) -> Optional[int]:
        return self._rawdata.get("id")

    @property
    def name(self) -> Optional[str]:
        return self._rawdata.get("name")

    @property
    def hash(self) -> Optional[str]:
        return self._rawdata.get("hashString")

    @property
    def download_dir(self) -> Optional[str]:
        return self._rawdata.get("downloadDir")

    @property
    def error(self) -> Optional[int]:
        return self._rawdata.get("error")

    @property
    def error_string(self) -> Optional[str]:
        return self._rawdata.get("errorString")

    @property
    def is_finished(self) -> Optional[bool]:
        return self._rawdata.get("isFinished")

    @property
    def is_stalled(self) -> Optional[bool]:
        return self._rawdata.get("isStalled")

    @property
    def total_size(self) -> Optional[int]:
        return self._rawdata.get("totalSize")

    @property
    def eta(self) -> Optional[int]:
        return self._rawdata.get("eta")

    @property
    def status(self) -> Optional[int]:
        return self._rawdata.get("status")

    @property
    def status_description(self) -> str:
        return describe_status(self.status, self.error)

    @property
    def size_when_done(self) -> Optional[int]:
        return self._rawdata.get("sizeWhenDone")

    @property
    def left_until_done(self) -> Optional[int]:
        return self._rawdata.get("leftUntilDone")

    @property
    def rate_upload(self) -> Optional[int]:
        return self._rawdata.get("rateUpload")

    @property
    def rate_download(self) -> Optional[int]:
        return self._rawdata.get("rateDownload")

    @property
    def queue_position(self) -> Optional[int]:
        return self._rawdata.get("queuePosition")

    @property
    def peers_sending_to_us(self) -> Optional[int]:
        return self._rawdata.get("peersSendingToUs")

    @property
    def peers_getting_from_us(self) -> Optional[int]:
        return self._rawdata.get("peersGettingFromUs")

    @property
    def peers_connected(self) -> Optional[int]:
        return self._rawdata.get("peersConnected")

    @property
    def percent_done(self) -> Optional[float]:
        return fraction_to_percent(self._rawdata.get("percentDone"))

    @property
    def metadata_percent_complete(self) -> Optional[float]:
        return fraction_to_percent(self._rawdata.get("metadataPercentComplete"))

    @property
    def is_metadata_downloaded(self) -> bool:
        return self._rawdata.get("metadataPercentComplete") == 1

    @property
    def pretty_total_size(self) -> str:
        return pretty_size(self.total_size or 0)

    @property
    def pretty_left_until_done(self) -> str:
        return pretty_size(self.left_until_done or 0)

    @property
    def pretty_current_size(self) -> str:
        return pretty_size((self.total_size or 0) - (self.left_until_done or 0))

    @property
    def pretty_rate_download(self) -> str:
        return pretty_rate(self.rate_download or 0)

    @property
    def pretty_rate_upload(self) -> str:
        return pretty_rate(self.rate_upload or 0)

    def __repr__(self) -> str:
        return f"Torrent({dict(self._rawdata)})"


class RecentlyActiveTorrents(NamedTuple):
    """Torrents changed since the previous poll, and ids removed meanwhile."""

    torrents: list[Torrent]
    removed: list[int]
