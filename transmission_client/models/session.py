"""
Read-only view over the daemon-wide settings returned by 'session-get'.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Iterator, Optional


class SessionSettings(Mapping):
    """Behaves as a plain mapping of setting names, with typed shortcuts."""

    __slots__ = ("_rawdata",)

    def __init__(self, rawdata: Optional[Mapping[str, Any]]):
        self._rawdata = MappingProxyType(dict(rawdata or {}))

    def __getitem__(self, key: str) -> Any:
        return self._rawdata[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rawdata)

    def __len__(self) -> int:
        return len(self._rawdata)

    @property
    def version(self) -> Optional[str]:
        return self._rawdata.get("version")

    @property
    def download_dir(self) -> Optional[str]:
        return self._rawdata.get("download-dir")

    @property
    def speed_limit_down(self) -> Optional[int]:
        return self._rawdata.get("speed-limit-down")

    @property
    def speed_limit_up(self) -> Optional[int]:
        return self._rawdata.get("speed-limit-up")

    @property
    def speed_limit_down_enabled(self) -> Optional[bool]:
        return self._rawdata.get("speed-limit-down-enabled")

    @property
    def speed_limit_up_enabled(self) -> Optional[bool]:
        return self._rawdata.get("speed-limit-up-enabled")

    @property
    def alt_speed_enabled(self) -> Optional[bool]:
        return self._rawdata.get("alt-speed-enabled")

    @property
    def alt_speed_down(self) -> Optional[int]:
        return self._rawdata.get("alt-speed-down")

    @property
    def alt_speed_up(self) -> Optional[int]:
        return self._rawdata.get("alt-speed-up")

    def __repr__(self) -> str:
        return f"SessionSettings({dict(self._rawdata)})"
