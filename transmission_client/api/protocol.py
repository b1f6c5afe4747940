"""
Request and response envelopes for the Transmission RPC protocol.

Documentation about the protocol:
https://github.com/transmission/transmission/blob/main/docs/rpc-spec.md
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping, Optional

from transmission_client.exceptions import (
    InvalidArgumentError,
    MalformedResponseError,
)

SESSION_ID_HEADER = "X-Transmission-Session-Id"
RESULT_SUCCESS = "success"

METHOD_ADD_TORRENT = "torrent-add"
METHOD_REMOVE_TORRENT = "torrent-remove"
METHOD_RENAME_TORRENT = "torrent-rename-path"
METHOD_MOVE_TORRENT = "torrent-set-location"
METHOD_GET_TORRENT = "torrent-get"
METHOD_SET_TORRENT = "torrent-set"
METHOD_GET_SESSION = "session-get"
METHOD_SET_SESSION = "session-set"
METHOD_START_TORRENT = "torrent-start"
METHOD_START_NOW_TORRENT = "torrent-start-now"
METHOD_STOP_TORRENT = "torrent-stop"
METHOD_REANNOUNCE_TORRENT = "torrent-reannounce"
METHOD_VERIFY_TORRENT = "torrent-verify"

METHODS = frozenset(
    {
        METHOD_ADD_TORRENT,
        METHOD_REMOVE_TORRENT,
        METHOD_RENAME_TORRENT,
        METHOD_MOVE_TORRENT,
        METHOD_GET_TORRENT,
        METHOD_SET_TORRENT,
        METHOD_GET_SESSION,
        METHOD_SET_SESSION,
        METHOD_START_TORRENT,
        METHOD_START_NOW_TORRENT,
        METHOD_STOP_TORRENT,
        METHOD_REANNOUNCE_TORRENT,
        METHOD_VERIFY_TORRENT,
    }
)


def _freeze(arguments: Optional[Mapping[str, Any]]) -> Optional[Mapping[str, Any]]:
    """Read-only copy of an argument map. Nested values are left as they are."""
    if arguments is None:
        return None
    return MappingProxyType(dict(arguments))


def _freeze_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze_value(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze_value(v) for v in value)
    return value


def _thaw_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _thaw_value(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw_value(v) for v in value]
    return value


@dataclass(frozen=True)
class Request:
    """
    A single RPC call. Resending a request transmits the same payload.

    Arguments are frozen all the way down: lists become tuples and nested
    objects become read-only mappings.
    """

    method: str
    arguments: Optional[Mapping[str, Any]] = None
    tag: Optional[str] = None

    def __post_init__(self):
        if self.method not in METHODS:
            raise InvalidArgumentError(f"Unknown RPC method: {self.method!r}")
        if self.arguments is not None:
            object.__setattr__(self, "arguments", _freeze_value(self.arguments))

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Request":
        """Rebuilds a request from its wire payload."""
        return cls(
            payload["method"],
            arguments=payload.get("arguments"),
            tag=payload.get("tag"),
        )

    def to_payload(self) -> dict[str, Any]:
        """Builds the JSON object sent as the HTTP body."""
        payload: dict[str, Any] = {"method": self.method}
        if self.arguments is not None:
            payload["arguments"] = _thaw_value(self.arguments)
        if self.tag is not None:
            payload["tag"] = self.tag
        return payload


@dataclass(frozen=True)
class Response:
    """The decoded reply of the daemon."""

    result: str
    arguments: Optional[Mapping[str, Any]] = field(default=None)
    tag: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "arguments", _freeze(self.arguments))

    @property
    def is_success(self) -> bool:
        return self.result == RESULT_SUCCESS

    def argument(self, key: str, default: Any = None) -> Any:
        """Reads one entry of the argument map, tolerating its absence."""
        if self.arguments is None:
            return default
        return self.arguments.get(key, default)

    def with_result(self, result: str) -> "Response":
        return replace(self, result=result)

    def __str__(self) -> str:
        args = dict(self.arguments) if self.arguments is not None else None
        return f"Response(result={self.result!r}, arguments={args}, tag={self.tag!r})"


def encode(
    method: str,
    arguments: Optional[Mapping[str, Any]] = None,
    tag: Optional[str] = None,
) -> dict[str, Any]:
    """Encodes a call into its wire payload."""
    return Request(method, arguments=arguments, tag=tag).to_payload()


def decode(payload: Any) -> Response:
    """
    Decodes a wire payload into a Response.

    Raises:
        MalformedResponseError: If the payload is not a response envelope.
    """
    if not isinstance(payload, dict):
        raise MalformedResponseError(
            f"Expected a JSON object, got {type(payload).__name__}."
        )

    result = payload.get("result")
    if not isinstance(result, str):
        raise MalformedResponseError(
            "Response envelope has no string 'result' field."
        )

    arguments = payload.get("arguments")
    if arguments is not None and not isinstance(arguments, dict):
        raise MalformedResponseError("Response 'arguments' must be a JSON object.")

    tag = payload.get("tag")
    if tag is not None:
        tag = str(tag)

    return Response(result, arguments=arguments, tag=tag)
