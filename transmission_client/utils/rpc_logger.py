"""
Event logging for RPC traffic, plus console logging setup for applications.
"""

import logging
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.pretty import pretty_repr

LOGGER_NAME = "transmission_client"


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """
    Routes the library's log records to a rich console handler.

    Meant for applications and scripts; the library never calls it itself.

    Args:
        verbose: Log at DEBUG instead of INFO.
        console: Console to print to, a new stderr console by default.
    """
    handler = RichHandler(
        console=console or Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    logger = logging.getLogger(LOGGER_NAME)
    for existing in list(logger.handlers):
        if isinstance(existing, RichHandler):
            logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


class RpcLogger:
    """
    Logs RPC events as '[event] key=value' lines.

    Usage:
        rpc_log = RpcLogger(logging.getLogger(__name__), verbose=True)
        rpc_log.request_sent("torrent-get", payload, attempt=1)
    """

    def __init__(self, logger: logging.Logger, verbose: bool = False):
        self._logger = logger
        self.verbose = verbose

    def _format_message(self, event: str, **context: Any) -> str:
        parts = [f"[{event}]"]
        for key, value in context.items():
            parts.append(f"{key}={value}")
        return " ".join(parts)

    def _body(self, event: str, body: Any) -> None:
        if self.verbose:
            self._logger.info(f"[{event}]\n{pretty_repr(body, max_width=100)}")

    def request_sent(self, method: str, payload: dict[str, Any], attempt: int) -> None:
        self._logger.debug(
            self._format_message("rpc_request_sent", method=method, attempt=attempt)
        )
        self._body("rpc_request_body", payload)

    def response_received(
        self, method: str, status: int, body: Any, duration_ms: float
    ) -> None:
        self._logger.debug(
            self._format_message(
                "rpc_response_received",
                method=method,
                status=status,
                duration_ms=round(duration_ms, 2),
            )
        )
        self._body("rpc_response_body", body)

    def session_rejected(self, method: str, attempt: int) -> None:
        self._logger.debug(
            self._format_message("rpc_session_rejected", method=method, attempt=attempt)
        )

    def request_failed(self, method: str, error: str) -> None:
        self._logger.debug(
            self._format_message("rpc_request_failed", method=method, error=error)
        )
