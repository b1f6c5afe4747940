"""
Pydantic model for client configuration.
Provides validation for the connection settings.
"""

from typing import Optional
from urllib.parse import quote, urlparse

from pydantic import BaseModel, field_validator

DEFAULT_BASE_URL = "http://localhost:9091/transmission/rpc"


def _validate_http_url(value: str, name: str) -> str:
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"{name} must be an absolute http(s) URL, got: {value!r}")
    return value


class ClientConfig(BaseModel):
    """A validated configuration model for the RPC client."""

    base_url: str = DEFAULT_BASE_URL
    # Requests go to proxy_url + the percent-encoded base_url when set
    proxy_url: Optional[str] = None
    verbose: bool = False
    # Total seconds per HTTP exchange; None leaves it unbounded
    timeout: Optional[float] = None

    class Config:
        """Pydantic model configuration."""

        validate_assignment = True
        str_strip_whitespace = True

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        return _validate_http_url(v, "Base URL")

    @field_validator("proxy_url")
    @classmethod
    def validate_proxy_url(cls, v: Optional[str]) -> Optional[str]:
        """Treats an empty proxy as no proxy."""
        if not v:
            return None
        return _validate_http_url(v, "Proxy URL")

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError("Timeout must be a positive number of seconds.")
        return v

    @property
    def endpoint(self) -> str:
        """The URL every RPC request is posted to."""
        if self.proxy_url is None:
            return self.base_url
        return self.proxy_url + quote(self.base_url, safe="")

    @property
    def proxified(self) -> bool:
        return self.proxy_url is not None

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns the set of keys that are expected in the INI file."""
        return set(cls.model_fields)
