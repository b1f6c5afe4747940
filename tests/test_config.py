"""Tests for the configuration model, the INI config file and logging setup."""

import logging

import pytest
from pydantic import ValidationError
from rich.logging import RichHandler

from transmission_client import TransmissionClient
from transmission_client.exceptions import ConfigurationError
from transmission_client.models.config import DEFAULT_BASE_URL, ClientConfig
from transmission_client.storage.config_manager import ConfigManager
from transmission_client.utils.rpc_logger import LOGGER_NAME, RpcLogger, setup_logging


def test_defaults():
    config = ClientConfig()
    assert config.base_url == DEFAULT_BASE_URL
    assert config.endpoint == DEFAULT_BASE_URL
    assert not config.proxified
    assert config.verbose is False
    assert config.timeout is None


def test_empty_proxy_means_no_proxy():
    assert ClientConfig(proxy_url="").proxy_url is None


@pytest.mark.parametrize(
    "values",
    [
        {"base_url": "ftp://host/rpc"},
        {"base_url": "/transmission/rpc"},
        {"proxy_url": "proxy.local"},
        {"timeout": -1},
    ],
)
def test_invalid_values(values):
    with pytest.raises(ValidationError):
        ClientConfig(**values)


def test_load_config_from_ini(tmp_path):
    path = tmp_path / "client.ini"
    path.write_text(
        "[transmission]\n"
        "base_url = http://seedbox:9091/transmission/rpc\n"
        "proxy_url = https://cors.example/?u=\n"
        "verbose = yes\n"
        "timeout = 12.5\n",
        encoding="utf-8",
    )

    config = ConfigManager(path).load_config()

    assert config.base_url == "http://seedbox:9091/transmission/rpc"
    assert config.endpoint.startswith("https://cors.example/?u=http%3A%2F%2Fseedbox")
    assert config.verbose is True
    assert config.timeout == 12.5

    client = TransmissionClient.from_config(config)
    assert client.endpoint == config.endpoint


def test_overrides_take_precedence(tmp_path):
    path = tmp_path / "client.ini"
    path.write_text("[transmission]\nverbose = true\n", encoding="utf-8")

    config = ConfigManager(path).load_config({"verbose": False})

    assert config.verbose is False
    assert config.base_url == DEFAULT_BASE_URL


def test_save_then_load(tmp_path):
    path = tmp_path / "nested" / "client.ini"
    manager = ConfigManager(path)
    original = ClientConfig(
        base_url="http://10.0.0.2:9091/transmission/rpc", verbose=True, timeout=30
    )

    manager.save_config(original)

    assert ConfigManager(path).load_config() == original


@pytest.mark.parametrize(
    "content",
    [
        "[other]\nverbose = true\n",
        "[transmission]\nverbose = maybe\n",
        "[transmission]\nbase_url = not a url\n",
        "not an ini file",
    ],
)
def test_invalid_files(tmp_path, content):
    path = tmp_path / "client.ini"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        ConfigManager(path).load_config()


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        ConfigManager(tmp_path / "absent.ini").load_config()


def test_setup_logging_installs_one_rich_handler():
    logger = logging.getLogger(LOGGER_NAME)
    previous = list(logger.handlers), logger.level
    try:
        setup_logging(verbose=True)
        setup_logging(verbose=True)
        rich_handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
        assert len(rich_handlers) == 1
        assert logger.level == logging.DEBUG
    finally:
        logger.handlers, logger.level = previous


def test_verbose_rpc_logger_logs_bodies(caplog):
    logger = logging.getLogger(f"{LOGGER_NAME}.test")
    with caplog.at_level(logging.DEBUG, logger=logger.name):
        RpcLogger(logger, verbose=True).request_sent(
            "torrent-get", {"method": "torrent-get"}, attempt=1
        )
        RpcLogger(logger).request_sent("session-get", {"method": "session-get"}, 1)

    messages = [r.getMessage() for r in caplog.records]
    assert "[rpc_request_sent] method=torrent-get attempt=1" in messages
    assert any("rpc_request_body" in m and "torrent-get" in m for m in messages)
    assert not any("rpc_request_body" in m and "session-get" in m for m in messages)
