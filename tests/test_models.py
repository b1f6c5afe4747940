"""Tests for the read-only torrent and session views and their formatting."""

import pytest

from transmission_client.models.session import SessionSettings
from transmission_client.models.torrent import (
    Torrent,
    TorrentLight,
    TorrentStatus,
    describe_status,
)
from transmission_client.utils.formatting import pretty_rate, pretty_size


@pytest.mark.parametrize(
    "size, decimals, expected",
    [
        (0, 2, "0 o"),
        (500, 2, "500 o"),
        (999, 2, "999 o"),
        (1500, 2, "1.50 Ko"),
        (2_000_000, 2, "2.00 Mo"),
        (3_000_000_000, 2, "3.00 Go"),
        (1_234_567, 1, "1.2 Mo"),
    ],
)
def test_pretty_size(size, decimals, expected):
    assert pretty_size(size, decimals=decimals) == expected


def test_pretty_rate_defaults_to_one_decimal():
    assert pretty_rate(1_500_000) == "1.5 Mo/s"


@pytest.mark.parametrize(
    "status, error, expected",
    [
        (0, 0, "Stopped"),
        (1, 0, "Check waiting"),
        (2, 0, "Checking"),
        (3, 0, "Download waiting"),
        (4, 0, "Downloading"),
        (5, 0, "Seed waiting"),
        (6, 0, "Seeding"),
        (4, 7, "Error"),
        (0, 3, "Error"),
        (99, 0, "Unknown"),
        (None, 0, "Unknown"),
    ],
)
def test_describe_status(status, error, expected):
    assert describe_status(status, error) == expected


def test_status_description_ignores_missing_error_field():
    assert Torrent({"status": TorrentStatus.SEEDING}).status_description == "Seeding"


def test_percentages_are_scaled():
    torrent = Torrent({"percentDone": 0.5, "metadataPercentComplete": 1.0})
    assert torrent.percent_done == 50.0
    assert torrent.metadata_percent_complete == 100.0
    assert torrent.is_metadata_downloaded


def test_partial_metadata_is_not_downloaded():
    torrent = Torrent({"metadataPercentComplete": 0.25})
    assert torrent.metadata_percent_complete == 25.0
    assert not torrent.is_metadata_downloaded
    assert Torrent({}).percent_done is None


def test_pretty_sizes_and_rates():
    torrent = Torrent(
        {
            "totalSize": 3_000_000_000,
            "leftUntilDone": 1_000_000_000,
            "rateDownload": 2_500_000,
            "rateUpload": 800,
        }
    )
    assert torrent.pretty_total_size == "3.00 Go"
    assert torrent.pretty_left_until_done == "1.00 Go"
    assert torrent.pretty_current_size == "2.00 Go"
    assert torrent.pretty_rate_download == "2.5 Mo/s"
    assert torrent.pretty_rate_upload == "800 o/s"


def test_torrent_accessors_and_raw_access():
    raw = {
        "id": 1,
        "name": "archlinux.iso",
        "hashString": "ab12",
        "downloadDir": "/data",
        "errorString": "",
        "isFinished": False,
        "isStalled": True,
        "eta": -1,
        "queuePosition": 2,
        "peersConnected": 10,
        "peersSendingToUs": 4,
        "peersGettingFromUs": 3,
        "sizeWhenDone": 100,
        "labels": ["linux"],
    }
    torrent = Torrent(raw)

    assert torrent.hash == "ab12"
    assert torrent.download_dir == "/data"
    assert torrent.is_stalled is True
    assert torrent.queue_position == 2
    assert torrent.peers_connected == 10
    assert torrent.peers_sending_to_us == 4
    assert torrent.peers_getting_from_us == 3
    assert torrent.size_when_done == 100
    assert torrent["labels"] == ["linux"]
    assert torrent.get("missing", "x") == "x"


def test_views_are_read_only_and_detached():
    raw = {"id": 1}
    torrent = Torrent(raw)
    raw["id"] = 2

    assert torrent.id == 1
    with pytest.raises(TypeError):
        torrent.rawdata["id"] = 3
    with pytest.raises(AttributeError):
        torrent.extra = True


def test_torrent_light():
    light = TorrentLight({"id": 9, "name": "x", "hashString": "h"})
    assert (light.id, light.name, light.hash) == (9, "x", "h")
    assert TorrentLight(None).id is None


def test_session_settings_mapping():
    settings = SessionSettings(
        {
            "version": "4.0.5 (a6fe2a64aa)",
            "download-dir": "/downloads",
            "speed-limit-down": 100,
            "speed-limit-down-enabled": True,
            "alt-speed-enabled": False,
        }
    )
    assert settings.version.startswith("4.0.5")
    assert settings.download_dir == "/downloads"
    assert settings.speed_limit_down == 100
    assert settings.speed_limit_down_enabled is True
    assert settings.alt_speed_enabled is False
    assert settings.speed_limit_up is None
    assert len(settings) == 5
    assert dict(settings)["download-dir"] == "/downloads"
