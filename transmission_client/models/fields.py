"""
Default field selections for 'torrent-get' and 'session-get'.

Any field listed in the RPC documentation can be requested instead.
"""

DEFAULT_TORRENT_FIELDS = (
    "id",
    "name",
    "eta",
    "queuePosition",
    "downloadDir",
    "isFinished",
    "isStalled",
    "leftUntilDone",
    "metadataPercentComplete",
    "error",
    "errorString",
    "percentDone",
    "totalSize",
    "peersConnected",
    "sizeWhenDone",
    "status",
    "rateDownload",
    "rateUpload",
    "peersGettingFromUs",
    "peersSendingToUs",
)

DEFAULT_SESSION_FIELDS = (
    "alt-speed-enabled",
    "speed-limit-down-enabled",
    "speed-limit-up-enabled",
    "download-dir",
    "speed-limit-down",
    "speed-limit-up",
    "alt-speed-down",
    "alt-speed-up",
    "version",
)

# Value of 'ids' selecting torrents changed since the previous request
RECENTLY_ACTIVE = "recently-active"
