# -*- coding: utf-8 -*-
"""Constants module."""

from enum import Enum
from typing import Mapping

NS: Mapping[str, str] = {
    "soap_envelope": "http://schemas.xmlsoap.org/soap/envelope/",
    "control": "urn:schemas-upnp-org:control-1-0",
}

SOAP_ENCODING_STYLE = "http://schemas.xmlsoap.org/soap/encoding/"

AVTRANSPORT_SERVICE_TYPE = "urn:schemas-upnp-org:service:AVTransport:1"
AVTRANSPORT_CONTROL_PATH = "/MediaRenderer/AVTransport/Control"
DEFAULT_PORT = 1400

NOT_IMPLEMENTED = "NOT_IMPLEMENTED"

# DIDL-Lite descriptors understood by Sonos players.
RINCON_METADATA_NS = "urn:schemas-rinconnetworks-com:metadata-1-0/"
RADIO_SERVICE_TYPE = "65031"
SPOTIFY_SERVICE_DESCRIPTOR = "SA_RINCON2311_X_#Svc2311-0-Token"
TUNE_IN_STREAM_URI_FMT = "x-sonosapi-stream:s{radio_id}?sid=254&flags=32"
SPOTIFY_TRACK_URI_FMT = "x-sonos-spotify:spotify%3atrack%3a{spotify_id}"


class SeekUnit(Enum):
    """Seek modes, valued with their wire string."""

    TRACK_NR = "TRACK_NR"
    REL_TIME = "REL_TIME"
    TIME_DELTA = "TIME_DELTA"


class PlayMode(Enum):
    """Play modes, valued with their wire string."""

    NORMAL = "NORMAL"
    REPEAT_ALL = "REPEAT_ALL"
    REPEAT_ONE = "REPEAT_ONE"
    SHUFFLE_NOREPEAT = "SHUFFLE_NOREPEAT"
    SHUFFLE = "SHUFFLE"
    SHUFFLE_REPEAT_ONE = "SHUFFLE_REPEAT_ONE"


class ItemClass(Enum):
    """UPnP item classes, valued with their wire string."""

    MUSIC_TRACK = "object.item.audioItem.musicTrack"
    STREAM = "object.item.audioItem.audioBroadcast"
