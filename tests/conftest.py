# -*- coding: utf-8 -*-
"""Test fixtures and test requester."""

import asyncio
from collections import deque
from copy import deepcopy
from typing import Deque, List, Mapping, MutableMapping, Optional, Tuple, cast

import defusedxml.ElementTree as DET

from async_avtransport.client import UpnpRequester
from async_avtransport.const import AVTRANSPORT_SERVICE_TYPE

CONTROL_URL = "http://sonos:1400/MediaRenderer/AVTransport/Control"

ResponseType = Tuple[int, Mapping[str, str], str]


def soap_response(action_name: str, args: Mapping[str, str]) -> str:
    """Build a SOAP response body for action_name."""
    args_xml = "".join(f"<{name}>{value}</{name}>" for name, value in args.items())
    return (
        '<?xml version="1.0"?>'
        '<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/"'
        ' s:encodingStyle="http://schemas.xmlsoap.org/soap/encoding/">'
        "<s:Body>"
        f'<u:{action_name}Response xmlns:u="{AVTRANSPORT_SERVICE_TYPE}">'
        f"{args_xml}"
        f"</u:{action_name}Response>"
        "</s:Body>"
        "</s:Envelope>"
    )


def soap_fault(error_code: int, error_description: str) -> str:
    """Build a SOAP fault body."""
    return (
        '<?xml version="1.0"?>'
        '<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/"'
        ' s:encodingStyle="http://schemas.xmlsoap.org/soap/encoding/">'
        "<s:Body>"
        "<s:Fault>"
        "<faultcode>s:Client</faultcode>"
        "<faultstring>UPnPError</faultstring>"
        "<detail>"
        '<UPnPError xmlns="urn:schemas-upnp-org:control-1-0">'
        f"<errorCode>{error_code}</errorCode>"
        f"<errorDescription>{error_description}</errorDescription>"
        "</UPnPError>"
        "</detail>"
        "</s:Fault>"
        "</s:Body>"
        "</s:Envelope>"
    )


class UpnpTestRequester(UpnpRequester):
    """Test requester, responses are keyed by (method, url, action)."""

    # pylint: disable=too-few-public-methods

    def __init__(
        self,
        response_map: Mapping[Tuple[str, str, str], ResponseType],
        delays: Optional[Mapping[str, float]] = None,
    ) -> None:
        """Class initializer."""
        self.response_map: MutableMapping[Tuple[str, str, str], ResponseType] = (
            deepcopy(cast(MutableMapping, response_map))
        )
        self.delays = delays or {}
        self.exceptions: Deque[Optional[Exception]] = deque()
        self.requests: List[Tuple[str, str, Mapping[str, str], str]] = []

    async def async_http_request(
        self,
        method: str,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[str] = None,
    ) -> Tuple[int, Mapping, str]:
        """Do a HTTP request."""
        headers = headers or {}
        action = headers.get("SOAPAction", "").strip('"').split("#")[-1]
        self.requests.append((method, url, headers, body or ""))

        await asyncio.sleep(self.delays.get(action, 0.01))

        if self.exceptions:
            exception = self.exceptions.popleft()
            if exception is not None:
                raise exception

        key = (method, url, action)
        if key not in self.response_map:
            raise KeyError(f"Request not in response map: {key}")

        return self.response_map[key]

    def request_args(self, index: int = -1) -> List[Tuple[str, str]]:
        """Get the (name, value) pairs of the action element of a sent request."""
        body = self.requests[index][3]
        xml = DET.fromstring(body)
        action_xml = xml.find(".//{http://schemas.xmlsoap.org/soap/envelope/}Body")[0]
        return [(arg.tag, arg.text or "") for arg in action_xml]


def ok(action_name: str, args: Optional[Mapping[str, str]] = None) -> ResponseType:
    """HTTP 200 response for action_name."""
    return 200, {}, soap_response(action_name, args or {})


RESPONSE_MAP: Mapping[Tuple[str, str, str], ResponseType] = {
    ("POST", CONTROL_URL, "Stop"): ok("Stop"),
    ("POST", CONTROL_URL, "Pause"): ok("Pause"),
    ("POST", CONTROL_URL, "Play"): ok("Play"),
    ("POST", CONTROL_URL, "Next"): ok("Next"),
    ("POST", CONTROL_URL, "Previous"): ok("Previous"),
    ("POST", CONTROL_URL, "Seek"): ok("Seek"),
    ("POST", CONTROL_URL, "RemoveAllTracksFromQueue"): ok(
        "RemoveAllTracksFromQueue"
    ),
    ("POST", CONTROL_URL, "RemoveTrackFromQueue"): ok("RemoveTrackFromQueue"),
    ("POST", CONTROL_URL, "SetPlayMode"): ok("SetPlayMode"),
    ("POST", CONTROL_URL, "SetAVTransportURI"): ok("SetAVTransportURI"),
    ("POST", CONTROL_URL, "AddURIToQueue"): ok(
        "AddURIToQueue",
        {
            "FirstTrackNumberEnqueued": "4",
            "NumTracksAdded": "1",
            "NewQueueLength": "4",
        },
    ),
    ("POST", CONTROL_URL, "GetMediaInfo"): ok(
        "GetMediaInfo",
        {
            "NrTracks": "12",
            "MediaDuration": "NOT_IMPLEMENTED",
            "CurrentURI": "x-rincon-queue:RINCON_000E58A0123401400#0",
            "CurrentURIMetaData": "",
            "NextURI": "",
            "NextURIMetaData": "",
            "PlayMedium": "NETWORK",
            "RecordMedium": "NOT_IMPLEMENTED",
            "WriteStatus": "NOT_IMPLEMENTED",
        },
    ),
    ("POST", CONTROL_URL, "GetPositionInfo"): ok(
        "GetPositionInfo",
        {
            "Track": "3",
            "TrackDuration": "0:04:12",
            "TrackMetaData": "",
            "TrackURI": "x-file-cifs://server/music/track.flac",
            "RelTime": "0:01:05",
            "AbsTime": "NOT_IMPLEMENTED",
            "RelCount": "2147483647",
            "AbsCount": "2147483647",
        },
    ),
    ("POST", CONTROL_URL, "GetTransportInfo"): ok(
        "GetTransportInfo",
        {
            "CurrentTransportState": "PLAYING",
            "CurrentTransportStatus": "OK",
            "CurrentSpeed": "1",
        },
    ),
    ("POST", CONTROL_URL, "GetTransportSettings"): ok(
        "GetTransportSettings",
        {"PlayMode": "SHUFFLE_NOREPEAT", "RecQualityMode": "NOT_IMPLEMENTED"},
    ),
}
