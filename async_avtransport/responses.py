# -*- coding: utf-8 -*-
"""Decoders for AVTransport action responses."""

import logging
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    Mapping,
    NamedTuple,
    Optional,
    Sequence,
    Type,
    TypeVar,
    Union,
)
from xml.etree import ElementTree as ET

import defusedxml.ElementTree as DET
from defusedxml import DefusedXmlException
import voluptuous as vol

from async_avtransport.const import PlayMode
from async_avtransport.didl import metadata_title
from async_avtransport.exceptions import UpnpDecodeError, UpnpXmlParseError
from async_avtransport.utils import duration

_LOGGER = logging.getLogger(__name__)


class AddUriToQueueResponse(NamedTuple):
    """Result of AddURIToQueue."""

    first_track_number_enqueued: int
    num_tracks_added: int
    new_queue_length: int


class GetMediaInfoResponse(NamedTuple):
    """Result of GetMediaInfo."""

    nr_tracks: int
    current_uri: str
    media_duration: str = ""
    current_uri_metadata: str = ""
    next_uri: str = ""
    next_uri_metadata: str = ""
    play_medium: str = ""
    record_medium: str = ""
    write_status: str = ""

    @property
    def current_title(self) -> Optional[str]:
        """Title of the current URI, from its metadata."""
        return metadata_title(self.current_uri_metadata)


class GetPositionInfoResponse(NamedTuple):
    """Result of GetPositionInfo."""

    track: int
    track_duration: str
    track_uri: str
    rel_time: str
    track_metadata: str = ""
    abs_time: str = ""
    rel_count: Optional[int] = None
    abs_count: Optional[int] = None

    @property
    def track_title(self) -> Optional[str]:
        """Title of the current track, from its metadata."""
        return metadata_title(self.track_metadata)


class GetTransportInfoResponse(NamedTuple):
    """Result of GetTransportInfo."""

    current_transport_state: str
    current_transport_status: str = ""
    current_speed: str = "1"


class GetTransportSettingsResponse(NamedTuple):
    """Result of GetTransportSettings."""

    play_mode: str
    rec_quality_mode: str = ""

    @property
    def play_mode_enum(self) -> Optional[PlayMode]:
        """Play mode as PlayMode, None if the device reports an unknown mode."""
        try:
            return PlayMode(self.play_mode)
        except ValueError:
            return None


class Field(NamedTuple):
    """A response field: wire name, model attribute, validator."""

    name: str
    attribute: str
    validator: Callable[[Any], Any]
    required: bool = True


def _optional(name: str, attribute: str, validator: Callable[[Any], Any]) -> Field:
    return Field(name, attribute, validator, False)


T = TypeVar("T")  # pylint: disable=invalid-name


class ResponseDecoder(Generic[T]):
    """Decodes the response of a single action into its model."""

    def __init__(
        self, action_name: str, model: Type[T], fields: Sequence[Field]
    ) -> None:
        """Initialize."""
        self.action_name = action_name
        self.model = model
        self.fields = fields

        schema: Dict[Any, Callable[[Any], Any]] = {}
        for field in fields:
            if field.required:
                schema[vol.Required(field.name)] = field.validator
            else:
                schema[vol.Optional(field.name)] = field.validator
        self._schema = vol.Schema(schema, extra=vol.REMOVE_EXTRA)

    @property
    def response_name(self) -> str:
        """Name of the response element."""
        return f"{self.action_name}Response"

    def decode(self, service_type: str, xml: Union[str, ET.Element]) -> T:
        """Decode a response body (or parsed envelope) into the model."""
        if isinstance(xml, str):
            try:
                xml = DET.fromstring(xml.strip(" \t\r\n\0"))
            except (ET.ParseError, DefusedXmlException) as err:
                _LOGGER.debug("Unable to parse XML: %s\nXML:\n%s", err, xml)
                raise UpnpXmlParseError(err) from err

        query = f".//{{{service_type}}}{self.response_name}"
        response = xml.find(query)
        if response is None and xml.tag == f"{{{service_type}}}{self.response_name}":
            response = xml
        if response is None:
            raise UpnpDecodeError(
                self.response_name, f"Invalid response, missing {self.response_name}"
            )

        values: Dict[str, str] = {}
        for arg_xml in response:
            # possibly namespaced arguments, use the local name
            name = arg_xml.tag.split("}")[-1]
            values[name] = arg_xml.text or ""

        try:
            data = self._schema(values)
        except vol.MultipleInvalid as err:
            field = str(err.path[0]) if err.path else self.response_name
            _LOGGER.debug("Could not decode %s: %s", self.response_name, err)
            raise UpnpDecodeError(
                field, f"Invalid response for {self.action_name}, {field}: {err.msg}"
            ) from err

        # missing optional fields keep the model default
        kwargs = {
            field.attribute: data[field.name]
            for field in self.fields
            if field.name in data
        }
        return self.model(**kwargs)


_INT = vol.Coerce(int)

DECODERS: Mapping[str, ResponseDecoder] = {
    decoder.action_name: decoder
    for decoder in (
        ResponseDecoder(
            "AddURIToQueue",
            AddUriToQueueResponse,
            [
                Field("FirstTrackNumberEnqueued", "first_track_number_enqueued", _INT),
                Field("NumTracksAdded", "num_tracks_added", _INT),
                Field("NewQueueLength", "new_queue_length", _INT),
            ],
        ),
        ResponseDecoder(
            "GetMediaInfo",
            GetMediaInfoResponse,
            [
                Field("NrTracks", "nr_tracks", _INT),
                _optional("MediaDuration", "media_duration", duration),
                Field("CurrentURI", "current_uri", str),
                _optional("CurrentURIMetaData", "current_uri_metadata", str),
                _optional("NextURI", "next_uri", str),
                _optional("NextURIMetaData", "next_uri_metadata", str),
                _optional("PlayMedium", "play_medium", str),
                _optional("RecordMedium", "record_medium", str),
                _optional("WriteStatus", "write_status", str),
            ],
        ),
        ResponseDecoder(
            "GetPositionInfo",
            GetPositionInfoResponse,
            [
                Field("Track", "track", _INT),
                Field("TrackDuration", "track_duration", duration),
                _optional("TrackMetaData", "track_metadata", str),
                Field("TrackURI", "track_uri", str),
                Field("RelTime", "rel_time", duration),
                _optional("AbsTime", "abs_time", duration),
                _optional("RelCount", "rel_count", _INT),
                _optional("AbsCount", "abs_count", _INT),
            ],
        ),
        ResponseDecoder(
            "GetTransportInfo",
            GetTransportInfoResponse,
            [
                Field("CurrentTransportState", "current_transport_state", str),
                _optional("CurrentTransportStatus", "current_transport_status", str),
                _optional("CurrentSpeed", "current_speed", str),
            ],
        ),
        ResponseDecoder(
            "GetTransportSettings",
            GetTransportSettingsResponse,
            [
                Field("PlayMode", "play_mode", str),
                _optional("RecQualityMode", "rec_quality_mode", str),
            ],
        ),
    )
}


def decode_response(
    action_name: str, service_type: str, xml: Union[str, ET.Element]
) -> Any:
    """Decode the response of action_name using its registered decoder."""
    try:
        decoder = DECODERS[action_name]
    except KeyError as err:
        raise UpnpDecodeError(action_name, f"No decoder for {action_name}") from err
    return decoder.decode(service_type, xml)
