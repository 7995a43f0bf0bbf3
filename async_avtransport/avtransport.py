# -*- coding: utf-8 -*-
"""AVTransport control module."""

import logging
import random
from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any, Callable, NamedTuple, Optional, Sequence, Union

import voluptuous as vol

from async_avtransport.client import UpnpActionInvoker, UpnpArgument, UpnpRequester
from async_avtransport.const import (
    AVTRANSPORT_SERVICE_TYPE,
    DEFAULT_PORT,
    SPOTIFY_TRACK_URI_FMT,
    TUNE_IN_STREAM_URI_FMT,
    PlayMode,
    SeekUnit,
)
from async_avtransport.didl import html_encode, radio_metadata, spotify_track_metadata
from async_avtransport.exceptions import UpnpInvalidArgumentError
from async_avtransport.responses import (
    AddUriToQueueResponse,
    GetMediaInfoResponse,
    GetPositionInfoResponse,
    GetTransportInfoResponse,
    GetTransportSettingsResponse,
    decode_response,
)
from async_avtransport.utils import build_control_url, time_to_str

_LOGGER = logging.getLogger(__name__)


class QueueItemId(NamedTuple):
    """Reference to an item in the queue of the device."""

    object_id: str


_NON_NEGATIVE_INT = vol.All(int, vol.Range(min=0))
_TRACK_NUMBER = vol.All(int, vol.Range(min=1))


def _validate(name: str, validator: Callable[[Any], Any], value: Any) -> Any:
    """Validate an argument before anything is sent to the device."""
    try:
        return vol.Schema(validator)(value)
    except vol.Invalid as err:
        raise UpnpInvalidArgumentError(name, value) from err


class AvTransport(ABC):
    """Transport controls of a media renderer."""

    @abstractmethod
    async def async_stop(self) -> None:
        """Stop playback."""

    @abstractmethod
    async def async_pause(self) -> None:
        """Pause playback."""

    @abstractmethod
    async def async_play(self, speed: int = 1) -> None:
        """Start playback."""

    @abstractmethod
    async def async_next_track(self) -> None:
        """Go to the next track."""

    @abstractmethod
    async def async_previous_track(self) -> None:
        """Go to the previous track."""

    @abstractmethod
    async def async_seek(self, unit: Union[SeekUnit, str], target: str) -> None:
        """
        Seek.

        REL_TIME targets are formatted as H:MM:SS, TRACK_NR targets are
        track numbers.
        """

    @abstractmethod
    async def async_clear_queue(self) -> None:
        """Remove all tracks from the queue."""

    @abstractmethod
    async def async_remove_track_from_queue(self, queue_item_id: QueueItemId) -> None:
        """Remove a single track from the queue."""

    @abstractmethod
    async def async_add_track_to_queue(
        self,
        enqueued_uri: str,
        desired_first_track_number_enqueued: int = 0,
        enqueue_as_next: bool = False,
    ) -> AddUriToQueueResponse:
        """Add a URI to the queue."""

    @abstractmethod
    async def async_set_play_mode(self, play_mode: Union[PlayMode, str]) -> None:
        """Set the play mode."""

    @abstractmethod
    async def async_get_media_info(self) -> GetMediaInfoResponse:
        """Get information about the current media."""

    @abstractmethod
    async def async_get_position_info(self) -> GetPositionInfoResponse:
        """Get information about the current track and position."""

    @abstractmethod
    async def async_get_transport_info(self) -> GetTransportInfoResponse:
        """Get the state of the transport."""

    @abstractmethod
    async def async_get_transport_settings(self) -> GetTransportSettingsResponse:
        """Get the play mode of the transport."""

    @abstractmethod
    async def async_set_media_url(self, url: str) -> None:
        """Set the URL of a stream to play."""

    @abstractmethod
    async def async_set_tune_in_radio(self, radio_id: int) -> None:
        """Set a TuneIn radio station to play."""


class AvTransportService(AvTransport):
    """AVTransport service of a (Sonos) media renderer, over SOAP."""

    # pylint: disable=too-many-public-methods

    def __init__(
        self,
        requester: UpnpRequester,
        control_url: str,
        service_type: str = AVTRANSPORT_SERVICE_TYPE,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize.

        :param requester Requester to do the HTTP requests with
        :param control_url Full URL to the control endpoint of the service
        :param service_type Service type, used as action namespace
        :param rng Random source, used for queue item ids of Spotify tracks
        """
        self.invoker = UpnpActionInvoker(requester)
        self.control_url = control_url
        self.service_type = service_type
        self._rng = rng or random.Random()

    @classmethod
    def from_host(
        cls,
        requester: UpnpRequester,
        host: str,
        port: int = DEFAULT_PORT,
        rng: Optional[random.Random] = None,
    ) -> "AvTransportService":
        """Create for a device at host."""
        return cls(requester, build_control_url(host, port), rng=rng)

    async def _async_call(
        self, action_name: str, arguments: Sequence[UpnpArgument] = ()
    ) -> str:
        return await self.invoker.async_call(
            self.control_url, self.service_type, action_name, arguments
        )

    async def _async_query(
        self, action_name: str, arguments: Sequence[UpnpArgument] = ()
    ) -> Any:
        body = await self._async_call(action_name, arguments)
        return decode_response(action_name, self.service_type, body)

    async def async_stop(self) -> None:
        """Stop playback."""
        await self._async_call("Stop")

    async def async_pause(self) -> None:
        """Pause playback."""
        await self._async_call("Pause")

    async def async_play(self, speed: int = 1) -> None:
        """Start playback."""
        speed = _validate("Speed", int, speed)
        await self._async_call("Play", [UpnpArgument.create("Speed", speed)])

    async def async_next_track(self) -> None:
        """Go to the next track."""
        await self._async_call("Next")

    async def async_previous_track(self) -> None:
        """Go to the previous track."""
        await self._async_call("Previous")

    async def async_seek(self, unit: Union[SeekUnit, str], target: str) -> None:
        """Seek, to a position (REL_TIME) or a track (TRACK_NR)."""
        seek_unit = _validate("Unit", vol.Coerce(SeekUnit), unit)
        target = _validate("Target", str, target)
        await self._async_call(
            "Seek",
            [
                UpnpArgument.create("Unit", seek_unit),
                UpnpArgument.create("Target", target),
            ],
        )

    async def async_seek_rel_time(self, time: timedelta) -> None:
        """Seek to a position in the current track."""
        await self.async_seek(SeekUnit.REL_TIME, time_to_str(time))

    async def async_seek_track(self, track_number: int) -> None:
        """Seek to a track in the queue, track numbers start at 1."""
        track_number = _validate("Target", _TRACK_NUMBER, track_number)
        await self.async_seek(SeekUnit.TRACK_NR, str(track_number))

    async def async_clear_queue(self) -> None:
        """Remove all tracks from the queue."""
        await self._async_call("RemoveAllTracksFromQueue")

    async def async_remove_track_from_queue(self, queue_item_id: QueueItemId) -> None:
        """Remove a single track from the queue."""
        await self._async_call(
            "RemoveTrackFromQueue",
            [UpnpArgument.create("ObjectID", queue_item_id.object_id)],
        )

    async def async_add_track_to_queue(
        self,
        enqueued_uri: str,
        desired_first_track_number_enqueued: int = 0,
        enqueue_as_next: bool = False,
    ) -> AddUriToQueueResponse:
        """
        Add a URI to the queue.

        :param enqueued_uri URI to add
        :param desired_first_track_number_enqueued 0 to add at the end of the
            queue, otherwise the position in the queue
        :param enqueue_as_next Play as next track, only works in SHUFFLE modes
        """
        desired_first_track_number_enqueued = _validate(
            "DesiredFirstTrackNumberEnqueued",
            _NON_NEGATIVE_INT,
            desired_first_track_number_enqueued,
        )
        result: AddUriToQueueResponse = await self._async_query(
            "AddURIToQueue",
            [
                UpnpArgument.create("EnqueuedURI", enqueued_uri),
                UpnpArgument.create("EnqueuedURIMetaData", ""),
                UpnpArgument.create(
                    "DesiredFirstTrackNumberEnqueued",
                    desired_first_track_number_enqueued,
                ),
                UpnpArgument.create("EnqueueAsNext", enqueue_as_next),
            ],
        )
        return result

    async def async_add_spotify_track_to_queue(
        self, spotify_id: str
    ) -> AddUriToQueueResponse:
        """
        Add a Spotify track to the end of the queue.

        The track metadata is built and encoded, but not sent:
        EnqueuedURIMetaData stays empty.
        """
        rand_number = self._rng.randrange(10000000, 99999999)
        uri = SPOTIFY_TRACK_URI_FMT.format(spotify_id=spotify_id)
        metadata = html_encode(spotify_track_metadata(spotify_id, rand_number))
        _LOGGER.debug("Not sending metadata for %s: %s", uri, metadata)
        return await self.async_add_track_to_queue(uri)

    async def async_set_play_mode(self, play_mode: Union[PlayMode, str]) -> None:
        """Set the play mode."""
        new_play_mode = _validate("NewPlayMode", vol.Coerce(PlayMode), play_mode)
        await self._async_call(
            "SetPlayMode", [UpnpArgument.create("NewPlayMode", new_play_mode)]
        )

    async def async_get_media_info(self) -> GetMediaInfoResponse:
        """Get information about the current media."""
        result: GetMediaInfoResponse = await self._async_query("GetMediaInfo")
        return result

    async def async_get_position_info(self) -> GetPositionInfoResponse:
        """Get information about the current track and position."""
        result: GetPositionInfoResponse = await self._async_query("GetPositionInfo")
        return result

    async def async_get_transport_info(self) -> GetTransportInfoResponse:
        """Get the state of the transport."""
        result: GetTransportInfoResponse = await self._async_query("GetTransportInfo")
        return result

    async def async_get_transport_settings(self) -> GetTransportSettingsResponse:
        """Get the play mode of the transport."""
        result: GetTransportSettingsResponse = await self._async_query(
            "GetTransportSettings"
        )
        return result

    async def _async_set_transport_uri(self, uri: str) -> None:
        await self._async_call(
            "SetAVTransportURI",
            [
                UpnpArgument.create("InstanceID", 0),
                UpnpArgument.create("CurrentURI", uri),
                UpnpArgument.create("CurrentURIMetaData", radio_metadata()),
            ],
        )

    async def async_set_media_url(self, url: str) -> None:
        """Set the URL of a stream to play."""
        await self._async_set_transport_uri(url)

    async def async_set_tune_in_radio(self, radio_id: int) -> None:
        """Set a TuneIn radio station to play."""
        radio_id = _validate("radio_id", _NON_NEGATIVE_INT, radio_id)
        await self._async_set_transport_uri(
            TUNE_IN_STREAM_URI_FMT.format(radio_id=radio_id)
        )
