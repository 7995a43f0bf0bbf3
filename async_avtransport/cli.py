# -*- coding: utf-8 -*-
"""CLI AVTransport client module."""
# pylint: disable=invalid-name

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Optional, Sequence

from async_avtransport.aiohttp import AiohttpRequester
from async_avtransport.avtransport import AvTransportService, QueueItemId
from async_avtransport.const import DEFAULT_PORT, PlayMode, SeekUnit
from async_avtransport.exceptions import UpnpError

logging.basicConfig()
_LOGGER = logging.getLogger("avtransport-client")
_LOGGER.setLevel(logging.ERROR)
_LOGGER_LIB = logging.getLogger("async_avtransport")
_LOGGER_LIB.setLevel(logging.ERROR)
_LOGGER_TRAFFIC = logging.getLogger("async_avtransport.traffic")
_LOGGER_TRAFFIC.setLevel(logging.ERROR)


parser = argparse.ArgumentParser(description="avtransport_client")
parser.add_argument("--debug", action="store_true", help="Show debug messages")
parser.add_argument("--debug-traffic", action="store_true", help="Show network traffic")
parser.add_argument(
    "--pprint", action="store_true", help="Pretty-print (indent) JSON output"
)
parser.add_argument("--timeout", type=int, help="Timeout for connection", default=5)
parser.add_argument("--port", type=int, help="Port of device", default=DEFAULT_PORT)
parser.add_argument("host", help="Host or IP of the device")
subparsers = parser.add_subparsers(title="Command", dest="command")
subparsers.required = True

subparsers.add_parser("stop", help="Stop playback")
subparsers.add_parser("pause", help="Pause playback")
subparser = subparsers.add_parser("play", help="Start playback")
subparser.add_argument("speed", type=int, nargs="?", default=1)
subparsers.add_parser("next", help="Next track")
subparsers.add_parser("previous", help="Previous track")
subparser = subparsers.add_parser("seek", help="Seek")
subparser.add_argument("unit", choices=[unit.value for unit in SeekUnit])
subparser.add_argument("target", help="H:MM:SS or track number")
subparsers.add_parser("clear-queue", help="Remove all tracks from queue")
subparser = subparsers.add_parser("remove", help="Remove track from queue")
subparser.add_argument("object_id", help="Object ID of queue item, e.g. Q:0/3")
subparser = subparsers.add_parser("add-uri", help="Add URI to queue")
subparser.add_argument("uri")
subparser.add_argument("--position", type=int, default=0, help="0 for end of queue")
subparser.add_argument("--next", action="store_true", help="Enqueue as next")
subparser = subparsers.add_parser("play-mode", help="Set play mode")
subparser.add_argument("mode", choices=[mode.value for mode in PlayMode])
subparsers.add_parser("media-info", help="Get media info")
subparsers.add_parser("position-info", help="Get position info")
subparsers.add_parser("transport-info", help="Get transport info")
subparsers.add_parser("transport-settings", help="Get transport settings")
subparser = subparsers.add_parser("set-url", help="Set stream URL")
subparser.add_argument("url")
subparser = subparsers.add_parser("tune-in", help="Play TuneIn radio station")
subparser.add_argument("radio_id", type=int)


async def call_command(service: AvTransportService, args: argparse.Namespace) -> Any:
    """Call the service for the given command, return the result, if any."""
    # pylint: disable=too-many-return-statements, too-many-branches
    command = args.command
    if command == "stop":
        return await service.async_stop()
    if command == "pause":
        return await service.async_pause()
    if command == "play":
        return await service.async_play(args.speed)
    if command == "next":
        return await service.async_next_track()
    if command == "previous":
        return await service.async_previous_track()
    if command == "seek":
        return await service.async_seek(args.unit, args.target)
    if command == "clear-queue":
        return await service.async_clear_queue()
    if command == "remove":
        return await service.async_remove_track_from_queue(QueueItemId(args.object_id))
    if command == "add-uri":
        return await service.async_add_track_to_queue(
            args.uri, args.position, args.next
        )
    if command == "play-mode":
        return await service.async_set_play_mode(args.mode)
    if command == "media-info":
        return await service.async_get_media_info()
    if command == "position-info":
        return await service.async_get_position_info()
    if command == "transport-info":
        return await service.async_get_transport_info()
    if command == "transport-settings":
        return await service.async_get_transport_settings()
    if command == "set-url":
        return await service.async_set_media_url(args.url)
    if command == "tune-in":
        return await service.async_set_tune_in_radio(args.radio_id)

    raise UpnpError(f"Unknown command: {command}")


async def async_main(args: argparse.Namespace) -> int:
    """Async main."""
    if args.debug:
        _LOGGER.setLevel(logging.DEBUG)
        _LOGGER_LIB.setLevel(logging.DEBUG)
        _LOGGER_TRAFFIC.setLevel(logging.INFO)
    if args.debug_traffic:
        _LOGGER_TRAFFIC.setLevel(logging.DEBUG)

    requester = AiohttpRequester(args.timeout)
    service = AvTransportService.from_host(requester, args.host, args.port)
    try:
        result = await call_command(service, args)
    except UpnpError as err:
        _LOGGER.error("Error calling %s: %s", args.command, err)
        return 1

    if result is not None:
        pprint_indent = 4 if args.pprint else None
        print(json.dumps(result._asdict(), indent=pprint_indent))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Parse arguments and run the main program."""
    args = parser.parse_args(argv)
    try:
        sys.exit(asyncio.run(async_main(args)))
    except KeyboardInterrupt:
        _LOGGER.debug("KeyboardInterrupt")


if __name__ == "__main__":
    main()
