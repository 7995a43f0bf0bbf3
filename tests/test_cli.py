"""Unit tests for the command line client."""

import json
from unittest.mock import AsyncMock, patch

import pytest

from async_avtransport.avtransport import QueueItemId
from async_avtransport.cli import async_main, parser
from async_avtransport.exceptions import UpnpActionError
from async_avtransport.responses import GetTransportInfoResponse


def test_parse_args() -> None:
    """Test parsing global options and a command."""
    args = parser.parse_args(
        ["--port", "1443", "sonos.local", "seek", "REL_TIME", "0:01:00"]
    )
    assert args.host == "sonos.local"
    assert args.port == 1443
    assert args.command == "seek"
    assert args.unit == "REL_TIME"
    assert args.target == "0:01:00"

    args = parser.parse_args(["sonos.local", "add-uri", "http://x/a.mp3", "--next"])
    assert args.port == 1400
    assert args.position == 0
    assert args.next is True


def test_parse_args_invalid_play_mode() -> None:
    """Test an unknown play mode is rejected by the parser."""
    with pytest.raises(SystemExit):
        parser.parse_args(["sonos.local", "play-mode", "PARTY"])


@pytest.mark.asyncio
async def test_query_prints_json(capsys: pytest.CaptureFixture) -> None:
    """Test a query prints its result as JSON."""
    service = AsyncMock()
    service.async_get_transport_info.return_value = GetTransportInfoResponse(
        "PLAYING", "OK", "1"
    )
    with patch(
        "async_avtransport.cli.AvTransportService.from_host", return_value=service
    ) as from_host:
        args = parser.parse_args(["192.168.1.20", "transport-info"])
        assert await async_main(args) == 0

    assert from_host.call_args[0][1:] == ("192.168.1.20", 1400)
    output = json.loads(capsys.readouterr().out)
    assert output == {
        "current_transport_state": "PLAYING",
        "current_transport_status": "OK",
        "current_speed": "1",
    }


@pytest.mark.asyncio
async def test_command_without_result(capsys: pytest.CaptureFixture) -> None:
    """Test a command without result prints nothing."""
    service = AsyncMock()
    service.async_remove_track_from_queue.return_value = None
    with patch(
        "async_avtransport.cli.AvTransportService.from_host", return_value=service
    ):
        args = parser.parse_args(["192.168.1.20", "remove", "Q:0/2"])
        assert await async_main(args) == 0

    service.async_remove_track_from_queue.assert_awaited_once_with(QueueItemId("Q:0/2"))
    assert capsys.readouterr().out == ""


@pytest.mark.asyncio
async def test_command_error() -> None:
    """Test a failing command results in exit code 1."""
    service = AsyncMock()
    service.async_next_track.side_effect = UpnpActionError(
        error_code=701, error_desc="Transition not available"
    )
    with patch(
        "async_avtransport.cli.AvTransportService.from_host", return_value=service
    ):
        args = parser.parse_args(["192.168.1.20", "next"])
        assert await async_main(args) == 1
