"""Unit tests for utils."""

from datetime import timedelta

import pytest
from voluptuous import Invalid

from async_avtransport.utils import (
    build_control_url,
    duration,
    str_to_time,
    time_to_str,
)


@pytest.mark.parametrize(
    "time, expected",
    [
        (timedelta(0), "0:00:00"),
        (timedelta(seconds=65), "0:01:05"),
        (timedelta(hours=1, minutes=2, seconds=3), "1:02:03"),
        (timedelta(hours=12, seconds=59, milliseconds=900), "12:00:59"),
        (-timedelta(minutes=1, seconds=30), "-0:01:30"),
    ],
)
def test_time_to_str(time: timedelta, expected: str) -> None:
    """Test time_to_str."""
    assert time_to_str(time) == expected


def test_str_to_time() -> None:
    """Test string to time parsing."""
    assert str_to_time("0:0:10") == timedelta(hours=0, minutes=0, seconds=10)
    assert str_to_time("0:10:0") == timedelta(hours=0, minutes=10, seconds=0)
    assert str_to_time("10:0:0") == timedelta(hours=10, minutes=0, seconds=0)

    assert str_to_time("0:0:10.10") == timedelta(
        hours=0, minutes=0, seconds=10, milliseconds=10
    )

    assert str_to_time("+0:0:10") == timedelta(hours=0, minutes=0, seconds=10)
    assert str_to_time("-0:0:10") == timedelta(hours=0, minutes=0, seconds=-10)

    assert str_to_time("") is None
    assert str_to_time(" ") is None
    assert str_to_time("NOT_IMPLEMENTED") is None


def test_duration() -> None:
    """Test the duration validator."""
    assert duration("0:03:25") == "0:03:25"
    assert duration("NOT_IMPLEMENTED") == "NOT_IMPLEMENTED"

    with pytest.raises(Invalid):
        duration("three minutes")
    with pytest.raises(Invalid):
        duration(205)


def test_build_control_url() -> None:
    """Test building the control URL."""
    assert (
        build_control_url("192.168.1.20")
        == "http://192.168.1.20:1400/MediaRenderer/AVTransport/Control"
    )
    assert (
        build_control_url("sonos.local", 8080)
        == "http://sonos.local:8080/MediaRenderer/AVTransport/Control"
    )
    assert (
        build_control_url("fe80::1")
        == "http://[fe80::1]:1400/MediaRenderer/AVTransport/Control"
    )
