# -*- coding: utf-8 -*-
"""Utils for async_avtransport."""

import re
from datetime import timedelta
from typing import Any, Optional

from voluptuous import Invalid

from async_avtransport.const import (
    AVTRANSPORT_CONTROL_PATH,
    DEFAULT_PORT,
    NOT_IMPLEMENTED,
)

_DURATION_RE = re.compile(
    r"(?P<sign>[-+])?(?P<h>\d+):(?P<m>\d+):(?P<s>\d+)(\.(?P<ms>\d+))?$"
)


def time_to_str(time: timedelta) -> str:
    """Convert timedelta to H:MM:SS, as used by Seek targets."""
    total_seconds = abs(time.total_seconds())
    target = {
        "sign": "-" if time.total_seconds() < 0 else "",
        "hours": int(total_seconds // 3600),
        "minutes": int(total_seconds % 3600 // 60),
        "seconds": int(total_seconds % 60),
    }
    return "{sign}{hours}:{minutes:02}:{seconds:02}".format(**target)


def str_to_time(string: str) -> Optional[timedelta]:
    """Convert a string to timedelta."""
    match = _DURATION_RE.match(string)
    if not match:
        return None

    sign = -1 if match.group("sign") == "-" else 1
    hours = int(match.group("h"))
    minutes = int(match.group("m"))
    seconds = int(match.group("s"))
    if match.group("ms"):
        msec = int(match.group("ms"))
    else:
        msec = 0
    return sign * timedelta(
        hours=hours, minutes=minutes, seconds=seconds, milliseconds=msec
    )


def duration(value: Any) -> str:
    """Validate a duration formatted string, e.g. 0:03:25 or NOT_IMPLEMENTED."""
    if not isinstance(value, str):
        raise Invalid("Expected a duration string")
    if value != NOT_IMPLEMENTED and str_to_time(value) is None:
        raise Invalid(f"Invalid duration: {value}")
    return value


def build_control_url(host: str, port: int = DEFAULT_PORT) -> str:
    """Build the AVTransport control URL for a device at host."""
    if ":" in host and not host.startswith("["):
        host = f"[{host}]"
    return f"http://{host}:{port}{AVTRANSPORT_CONTROL_PATH}"
