# -*- coding: utf-8 -*-
"""Exceptions raised by async_avtransport."""

import asyncio
from enum import IntEnum
from typing import Any, Optional, Union
from xml.etree import ElementTree as ET

import aiohttp
from defusedxml import DefusedXmlException

# pylint: disable=too-many-ancestors


class UpnpError(Exception):
    """UpnpError."""


class UpnpInvalidArgumentError(UpnpError, ValueError):
    """Caller supplied an argument which violates a precondition.

    Raised before any request is sent to the device.
    """

    def __init__(self, name: str, value: Any, message: Optional[str] = None) -> None:
        """Initialize."""
        super().__init__(message or f"Invalid value for {name}: '{value}'")
        self.name = name
        self.value = value


class UpnpContentError(UpnpError):
    """Content of UPnP response is invalid."""


class UpnpDecodeError(UpnpContentError):
    """A success response could not be decoded into its result model."""

    def __init__(self, field: str, message: Optional[str] = None) -> None:
        """Initialize."""
        super().__init__(message or f"Unable to decode field: {field}")
        self.field = field


class UpnpCommunicationError(UpnpError, aiohttp.ClientError):
    """Error occurred while communicating with the UPnP device ."""


class UpnpXmlParseError(UpnpCommunicationError, ET.ParseError):
    """UPnP response is not valid XML, or XML refused by defusedxml."""

    def __init__(self, orig_err: Union[ET.ParseError, DefusedXmlException]) -> None:
        """Initialize from original ParseError, to match it."""
        super().__init__(str(orig_err))
        self.code = getattr(orig_err, "code", None)
        self.position = getattr(orig_err, "position", None)


class UpnpResponseError(UpnpCommunicationError):
    """HTTP error code returned by the UPnP device."""

    def __init__(
        self,
        status: int,
        headers: Optional[aiohttp.typedefs.LooseHeaders] = None,
        message: Optional[str] = None,
    ) -> None:
        """Initialize."""
        super().__init__(message or f"Did not receive HTTP 2xx but {status}")
        self.status = status
        self.headers = headers


class UpnpClientResponseError(aiohttp.ClientResponseError, UpnpResponseError):
    """HTTP response error with more details from aiohttp."""


class UpnpConnectionError(UpnpCommunicationError, aiohttp.ClientConnectionError):
    """Error in the underlying connection to the UPnP device.

    This could indicate that the device is offline.
    """


class UpnpConnectionTimeoutError(
    UpnpConnectionError, aiohttp.ServerTimeoutError, asyncio.TimeoutError
):
    """Timeout while communicating with the device."""


class UpnpActionErrorCode(IntEnum):
    """Error codes for UPnP actions, including the AVTransport specific ones."""

    INVALID_ACTION = 401
    INVALID_ARGS = 402
    INVALID_VAR = 404
    ACTION_FAILED = 501
    ARGUMENT_VALUE_INVALID = 600
    ARGUMENT_VALUE_OUT_OF_RANGE = 601
    OPTIONAL_ACTION_NOT_IMPLEMENTED = 602
    OUT_OF_MEMORY = 603
    HUMAN_INTERVENTION_REQUIRED = 604
    STRING_ARGUMENT_TOO_LONG = 605
    TRANSITION_NOT_AVAILABLE = 701
    NO_CONTENTS = 702
    READ_ERROR = 703
    FORMAT_NOT_SUPPORTED_FOR_PLAYBACK = 704
    TRANSPORT_IS_LOCKED = 705
    WRITE_ERROR = 706
    MEDIA_IS_PROTECTED_OR_NOT_WRITABLE = 707
    FORMAT_NOT_SUPPORTED_FOR_RECORDING = 708
    MEDIA_IS_FULL = 709
    SEEK_MODE_NOT_SUPPORTED = 710
    ILLEGAL_SEEK_TARGET = 711
    PLAY_MODE_NOT_SUPPORTED = 712
    RECORD_QUALITY_NOT_SUPPORTED = 713
    ILLEGAL_MIME_TYPE = 714
    CONTENT_BUSY = 715
    RESOURCE_NOT_FOUND = 716
    PLAY_SPEED_NOT_SUPPORTED = 717
    INVALID_INSTANCE_ID = 718


class UpnpActionError(UpnpError):
    """The device answered with a SOAP fault.

    Error code and description are carried verbatim from the fault detail.
    """

    def __init__(
        self,
        error_code: Optional[int] = None,
        error_desc: Optional[str] = None,
        detail: Optional[str] = None,
        status: Optional[int] = None,
        message: Optional[str] = None,
    ) -> None:
        """Initialize."""
        # pylint: disable=too-many-arguments
        super().__init__(message or f"Error code {error_code}: {error_desc}")
        self.error_code = error_code
        self.error_desc = error_desc
        self.detail = detail
        self.status = status
