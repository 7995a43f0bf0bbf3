# -*- coding: utf-8 -*-
"""UPnP action invocation module."""

import logging
import urllib.parse
from abc import ABC
from enum import Enum
from typing import Any, Mapping, NamedTuple, Optional, Sequence, Tuple, Union
from xml.etree import ElementTree as ET
from xml.sax.saxutils import escape

import defusedxml.ElementTree as DET
from defusedxml import DefusedXmlException

from async_avtransport.const import NS, SOAP_ENCODING_STYLE
from async_avtransport.exceptions import (
    UpnpActionError,
    UpnpInvalidArgumentError,
    UpnpResponseError,
    UpnpXmlParseError,
)

_LOGGER = logging.getLogger(__name__)
_LOGGER_TRAFFIC_UPNP = logging.getLogger("async_avtransport.traffic.upnp")


class UpnpRequester(ABC):
    """
    Abstract base class used for performing async HTTP requests.

    Implement method async_http_request() in your concrete class.
    """

    # pylint: disable=too-few-public-methods

    async def async_http_request(
        self,
        method: str,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[str] = None,
    ) -> Tuple[int, Mapping[str, str], str]:
        """
        Do a HTTP request.

        :param method HTTP Method
        :param url URL to call
        :param headers Headers to send
        :param body Body to send

        :return status code, headers, body
        """
        raise NotImplementedError()


class UpnpArgument(NamedTuple):
    """Argument of an action, value is in wire form."""

    name: str
    value: str

    @classmethod
    def create(cls, name: str, value: Any) -> "UpnpArgument":
        """Create an argument from a Python value."""
        return cls(name, marshal_value(value, name))


def marshal_value(value: Any, name: str = "value") -> str:
    """
    Coerce a Python value to its wire string.

    Strings are passed as-is, escaping happens when building the envelope.
    """
    if isinstance(value, Enum):
        wire_value: str = value.value
        return wire_value
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value

    raise UpnpInvalidArgumentError(
        name, value, f"Unsupported type for {name}: {type(value).__name__}"
    )


class ActionRequest(NamedTuple):
    """A to-be-sent action invocation."""

    control_url: str
    service_type: str
    action_name: str
    arguments: Tuple[UpnpArgument, ...] = ()

    @property
    def soap_action(self) -> str:
        """Get the value for the SOAPAction header."""
        return f"{self.service_type}#{self.action_name}"

    def create_request(self) -> Tuple[str, Mapping[str, str], str]:
        """Create url, headers and body for this action."""
        body = build_envelope(self.service_type, self.action_name, self.arguments)
        headers = {
            "SOAPAction": f'"{self.soap_action}"',
            "Host": urllib.parse.urlparse(self.control_url).netloc,
            "Content-Type": 'text/xml; charset="utf-8"',
            "Content-Length": str(len(body.encode("utf-8"))),
        }
        return self.control_url, headers, body


class ActionSuccess(NamedTuple):
    """Successful action outcome, carrying the raw response body."""

    body: str


class ActionFault(NamedTuple):
    """Action outcome when the device answered with a SOAP fault."""

    error_code: int
    error_description: Optional[str]
    detail: Optional[str] = None
    status: Optional[int] = None


ActionOutcome = Union[ActionSuccess, ActionFault]


def build_envelope(
    service_type: str, action_name: str, arguments: Sequence[UpnpArgument]
) -> str:
    """Build the SOAP envelope for an action, arguments are kept in order."""
    soap_args = "".join(
        f"<{arg.name}>{escape(arg.value)}</{arg.name}>" for arg in arguments
    )
    return (
        f'<?xml version="1.0"?>'
        f'<s:Envelope s:encodingStyle="{SOAP_ENCODING_STYLE}"'
        f' xmlns:s="{NS["soap_envelope"]}">'
        f"<s:Body>"
        f'<u:{action_name} xmlns:u="{service_type}">'
        f"{soap_args}"
        f"</u:{action_name}>"
        f"</s:Body>"
        f"</s:Envelope>"
    )


def parse_fault(xml: ET.Element, status_code: int) -> Optional[ActionFault]:
    """
    Parse a SOAP fault, if any.

    A fault without a UPnP errorCode raises UpnpResponseError.
    """
    fault = xml.find(".//soap_envelope:Body/soap_envelope:Fault", NS)
    if fault is None:
        return None

    error_code_str = fault.findtext(".//control:errorCode", None, NS)
    try:
        error_code = int(error_code_str or "")
    except ValueError as err:
        fault_string = fault.findtext("faultstring", "")
        raise UpnpResponseError(
            status=status_code,
            message=f"SOAP fault without valid UPnP error code: "
            f"{error_code_str!r} ({fault_string})",
        ) from err
    error_desc = fault.findtext(".//control:errorDescription", None, NS)

    detail_xml = fault.find("detail")
    detail = (
        ET.tostring(detail_xml, encoding="unicode") if detail_xml is not None else None
    )
    return ActionFault(error_code, error_desc, detail, status_code)


def _parse_xml(body: str) -> ET.Element:
    try:
        xml: ET.Element = DET.fromstring(body.strip(" \t\r\n\0"))
    except (ET.ParseError, DefusedXmlException) as err:
        _LOGGER.debug("Unable to parse XML: %s\nXML:\n%s", err, body)
        raise UpnpXmlParseError(err) from err
    return xml


class UpnpActionInvoker:
    """Invokes actions on a UPnP service using a UpnpRequester."""

    # pylint: disable=too-few-public-methods

    def __init__(self, requester: UpnpRequester) -> None:
        """Initialize."""
        self.requester = requester

    async def async_invoke(
        self,
        control_url: str,
        service_type: str,
        action_name: str,
        arguments: Sequence[UpnpArgument] = (),
    ) -> ActionOutcome:
        """
        Invoke an action.

        Transport failures are raised as UpnpCommunicationError, a fault
        from the device is returned as ActionFault.
        """
        request = ActionRequest(
            control_url, service_type, action_name, tuple(arguments)
        )
        url, headers, body = request.create_request()
        (
            status_code,
            response_headers,
            response_body,
        ) = await self.requester.async_http_request("POST", url, headers, body)
        _LOGGER_TRAFFIC_UPNP.debug(
            "%s returned %s with body %s", action_name, status_code, response_body
        )

        if not isinstance(response_body, str):
            raise UpnpResponseError(
                status=status_code,
                headers=response_headers,
                message="Did not receive a body",
            )

        if 200 <= status_code < 300:
            if not response_body.strip(" \t\r\n\0"):
                return ActionSuccess(response_body)

            # Not all devices send an HTTP 500 status with a SOAP fault.
            fault = parse_fault(_parse_xml(response_body), status_code)
            if fault is not None:
                return fault
            return ActionSuccess(response_body)

        try:
            fault = parse_fault(_parse_xml(response_body), status_code)
        except UpnpXmlParseError:
            fault = None
        if fault is not None:
            return fault

        # Couldn't parse body for fault details, raise generic response error
        raise UpnpResponseError(
            status=status_code,
            headers=response_headers,
            message=f"Error during {action_name}, status: {status_code}, "
            f"body: {response_body}",
        )

    async def async_call(
        self,
        control_url: str,
        service_type: str,
        action_name: str,
        arguments: Sequence[UpnpArgument] = (),
    ) -> str:
        """Invoke an action, raise UpnpActionError on a fault, return the body."""
        outcome = await self.async_invoke(
            control_url, service_type, action_name, arguments
        )
        if isinstance(outcome, ActionFault):
            raise UpnpActionError(
                error_code=outcome.error_code,
                error_desc=outcome.error_description,
                detail=outcome.detail,
                status=outcome.status,
                message=f"Error during {action_name}, "
                f"upnp error: {outcome.error_code} ({outcome.error_description})",
            )

        return outcome.body
