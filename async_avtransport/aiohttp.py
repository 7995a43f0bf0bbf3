# -*- coding: utf-8 -*-
"""aiohttp requester module."""

import asyncio
import logging
from typing import Any, Callable, Mapping, Optional, Tuple

import aiohttp
import async_timeout

from async_avtransport.client import UpnpRequester
from async_avtransport.exceptions import (
    UpnpClientResponseError,
    UpnpCommunicationError,
    UpnpConnectionError,
    UpnpConnectionTimeoutError,
)

_LOGGER_TRAFFIC_UPNP = logging.getLogger("async_avtransport.traffic.upnp")


def _format_headers(headers: Mapping[str, str]) -> str:
    return "\n".join([key + ": " + value for key, value in headers.items()])


async def _async_do_request(
    request: Callable[[], Any],
    timeout: float,
) -> Tuple[int, Mapping[str, str], str]:
    """Perform the request and translate aiohttp errors."""
    try:
        async with async_timeout.timeout(timeout):
            async with request() as response:
                status = response.status
                resp_headers: Mapping = response.headers or {}
                resp_body = await response.read()

                _LOGGER_TRAFFIC_UPNP.debug(
                    "Got response:\n%s\n%s\n\n%s",
                    status,
                    _format_headers(resp_headers),
                    resp_body,
                )

                resp_body_text = await response.text()
    except asyncio.TimeoutError as err:
        raise UpnpConnectionTimeoutError(str(err)) from err
    except aiohttp.ClientConnectionError as err:
        raise UpnpConnectionError(str(err)) from err
    except aiohttp.ClientResponseError as err:
        raise UpnpClientResponseError(
            request_info=err.request_info,
            history=err.history,
            status=err.status,
            message=err.message,
            headers=err.headers,
        ) from err
    except aiohttp.ClientError as err:
        raise UpnpCommunicationError(str(err)) from err
    except UnicodeDecodeError as err:
        raise UpnpCommunicationError(str(err)) from err

    return status, resp_headers, resp_body_text


class AiohttpRequester(UpnpRequester):
    """Standard AiohttpRequester, opens a session per request."""

    # pylint: disable=too-few-public-methods

    def __init__(
        self, timeout: int = 5, http_headers: Optional[Mapping[str, str]] = None
    ) -> None:
        """Initialize."""
        self._timeout = timeout
        self._http_headers = http_headers or {}

    async def async_http_request(
        self,
        method: str,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[str] = None,
    ) -> Tuple[int, Mapping[str, str], str]:
        """Do a HTTP request."""
        req_headers = {**self._http_headers, **(headers or {})}

        _LOGGER_TRAFFIC_UPNP.debug(
            "Sending request:\n%s %s\n%s\n%s\n",
            method,
            url,
            _format_headers(req_headers),
            body or "",
        )

        async with aiohttp.ClientSession() as session:
            return await _async_do_request(
                lambda: session.request(method, url, headers=req_headers, data=body),
                self._timeout,
            )


class AiohttpSessionRequester(UpnpRequester):
    """
    Standard AiohttpSessionRequester.

    With pluggable session, which may be shared between concurrent calls.
    Requests are not retried, a disconnect is raised as UpnpConnectionError.
    """

    # pylint: disable=too-few-public-methods

    def __init__(
        self,
        session: aiohttp.ClientSession,
        timeout: int = 5,
        http_headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        """Initialize."""
        self._session = session
        self._timeout = timeout
        self._http_headers = http_headers or {}

    async def async_http_request(
        self,
        method: str,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[str] = None,
    ) -> Tuple[int, Mapping[str, str], str]:
        """Do a HTTP request."""
        req_headers = {**self._http_headers, **(headers or {})}

        _LOGGER_TRAFFIC_UPNP.debug(
            "Sending request:\n%s %s\n%s\n%s\n",
            method,
            url,
            _format_headers(req_headers),
            body or "",
        )

        return await _async_do_request(
            lambda: self._session.request(method, url, headers=req_headers, data=body),
            self._timeout,
        )
