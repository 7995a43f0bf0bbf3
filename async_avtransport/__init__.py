# -*- coding: utf-8 -*-
"""UPnP AVTransport module."""

from async_avtransport.avtransport import AvTransport  # noqa: F401
from async_avtransport.avtransport import AvTransportService  # noqa: F401
from async_avtransport.avtransport import QueueItemId  # noqa: F401
from async_avtransport.client import UpnpActionInvoker  # noqa: F401
from async_avtransport.client import UpnpArgument  # noqa: F401
from async_avtransport.client import UpnpRequester  # noqa: F401
from async_avtransport.const import ItemClass  # noqa: F401
from async_avtransport.const import PlayMode  # noqa: F401
from async_avtransport.const import SeekUnit  # noqa: F401
from async_avtransport.exceptions import UpnpActionError  # noqa: F401
from async_avtransport.exceptions import UpnpCommunicationError  # noqa: F401
from async_avtransport.exceptions import UpnpDecodeError  # noqa: F401
from async_avtransport.exceptions import UpnpError  # noqa: F401
from async_avtransport.exceptions import UpnpInvalidArgumentError  # noqa: F401
