# -*- coding: utf-8 -*-
"""DIDL-Lite metadata for queue and stream URIs."""

import logging
from typing import Optional
from xml.etree import ElementTree as ET
from xml.sax.saxutils import escape

from defusedxml import DefusedXmlException
from didl_lite import didl_lite

from async_avtransport.const import (
    NOT_IMPLEMENTED,
    RADIO_SERVICE_TYPE,
    RINCON_METADATA_NS,
    SPOTIFY_SERVICE_DESCRIPTOR,
    ItemClass,
)
from async_avtransport.exceptions import UpnpError

_LOGGER = logging.getLogger(__name__)

_HTML_ENTITIES = {'"': "&quot;", "'": "&#39;"}


def _build_item(
    item_class: ItemClass,
    item_id: str,
    title: str,
    descriptor_text: str,
    parent_id: str = "",
) -> str:
    didl_item_type = didl_lite.type_by_upnp_class(item_class.value)
    if not didl_item_type:
        raise UpnpError(f"Unknown DIDL-lite type: {item_class.value}")

    descriptor = didl_lite.Descriptor(
        id="cdudn", name_space=RINCON_METADATA_NS, text=descriptor_text
    )
    item = didl_item_type(
        id=item_id,
        parent_id=parent_id,
        title=title,
        restricted="true",
        descriptors=[descriptor],
    )
    xml_string: bytes = didl_lite.to_xml_string(item)
    return xml_string.decode("utf-8")


def radio_metadata(item_ref: str = "", service_type: str = RADIO_SERVICE_TYPE) -> str:
    """Build the metadata for a radio/stream URI, as used by SetAVTransportURI."""
    return _build_item(
        ItemClass.STREAM,
        f"F00092020s{item_ref}",
        "tunein",
        f"SA_RINCON{service_type}_",
        parent_id="L",
    )


def spotify_track_metadata(spotify_id: str, rand_number: int) -> str:
    """Build the metadata for a Spotify track, item id prefixed by rand_number."""
    return _build_item(
        ItemClass.MUSIC_TRACK,
        f"{rand_number}spotify%3atrack%3a{spotify_id}",
        "",
        SPOTIFY_SERVICE_DESCRIPTOR,
    )


def html_encode(metadata: str) -> str:
    """Entity-encode a metadata document."""
    return escape(metadata, _HTML_ENTITIES)


def metadata_title(metadata: Optional[str]) -> Optional[str]:
    """Get the title of the first item in a DIDL-Lite document, None if unreadable."""
    if not metadata or metadata == NOT_IMPLEMENTED:
        return None

    try:
        items = didl_lite.from_xml_string(metadata, strict=False)
    except (ET.ParseError, DefusedXmlException) as err:
        _LOGGER.debug("Unable to parse metadata: %s\nXML:\n%s", err, metadata)
        return None
    if not items:
        _LOGGER.debug("No items in metadata")
        return None

    title: Optional[str] = getattr(items[0], "title", None)
    return title
