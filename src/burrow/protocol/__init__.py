"""Gopher wire protocol: response framing, attribute parsing, query strings.

The protocol layer depends only on [burrow.models][burrow.models] and does no
I/O. It turns raw byte streams into framed responses and menus, and phrases
the query strings that [burrow.utils.transport][burrow.utils.transport]
writes to the wire.

Attributes:
    frame_response: Split a byte stream into Gopher+ status line and body.
    build_response: Frame a byte stream into a
        [GopherResponse][burrow.models.response.GopherResponse].
    parse_attribute_blocks: Parse Gopher+ ``+NAME:`` blocks.
    split_menu_attribute_records: Cut a menu-wide attribute body into
        per-item records.
    get_handler: Handler for a [GopherProtocol][burrow.models.constants.GopherProtocol].
"""

from burrow.protocol.attributes import (
    INFO_BLOCK,
    parse_attribute_blocks,
    split_menu_attribute_records,
)
from burrow.protocol.framing import FramedResponse, build_response, frame_response
from burrow.protocol.handler import (
    GopherPlusHandler,
    ProtocolHandler,
    Rfc1436Handler,
    get_handler,
)


__all__ = [
    "INFO_BLOCK",
    "FramedResponse",
    "GopherPlusHandler",
    "ProtocolHandler",
    "Rfc1436Handler",
    "build_response",
    "frame_response",
    "get_handler",
    "parse_attribute_blocks",
    "split_menu_attribute_records",
]
