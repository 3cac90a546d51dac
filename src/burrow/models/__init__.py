"""Pure frozen dataclasses with zero I/O for Gopher requests, menus, and responses.

The models layer is the foundation of the diamond DAG. It depends on no other
burrow package; only the standard library and ``rfc3986`` (for URI parsing).
Every model uses ``@dataclass(frozen=True, slots=True)`` and validates in
``__post_init__`` so invalid instances never escape the constructor.

Attributes:
    GopherRequest: Hostname, port, selector, optional query and optional TLS
        override for one request. Built directly or from a Gopher URI.
    GopherResponse: Raw byte stream plus its framed header and body, the
        protocol used, timing checkpoints, and whether TLS was used.
    GopherTimingInfo: Four monotonic checkpoints of an exchange and the
        durations derived from them.
    GopherItem: Identity shared by menu entries and menus.
    MenuItem: One parsed menu line, never rejected for being malformed.
    Menu: Ordered menu entries plus the location the menu came from.
    ItemAttributes: One named Gopher+ attribute block.
    GopherProtocol: ``rfc1436`` or ``gopher+``.
    TlsPolicy: ``none``, ``prefer`` or ``only``.
    ItemType: Known item type codes with an ``UNKNOWN`` fallback.

Note:
    Models use ``object.__setattr__`` in ``__post_init__`` to store frozen
    copies of mapping fields.

See Also:
    [burrow.protocol][]: Framing, attribute parsing, and query strings.
    [burrow.client][]: Async client that produces these models.
"""

from .constants import (
    CRLF,
    DEFAULT_PORT,
    FAKE_SELECTOR,
    NULL_HOSTNAME,
    GopherProtocol,
    ItemType,
    TlsPolicy,
)
from .item import (
    GopherItem,
    ItemAttributes,
    Menu,
    MenuItem,
    ParsedMenuLine,
    parse_menu_line,
    split_menu_lines,
)
from .request import GopherRequest, parse_gopher_uri
from .response import GopherResponse, GopherTimingInfo


__all__ = [
    "CRLF",
    "DEFAULT_PORT",
    "FAKE_SELECTOR",
    "NULL_HOSTNAME",
    "GopherItem",
    "GopherProtocol",
    "GopherRequest",
    "GopherResponse",
    "GopherTimingInfo",
    "ItemAttributes",
    "ItemType",
    "Menu",
    "MenuItem",
    "ParsedMenuLine",
    "TlsPolicy",
    "parse_gopher_uri",
    "parse_menu_line",
    "split_menu_lines",
]
