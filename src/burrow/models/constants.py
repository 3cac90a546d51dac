"""Shared constants for the models layer.

Defines the protocol enumerations and wire-level constants used across the
model, protocol, and transport modules. Placing them here avoids circular
dependencies between the layers.

See Also:
    [burrow.models.item][]: Uses [ItemType][burrow.models.constants.ItemType]
        to classify menu entries.
    [burrow.protocol.framing][]: Uses
        [GopherProtocol][burrow.models.constants.GopherProtocol] to select the
        framing strategy.
    [burrow.utils.transport][]: Uses [TlsPolicy][burrow.models.constants.TlsPolicy]
        to decide how a connection is established.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Final


CRLF: Final[str] = "\r\n"
"""Line terminator used on the wire (RFC 1436)."""

DEFAULT_PORT: Final[int] = 70
"""Well-known Gopher TCP port."""

FAKE_SELECTOR: Final[str] = "fake"
"""Selector conventionally used by informational (non-navigable) menu lines."""

NULL_HOSTNAME: Final[str] = "(NULL)"
"""Hostname conventionally used by informational (non-navigable) menu lines."""


class GopherProtocol(StrEnum):
    """Protocol variant spoken by a client.

    Selected once at client construction. The variant decides how query
    strings are generated and how a response stream is framed.

    Attributes:
        RFC1436: Original Gopher. Responses are read to end-of-stream with
            no header.
        GOPHER_PLUS: Gopher+ extension. Responses carry a status line
            (``+-1``, ``+-2``, ``+<size>`` or ``-<code>``) before the body and
            items may carry attribute blocks.
    """

    RFC1436 = "rfc1436"
    GOPHER_PLUS = "gopher+"


class TlsPolicy(StrEnum):
    """How a request negotiates TLS before any protocol bytes are sent.

    Attributes:
        DO_NOT_USE_TLS: Plaintext only; TLS is never attempted.
        PREFER_TLS: Attempt TLS first and fall back to plaintext on any
            connection-establishment failure.
        ONLY_TLS: Attempt TLS only; failures propagate to the caller.
    """

    DO_NOT_USE_TLS = "none"
    PREFER_TLS = "prefer"
    ONLY_TLS = "only"


class ItemType(StrEnum):
    """Gopher item type codes (RFC 1436 plus common and Gopher+ extensions).

    The value of each member is the single character that starts a menu
    line. Codes outside this enumeration map to ``UNKNOWN`` via
    [ItemType.from_code][burrow.models.constants.ItemType.from_code].
    """

    UNKNOWN = "?"
    TEXT = "0"
    MENU = "1"
    CCSO_NAMESERVER = "2"
    ERROR = "3"
    BINHEX_FILE = "4"
    DOS_FILE = "5"
    UUENCODED_FILE = "6"
    FULL_TEXT_SEARCH = "7"
    TELNET = "8"
    BINARY_FILE = "9"
    MIRROR = "+"
    GIF = "g"
    IMAGE = "I"
    TELNET_3270 = "T"
    DOC = "d"
    HTML = "h"
    INFO = "i"
    AUDIO = "s"
    PLUS_IMAGE = ":"
    PLUS_VIDEO = ";"
    PLUS_AUDIO = "<"

    @classmethod
    def from_code(cls, code: str) -> ItemType:
        """Return the member for *code*, or ``UNKNOWN`` if it is not recognized."""
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN
