"""Protocol variants: query-string generation and menu parsing.

Each [GopherProtocol][burrow.models.constants.GopherProtocol] has a handler
that knows how to phrase requests for it. Both handlers share menu parsing;
only the Gopher+ handler can phrase attribute requests.

Examples:
    ```python
    handler = get_handler(GopherProtocol.GOPHER_PLUS)
    handler.selector_string("/docs")         # '/docs\\t+\\r\\n'
    handler.attribute_string("/docs")        # '/docs\\t!\\r\\n'
    ```
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

from burrow.models.constants import CRLF, GopherProtocol
from burrow.models.item import Menu, parse_menu_line, split_menu_lines


if TYPE_CHECKING:
    from burrow.models.request import GopherRequest
    from burrow.models.response import GopherResponse


logger = logging.getLogger("burrow.protocol")


class ProtocolHandler(ABC):
    """Common interface of the protocol variants."""

    protocol: ClassVar[GopherProtocol]

    @abstractmethod
    def selector_string(self, selector: str) -> str:
        """Query string that requests *selector*."""

    @abstractmethod
    def search_string(self, selector: str, query: str) -> str:
        """Query string that submits *query* to the search server at *selector*."""

    def encode(self, query: str) -> bytes:
        """Encode a query string for the wire."""
        return query.encode("utf-8")

    def parse_menu(self, response: GopherResponse, request: GopherRequest | None = None) -> Menu:
        """Parse a framed menu response.

        The body is decoded, trimmed, and split into lines. Malformed lines
        are kept in degraded form and logged.

        Args:
            response: Response whose body is a menu.
            request: Request the menu was fetched with; recorded as the
                menu's own location.
        """
        parsed = [parse_menu_line(line) for line in split_menu_lines(response.text().strip())]
        for index, line in enumerate(parsed):
            if not line.well_formed:
                logger.debug(
                    "menu_line_degraded index=%d issues=%s line=%r",
                    index,
                    ",".join(line.issues),
                    line.item.original,
                )

        if request is None:
            return Menu.from_lines(parsed)
        return Menu.from_lines(
            parsed,
            hostname=request.hostname,
            port=request.port,
            selector=request.selector,
        )


class Rfc1436Handler(ProtocolHandler):
    """Plain RFC 1436 Gopher."""

    protocol = GopherProtocol.RFC1436

    def selector_string(self, selector: str) -> str:
        return f"{selector}{CRLF}"

    def search_string(self, selector: str, query: str) -> str:
        return f"{selector}\t{query}{CRLF}"


class GopherPlusHandler(ProtocolHandler):
    """Gopher+: every request carries a trailing ``+`` field or an attribute marker."""

    protocol = GopherProtocol.GOPHER_PLUS

    def selector_string(self, selector: str) -> str:
        return f"{selector}\t+{CRLF}"

    def search_string(self, selector: str, query: str) -> str:
        return f"{selector}\t{query}\t+{CRLF}"

    def attribute_string(self, selector: str) -> str:
        """Query string asking for the attribute blocks of one item."""
        return f"{selector}\t!{CRLF}"

    def menu_attribute_string(self, selector: str) -> str:
        """Query string asking for the attribute blocks of every item in a menu."""
        return f"{selector}\t${CRLF}"


_HANDLERS: dict[GopherProtocol, type[ProtocolHandler]] = {
    GopherProtocol.RFC1436: Rfc1436Handler,
    GopherProtocol.GOPHER_PLUS: GopherPlusHandler,
}


def get_handler(protocol: GopherProtocol) -> ProtocolHandler:
    """Return a handler for *protocol*.

    Raises:
        ValueError: If *protocol* is not a known variant.
    """
    try:
        return _HANDLERS[GopherProtocol(protocol)]()
    except (KeyError, ValueError):
        raise ValueError(f"unsupported protocol: {protocol!r}") from None
