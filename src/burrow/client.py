"""
Async Gopher and Gopher+ client.

[GopherClient][burrow.client.GopherClient] composes the lower layers into the
public operations: download a menu, download an item, run a search, and
populate Gopher+ attributes for one item or a whole menu. Every operation
performs one independent exchange on a fresh connection; the client holds
only its read-only [ClientConfig][burrow.core.config.ClientConfig].

Transport failures are translated into the
[burrow.core.exceptions][burrow.core.exceptions] hierarchy:

* ``TimeoutError`` -> [GopherTimeoutError][burrow.core.exceptions.GopherTimeoutError]
* ``ssl.SSLError`` -> [TlsError][burrow.core.exceptions.TlsError]
* other ``OSError`` -> [ConnectivityError][burrow.core.exceptions.ConnectivityError]

Attribute population never mutates its input; it returns a new item or menu.

Examples:
    ```python
    from burrow import ClientConfig, GopherClient, GopherProtocol, GopherRequest

    client = GopherClient(ClientConfig(protocol=GopherProtocol.GOPHER_PLUS))
    menu = await client.download_menu(GopherRequest("gopher.floodgap.com"))
    for item in menu:
        print(item)

    menu = await client.populate_menu_attributes(menu)
    ```
"""

from __future__ import annotations

import ssl
from dataclasses import replace
from typing import TYPE_CHECKING

from burrow.core.config import ClientConfig
from burrow.core.exceptions import (
    ConfigurationError,
    ConnectivityError,
    GopherTimeoutError,
    ProtocolError,
    RequestError,
    TlsError,
)
from burrow.core.logger import Logger
from burrow.models.constants import GopherProtocol, TlsPolicy
from burrow.models.item import GopherItem, Menu, MenuItem, parse_menu_line
from burrow.models.request import GopherRequest
from burrow.protocol.attributes import (
    INFO_BLOCK,
    parse_attribute_blocks,
    split_menu_attribute_records,
)
from burrow.protocol.framing import build_response
from burrow.protocol.handler import GopherPlusHandler, ProtocolHandler, get_handler
from burrow.utils.transport import exchange


if TYPE_CHECKING:
    from pathlib import Path
    from typing import Any

    from burrow.models.response import GopherResponse


class GopherClient:
    """Gopher client bound to one protocol variant and default TLS policy.

    Args:
        config: Client settings; defaults to ``ClientConfig()`` (RFC 1436,
            plaintext, 30 s timeout).
        logger: Structured logger; defaults to ``Logger("burrow.client")``.

    See Also:
        [GopherRequest][burrow.models.request.GopherRequest]: Input of every
            download operation.
        [exchange()][burrow.utils.transport.exchange]: The transport
            primitive each operation calls once.
    """

    def __init__(self, config: ClientConfig | None = None, *, logger: Logger | None = None) -> None:
        self._config = config or ClientConfig()
        self._handler = get_handler(self._config.protocol)
        self._logger = logger or Logger("burrow.client")

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> GopherClient:
        """Create a client from a YAML configuration file."""
        return cls(ClientConfig.from_yaml(config_path))

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> GopherClient:
        """Create a client from a configuration dictionary."""
        return cls(ClientConfig.from_dict(config_dict))

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def protocol(self) -> GopherProtocol:
        return self._config.protocol

    @property
    def handler(self) -> ProtocolHandler:
        return self._handler

    # -- Public operations -------------------------------------------------

    async def download_menu(self, request: GopherRequest) -> Menu:
        """Fetch and parse the menu at *request*.

        Raises:
            ConnectivityError: The exchange failed.
            ProtocolError: A Gopher+ server answered with a failure status.
        """
        response = await self._send(request, self._handler.selector_string(request.selector))
        return self.parse_menu(response, request)

    async def download_item(self, request: GopherRequest) -> GopherResponse:
        """Fetch the resource at *request* without interpreting the body.

        Failure statuses are returned as-is; check
        [GopherResponse.is_error][burrow.models.response.GopherResponse.is_error].
        """
        return await self._send(request, self._handler.selector_string(request.selector))

    async def search(self, request: GopherRequest) -> Menu:
        """Submit ``request.query`` to the search server at ``request.selector``.

        Raises:
            RequestError: The request carries no query (nothing is sent).
        """
        if not request.query:
            raise RequestError("search requires a non-empty query")
        response = await self._send(
            request, self._handler.search_string(request.selector, request.query)
        )
        return self.parse_menu(response, request)

    async def populate_attributes(
        self, item: MenuItem, *, tls: TlsPolicy | None = None
    ) -> MenuItem:
        """Fetch the Gopher+ attribute blocks of *item*.

        Args:
            item: A navigable menu entry.
            tls: TLS policy override for this exchange.

        Returns:
            A copy of *item* carrying the parsed attributes.

        Raises:
            ConfigurationError: The client does not speak Gopher+ (nothing
                is sent).
            RequestError: *item* has no target (nothing is sent).
        """
        handler = self._require_gopher_plus("populate_attributes")
        request = self._target_of(item, tls)
        response = await self._send(request, handler.attribute_string(item.selector))
        self._raise_for_status(response, request)
        blocks = parse_attribute_blocks(response.text(), has_status_line=False)
        self._logger.debug(
            "attributes_populated",
            host=request.hostname,
            selector=request.selector,
            blocks=",".join(blocks),
        )
        return item.with_attributes(blocks)

    async def populate_menu_attributes(self, menu: Menu, *, tls: TlsPolicy | None = None) -> Menu:
        """Fetch the attribute blocks of every item of *menu* in one exchange.

        The server answers with one record per item, each opened by its
        ``+INFO`` block. Records are first assigned to the first unassigned
        item whose selector, hostname and port equal those in the ``INFO``
        descriptor; records left over then take the first unassigned item
        with the same selector. Records matching no item are logged and
        ignored; items without a record keep ``attributes=None``.

        Returns:
            A copy of *menu* whose items carry their attributes.

        Raises:
            ConfigurationError: The client does not speak Gopher+.
            RequestError: *menu* does not record where it was fetched from.
        """
        handler = self._require_gopher_plus("populate_menu_attributes")
        request = self._target_of(menu, tls)
        response = await self._send(request, handler.menu_attribute_string(menu.selector))
        self._raise_for_status(response, request)

        items = list(menu.items)
        records = [
            parse_attribute_blocks(record, has_status_line=False)
            for record in split_menu_attribute_records(response.text())
        ]
        targets = [parse_menu_line(blocks[INFO_BLOCK].descriptor).item for blocks in records]
        owners = _assign_records(items, targets)
        for blocks, target, index in zip(records, targets, owners, strict=True):
            if index is None:
                self._logger.debug(
                    "attribute_record_unmatched",
                    host=request.hostname,
                    selector=target.selector,
                )
                continue
            items[index] = items[index].with_attributes(blocks)

        self._logger.debug(
            "menu_attributes_populated",
            host=request.hostname,
            selector=request.selector,
            items=len(items),
            matched=sum(index is not None for index in owners),
        )
        return replace(menu, items=tuple(items))

    def parse_menu(self, response: GopherResponse, request: GopherRequest | None = None) -> Menu:
        """Parse an already-downloaded response as a menu.

        Raises:
            ProtocolError: The response carries a Gopher+ failure status.
        """
        self._raise_for_status(response, request)
        menu = self._handler.parse_menu(response, request)
        self._logger.debug("menu_parsed", items=len(menu), size=response.body_size)
        return menu

    # -- Internals ---------------------------------------------------------

    async def _send(self, request: GopherRequest, query: str) -> GopherResponse:
        """Run one exchange and frame the result."""
        policy = request.tls or self._config.tls
        target = f"{request.hostname}:{request.port}"
        try:
            result = await exchange(
                request.hostname,
                request.port,
                self._handler.encode(query),
                tls_policy=policy,
                timeout=self._config.timeout,
                chunk_size=self._config.chunk_size,
                verify_tls=self._config.verify_tls,
            )
        except TimeoutError as e:
            raise GopherTimeoutError(f"{target} timed out after {self._config.timeout}s") from e
        except ssl.SSLError as e:
            raise TlsError(f"TLS with {target} failed: {e}") from e
        except OSError as e:
            raise ConnectivityError(f"cannot reach {target}: {e}") from e
        except UnicodeError as e:
            # idna encoding of the hostname during name resolution
            raise ConnectivityError(f"cannot resolve {target}: {e}") from e

        response = build_response(result.raw, self._config.protocol, result.timing, result.tls_used)
        self._logger.debug(
            "response_received",
            host=request.hostname,
            port=request.port,
            selector=request.selector,
            tls=response.tls_used,
            size=response.response_size,
            status=response.status or None,
            total_ms=round(response.timing.total_duration, 1),
        )
        return response

    def _require_gopher_plus(self, operation: str) -> GopherPlusHandler:
        if not isinstance(self._handler, GopherPlusHandler):
            raise ConfigurationError(
                f"{operation} requires a Gopher+ client, configured protocol is {self.protocol}"
            )
        return self._handler

    @staticmethod
    def _target_of(item: GopherItem, tls: TlsPolicy | None) -> GopherRequest:
        try:
            return item.to_request(tls=tls)
        except ValueError as e:
            raise RequestError(str(e)) from e

    @staticmethod
    def _raise_for_status(response: GopherResponse, request: GopherRequest | None) -> None:
        if not response.is_error:
            return
        detail = response.text().strip().splitlines()
        where = f" for {request.selector!r}" if request is not None else ""
        message = f"server returned {response.status}{where}"
        if detail:
            message += f": {detail[0]}"
        raise ProtocolError(message, status=response.status)


def _location(item: MenuItem) -> tuple[str, str, int]:
    return (item.selector, item.hostname, item.port)


def _selector(item: MenuItem) -> str:
    return item.selector


def _assign_records(items: list[MenuItem], targets: list[MenuItem]) -> list[int | None]:
    """Menu index owning each attribute record, ``None`` when unmatched.

    Every exact (selector, hostname, port) match is assigned before any
    record falls back to matching on selector alone, so a record cannot take
    an item that another record names exactly.
    """
    owners: list[int | None] = [None] * len(targets)
    taken = [False] * len(items)
    for key in (_location, _selector):
        for record, target in enumerate(targets):
            if owners[record] is not None:
                continue
            wanted = key(target)
            for index, item in enumerate(items):
                if not taken[index] and key(item) == wanted:
                    owners[record] = index
                    taken[index] = True
                    break
    return owners
