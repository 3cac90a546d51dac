"""
Gopher menu entries, menus, and Gopher+ attribute blocks.

A menu line has the form::

    <type><name>\\t<selector>\\t<hostname>\\t<port>[\\t<extra fields>]

[parse_menu_line][burrow.models.item.parse_menu_line] turns one line into a
[MenuItem][burrow.models.item.MenuItem] and reports which fields had to be
degraded; [Menu.parse][burrow.models.item.Menu.parse] applies it to every
line of a decoded menu body. Malformed lines never abort a menu: missing
fields become empty strings and a missing or invalid port becomes ``0``.

[ItemAttributes][burrow.models.item.ItemAttributes] holds one named Gopher+
attribute block (``+INFO``, ``+ADMIN``, ``+VIEWS`` ...). Items carry
``attributes=None`` until a separate attribute exchange populates them;
population returns a new item via
[with_attributes][burrow.models.item.GopherItem.with_attributes].

Note:
    ``Menu`` is itself a ``GopherItem``: it keeps the hostname, port, and
    selector it was fetched from, so a submenu link and the menu it leads to
    are handled the same way.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, NamedTuple, Self

from ._validation import deep_freeze, validate_instance, validate_mapping
from .constants import FAKE_SELECTOR, NULL_HOSTNAME, ItemType, TlsPolicy
from .request import GopherRequest


if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


_MENU_TERMINATOR = "."


@dataclass(frozen=True, slots=True)
class ItemAttributes:
    """One named Gopher+ attribute block.

    ``raw_lines`` and ``lines`` are two views of the same source lines:
    ``raw_lines`` keeps every content line verbatim (each followed by CRLF),
    ``lines`` keeps only the ``key: value`` pairs where both sides are
    non-empty after trimming.

    Attributes:
        name: Block name without the leading ``+`` (e.g. ``ADMIN``).
        descriptor: Trimmed text after ``+NAME:``.
        raw_lines: Content lines joined with CRLF terminators.
        lines: Read-only ``key -> value`` mapping.
    """

    name: str
    descriptor: str = ""
    raw_lines: str = ""
    lines: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        validate_instance(self.name, str, "name")
        validate_instance(self.descriptor, str, "descriptor")
        validate_instance(self.raw_lines, str, "raw_lines")
        validate_mapping(self.lines, "lines")
        object.__setattr__(self, "lines", deep_freeze(self.lines))


@dataclass(frozen=True, slots=True)
class GopherItem:
    """Identity shared by menu entries and menus.

    Attributes:
        type: Raw one-character type code (``?`` when unknown). Kept as the
            server sent it; see ``item_type`` for the enumerated view.
        name: Display name.
        selector: Selector of the target resource. ``fake`` marks
            informational lines.
        hostname: Target host. ``(NULL)`` marks informational lines.
        port: Target port, ``0`` meaning "no target".
        original: The unparsed source line, if any.
        attributes: Gopher+ attribute blocks keyed by name, or ``None`` when
            not populated.
    """

    type: str = ItemType.UNKNOWN.value
    name: str = ""
    selector: str = FAKE_SELECTOR
    hostname: str = ""
    port: int = 0
    original: str = ""
    attributes: Mapping[str, ItemAttributes] | None = None

    def __post_init__(self) -> None:
        validate_instance(self.type, str, "type")
        validate_instance(self.name, str, "name")
        validate_instance(self.selector, str, "selector")
        validate_instance(self.hostname, str, "hostname")
        if isinstance(self.port, bool) or not isinstance(self.port, int):
            raise TypeError(f"port must be an int, got {type(self.port).__name__}")
        if self.attributes is not None:
            validate_mapping(self.attributes, "attributes")
            object.__setattr__(self, "attributes", deep_freeze(self.attributes))

    @property
    def item_type(self) -> ItemType:
        """The type code as an [ItemType][burrow.models.constants.ItemType]."""
        return ItemType.from_code(self.type)

    @property
    def is_navigable(self) -> bool:
        """False for informational lines and entries without a usable target."""
        return not (
            self.selector == FAKE_SELECTOR or self.port == 0 or self.hostname == NULL_HOSTNAME
        )

    def with_attributes(self, attributes: Mapping[str, ItemAttributes]) -> Self:
        """Return a copy of this item carrying *attributes*."""
        return replace(self, attributes=attributes)

    def to_request(self, tls: TlsPolicy | None = None) -> GopherRequest:
        """Build the request that follows this item's link.

        Raises:
            ValueError: If the item is not navigable.
        """
        if not self.is_navigable or not self.hostname:
            raise ValueError(f"item has no target: {self.original or self.name!r}")
        return GopherRequest(
            hostname=self.hostname,
            port=self.port,
            selector=self.selector,
            tls=tls,
        )


@dataclass(frozen=True, slots=True)
class MenuItem(GopherItem):
    """A single line of a Gopher menu.

    Examples:
        ```python
        item = MenuItem.parse("1Home\\t/home\\tgopher.example.com\\t70")
        str(item)   # '1 Home gopher://gopher.example.com:70/home'

        info = MenuItem.parse("iWelcome!\\tfake\\t(NULL)\\t0")
        str(info)   # 'i Welcome!'
        ```
    """

    @classmethod
    def parse(cls, line: str) -> MenuItem:
        """Parse one menu line, degrading malformed fields instead of raising."""
        return parse_menu_line(line).item

    def __str__(self) -> str:
        if not self.is_navigable:
            return f"{self.type} {self.name}"
        return f"{self.type} {self.name} gopher://{self.hostname}:{self.port}{self.selector}"


class ParsedMenuLine(NamedTuple):
    """Outcome of parsing one menu line.

    Attributes:
        item: Best-effort item, always present.
        issues: Names of the fields that were missing or invalid. Empty for
            well-formed lines.
    """

    item: MenuItem
    issues: tuple[str, ...] = ()

    @property
    def well_formed(self) -> bool:
        """True when every field was present and valid."""
        return not self.issues


def parse_menu_line(line: str) -> ParsedMenuLine:
    """Split a menu line into its type, name, selector, hostname, and port.

    The first character is the type code; the rest is split on tabs. Only
    the first four fields are used, so Gopher+ ``+`` markers and other
    trailing fields are ignored.

    Args:
        line: One menu line without its terminator.

    Returns:
        The parsed item and the list of degraded fields.
    """
    if not line:
        return ParsedMenuLine(MenuItem(original=line), ("empty line",))

    issues: list[str] = []
    fields = line[1:].split("\t")

    def _field(index: int, label: str) -> str:
        if len(fields) > index:
            return fields[index]
        issues.append(f"missing {label}")
        return ""

    name = fields[0]
    selector = _field(1, "selector")
    hostname = _field(2, "hostname")
    raw_port = _field(3, "port")

    port = 0
    if len(fields) > 3:
        digits = raw_port.strip()
        if digits.isascii() and digits.isdigit() and int(digits) <= 65_535:
            port = int(digits)
        else:
            issues.append("invalid port")

    item = MenuItem(
        type=line[0],
        name=name,
        selector=selector,
        hostname=hostname,
        port=port,
        original=line,
    )
    return ParsedMenuLine(item, tuple(issues))


def split_menu_lines(text: str) -> list[str]:
    """Split a decoded menu body into non-empty lines.

    Lines are separated by CRLF (a bare LF is tolerated). Empty lines are
    discarded, and a line holding only ``.`` ends the menu.
    """
    lines: list[str] = []
    for raw_line in text.split("\n"):
        line = raw_line.removesuffix("\r")
        if line == _MENU_TERMINATOR:
            break
        if line:
            lines.append(line)
    return lines


@dataclass(frozen=True, slots=True)
class Menu(GopherItem):
    """An ordered Gopher menu.

    ``items`` keeps the server's line order. The inherited identity fields
    describe where the menu itself was fetched from.

    Attributes:
        items: Menu entries in server order.
    """

    type: str = ItemType.MENU.value
    selector: str = ""
    items: tuple[MenuItem, ...] = ()

    def __post_init__(self) -> None:
        GopherItem.__post_init__(self)
        object.__setattr__(self, "items", tuple(self.items))

    @classmethod
    def from_lines(
        cls,
        parsed: Iterable[ParsedMenuLine],
        *,
        hostname: str = "",
        port: int = 0,
        selector: str = "",
    ) -> Menu:
        """Build a menu from already-parsed lines."""
        return cls(
            hostname=hostname,
            port=port,
            selector=selector,
            items=tuple(line.item for line in parsed),
        )

    @classmethod
    def parse(
        cls,
        text: str,
        *,
        hostname: str = "",
        port: int = 0,
        selector: str = "",
    ) -> Menu:
        """Parse a decoded menu body.

        Args:
            text: Menu body (already framed and decoded).
            hostname: Host the menu was fetched from.
            port: Port the menu was fetched from.
            selector: Selector the menu was fetched with.
        """
        return cls.from_lines(
            (parse_menu_line(line) for line in split_menu_lines(text)),
            hostname=hostname,
            port=port,
            selector=selector,
        )

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[MenuItem]:
        return iter(self.items)
