"""Gopher+ attribute block parsing.

An attribute response is a sequence of named blocks::

    +INFO: 0About\\t/about\\tgopher.example.com\\t70\\t+
    +ADMIN:
     Admin: Foo Bar <foobar@example.com>
     Mod-Date: Sun Feb 21 20:19:18 2021 <20210221201918>
    +VIEWS:
     text/plain: <1k>

A ``+NAME:`` line opens a block; the text after the colon is its
descriptor. Every following line up to the next ``+`` line belongs to that
block. A menu-wide (``$``) attribute response concatenates one such group
per menu item, each opened by its ``+INFO`` block;
[split_menu_attribute_records][burrow.protocol.attributes.split_menu_attribute_records]
cuts it back into per-item records.
"""

from __future__ import annotations

from typing import Final

from burrow.models.constants import CRLF
from burrow.models.item import ItemAttributes


INFO_BLOCK: Final[str] = "INFO"
_INFO_PREFIX: Final[str] = f"+{INFO_BLOCK}:"


def _lines(text: str) -> list[str]:
    return [line.removesuffix("\r") for line in text.split("\n")]


def parse_attribute_blocks(
    text: str, *, has_status_line: bool = True
) -> dict[str, ItemAttributes]:
    """Parse Gopher+ attribute text into blocks keyed by name.

    Args:
        text: Decoded attribute response.
        has_status_line: Discard the first line as the Gopher+ status line.
            Pass ``False`` for bodies that were already framed.

    Returns:
        Mapping of block name to [ItemAttributes][burrow.models.item.ItemAttributes],
        in the order the blocks appeared. Content lines seen before the first
        block are dropped; empty lines inside a block are kept in
        ``raw_lines``.
    """
    lines = _lines(text)
    if lines and not lines[-1]:
        # terminator of the last line
        lines.pop()
    if has_status_line:
        lines = lines[1:]

    blocks: dict[str, tuple[str, list[str], dict[str, str]]] = {}
    current: str | None = None

    for line in lines:
        if line.startswith("+"):
            name, sep, descriptor = line[1:].partition(":")
            current = name if sep else name.strip()
            blocks[current] = (descriptor.strip(), [], {})
            continue
        if current is None:
            continue

        _, raw, pairs = blocks[current]
        raw.append(line + CRLF)
        key, sep, value = line.partition(":")
        if sep and key.strip() and value.strip():
            pairs[key.strip()] = value.strip()

    return {
        name: ItemAttributes(
            name=name,
            descriptor=descriptor,
            raw_lines="".join(raw),
            lines=pairs,
        )
        for name, (descriptor, raw, pairs) in blocks.items()
    }


def split_menu_attribute_records(text: str) -> list[str]:
    """Split a menu-wide attribute body into one record per ``+INFO`` block.

    Each record starts at a line beginning with ``+INFO:`` and runs up to the
    next one. Lines before the first ``+INFO:`` are dropped.
    """
    records: list[list[str]] = []
    for line in _lines(text):
        if line.startswith(_INFO_PREFIX):
            records.append([line])
        elif records:
            records[-1].append(line)
    return [CRLF.join(record) for record in records]
