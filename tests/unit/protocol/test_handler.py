"""
Unit tests for protocol.handler module.

Tests:
- Query string generation for RFC 1436 and Gopher+
- get_handler() factory
- parse_menu() on framed responses, including degraded-line logging
"""

import logging

import pytest

from burrow.models import GopherProtocol, GopherRequest
from burrow.protocol.framing import build_response
from burrow.protocol.handler import (
    GopherPlusHandler,
    ProtocolHandler,
    Rfc1436Handler,
    get_handler,
)


class TestRfc1436Handler:
    def test_selector_string(self):
        assert Rfc1436Handler().selector_string("/docs") == "/docs\r\n"

    def test_empty_selector(self):
        assert Rfc1436Handler().selector_string("") == "\r\n"

    def test_search_string(self):
        assert Rfc1436Handler().search_string("/v2/vs", "rfc 1436") == "/v2/vs\trfc 1436\r\n"

    def test_no_attribute_queries(self):
        assert not hasattr(Rfc1436Handler(), "attribute_string")


class TestGopherPlusHandler:
    def test_selector_string(self):
        assert GopherPlusHandler().selector_string("/docs") == "/docs\t+\r\n"

    def test_search_string(self):
        assert GopherPlusHandler().search_string("/vs", "q") == "/vs\tq\t+\r\n"

    def test_attribute_string(self):
        assert GopherPlusHandler().attribute_string("/docs") == "/docs\t!\r\n"

    def test_menu_attribute_string(self):
        assert GopherPlusHandler().menu_attribute_string("/docs") == "/docs\t$\r\n"


class TestGetHandler:
    def test_rfc1436(self):
        handler = get_handler(GopherProtocol.RFC1436)
        assert isinstance(handler, Rfc1436Handler)
        assert handler.protocol is GopherProtocol.RFC1436

    def test_gopher_plus(self):
        handler = get_handler(GopherProtocol.GOPHER_PLUS)
        assert isinstance(handler, GopherPlusHandler)
        assert isinstance(handler, ProtocolHandler)

    def test_accepts_value(self):
        assert isinstance(get_handler("gopher+"), GopherPlusHandler)  # type: ignore[arg-type]

    def test_unknown(self):
        with pytest.raises(ValueError, match="unsupported protocol"):
            get_handler("gopher3")  # type: ignore[arg-type]

    def test_encode_utf8(self):
        assert get_handler(GopherProtocol.RFC1436).encode("/café\r\n") == b"/caf\xc3\xa9\r\n"


class TestParseMenu:
    def test_rfc1436_menu(self, timing, sample_menu_text):
        response = build_response(sample_menu_text.encode(), GopherProtocol.RFC1436, timing)
        menu = Rfc1436Handler().parse_menu(response)
        assert [item.type for item in menu] == ["i", "1", "0", "7"]
        assert menu.hostname == ""

    def test_gopher_plus_menu_framed(self, timing):
        raw = b"+-1\r\n1A Menu\t/A/Menu\thost\t70\t+\r\n0File\t/f.txt\thost\t70\t+\r\n.\r\n"
        response = build_response(raw, GopherProtocol.GOPHER_PLUS, timing)
        menu = GopherPlusHandler().parse_menu(response)
        assert [item.selector for item in menu] == ["/A/Menu", "/f.txt"]

    def test_surrounding_whitespace_trimmed(self, timing):
        response = build_response(
            b"\r\n\r\n1A\t/a\thost\t70\r\n\r\n", GopherProtocol.RFC1436, timing
        )
        assert len(Rfc1436Handler().parse_menu(response)) == 1

    def test_request_location_recorded(self, timing):
        response = build_response(b"1A\t/a\thost\t70\r\n", GopherProtocol.RFC1436, timing)
        request = GopherRequest("gopher.example.com", 7070, "/root")
        menu = Rfc1436Handler().parse_menu(response, request)
        assert (menu.hostname, menu.port, menu.selector) == ("gopher.example.com", 7070, "/root")

    def test_degraded_line_logged(self, timing, caplog):
        response = build_response(
            b"1A\t/a\thost\t70\r\n0broken\r\n", GopherProtocol.RFC1436, timing
        )
        with caplog.at_level(logging.DEBUG, logger="burrow.protocol"):
            menu = Rfc1436Handler().parse_menu(response)
        assert len(menu) == 2
        assert "menu_line_degraded" in caplog.text
        assert "missing selector" in caplog.text
