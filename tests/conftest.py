"""
Pytest configuration and shared fixtures for burrow tests.

Provides:
- An in-process fake Gopher server on 127.0.0.1 (``gopher_server``)
- Sample menu and attribute payloads
- Fixed timing checkpoints for building responses without a network
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from burrow.models import GopherTimingInfo


# ============================================================================
# Logging Configuration
# ============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Configure logging for tests."""
    logging.basicConfig(level=logging.DEBUG)


# ============================================================================
# Fake Gopher Server
# ============================================================================

Responder = Callable[[bytes], bytes]


class FakeGopherServer:
    """Single-shot-per-connection Gopher server.

    Reads one request line, records it, writes the responder's answer, and
    closes the connection.
    """

    def __init__(self, respond: Responder | bytes) -> None:
        self._respond: Responder = respond if callable(respond) else (lambda _line: respond)
        self._server: asyncio.Server | None = None
        self.requests: list[bytes] = []
        self.host = "127.0.0.1"
        self.port = 0

    async def start(self) -> None:
        self._server = await asyncio.start_server(self._handle, self.host, 0)
        self.port = self._server.sockets[0].getsockname()[1]

    async def stop(self) -> None:
        if self._server is not None:
            self._server.close()
            await self._server.wait_closed()

    async def _handle(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        try:
            line = await reader.readline()
            self.requests.append(line)
            writer.write(self._respond(line))
            await writer.drain()
        except ConnectionError:
            pass
        finally:
            writer.close()


@pytest.fixture
async def gopher_server() -> AsyncIterator[Callable[[Responder | bytes], Awaitable[FakeGopherServer]]]:
    """Factory starting fake servers that are stopped after the test."""
    servers: list[FakeGopherServer] = []

    async def start(respond: Responder | bytes) -> FakeGopherServer:
        server = FakeGopherServer(respond)
        await server.start()
        servers.append(server)
        return server

    yield start

    for server in servers:
        await server.stop()


# ============================================================================
# Stream Mocks
# ============================================================================


@pytest.fixture
def mock_streams() -> tuple[MagicMock, MagicMock]:
    """A reader returning one chunk then EOF, and a writer recording writes."""
    reader = MagicMock()
    reader.read = AsyncMock(side_effect=[b"hello", b""])
    writer = MagicMock()
    writer.drain = AsyncMock()
    writer.wait_closed = AsyncMock()
    return reader, writer


# ============================================================================
# Sample Data
# ============================================================================


@pytest.fixture
def timing() -> GopherTimingInfo:
    return GopherTimingInfo(start=100.0, write_start=110.0, read_start=125.0, read_complete=140.0)


@pytest.fixture
def sample_menu_text() -> str:
    return (
        "iWelcome to the test server\tfake\t(NULL)\t0\r\n"
        "1A Menu\t/A/Menu\texample.com\t70\r\n"
        "0File\t/f.txt\texample.com\t70\t+\r\n"
        "7Search\t/search\texample.com\t7070\r\n"
        ".\r\n"
    )


@pytest.fixture
def sample_attribute_text() -> str:
    return (
        "+-2\n"
        "+INFO: 0whatsnew.txt\t/whatsnew.txt\tgopher.example.com 70\t+\n"
        "+ADMIN:\n"
        " Admin: Foo Bar <foobar@example.com>\n"
        " Mod-Date: Sun Feb 21 20:19:18 2021 <20210221201918>\n"
        "+VIEWS:\n"
        " text/plain: <1k>\n"
        " text/html: <2k>"
    )
