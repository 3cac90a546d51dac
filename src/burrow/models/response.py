"""
Immutable result of one Gopher request/response cycle.

[GopherResponse][burrow.models.response.GopherResponse] keeps the full,
unmodified byte stream next to the framed header and body, so callers can
always reach the exact bytes the server sent.
[GopherTimingInfo][burrow.models.response.GopherTimingInfo] records four
checkpoints of the exchange and derives the durations between them.

Note:
    Framing (splitting the Gopher+ status line from the body) is performed
    by [frame_response][burrow.protocol.framing.frame_response]; this module
    only stores its result. Sizes are derived from the stored buffers rather
    than kept as separate fields.
"""

from __future__ import annotations

from dataclasses import dataclass

from ._validation import validate_instance
from .constants import GopherProtocol


@dataclass(frozen=True, slots=True)
class GopherTimingInfo:
    """Millisecond checkpoints recorded during one exchange.

    All four values come from the same monotonic clock and must be
    non-decreasing: ``start <= write_start <= read_start <= read_complete``.

    Attributes:
        start: Request start, before the connection is opened.
        write_start: Connection established, query about to be written.
        read_start: First byte of the response received.
        read_complete: End of stream reached.

    Raises:
        ValueError: If the checkpoints are out of order.
    """

    start: float
    write_start: float
    read_start: float
    read_complete: float

    def __post_init__(self) -> None:
        """Enforce the checkpoint ordering."""
        checkpoints = (self.start, self.write_start, self.read_start, self.read_complete)
        for value in checkpoints:
            if isinstance(value, bool) or not isinstance(value, int | float):
                raise TypeError(f"timing values must be numbers, got {type(value).__name__}")
        if any(a > b for a, b in zip(checkpoints, checkpoints[1:], strict=False)):
            raise ValueError(
                "timing checkpoints must satisfy"
                " start <= write_start <= read_start <= read_complete"
            )

    @property
    def connection_wait(self) -> float:
        """Milliseconds spent opening the connection (including TLS)."""
        return self.write_start - self.start

    @property
    def first_byte_wait(self) -> float:
        """Milliseconds between writing the query and the first response byte."""
        return self.read_start - self.write_start

    @property
    def receive_duration(self) -> float:
        """Milliseconds between the first response byte and end of stream."""
        return self.read_complete - self.read_start

    @property
    def total_duration(self) -> float:
        """Milliseconds for the whole exchange."""
        return self.read_complete - self.start


@dataclass(frozen=True, slots=True)
class GopherResponse:
    """Framed response from a Gopher server.

    Attributes:
        raw: Full byte stream exactly as read from the connection.
        header: Gopher+ status line without its CRLF. Empty for RFC 1436
            responses and for Gopher+ responses that carried no status line.
        body: Payload handed to downstream parsers. Opaque bytes; nothing is
            decoded here.
        protocol: Protocol variant the response was framed with.
        timing: Checkpoints of the exchange that produced the response.
        tls_used: Whether the connection was TLS.
    """

    raw: bytes
    header: bytes
    body: bytes
    protocol: GopherProtocol
    timing: GopherTimingInfo
    tls_used: bool = False

    def __post_init__(self) -> None:
        """Validate field types."""
        validate_instance(self.raw, bytes, "raw")
        validate_instance(self.header, bytes, "header")
        validate_instance(self.body, bytes, "body")
        validate_instance(self.protocol, GopherProtocol, "protocol")
        validate_instance(self.timing, GopherTimingInfo, "timing")
        validate_instance(self.tls_used, bool, "tls_used")

    @property
    def header_size(self) -> int:
        """Length of the Gopher+ status line in bytes."""
        return len(self.header)

    @property
    def body_size(self) -> int:
        """Length of the framed body in bytes."""
        return len(self.body)

    @property
    def response_size(self) -> int:
        """Header size plus body size in bytes."""
        return self.header_size + self.body_size

    @property
    def status(self) -> str:
        """The Gopher+ status line as text (``""`` when absent)."""
        return self.header.decode("ascii", errors="replace")

    @property
    def is_error(self) -> bool:
        """True when a Gopher+ server answered with a failure status (``-...``)."""
        return self.header.startswith(b"-")

    def text(self, encoding: str = "utf-8", errors: str = "replace") -> str:
        """Decode the body as text."""
        return self.body.decode(encoding, errors=errors)
