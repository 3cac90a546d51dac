"""Byte-exact framing of Gopher response streams.

RFC 1436 responses carry no header: the whole stream is the body. Gopher+
responses start with a status line terminated by CRLF:

* ``+-1``: body is followed by ``CRLF.CRLF``, which is removed.
* ``+-2``: body runs to end of stream.
* ``+<size>`` or ``-<code>``: body runs to end of stream as read.

Nothing is decoded here; selectors, binaries, and images pass through the
body unmodified.

See Also:
    [GopherResponse][burrow.models.response.GopherResponse]: The model built
        by [build_response][burrow.protocol.framing.build_response].
"""

from __future__ import annotations

import logging
from typing import Final, NamedTuple

from burrow.models.constants import GopherProtocol
from burrow.models.response import GopherResponse, GopherTimingInfo


logger = logging.getLogger("burrow.protocol")

_CRLF: Final[bytes] = b"\r\n"
_DOT_TERMINATED: Final[bytes] = b"+-1"
_TERMINATOR: Final[bytes] = b"\r\n.\r\n"
_BARE_TERMINATOR: Final[bytes] = b".\r\n"


class FramedResponse(NamedTuple):
    """Header and body split out of a raw response stream."""

    header: bytes
    body: bytes


def frame_response(raw: bytes, protocol: GopherProtocol) -> FramedResponse:
    """Split *raw* into header and body according to *protocol*.

    Args:
        raw: Complete byte stream read from the server.
        protocol: Protocol the request was made with.

    Returns:
        [FramedResponse][burrow.protocol.framing.FramedResponse]. For Gopher+
        streams without any CRLF the header is empty and the body is the
        whole buffer.
    """
    if protocol is GopherProtocol.RFC1436:
        return FramedResponse(b"", raw)

    index = raw.find(_CRLF)
    if index < 0:
        logger.debug("frame_missing_status_line size=%d", len(raw))
        return FramedResponse(b"", raw)

    header = raw[:index]
    body = raw[index + len(_CRLF) :]

    if header == _DOT_TERMINATED:
        if body.endswith(_TERMINATOR):
            body = body[: -len(_TERMINATOR)]
        elif body == _BARE_TERMINATOR:
            body = b""
        else:
            logger.debug("frame_missing_terminator header=%s size=%d", header, len(body))

    return FramedResponse(header, body)


def build_response(
    raw: bytes,
    protocol: GopherProtocol,
    timing: GopherTimingInfo,
    tls_used: bool = False,
) -> GopherResponse:
    """Frame *raw* and wrap it in a [GopherResponse][burrow.models.response.GopherResponse]."""
    framed = frame_response(raw, protocol)
    return GopherResponse(
        raw=raw,
        header=framed.header,
        body=framed.body,
        protocol=protocol,
        timing=timing,
        tls_used=tls_used,
    )
