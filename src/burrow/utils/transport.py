"""TCP/TLS transport for one Gopher request/response exchange.

Opens a connection according to a [TlsPolicy][burrow.models.constants.TlsPolicy],
writes one query string, and reads until the server closes the stream (the
only end-of-message signal RFC 1436 has). Four timing checkpoints are
recorded on the way.

Attributes:
    exchange: Full connect/write/read cycle returning an
        [ExchangeResult][burrow.utils.transport.ExchangeResult].
    open_gopher_connection: Connection acquisition with TLS policy resolution.
    create_ssl_context: TLS context factory, optionally without verification.

Note:
    ``PREFER_TLS`` tries TLS first and falls back to plaintext on any
    connection-establishment failure (``ssl.SSLError``, other ``OSError``,
    or ``TimeoutError``). ``ONLY_TLS`` never falls back. This module raises
    standard library exceptions only; the client maps them onto the
    [burrow.core.exceptions][burrow.core.exceptions] hierarchy.

    The connection is closed on every exit path, including cancellation.

Examples:
    ```python
    result = await exchange("gopher.floodgap.com", 70, b"/\\r\\n")
    result.raw[:20]
    result.timing.total_duration   # milliseconds
    ```
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import ssl
from dataclasses import dataclass
from time import perf_counter
from typing import Any, Final

from burrow.models.constants import TlsPolicy
from burrow.models.response import GopherTimingInfo


DEFAULT_TIMEOUT: Final[float] = 30.0
DEFAULT_CHUNK_SIZE: Final[int] = 2048

_CLOSE_TIMEOUT: Final[float] = 5.0


logger = logging.getLogger("burrow.utils.transport")


@dataclass(frozen=True, slots=True)
class ExchangeResult:
    """Unframed outcome of one exchange.

    Attributes:
        raw: Every byte read before end of stream.
        timing: Checkpoints recorded during the exchange.
        tls_used: Whether the connection that carried the exchange was TLS.
    """

    raw: bytes
    timing: GopherTimingInfo
    tls_used: bool


def _now_ms() -> float:
    return perf_counter() * 1000


def create_ssl_context(*, verify: bool = True) -> ssl.SSLContext:
    """Return a client TLS context.

    Args:
        verify: Verify the server certificate and hostname. Many Gopher
            servers use self-signed certificates; pass ``False`` to accept
            them.
    """
    context = ssl.create_default_context()
    if not verify:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


def failure_kind(error: BaseException) -> str:
    """Classify a connection failure as ``ssl``, ``timeout`` or ``network``."""
    if isinstance(error, ssl.SSLError | ssl.CertificateError):
        return "ssl"
    if isinstance(error, TimeoutError):
        return "timeout"
    return "network"


async def _connect(
    host: str,
    port: int,
    *,
    use_tls: bool,
    timeout: float | None,
    verify_tls: bool,
) -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
    kwargs: dict[str, Any] = {}
    if use_tls:
        kwargs["ssl"] = create_ssl_context(verify=verify_tls)
        kwargs["server_hostname"] = host
    return await asyncio.wait_for(asyncio.open_connection(host, port, **kwargs), timeout=timeout)


async def open_gopher_connection(
    host: str,
    port: int,
    *,
    tls_policy: TlsPolicy = TlsPolicy.DO_NOT_USE_TLS,
    timeout: float | None = DEFAULT_TIMEOUT,  # noqa: ASYNC109
    verify_tls: bool = True,
) -> tuple[asyncio.StreamReader, asyncio.StreamWriter, bool]:
    """Open a stream connection following *tls_policy*.

    Args:
        host: Server hostname or IP literal.
        port: Server port.
        tls_policy: Policy resolved for this request.
        timeout: Seconds allowed for each connection attempt, ``None`` for
            no limit.
        verify_tls: Verify certificates on TLS attempts.

    Returns:
        ``(reader, writer, tls_used)``.

    Raises:
        ssl.SSLError: TLS handshake failed under ``ONLY_TLS``.
        TimeoutError: The (final) attempt did not complete within *timeout*.
        OSError: The (final) attempt failed at the network level.
    """
    policy = TlsPolicy(tls_policy)

    if policy is TlsPolicy.DO_NOT_USE_TLS:
        reader, writer = await _connect(
            host, port, use_tls=False, timeout=timeout, verify_tls=verify_tls
        )
        return reader, writer, False

    if policy is TlsPolicy.ONLY_TLS:
        reader, writer = await _connect(
            host, port, use_tls=True, timeout=timeout, verify_tls=verify_tls
        )
        return reader, writer, True

    try:
        reader, writer = await _connect(
            host, port, use_tls=True, timeout=timeout, verify_tls=verify_tls
        )
    except (OSError, TimeoutError) as e:
        logger.warning(
            "tls_fallback host=%s port=%s reason=%s error=%s",
            host,
            port,
            failure_kind(e),
            str(e) or type(e).__name__,
        )
    else:
        return reader, writer, True

    reader, writer = await _connect(
        host, port, use_tls=False, timeout=timeout, verify_tls=verify_tls
    )
    return reader, writer, False


async def _close(writer: asyncio.StreamWriter) -> None:
    writer.close()
    with contextlib.suppress(OSError, TimeoutError):
        await asyncio.wait_for(writer.wait_closed(), timeout=_CLOSE_TIMEOUT)


async def exchange(  # noqa: PLR0913
    host: str,
    port: int,
    query: bytes,
    *,
    tls_policy: TlsPolicy = TlsPolicy.DO_NOT_USE_TLS,
    timeout: float | None = DEFAULT_TIMEOUT,  # noqa: ASYNC109
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    verify_tls: bool = True,
) -> ExchangeResult:
    """Send *query* and read the response to end of stream.

    Args:
        host: Server hostname or IP literal.
        port: Server port.
        query: Encoded query string, terminator included.
        tls_policy: Policy resolved for this request.
        timeout: Seconds allowed for connecting, for draining the write,
            and for each individual read. ``None`` disables the limit.
        chunk_size: Maximum bytes requested per read.
        verify_tls: Verify certificates on TLS attempts.

    Returns:
        [ExchangeResult][burrow.utils.transport.ExchangeResult] with the raw
        bytes and timing. When the server sends nothing, ``read_start``
        equals ``read_complete``.

    Raises:
        ssl.SSLError: TLS failure under ``ONLY_TLS`` or during the exchange.
        TimeoutError: Connect, write or a read exceeded *timeout*.
        OSError: Network failure while connecting, writing or reading.
    """
    start = _now_ms()
    reader, writer, tls_used = await open_gopher_connection(
        host, port, tls_policy=tls_policy, timeout=timeout, verify_tls=verify_tls
    )

    try:
        write_start = _now_ms()
        writer.write(query)
        await asyncio.wait_for(writer.drain(), timeout=timeout)

        chunks: list[bytes] = []
        read_start: float | None = None
        while True:
            chunk = await asyncio.wait_for(reader.read(chunk_size), timeout=timeout)
            if not chunk:
                break
            if read_start is None:
                read_start = _now_ms()
            chunks.append(chunk)
        read_complete = _now_ms()
    finally:
        await _close(writer)

    raw = b"".join(chunks)
    timing = GopherTimingInfo(
        start=start,
        write_start=write_start,
        read_start=read_start if read_start is not None else read_complete,
        read_complete=read_complete,
    )
    logger.debug(
        "exchange_completed host=%s port=%s tls=%s size=%d total_ms=%.1f",
        host,
        port,
        tls_used,
        len(raw),
        timing.total_duration,
    )
    return ExchangeResult(raw=raw, timing=timing, tls_used=tls_used)
