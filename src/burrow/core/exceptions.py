"""burrow exception hierarchy.

Typed exceptions for every failure a Gopher client can report, so callers
can tell bad input from an unreachable server from a server that refused
the request. ``asyncio.CancelledError`` is never wrapped.

Exception hierarchy:

```text
BurrowError (base -- never raised directly)
├── ConfigurationError      -- bad config file, Gopher+ op on an RFC 1436 client
├── RequestError            -- invalid caller input
├── ConnectivityError       -- connect, write or read failed
│   ├── GopherTimeoutError  -- connect or read timed out
│   └── TlsError            -- TLS handshake or certificate failure
└── ProtocolError           -- Gopher+ failure status where content was expected
```

See Also:
    [GopherClient][burrow.client.GopherClient]: Translates transport
        exceptions into this hierarchy with ``raise ... from``.
"""

from __future__ import annotations


class BurrowError(Exception):
    """Base exception for all burrow errors.

    Never raised directly -- always use a specific subclass.
    """


# ---------------------------------------------------------------------------
# Configuration / input
# ---------------------------------------------------------------------------


class ConfigurationError(BurrowError):
    """Invalid configuration, or an operation the configured protocol cannot perform.

    See Also:
        [load_yaml()][burrow.core.yaml.load_yaml]: YAML loading function
            whose failures surface as configuration errors.
    """


class RequestError(BurrowError):
    """The caller supplied a request that cannot be sent.

    Raised before any network activity, e.g. a search without a query or
    an attribute request for an informational menu line.
    """


# ---------------------------------------------------------------------------
# Connectivity
# ---------------------------------------------------------------------------


class ConnectivityError(BurrowError):
    """Base for all server/network connectivity errors.

    The underlying ``OSError`` is chained as ``__cause__``.
    """


class GopherTimeoutError(ConnectivityError):
    """Connecting or reading exceeded the configured timeout."""


class TlsError(ConnectivityError):
    """TLS handshake or certificate verification failed."""


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------


class ProtocolError(BurrowError):
    """The server answered with a Gopher+ failure status.

    Attributes:
        status: The status line the server sent (e.g. ``--1``).
    """

    def __init__(self, message: str, status: str = "") -> None:
        super().__init__(message)
        self.status = status
