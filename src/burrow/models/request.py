"""
Validated Gopher request with URI parsing.

A [GopherRequest][burrow.models.request.GopherRequest] names one resource on
one server: hostname, port, selector, an optional search query, and an
optional per-request TLS policy override. It is immutable and consumed by
exactly one request/response cycle.

Gopher URIs (``gopher://host[:port][selector]``, ``gophers://`` for TLS, or
a bare ``host[:port][selector]``) are parsed with RFC 3986 rules by
[parse_gopher_uri][burrow.models.request.parse_gopher_uri].
"""

from __future__ import annotations

from dataclasses import dataclass
from ipaddress import ip_address
from typing import Any, Final

from rfc3986 import uri_reference
from rfc3986.exceptions import UnpermittedComponentError, ValidationError
from rfc3986.validators import Validator

from ._validation import (
    validate_instance,
    validate_port,
    validate_single_line,
    validate_str_not_empty,
)
from .constants import DEFAULT_PORT, TlsPolicy


@dataclass(frozen=True, slots=True)
class GopherRequest:
    """Immutable description of a single Gopher request.

    Attributes:
        hostname: Server hostname or IP literal (required).
        port: TCP port, 70 by default.
        selector: Resource selector, conventionally with a leading ``/``.
            Empty selects the server's root menu.
        query: Search terms for full-text search servers (type ``7``).
        tls: Per-request [TlsPolicy][burrow.models.constants.TlsPolicy]
            override, or ``None`` to use the client's default.

    Raises:
        TypeError: If a field has the wrong type.
        ValueError: If the hostname is empty, the port is out of range, or
            the selector/query contain null bytes, CR, or LF.

    Examples:
        ```python
        request = GopherRequest("gopher.floodgap.com", selector="/gopher")
        request.port        # 70

        GopherRequest.from_uri("gophers://bitreich.org:70/")
        # GopherRequest(hostname='bitreich.org', port=70, selector='/', ...)
        ```
    """

    hostname: str
    port: int = DEFAULT_PORT
    selector: str = ""
    query: str | None = None
    tls: TlsPolicy | None = None

    def __post_init__(self) -> None:
        """Validate every field so invalid requests never reach the wire."""
        validate_str_not_empty(self.hostname, "hostname")
        validate_port(self.port, "port")
        validate_single_line(self.selector, "selector")
        if self.query is not None:
            validate_single_line(self.query, "query")
        if self.tls is not None:
            validate_instance(self.tls, TlsPolicy, "tls")

    @classmethod
    def from_uri(cls, uri: str, *, query: str | None = None) -> GopherRequest:
        """Build a request from a Gopher URI.

        Args:
            uri: ``gopher://``, ``gophers://`` or scheme-less URI.
            query: Optional search terms to attach to the request.

        Returns:
            A new request. ``gophers://`` URIs carry
            ``TlsPolicy.ONLY_TLS``; other URIs leave ``tls`` unset.

        Raises:
            ValueError: If the URI cannot be parsed.
        """
        parsed = parse_gopher_uri(uri)
        return cls(
            hostname=parsed["hostname"],
            port=parsed["port"],
            selector=parsed["selector"],
            query=query,
            tls=parsed["tls"],
        )


# URI scheme to the TLS policy it implies (None = client default)
_SCHEME_TLS: Final[dict[str, TlsPolicy | None]] = {
    "gopher": None,
    "gophers": TlsPolicy.ONLY_TLS,
}


def _is_valid_host(host: str) -> bool:
    """Return True for IP literals and dotted domain names with sane labels."""
    try:
        ip_address(host)
        return True
    except ValueError:
        pass

    if "." not in host or any(c.isspace() for c in host):
        return False
    labels = host.split(".")
    return all(label and not label.startswith("-") and not label.endswith("-") for label in labels)


def parse_gopher_uri(raw: str) -> dict[str, Any]:
    """Parse a Gopher URI into request fields.

    The selector is everything after the authority, kept verbatim
    (including any ``?`` or ``#`` parts) because Gopher selectors are
    opaque to the client. No percent-decoding is applied.

    Args:
        raw: URI such as ``gopher://example.com:7070/1/docs`` or
            ``example.com/``.

    Returns:
        Dictionary with ``hostname``, ``port``, ``selector`` and ``tls``.

    Raises:
        ValueError: If the scheme is not ``gopher``/``gophers``, the host is
            missing or invalid, or the port is out of range.
    """
    text = raw.strip()
    if not text:
        raise ValueError("Invalid URI: empty")
    if "\x00" in text:
        raise ValueError("Invalid URI: contains null bytes")
    if "://" not in text:
        text = f"gopher://{text}"

    uri = uri_reference(text)
    if uri.scheme:
        uri = uri.copy_with(scheme=uri.scheme.lower())
    validator = (
        Validator()
        .require_presence_of("scheme", "host")
        .allow_schemes(*_SCHEME_TLS)
        .check_validity_of("scheme", "host", "port")
    )

    try:
        validator.validate(uri)
    except UnpermittedComponentError:
        raise ValueError("Invalid scheme: must be gopher or gophers") from None
    except ValidationError as e:
        raise ValueError(f"Invalid URI: {e}") from None

    host = uri.host.strip("[]")
    if not _is_valid_host(host):
        raise ValueError(f"Invalid host: '{host}'")

    port = int(uri.port) if uri.port else DEFAULT_PORT
    validate_port(port, "port")

    # rfc3986 percent-encodes path components; slice the selector out of the
    # original text so it reaches the server byte-for-byte
    selector = text[text.index("://") + 3 + len(uri.authority or "") :]

    return {
        "hostname": host,
        "port": port,
        "selector": selector,
        "tls": _SCHEME_TLS[uri.scheme],
    }
