"""Core layer: configuration, structured logging, and the exception hierarchy.

Sits in the middle of the diamond DAG -- depends only on
``burrow.models`` (and the transport defaults in ``burrow.utils``) and is
depended upon by ``burrow.client``.

Attributes:
    ClientConfig: Frozen Pydantic client settings with
        [from_yaml()][burrow.core.config.ClientConfig.from_yaml] and
        [from_dict()][burrow.core.config.ClientConfig.from_dict].
    Logger: Structured logger supporting key=value and JSON output modes.
        See [Logger][burrow.core.logger.Logger].
    YAML: Safe YAML loading with ``yaml.safe_load()``.
        See [load_yaml()][burrow.core.yaml.load_yaml].
    Exceptions: [BurrowError][burrow.core.exceptions.BurrowError] and its
        subclasses.
"""

from .config import ClientConfig
from .exceptions import (
    BurrowError,
    ConfigurationError,
    ConnectivityError,
    GopherTimeoutError,
    ProtocolError,
    RequestError,
    TlsError,
)
from .logger import Logger, StructuredFormatter, format_kv_pairs
from .yaml import load_yaml


__all__ = [
    "BurrowError",
    "ClientConfig",
    "ConfigurationError",
    "ConnectivityError",
    "GopherTimeoutError",
    "Logger",
    "ProtocolError",
    "RequestError",
    "StructuredFormatter",
    "TlsError",
    "format_kv_pairs",
    "load_yaml",
]
