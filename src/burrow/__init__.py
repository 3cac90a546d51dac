r"""burrow -- Async Gopher and Gopher+ client.

Opens a connection (plaintext, opportunistic TLS, or TLS only), sends one
selector line, reads the response to end of stream, and decodes it into
menus, items, and Gopher+ attribute blocks.

Architecture follows a **diamond DAG** dependency structure where imports
flow strictly downward:

```text
               client            Public orchestration (GopherClient)
             /   |    \
         core protocol utils     Config/logging/errors, wire format, transport
             \   |    /
              models             Pure frozen dataclasses (zero I/O)
```

Attributes:
    models: Requests, responses, timing, menus, items, attribute blocks.
    protocol: Response framing, attribute parsing, query strings.
    utils: TCP/TLS transport with timing checkpoints.
    core: Client configuration, structured logging, exceptions.
    client: [GopherClient][burrow.client.GopherClient].

Note:
    Top-level imports (``from burrow import GopherClient``) use lazy loading
    and resolve on first access.
"""

import importlib
from importlib.metadata import version as _get_version


__version__ = _get_version("burrow")

__all__ = [
    "BurrowError",
    "ClientConfig",
    "GopherClient",
    "GopherProtocol",
    "GopherRequest",
    "GopherResponse",
    "GopherTimingInfo",
    "ItemAttributes",
    "ItemType",
    "Logger",
    "Menu",
    "MenuItem",
    "TlsPolicy",
]

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "GopherClient": ("burrow.client", "GopherClient"),
    "BurrowError": ("burrow.core", "BurrowError"),
    "ClientConfig": ("burrow.core", "ClientConfig"),
    "Logger": ("burrow.core", "Logger"),
    "GopherProtocol": ("burrow.models", "GopherProtocol"),
    "GopherRequest": ("burrow.models", "GopherRequest"),
    "GopherResponse": ("burrow.models", "GopherResponse"),
    "GopherTimingInfo": ("burrow.models", "GopherTimingInfo"),
    "ItemAttributes": ("burrow.models", "ItemAttributes"),
    "ItemType": ("burrow.models", "ItemType"),
    "Menu": ("burrow.models", "Menu"),
    "MenuItem": ("burrow.models", "MenuItem"),
    "TlsPolicy": ("burrow.models", "TlsPolicy"),
}


def __getattr__(name: str) -> object:
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        module = importlib.import_module(module_path)
        value = getattr(module, attr_name)
        globals()[name] = value
        return value
    raise AttributeError(f"module 'burrow' has no attribute {name!r}")


def __dir__() -> list[str]:
    return __all__
