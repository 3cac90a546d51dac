"""Network transport for Gopher exchanges.

The utils layer sits in the middle of the diamond DAG, depending only on
[burrow.models][burrow.models].

Attributes:
    transport: Connection acquisition with TLS policy resolution
        (none / prefer with plaintext fallback / only), single query write,
        read to end of stream, and timing checkpoints.

Note:
    The utils layer has **zero** imports from ``burrow.core`` or
    ``burrow.client``. It raises standard library exceptions (``OSError``,
    ``ssl.SSLError``, ``TimeoutError``) which the client translates.

Examples:
    ```python
    from burrow.utils.transport import exchange
    ```
"""
