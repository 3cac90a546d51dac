"""
Structured logging with key=value and JSON output.

[Logger][burrow.core.logger.Logger] wraps a standard ``logging.Logger`` and
attaches keyword arguments to each record as structured fields.
[StructuredFormatter][burrow.core.logger.StructuredFormatter] renders those
fields as ``key=value`` pairs; installed on the root handler (as the CLI
does) it also formats the plain ``logging.getLogger()`` records emitted by
the models, protocol and utils layers.

Examples:
    ```python
    from burrow.core.logger import Logger

    logger = Logger("burrow.client")
    logger.debug("menu_downloaded", host="gopher.example.com", items=12)
    # Output: menu_downloaded host=gopher.example.com items=12

    Logger("burrow.client", json_output=True).debug("menu_downloaded", items=12)
    # Output: {"timestamp": "...", "level": "debug", "logger": "burrow.client", ...}
    ```
"""

import datetime
import json
import logging
from typing import Any, ClassVar


def _truncate(value: Any, max_length: int | None) -> str:
    text = str(value)
    if max_length and len(text) > max_length:
        return text[:max_length] + f"...<truncated {len(text) - max_length} chars>"
    return text


def format_kv_pairs(
    kwargs: dict[str, Any],
    max_value_length: int | None = 1000,
    prefix: str = " ",
) -> str:
    """Render *kwargs* as space-separated ``key=value`` pairs.

    Values longer than *max_value_length* are truncated. Empty values and
    values containing spaces, ``=`` or quotes are double-quoted with
    backslash escaping.

    Returns:
        ``prefix`` followed by the pairs, or ``""`` when *kwargs* is empty.
    """
    parts = []
    for key, value in kwargs.items():
        text = _truncate(value, max_value_length)
        if not text or any(c in text for c in " =\"'"):
            escaped = text.replace("\\", "\\\\").replace('"', '\\"')
            parts.append(f'{key}="{escaped}"')
        else:
            parts.append(f"{key}={text}")
    return prefix + " ".join(parts) if parts else ""


class StructuredFormatter(logging.Formatter):
    """Formats records as ``level name message key=value ...``.

    Structured fields come from the ``structured_kv`` extra attached by
    [Logger][burrow.core.logger.Logger]; records without it are emitted with
    the same prefix and no pairs.
    """

    def format(self, record: logging.LogRecord) -> str:
        line = f"{record.levelname.lower()} {record.name} {record.getMessage()}"
        line += format_kv_pairs(getattr(record, "structured_kv", {}))
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class Logger:
    """Logger whose methods accept structured keyword arguments.

    Every level method mirrors the standard logging API with an added
    ``**kwargs``; the pairs travel either in the ``structured_kv`` extra
    (default) or inside a JSON document (``json_output=True``).
    """

    _DEFAULT_MAX_VALUE_LENGTH: ClassVar[int] = 1000

    def __init__(
        self,
        name: str,
        *,
        json_output: bool = False,
        max_value_length: int | None = None,
    ) -> None:
        """Wrap ``logging.getLogger(name)``.

        Args:
            name: Logger name, e.g. ``burrow.client``.
            json_output: Emit one JSON object per record instead of pairs.
            max_value_length: Per-value truncation length (default 1000).
        """
        self._logger = logging.getLogger(name)
        self._json_output = json_output
        self._max_value_length = (
            self._DEFAULT_MAX_VALUE_LENGTH if max_value_length is None else max_value_length
        )

    @property
    def name(self) -> str:
        return self._logger.name

    def _log(self, level: int, msg: str, kwargs: dict[str, Any], *, exc_info: bool = False) -> None:
        if not self._logger.isEnabledFor(level):
            return
        if self._json_output:
            document = {
                "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
                "level": logging.getLevelName(level).lower(),
                "logger": self._logger.name,
                "message": msg,
                **kwargs,
            }
            self._logger.log(level, json.dumps(document, default=str), exc_info=exc_info)
            return
        extra = (
            {"structured_kv": {k: _truncate(v, self._max_value_length) for k, v in kwargs.items()}}
            if kwargs
            else {}
        )
        self._logger.log(level, msg, extra=extra, exc_info=exc_info)

    def debug(self, msg: str, **kwargs: Any) -> None:
        """Log at DEBUG with optional key=value pairs."""
        self._log(logging.DEBUG, msg, kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        """Log at INFO with optional key=value pairs."""
        self._log(logging.INFO, msg, kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        """Log at WARNING with optional key=value pairs."""
        self._log(logging.WARNING, msg, kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        """Log at ERROR with optional key=value pairs."""
        self._log(logging.ERROR, msg, kwargs)

    def exception(self, msg: str, **kwargs: Any) -> None:
        """Log at ERROR with the active exception's traceback."""
        self._log(logging.ERROR, msg, kwargs, exc_info=True)
