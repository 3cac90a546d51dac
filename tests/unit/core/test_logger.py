"""
Unit tests for core.logger module.

Tests:
- format_kv_pairs() quoting, escaping, truncation
- StructuredFormatter output for structured and plain records
- Logger key=value and JSON modes
"""

import json
import logging

import pytest

from burrow.core.logger import Logger, StructuredFormatter, format_kv_pairs


# ============================================================================
# format_kv_pairs Tests
# ============================================================================


class TestFormatKvPairs:
    def test_empty_dict(self) -> None:
        assert format_kv_pairs({}) == ""

    def test_simple_values(self) -> None:
        assert format_kv_pairs({"host": "example.com", "port": 70}) == " host=example.com port=70"

    def test_value_with_spaces(self) -> None:
        assert format_kv_pairs({"key": "hello world"}) == ' key="hello world"'

    def test_value_with_equals_sign(self) -> None:
        assert format_kv_pairs({"key": "foo=bar"}) == ' key="foo=bar"'

    def test_double_quotes_escaped(self) -> None:
        assert format_kv_pairs({"key": 'say "hi"'}) == ' key="say \\"hi\\""'

    def test_empty_string_quoted(self) -> None:
        assert format_kv_pairs({"key": ""}) == ' key=""'

    def test_truncation(self) -> None:
        result = format_kv_pairs({"key": "x" * 20}, max_value_length=5)
        assert result == ' key="xxxxx...<truncated 15 chars>"'

    def test_no_truncation(self) -> None:
        assert format_kv_pairs({"k": "x" * 2000}, max_value_length=None) == " k=" + "x" * 2000

    def test_custom_prefix(self) -> None:
        assert format_kv_pairs({"a": 1}, prefix="") == "a=1"


# ============================================================================
# StructuredFormatter Tests
# ============================================================================


def _record(msg: str, **extra: object) -> logging.LogRecord:
    record = logging.LogRecord("burrow.test", logging.DEBUG, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    def test_plain_record(self) -> None:
        assert StructuredFormatter().format(_record("hello")) == "debug burrow.test hello"

    def test_structured_record(self) -> None:
        line = StructuredFormatter().format(_record("fetched", structured_kv={"size": 10}))
        assert line == "debug burrow.test fetched size=10"


# ============================================================================
# Logger Tests
# ============================================================================


class TestLogger:
    def test_name(self) -> None:
        assert Logger("burrow.client").name == "burrow.client"

    @pytest.mark.parametrize("level", ["debug", "info", "warning", "error"])
    def test_levels_attach_structured_kv(self, level: str, caplog: pytest.LogCaptureFixture) -> None:
        logger = Logger("burrow.test.levels")
        with caplog.at_level(logging.DEBUG, logger="burrow.test.levels"):
            getattr(logger, level)("event_name", host="example.com")
        record = caplog.records[-1]
        assert record.levelname == level.upper()
        assert record.getMessage() == "event_name"
        assert record.structured_kv == {"host": "example.com"}  # type: ignore[attr-defined]

    def test_values_truncated(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = Logger("burrow.test.trunc", max_value_length=3)
        with caplog.at_level(logging.DEBUG, logger="burrow.test.trunc"):
            logger.debug("event", body="abcdef")
        assert caplog.records[-1].structured_kv["body"].startswith("abc...")  # type: ignore[attr-defined]

    def test_json_output(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = Logger("burrow.test.json", json_output=True)
        with caplog.at_level(logging.DEBUG, logger="burrow.test.json"):
            logger.info("menu_downloaded", items=3)
        document = json.loads(caplog.records[-1].getMessage())
        assert document["message"] == "menu_downloaded"
        assert document["items"] == 3
        assert document["level"] == "info"
        assert document["logger"] == "burrow.test.json"
        assert "timestamp" in document

    def test_disabled_level_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = Logger("burrow.test.disabled")
        with caplog.at_level(logging.WARNING, logger="burrow.test.disabled"):
            logger.debug("hidden")
        assert not [r for r in caplog.records if r.name == "burrow.test.disabled"]

    def test_exception_includes_traceback(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = Logger("burrow.test.exc")
        with caplog.at_level(logging.ERROR, logger="burrow.test.exc"):
            try:
                raise RuntimeError("boom")
            except RuntimeError:
                logger.exception("failed", step=1)
        assert caplog.records[-1].exc_info is not None
