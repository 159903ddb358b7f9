"""
Unit tests for core.logger module.

Tests:
- Logger initialization
- format_kv_pairs() escaping and truncation
- StructuredFormatter output
- JSON output mode
- Level filtering
"""

import json
import logging

import pytest

from stagedns.core.logger import Logger, StructuredFormatter, format_kv_pairs


class TestInit:
    def test_name(self) -> None:
        logger = Logger("resolver")
        assert logger.name == "resolver"
        assert logger._logger is logging.getLogger("resolver")

    def test_default_not_json(self) -> None:
        assert Logger("test")._json_output is False

    def test_json_mode(self) -> None:
        assert Logger("test", json_output=True)._json_output is True


class TestFormatKvPairs:
    """Key-value pairs formatting and escaping."""

    def test_simple(self) -> None:
        assert format_kv_pairs({"host": "db.example.com"}) == " host=db.example.com"
        assert format_kv_pairs({"family": 6}) == " family=6"

    def test_with_spaces(self) -> None:
        assert format_kv_pairs({"error": "timed out"}) == ' error="timed out"'

    def test_with_equals(self) -> None:
        assert format_kv_pairs({"key": "foo=bar"}) == ' key="foo=bar"'

    def test_with_double_quotes(self) -> None:
        assert format_kv_pairs({"key": 'say "hello"'}) == ' key="say \\"hello\\""'

    def test_empty_value(self) -> None:
        assert format_kv_pairs({"key": ""}) == ' key=""'

    def test_ipv6_address_unquoted(self) -> None:
        assert format_kv_pairs({"address": "2001:db8::1"}) == " address=2001:db8::1"

    def test_empty_dict(self) -> None:
        assert format_kv_pairs({}) == ""

    def test_truncation(self) -> None:
        result = format_kv_pairs({"key": "x" * 1500}, max_value_length=1000)
        assert "truncated 500 chars" in result

    def test_no_truncation(self) -> None:
        result = format_kv_pairs({"key": "x" * 1500}, max_value_length=None)
        assert "truncated" not in result

    def test_custom_prefix(self) -> None:
        assert format_kv_pairs({"key": "val"}, prefix="") == "key=val"


class TestStructuredFormatter:
    def test_appends_structured_fields(self) -> None:
        record = logging.LogRecord("resolver", logging.WARNING, __file__, 1, "stage_failed", (), None)
        record.structured_kv = {"host": "db.example.com", "stage": "system_ipv4"}

        output = StructuredFormatter().format(record)

        assert output == "warning resolver stage_failed host=db.example.com stage=system_ipv4"

    def test_plain_record(self) -> None:
        record = logging.LogRecord(
            "stagedns.utils.dns", logging.DEBUG, __file__, 1, "aaaa_query host=%s", ("h",), None
        )
        assert StructuredFormatter().format(record) == "debug stagedns.utils.dns aaaa_query host=h"


class TestIntegration:
    """Integration tests with real logging."""

    def test_kv_fields_attached(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="kv_test"):
            Logger("kv_test").info("connection_starting", host="db.example.com", port=5432)

        record = caplog.records[0]
        assert record.getMessage() == "connection_starting"
        assert record.structured_kv == {"host": "db.example.com", "port": 5432}

    def test_kv_values_truncated(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="trunc_test"):
            Logger("trunc_test", max_value_length=5).info("msg", error="abcdefgh")

        assert caplog.records[0].structured_kv["error"] == "abcde...<truncated 3 chars>"

    def test_json_output(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="json_test"):
            Logger("json_test", json_output=True).warning("stage_failed", family=6)

        parsed = json.loads(caplog.records[0].getMessage())
        assert parsed["message"] == "stage_failed"
        assert parsed["level"] == "warning"
        assert parsed["service"] == "json_test"
        assert parsed["family"] == 6

    def test_disabled_level_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="quiet_test"):
            Logger("quiet_test").debug("noise", a=1)

        assert caplog.records == []

    def test_exception_includes_traceback(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR, logger="exc_test"):
            try:
                raise OSError("boom")
            except OSError:
                Logger("exc_test").exception("failed", step="connect")

        assert caplog.records[0].exc_info is not None
