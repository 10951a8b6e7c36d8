import datetime
from decimal import Decimal
import json
import logging
import sys
import uuid
from unittest.mock import Mock
import pytest

from node_map.dtos import FilterToken, MatcherFilters
from node_map.utils.logs import (
    CustomJSONEncoder,
    JSONFormatter,
    setup_logger_json,
    get_logger,
    CorrelationIdFilter
)


def _record(msg="Test message", level=logging.INFO, exc_info=None):
    return logging.LogRecord(
        name="test_logger",
        level=level,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=exc_info
    )


class TestCorrelationIdFilter:
    """Tests for CorrelationIdFilter."""

    def test_correlation_id_filter_works(self):
        filter_instance = CorrelationIdFilter()
        record = Mock()
        assert filter_instance.filter(record) is True


class TestCustomJSONEncoder:
    """Tests for CustomJSONEncoder."""

    def test_encode_uuid(self):
        test_uuid = uuid.uuid4()
        assert CustomJSONEncoder().default(test_uuid) == str(test_uuid)

    def test_encode_decimal(self):
        result = CustomJSONEncoder().default(Decimal("123.456"))
        assert result == 123.456
        assert isinstance(result, float)

    def test_encode_datetime(self):
        result = CustomJSONEncoder().default(datetime.datetime(2024, 1, 15, 10, 30, 45))
        assert result == "2024-01-15T10:30:45"

    def test_encode_frozenset(self):
        assert CustomJSONEncoder().default(frozenset(["b", "a"])) == ["a", "b"]

    def test_encode_matcher_filters(self):
        filters = MatcherFilters(platform=["ubuntu", "!debian"])
        result = json.loads(json.dumps({"filters": filters}, cls=CustomJSONEncoder))
        assert result["filters"] == {
            "platform": [
                {"negated": False, "value": "ubuntu"},
                {"negated": True, "value": "debian"},
            ]
        }

    def test_encode_filter_token(self):
        assert CustomJSONEncoder().default(FilterToken.parse("!x")) == {"negated": True, "value": "x"}

    def test_encode_callable(self):
        def my_predicate(node):
            return True
        assert CustomJSONEncoder().default(my_predicate).endswith("my_predicate")

    def test_encode_unsupported_type(self):
        with pytest.raises(TypeError):
            CustomJSONEncoder().default(object())


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_format_time(self):
        result = JSONFormatter().formatTime(_record())
        assert "-" in result
        assert ":" in result

    def test_format_basic_log(self):
        log_data = json.loads(JSONFormatter().format(_record()))

        assert log_data["logger"] == "test_logger"
        assert log_data["level"] == "INFO"
        assert log_data["message"] == "Test message"
        assert "timestamp" in log_data
        assert log_data["exc_info"] is None

    def test_format_with_correlation_id(self):
        record = _record()
        record.correlation_id = "test-correlation-id"
        log_data = json.loads(JSONFormatter().format(record))
        assert log_data["correlation_id"] == "test-correlation-id"

    def test_format_without_correlation_id(self):
        log_data = json.loads(JSONFormatter().format(_record()))
        assert "correlation_id" not in log_data

    def test_format_with_exception(self):
        try:
            raise ValueError("Test exception")
        except ValueError:
            exc_info = sys.exc_info()

        log_data = json.loads(JSONFormatter().format(_record("Error occurred", logging.ERROR, exc_info)))

        assert log_data["level"] == "ERROR"
        assert "ValueError" in log_data["exc_info"]
        assert "Test exception" in log_data["exc_info"]

    def test_format_with_extra_dict(self):
        record = _record()
        record.extra = {"key": "apt_package", "event": "override"}
        log_data = json.loads(JSONFormatter().format(record))
        assert log_data["key"] == "apt_package"
        assert log_data["event"] == "override"

    def test_format_with_custom_fields(self):
        record = _record()
        record.previous_value = "A"
        record.filters = MatcherFilters(os="linux")
        log_data = json.loads(JSONFormatter().format(record))
        assert log_data["previous_value"] == "A"
        assert log_data["filters"] == {"os": [{"negated": False, "value": "linux"}]}


class TestSetupLoggerJson:
    """Tests for setup_logger_json function."""

    @pytest.mark.parametrize("level,expected", [
        ("DEBUG", logging.DEBUG),
        ("INFO", logging.INFO),
        ("WARNING", logging.WARNING),
        ("ERROR", logging.ERROR),
        ("CRITICAL", logging.CRITICAL),
    ])
    def test_setup_logger_levels(self, level, expected):
        logger = setup_logger_json(level=level, module_name=f"test_module_{level.lower()}")

        assert logger.name == f"node_map.test_module_{level.lower()}"
        assert logger.level == expected
        assert logger.propagate is False

    def test_setup_logger_clears_handlers(self):
        logger = setup_logger_json(level="INFO", module_name="test_clear_handlers")
        initial_handler_count = len(logger.handlers)

        logger = setup_logger_json(level="INFO", module_name="test_clear_handlers")

        assert len(logger.handlers) == initial_handler_count

    def test_setup_logger_has_json_formatter(self):
        logger = setup_logger_json(level="INFO", module_name="test_json_formatter")
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_setup_logger_has_correlation_id_filter(self):
        logger = setup_logger_json(level="INFO", module_name="test_correlation_filter")
        assert any(isinstance(f, CorrelationIdFilter) for f in logger.filters)

    def test_get_logger_uses_package_prefix(self):
        logger = get_logger("test_get_logger")
        assert logger.name == "node_map.test_get_logger"
        assert logger.handlers
