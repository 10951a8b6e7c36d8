from unittest.mock import Mock

from node_map.diagnostics import LoggerSink, logger


def test_logger_sink_deprecation():
    log = Mock()
    LoggerSink(log).deprecation("The on_platform option to node_map has been deprecated", key="svc", option="on_platform")
    log.warning.assert_called_once()
    args, kwargs = log.warning.call_args
    assert args[0] == "The on_platform option to node_map has been deprecated"
    assert kwargs["extra"] == {"event": "deprecation", "key": "svc", "option": "on_platform"}


def test_logger_sink_warn():
    log = Mock()
    LoggerSink(log).warn("You are overriding svc", key="svc", value="B", previous_value="A")
    extra = log.warning.call_args[1]["extra"]
    assert extra["event"] == "override"
    assert extra["previous_value"] == "A"


def test_logger_sink_defaults_to_package_logger():
    sink = LoggerSink()
    assert sink._logger is logger
    assert logger.name == "node_map.diagnostics"
