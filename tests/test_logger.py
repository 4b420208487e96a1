import json
import logging

from postless.logger import SimpleFormatter, StructuredFormatter, get_logger, setup_logger


def _record(msg="hello", **extra):
    record = logging.LogRecord("postless.test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_structured_formatter_redacts_sensitive_fields():
    output = json.loads(StructuredFormatter().format(_record(jwt="abc", context={"Authorization": "Bearer x"})))
    assert output["message"] == "hello"
    assert output["jwt"] == "[REDACTED]"
    assert output["context"] == {"Authorization": "[REDACTED]"}


def test_structured_formatter_without_sanitizing():
    output = json.loads(StructuredFormatter(sanitize=False).format(_record(jwt="abc")))
    assert output["jwt"] == "abc"


def test_simple_formatter():
    assert "postless.test: hello" in SimpleFormatter().format(_record())


def test_get_logger_nests_under_package():
    assert get_logger("session").name == "postless.session"
    assert get_logger("postless.views").name == "postless.views"
    assert get_logger().name == "postless"


def test_setup_logger_updates_level():
    logger = setup_logger(level="DEBUG")
    try:
        assert logger.level == logging.DEBUG
        assert all(h.level == logging.DEBUG for h in logger.handlers)
    finally:
        setup_logger(level="WARNING")
