# src/social_api/tests/test_logging/test_formatters.py
import json
import logging
import sys

from social_api.core.logging.formatters import DEFAULT_SERVICE_NAME, ColorFormatter, JsonFormatter


def make_record(level=logging.INFO, exc_info=None):
    # a LogRecord that simulates formatting with args
    return logging.LogRecord("social_api", level, __file__, 10, "hello %s", ("tester",), exc_info)


def test_json_formatter_basic_fields():
    rec = make_record()
    # simulate extra={...}
    rec.custom = "value"
    rec.request_id = "req-1"
    data = json.loads(JsonFormatter(env="testing", service="svc").format(rec))

    assert data["message"] == "hello tester"
    assert data["level"] == "INFO"
    assert data["logger"] == "social_api"
    assert data["service"] == "svc"
    assert data["env"] == "testing"
    assert "timestamp" in data
    assert data["request_id"] == "req-1"
    assert data["custom"] == "value"
    assert "version" in data


def test_json_formatter_defaults():
    data = json.loads(JsonFormatter().format(make_record()))

    assert data["service"] == DEFAULT_SERVICE_NAME
    assert data["request_id"] == "-"
    # standard LogRecord attributes are not repeated as extras
    assert "args" not in data
    assert "levelno" not in data


def test_json_formatter_non_serializable_extra():
    rec = make_record()

    class X:
        def __repr__(self):
            return "<X>"

    rec.obj = X()
    data = json.loads(JsonFormatter(env="dev", service="svc").format(rec))

    # non-serializable obj is stringified
    assert isinstance(data["obj"], str)


def test_json_formatter_exception():
    try:
        raise ValueError("boom")
    except ValueError:
        rec = make_record(logging.ERROR, exc_info=sys.exc_info())

    data = json.loads(JsonFormatter().format(rec))
    assert "ValueError: boom" in data["exc_info"]


def test_color_formatter_shows_extras_inline():
    rec = make_record(logging.WARNING)
    rec.request_id = "rid-9"
    rec.account_id = 7

    line = ColorFormatter().format(rec)

    assert "hello tester" in line
    assert "rid-9" in line
    assert "account_id=7" in line
    assert ColorFormatter.COLOR_CODES["WARNING"] in line
