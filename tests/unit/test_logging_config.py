import json
import logging
import sys

from library_api.context import request_id_var
from library_api.logging_config import JsonFormatter, configure_logging


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="library_api.main",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="hello %s",
        args=("world",),
        exc_info=None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_emits_expected_fields() -> None:
    formatter = JsonFormatter(service_name="library-api")

    payload = json.loads(formatter.format(make_record()))

    assert payload["service"] == "library-api"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "library_api.main"
    assert payload["message"] == "hello world"
    assert "timestamp" in payload
    assert "request_id" not in payload


def test_json_formatter_emits_request_id_and_extra_fields() -> None:
    formatter = JsonFormatter(service_name="library-api")

    token = request_id_var.set("req-456")
    try:
        payload = json.loads(formatter.format(make_record(author_count=2)))
    finally:
        request_id_var.reset(token)

    assert payload["request_id"] == "req-456"
    assert payload["author_count"] == 2
    assert "args" not in payload


def test_json_formatter_includes_exception() -> None:
    formatter = JsonFormatter(service_name="library-api")
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = make_record(exc_info=sys.exc_info())

    payload = json.loads(formatter.format(record))

    assert "RuntimeError: boom" in payload["exception"]


def test_configure_logging_plain_text_format() -> None:
    configure_logging(level="DEBUG", output_format="plain", service_name="library-api")

    root_logger = logging.getLogger()

    assert root_logger.level == logging.DEBUG
    assert len(root_logger.handlers) == 1
    assert not isinstance(root_logger.handlers[0].formatter, JsonFormatter)


def test_configure_logging_json_format() -> None:
    configure_logging(level="info", output_format="JSON", service_name="library-api")

    root_logger = logging.getLogger()

    assert root_logger.level == logging.INFO
    assert isinstance(root_logger.handlers[0].formatter, JsonFormatter)
