import json
import logging
from logging.handlers import RotatingFileHandler

from greeter.core.context import bind_request, release_request
from greeter.core.logger import LOG_FORMAT, CustomJsonFormatter, get_logger, utc_timestamp


def _format(formatter, **extra):
    record = logging.LogRecord(
        name="greeter", level=logging.INFO, pathname=__file__, lineno=1,
        msg="Server running on port 3000", args=(), exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return json.loads(formatter.format(record))


def test_formatter_emits_structured_fields():
    formatter = CustomJsonFormatter(LOG_FORMAT)

    payload = _format(formatter, port=3000)

    assert payload["message"] == "Server running on port 3000"
    assert payload["level"] == "INFO"
    assert payload["mdc"] == {"trace_id": "-"}
    assert payload["ip"] == "-"
    assert payload["port"] == 3000
    assert payload["service"] == "greeter"
    assert payload["@timestamp"].endswith("Z")


def test_formatter_reads_request_context():
    formatter = CustomJsonFormatter(LOG_FORMAT)
    tokens = bind_request("trace-1", "198.51.100.4")
    try:
        payload = _format(formatter)
    finally:
        release_request(tokens)

    assert payload["mdc"] == {"trace_id": "trace-1"}
    assert payload["ip"] == "198.51.100.4"


def test_get_logger_is_idempotent():
    first = get_logger("greeter.tests.idempotent")
    second = get_logger("greeter.tests.idempotent")

    assert first is second
    assert len(first.handlers) == 1


def test_get_logger_adds_rotating_file_handler(tmp_path):
    log_file = tmp_path / "logs" / "greeter.log"

    logger = get_logger("greeter.tests.file", log_file=str(log_file))
    try:
        logger.info("SERVER_SHUTDOWN")
        file_handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]

        assert len(file_handlers) == 1
        assert "SERVER_SHUTDOWN" in log_file.read_text()
    finally:
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()


def test_utc_timestamp_has_millisecond_precision():
    assert utc_timestamp(0.5) == "1970-01-01T00:00:00.500Z"


def test_request_context_is_released_after_request():
    formatter = CustomJsonFormatter(LOG_FORMAT)

    release_request(bind_request("trace-2", "192.0.2.1"))

    assert _format(formatter)["mdc"] == {"trace_id": "-"}
