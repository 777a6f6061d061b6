import json
import logging

from app.core.logging import RecordJsonFormatter, LOG_FORMAT, request_id_var, setup_logging


def _format(message="employee created", level=logging.INFO):
    record = logging.LogRecord("app.services.records", level, __file__, 1, message, None, None)
    return json.loads(RecordJsonFormatter(LOG_FORMAT).format(record))


def test_log_lines_carry_service_and_environment():
    line = _format()
    assert line["message"] == "employee created"
    assert line["level"] == "INFO"
    assert line["name"] == "app.services.records"
    assert line["service"] == "HR Employee Records"
    assert line["environment"] == "testing"
    assert line["timestamp"]
    assert "request_id" not in line


def test_log_lines_carry_request_id():
    token = request_id_var.set("trace-abc")
    try:
        line = _format(level=logging.WARNING)
    finally:
        request_id_var.reset(token)
    assert line["request_id"] == "trace-abc"
    assert line["level"] == "WARNING"


def test_setup_logging_installs_one_handler():
    setup_logging()
    setup_logging("DEBUG")
    root = logging.getLogger()
    handlers = [h for h in root.handlers if isinstance(h.formatter, RecordJsonFormatter)]
    assert len(handlers) == 1
    assert root.level == logging.DEBUG
    setup_logging("INFO")
