import json
import logging
import sys

from workforce_rotation.logging.logger import CustomJsonFormatter, setup_logging


def _record(msg="rotation.month.computed", exc_info=None, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="workforce_rotation.rotation.calculator",
        level=logging.WARNING,
        pathname=__file__,
        lineno=10,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_json_with_extras():
    payload = json.loads(CustomJsonFormatter().format(_record(year="2025", month="9")))
    assert payload["message"] == "rotation.month.computed"
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "workforce_rotation.rotation.calculator"
    assert payload["year"] == "2025"
    assert payload["month"] == "9"
    assert "timestamp" in payload
    assert "trace_id" not in payload
    assert "pathname" not in payload


def test_formatter_includes_exception():
    try:
        raise ValueError("bad snapshot")
    except ValueError:
        record = _record(exc_info=sys.exc_info())
    payload = json.loads(CustomJsonFormatter().format(record))
    assert "ValueError: bad snapshot" in payload["exception"]


def test_formatter_stringifies_unknown_values():
    payload = json.loads(CustomJsonFormatter().format(_record(reference=object())))
    assert payload["reference"].startswith("<object object")


def test_setup_logging_installs_json_handler():
    root = logging.getLogger()
    previous_handlers, previous_level = list(root.handlers), root.level
    try:
        setup_logging("debug")
        assert root.level == logging.DEBUG
        handler = root.handlers[-1]
        assert isinstance(handler.formatter, CustomJsonFormatter)
        assert any(type(f).__name__ == "ContextFilter" for f in handler.filters)
    finally:
        root.handlers = previous_handlers
        root.setLevel(previous_level)
