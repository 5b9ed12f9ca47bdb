from __future__ import annotations

import logging

import logging_config
from logging_config import ContextualFormatter, configure_logging


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord("services.codec", logging.WARNING, __file__, 1, "rejected", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_appends_known_extra_keys() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")

    line = formatter.format(_record(sensor_id="s1", payload_bytes=12, unrelated="x"))

    assert line == "rejected | sensor_id=s1 payload_bytes=12"


def test_formatter_skips_none_values() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")

    assert formatter.format(_record(sensor_id=None)) == "rejected"


def test_configure_logging_installs_contextual_handler(monkeypatch) -> None:
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    monkeypatch.setattr(logging_config, "_configured", False)

    try:
        configure_logging(level="DEBUG")

        assert root.level == logging.DEBUG
        assert any(isinstance(h.formatter, ContextualFormatter) for h in root.handlers)
        assert logging_config._configured is True
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
