from __future__ import annotations

import io
import logging

import pytest

from timer_relay.common.logging_config import AnsiColorFormatter, TRACE, configure_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    httpx_logger = logging.getLogger("httpx")
    handlers, level, httpx_level = list(root.handlers), root.level, httpx_logger.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    httpx_logger.setLevel(httpx_level)


@pytest.mark.unit
def test_configure_logging_is_idempotent(root_logger: logging.Logger):
    configure_logging(logging.INFO)
    configure_logging(logging.DEBUG)

    ours = [h for h in root_logger.handlers if isinstance(h.formatter, AnsiColorFormatter)]
    assert len(ours) == 1
    assert root_logger.level == logging.DEBUG


@pytest.mark.unit
def test_httpx_request_logs_only_when_tracing(root_logger: logging.Logger):
    configure_logging(logging.INFO)
    assert logging.getLogger("httpx").level == logging.WARNING
    configure_logging(TRACE)
    assert logging.getLogger("httpx").level == logging.DEBUG


@pytest.mark.unit
def test_trace_level_is_registered():
    assert logging.getLevelName(TRACE) == "TRACE"


@pytest.mark.unit
def test_uncolored_format_is_compact():
    fmt = AnsiColorFormatter(colored=False)
    record = logging.LogRecord(
        "timer_relay.services.device_sync", logging.WARNING, __file__, 1,
        "Status poll failed: %s", ("timeout",), None,
    )
    line = fmt.format(record)
    assert line.endswith("WARNING timer_relay.services.device_sync: Status poll failed: timeout")
    assert "\033[" not in line


class _Tty(io.StringIO):
    def isatty(self) -> bool:
        return True


def _record(level: int = logging.ERROR) -> logging.LogRecord:
    return logging.LogRecord(
        "timer_relay.services.device_sync", level, __file__, 1,
        "RELAY%s %s failed", (1, "ON"), None,
    )


@pytest.mark.unit
def test_terminal_output_colors_level_and_dims_time(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    fmt = AnsiColorFormatter(stream=_Tty())
    record = _record()

    line = fmt.format(record)

    assert line.startswith("\033[2m")
    assert "\033[31mERROR\033[0m timer_relay.services.device_sync: RELAY1 ON failed" in line
    # The record itself is left untouched for other handlers
    assert record.levelname == "ERROR"


@pytest.mark.unit
def test_no_color_env_and_pipes_stay_plain(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("NO_COLOR", "1")
    assert not AnsiColorFormatter(stream=_Tty()).colored
    monkeypatch.delenv("NO_COLOR")
    assert not AnsiColorFormatter(stream=io.StringIO()).colored
    assert "\033[" not in AnsiColorFormatter(stream=io.StringIO()).format(_record())
