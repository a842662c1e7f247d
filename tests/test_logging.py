"""
Tests for logging setup, console suppression and colour formatting.
"""
import io
import logging

import pytest

from core.logging import logger as logger_module
from core.logging.logger import (
    LOG_FORMAT,
    ColoredFormatter,
    SuppressingStreamHandler,
    get_log_dir,
    setup_logging,
)


def _record(name="engine", level=logging.DEBUG, msg="tick"):
    return logging.LogRecord(name=name, level=level, pathname="", lineno=0,
                             msg=msg, args=(), exc_info=None)


@pytest.fixture
def console():
    stream = io.StringIO()
    handler = SuppressingStreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler, stream


def test_duplicate_sources_are_collapsed(console):
    handler, stream = console
    for _ in range(4):
        handler.emit(_record())
    handler.emit(_record(name="other"))

    lines = stream.getvalue().splitlines()
    assert lines == ["tick", "[3 Suppressed: CHECK LOG]", "tick"]


def test_warnings_always_print(console):
    handler, stream = console
    handler.emit(_record())
    handler.emit(_record())
    handler.emit(_record(level=logging.WARNING, msg="clamped"))
    handler.emit(_record(level=logging.WARNING, msg="clamped again"))

    lines = stream.getvalue().splitlines()
    assert lines == ["tick", "[1 Suppressed: CHECK LOG]", "clamped", "clamped again"]


def test_close_flushes_pending_summary(console):
    handler, stream = console
    handler.emit(_record())
    handler.emit(_record())
    handler.close()
    assert stream.getvalue().splitlines()[-1] == "[1 Suppressed: CHECK LOG]"


def test_colored_formatter_marks_perf_records():
    formatter = ColoredFormatter(LOG_FORMAT)
    perf = formatter.format(_record(level=logging.INFO, msg="[PERF] [ANIM] frames=60"))
    plain = formatter.format(_record(level=logging.INFO, msg="started"))
    assert perf.startswith(ColoredFormatter.PERF_COLOR)
    assert plain.startswith(ColoredFormatter.COLORS['INFO'])
    # levelname is restored for other handlers
    record = _record(level=logging.ERROR)
    formatter.format(record)
    assert record.levelname == "ERROR"


def test_setup_logging_writes_rotating_file(tmp_path):
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    try:
        setup_logging(debug=False, base_dir=tmp_path)
        logging.getLogger("core.animation.scene").info("scene mounted")
        for handler in root.handlers:
            handler.flush()
        log_file = get_log_dir() / "illustrations.log"
        assert log_file.exists()
        assert "scene mounted" in log_file.read_text(encoding="utf-8")
        assert not logger_module.is_verbose_logging()
    finally:
        for handler in list(root.handlers):
            if handler not in before:
                root.removeHandler(handler)
                handler.close()
        root.setLevel(level)


def test_perf_toggle():
    original = logger_module.is_perf_metrics_enabled()
    try:
        logger_module.set_perf_metrics_enabled(False)
        assert not logger_module.is_perf_metrics_enabled()
    finally:
        logger_module.set_perf_metrics_enabled(original)
