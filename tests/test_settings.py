import io
import logging

from comment_reflow.settings import (
    LOG_LEVEL_ENV,
    NO_COLOR_ENV,
    ReflowFormatter,
    comment_reflow_logger,
    set_comment_reflow_log_level,
)


class Terminal(io.StringIO):
    """StringIO that claims to be a TTY."""

    def isatty(self) -> bool:
        return True


def _record(level: int = logging.WARNING) -> logging.LogRecord:
    return logging.LogRecord("comment_reflow.core", level, __file__, 1, "Bad regex for %s", ("bullet",), None)


def test_logger_is_configured_once():
    logger = comment_reflow_logger("tests.settings.once")
    again = comment_reflow_logger("tests.settings.once")

    assert logger is again
    assert len(logger.handlers) == 1


def test_logger_level_comes_from_environment(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "warning")

    logger = comment_reflow_logger("tests.settings.env")

    assert logger.level == logging.WARNING


def test_unknown_level_in_environment_is_ignored(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "chatty")

    logger = comment_reflow_logger("tests.settings.unknown")

    assert logger.level == logging.NOTSET


def test_set_log_level_updates_registered_loggers(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "WARNING")
    logger = comment_reflow_logger("tests.settings.update")

    set_comment_reflow_log_level("DEBUG")
    try:
        assert logger.level == logging.DEBUG
    finally:
        set_comment_reflow_log_level("NOTSET")

    assert logger.level == logging.NOTSET


def test_formatter_without_color_writes_plain_lines():
    assert ReflowFormatter().format(_record()) == "comment-reflow: WARNING [comment_reflow.core] Bad regex for bullet"


def test_formatter_with_color_wraps_the_line():
    line = ReflowFormatter(use_color=True).format(_record(logging.ERROR))

    assert line == "\033[1;31mcomment-reflow: ERROR [comment_reflow.core] Bad regex for bullet\033[0m"


def test_records_are_plain_when_stream_is_piped(monkeypatch):
    monkeypatch.delenv(NO_COLOR_ENV, raising=False)
    stream = io.StringIO()
    logger = comment_reflow_logger("tests.settings.piped", stream=stream)
    logger.setLevel(logging.INFO)

    logger.info("Reflowing %d line(s)", 3)

    assert stream.getvalue() == "comment-reflow: INFO [tests.settings.piped] Reflowing 3 line(s)\n"


def test_records_are_colored_on_a_terminal(monkeypatch):
    monkeypatch.delenv(NO_COLOR_ENV, raising=False)
    stream = Terminal()
    logger = comment_reflow_logger("tests.settings.tty", stream=stream)
    logger.setLevel(logging.INFO)

    logger.warning("Careful")

    assert stream.getvalue() == "\033[1;33mcomment-reflow: WARNING [tests.settings.tty] Careful\033[0m\n"


def test_no_color_disables_colors_on_a_terminal(monkeypatch):
    monkeypatch.setenv(NO_COLOR_ENV, "1")
    stream = Terminal()
    logger = comment_reflow_logger("tests.settings.no_color", stream=stream)
    logger.setLevel(logging.INFO)

    logger.warning("Careful")

    assert "\033[" not in stream.getvalue()
