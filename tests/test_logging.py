import logging

from htmlxpath.utils.logging import (LOG_LEVELS, LOGGER_NAME, LogFormatter, PerformanceLogger,
                                     log_exception, setup_logging)


def test_setup_logging_configures_console_once():
    logger = setup_logging(console_level="INFO", colored=False)
    assert logger.name == LOGGER_NAME
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert setup_logging() is logger
    assert len(logger.handlers) == 1


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "htmlxpath.log"
    logger = setup_logging(log_file=str(log_file), console_level="ERROR", colored=False)
    assert logger.level == logging.DEBUG
    logging.getLogger(f"{LOGGER_NAME}.dom").debug("parsed something")
    for handler in logger.handlers:
        handler.flush()
    content = log_file.read_text(encoding="utf-8")
    assert "parsed something" in content
    assert "[DEBUG]" in content


def test_component_logger_name():
    logger = setup_logging(component="cli", colored=False)
    try:
        assert logger.name == f"{LOGGER_NAME}.cli"
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)


def test_colored_formatter_marks_level(monkeypatch):
    monkeypatch.setattr("sys.platform", "linux")
    formatter = LogFormatter(colored=True, fmt="[%(levelname)s] %(message)s")
    record = logging.LogRecord("x", logging.ERROR, __file__, 1, "boom", None, None)
    assert formatter.format(record) == "[\033[31mERROR\033[0m] boom"


def test_plain_formatter():
    formatter = LogFormatter(colored=False, fmt="[%(levelname)s] %(message)s")
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "ok", None, None)
    assert formatter.format(record) == "[INFO] ok"


def test_log_exception_includes_traceback(caplog):
    logger = logging.getLogger(f"{LOGGER_NAME}.test")
    try:
        raise ValueError("bad value")
    except ValueError as e:
        log_exception(logger, e, "Failure")
    record = caplog.records[-1]
    assert record.getMessage() == "Failure: bad value"
    assert record.exc_info[0] is ValueError


def test_performance_logger(caplog):
    logger = logging.getLogger(f"{LOGGER_NAME}.perf")
    perf = PerformanceLogger(logger, "Document")
    with caplog.at_level(logging.DEBUG, logger=logger.name):
        perf.start("parse")
        duration = perf.end("parse")
        missing = perf.end("parse")
    assert duration >= 0
    assert missing == 0.0
    messages = [record.getMessage() for record in caplog.records]
    assert any(message.startswith("Document parse took") for message in messages)
    assert "No start time found for parse" in messages


def test_measure_logs_block_duration(caplog):
    logger = logging.getLogger(f"{LOGGER_NAME}.perf")
    perf = PerformanceLogger(logger, "Fetcher")
    with caplog.at_level(logging.DEBUG, logger=logger.name):
        with perf.measure("fetch", level="INFO"):
            pass
    record = caplog.records[-1]
    assert record.levelno == logging.INFO
    assert record.getMessage().startswith("Fetcher fetch took")
    assert perf.start_times == {}


def test_measure_skips_logging_on_error(caplog):
    logger = logging.getLogger(f"{LOGGER_NAME}.perf")
    perf = PerformanceLogger(logger, "Document")
    with caplog.at_level(logging.DEBUG, logger=logger.name):
        try:
            with perf.measure("parse"):
                raise RuntimeError("broken")
        except RuntimeError:
            pass
    assert caplog.records == []
    assert perf.start_times == {}


def test_every_level_has_a_color():
    assert set(LogFormatter.LEVEL_COLORS) == set(LOG_LEVELS)
