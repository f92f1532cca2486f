import logging

import pytest

import logging_config
from logging_config import DEBUG_LOGGER, PROJECTION_LOGGER, setup_logging


@pytest.fixture
def restore_logging(monkeypatch):
    root = logging.getLogger()
    saved = (root.level, root.handlers[:])
    named = {
        name: (logging.getLogger(name).level, logging.getLogger(name).handlers[:])
        for name in (PROJECTION_LOGGER, DEBUG_LOGGER)
    }
    monkeypatch.setattr(logging_config, "_LOGGING_CONFIGURED", False)
    yield
    for logger in [root] + [logging.getLogger(n) for n in named]:
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            handler.close()
    root.setLevel(saved[0])
    for handler in saved[1]:
        root.addHandler(handler)
    for name, (level, handlers) in named.items():
        logger = logging.getLogger(name)
        logger.setLevel(level)
        for handler in handlers:
            logger.addHandler(handler)


def test_setup_logging_creates_log_files(tmp_path, restore_logging):
    setup_logging(tmp_path, debug=True, force=True)
    logging.getLogger(PROJECTION_LOGGER).info("projection event")
    logging.getLogger(DEBUG_LOGGER).debug("debug detail")
    logging.getLogger("scenario_model.cli").warning("something odd")
    for handler in logging.getLogger().handlers + logging.getLogger(PROJECTION_LOGGER).handlers:
        handler.flush()

    assert "projection event" in (tmp_path / "projection_events.log").read_text()
    assert "debug detail" in (tmp_path / "debug_detail.log").read_text()
    assert "something odd" in (tmp_path / "warnings_errors.log").read_text()
    combined = (tmp_path / "combined.log").read_text()
    assert "projection event" in combined
    assert "something odd" in combined


def test_setup_logging_is_idempotent(tmp_path, restore_logging):
    setup_logging(tmp_path / "first")
    setup_logging(tmp_path / "second")
    assert not (tmp_path / "second").exists()


def test_no_debug_file_without_debug(tmp_path, restore_logging):
    setup_logging(tmp_path, force=True)
    assert not (tmp_path / "debug_detail.log").exists()
