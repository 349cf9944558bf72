"""Tests for logging setup."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from mngr.config import LoggingConfig
from mngr.logs import setup_logging
from mngr.middleware import ACCESS_LOGGER


@pytest.fixture(autouse=True)
def restore_access_logger() -> Iterator[None]:
    """Undo setup_logging changes so other tests keep capturing records."""
    access_log = logging.getLogger(ACCESS_LOGGER)
    handlers = list(access_log.handlers)
    propagate = access_log.propagate
    level = access_log.level
    yield
    for handler in list(access_log.handlers):
        access_log.removeHandler(handler)
        handler.close()
    for handler in handlers:
        access_log.addHandler(handler)
    access_log.propagate = propagate
    access_log.setLevel(level)


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test__access_log_file__appends_bare_lines(self, tmp_path: Path) -> None:
        """Access records are appended to the file without decoration."""
        log_file = tmp_path / "access.log"
        log_file.write_text("previous line\n")

        access_log = setup_logging(LoggingConfig(access_log=log_file))
        access_log.info("127.0.0.1 0.001s 200 GET /list/ None")
        for handler in access_log.handlers:
            handler.flush()

        assert log_file.read_text() == "previous line\n127.0.0.1 0.001s 200 GET /list/ None\n"

    def test__no_file__logs_to_stream(self) -> None:
        access_log = setup_logging(LoggingConfig())

        assert access_log.name == ACCESS_LOGGER
        assert not access_log.propagate
        assert len(access_log.handlers) == 1
        assert isinstance(access_log.handlers[0], logging.StreamHandler)
        assert not isinstance(access_log.handlers[0], logging.FileHandler)

    def test__repeated_setup__replaces_handler(self, tmp_path: Path) -> None:
        setup_logging(LoggingConfig(access_log=tmp_path / "first.log"))
        access_log = setup_logging(LoggingConfig(access_log=tmp_path / "second.log"))

        assert len(access_log.handlers) == 1
        assert access_log.handlers[0].baseFilename == str(tmp_path / "second.log")
