"""Tests for git-critic's logging setup."""

import logging

import pytest

from git_critic.logging_config import LOGGER_NAME, get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_logger():
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level = list(logger.handlers), logger.level
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)


class TestSetupLogging:
    @pytest.mark.parametrize(
        "verbose,quiet,level",
        [(False, False, logging.WARNING), (True, False, logging.DEBUG), (True, True, logging.ERROR)],
    )
    def test_levels(self, verbose, quiet, level):
        assert setup_logging(verbose=verbose, quiet=quiet).level == level

    def test_repeated_setup_replaces_handlers(self, tmp_path):
        setup_logging(log_file=str(tmp_path / "a.log"))
        logger = setup_logging()
        assert len(logger.handlers) == 1
        assert all(h not in logging.getLogger().handlers for h in logger.handlers)

    def test_log_file(self, tmp_path):
        path = tmp_path / "critic.log"
        setup_logging(verbose=True, log_file=str(path))
        get_logger("pipeline").debug("stats for %s", "lib/Foo.pm")
        for handler in logging.getLogger(LOGGER_NAME).handlers:
            handler.flush()
        text = path.read_text()
        assert "DEBUG" in text
        assert "git_critic.pipeline: stats for lib/Foo.pm" in text


class TestGetLogger:
    def test_namespacing(self):
        assert get_logger().name == "git_critic"
        assert get_logger("git_critic").name == "git_critic"
        assert get_logger("pipeline").name == "git_critic.pipeline"
        assert get_logger("git_critic.vcs.git").name == "git_critic.vcs.git"
