# test_logger.py

import logging

from memtier.utils.logger import PACKAGE_LOGGER, setup_logger


def test_module_loggers_share_the_package_handler():
    logger = setup_logger("memtier.test.configured", level="debug")
    package = logging.getLogger(PACKAGE_LOGGER)
    assert logger.level == logging.DEBUG
    assert logger.handlers == []
    assert logger.propagate is True
    assert len(package.handlers) == 1
    assert package.propagate is False


def test_foreign_names_are_nested_under_the_package():
    logger = setup_logger("tools.load")
    assert logger.name == "memtier.tools.load"
    assert setup_logger(PACKAGE_LOGGER) is logging.getLogger(PACKAGE_LOGGER)


def test_setup_logger_is_idempotent():
    first = setup_logger("memtier.test.idempotent")
    second = setup_logger("memtier.test.idempotent")
    assert first is second
    assert len(logging.getLogger(PACKAGE_LOGGER).handlers) == 1


def test_unknown_level_falls_back_to_info():
    logger = setup_logger("memtier.test.unknown", level="chatty")
    assert logger.level == logging.INFO


def test_messages_reach_the_package_handler(caplog):
    package = logging.getLogger(PACKAGE_LOGGER)
    package.addHandler(caplog.handler)
    try:
        logger = setup_logger("memtier.test.messages", level="DEBUG")
        logger.debug("This is a DEBUG message.")
        try:
            1 / 0
        except ZeroDivisionError as e:
            logger.exception(f"This is how to log an exception: {e}")
    finally:
        package.removeHandler(caplog.handler)

    records = [r for r in caplog.records if r.name == "memtier.test.messages"]
    assert [r.levelno for r in records] == [logging.DEBUG, logging.ERROR]
    assert records[1].exc_info is not None
