import logging

from vibepack.logging_setup import PACKAGE_LOGGER_NAME, configure_logging


def test_debug_logging_attaches_one_handler() -> None:
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    before = list(logger.handlers)
    try:
        configure_logging(debug=True)
        configure_logging(debug=True)
        added = [handler for handler in logger.handlers if handler not in before]

        assert logger.level == logging.DEBUG
        assert len(added) <= 1
        assert len([h for h in logger.handlers if type(h).__name__ == "_VibekitStreamHandler"]) == 1
    finally:
        for handler in [handler for handler in logger.handlers if handler not in before]:
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)


def test_logging_is_untouched_without_debug() -> None:
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level

    configure_logging(debug=False)

    assert logger.handlers == handlers
    assert logger.level == level
