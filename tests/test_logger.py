import logging
import sys

from kubetoken.logger import QUIET_FORMAT, VERBOSE_FORMAT, logger, setup_logger


def test_setup_logger() -> None:
    try:
        setup_logger(verbose=True)
        setup_logger(verbose=True)

        assert logger.name == "kubetoken"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        handler = logger.handlers[0]
        assert isinstance(handler, logging.StreamHandler)
        assert handler.stream is sys.stderr
        assert handler.formatter is not None
        assert handler.formatter._fmt == VERBOSE_FORMAT

        setup_logger()

        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
        assert logger.handlers[0].formatter is not None
        assert logger.handlers[0].formatter._fmt == QUIET_FORMAT
    finally:
        setup_logger()
