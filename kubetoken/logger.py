import logging
import sys

from kubetoken.constants import PROJECT_NAME

# Shared by every module of the package
logger = logging.getLogger(PROJECT_NAME)

QUIET_FORMAT = "%(message)s"
VERBOSE_FORMAT = "%(levelname)s %(module)s: %(message)s"


def setup_logger(verbose: bool = False) -> None:
    """
    Send the package's log records to stderr.

    Command output goes to stdout, so messages and errors never end up in a
    piped context list. With verbose set, debug records are shown as well and
    each line is prefixed with its level and the module that logged it.

    Calling this again replaces the handler added by the previous call.

    Args:
        verbose (bool): Whether to show debug records.

    Returns:
        None
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(VERBOSE_FORMAT if verbose else QUIET_FORMAT)
    )
    logger.addHandler(handler)


setup_logger()
