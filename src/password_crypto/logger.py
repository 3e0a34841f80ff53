import logging
import sys

from . import config as cfg

logger = logging.getLogger(cfg.logger_name)
logger.addHandler(logging.NullHandler())

_stderr_handler = None


def setup_logging(verbose: bool = False) -> logging.Handler:
    """
    Attach a stderr handler to the package logger, replacing any handler
    added by an earlier call.

    Parameters
    ----------
    verbose : 
        Log debug messages if True, only warnings and errors otherwise.

    Returns
    -------
    :
        The handler that was added.
    """
    global _stderr_handler

    if _stderr_handler is not None:
        logger.removeHandler(_stderr_handler)

    level = logging.DEBUG if verbose else logging.WARNING
    _stderr_handler = logging.StreamHandler(sys.stderr)
    _stderr_handler.setFormatter(logging.Formatter(cfg.log_format))
    _stderr_handler.setLevel(level)
    logger.setLevel(level)
    logger.addHandler(_stderr_handler)
    return _stderr_handler
