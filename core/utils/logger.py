"""
Unity Package Extractor - Centralized Logging Utility
"""
import logging
import sys


class _BelowWarning(logging.Filter):
    def filter(self, record):
        return record.levelno < logging.WARNING


def setup_logger():
    logger = logging.getLogger("unitypackage")
    logger.setLevel(logging.DEBUG)

    # Progress and status lines go to stdout, problems to stderr
    out_handler = logging.StreamHandler(sys.stdout)
    out_handler.setLevel(logging.INFO)
    out_handler.addFilter(_BelowWarning())

    err_handler = logging.StreamHandler(sys.stderr)
    err_handler.setLevel(logging.WARNING)

    c_format = logging.Formatter('%(message)s')  # Clean output for CLI
    out_handler.setFormatter(c_format)
    err_handler.setFormatter(c_format)

    if not logger.handlers:
        logger.addHandler(out_handler)
        logger.addHandler(err_handler)

    return logger


def set_verbosity(verbose: bool = False, quiet: bool = False):
    """Adjust the stdout handler level for the CLI flags."""
    level = logging.INFO
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    for handler in logger.handlers:
        if any(isinstance(f, _BelowWarning) for f in handler.filters):
            handler.setLevel(level)


# Initialize singleton
logger = setup_logger()

__all__ = ["logger", "set_verbosity"]
