import logging
import sys

from ..config import load_config


def get_logger():
    logger = logging.getLogger("jwkgen")
    if not logger.handlers:
        # stdout carries key material; diagnostics go to stderr
        h = logging.StreamHandler(sys.stderr)
        fmt = logging.Formatter("[%(asctime)s] %(levelname)s %(message)s")
        h.setFormatter(fmt)
        logger.addHandler(h)
        level = logging.getLevelName(load_config().log_level)
        logger.setLevel(level if isinstance(level, int) else logging.WARNING)
    return logger
