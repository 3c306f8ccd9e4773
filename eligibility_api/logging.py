import logging
import sys

LOG_FORMAT = "%(levelname)s:     %(asctime)s - %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure the root logger once and return it.

    Repeated calls (tests, reloads) only adjust the level, so handlers are
    never duplicated. Unknown level names fall back to INFO.
    """
    numeric_level = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logger = logging.getLogger()
    logger.setLevel(numeric_level)
    if not any(getattr(h, "_eligibility_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        handler._eligibility_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
