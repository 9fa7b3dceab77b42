"""Shared logger for the calculator client."""
import logging
import sys

logger: logging.Logger = logging.getLogger("lizzycalc_client")

if not logger.handlers:
    # Log to stderr so rendered form output on stdout stays clean
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(_handler)
    logger.setLevel(logging.INFO)


def configure_logging(level: str = "INFO") -> None:
    """
    Set the level of the shared logger.

    :param str level: Level name, e.g. "DEBUG", "INFO", "WARNING"

    :raises ValueError: If the level name is unknown
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level}")
    logger.setLevel(numeric)
